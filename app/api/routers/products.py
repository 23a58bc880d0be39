# app/api/routers/products.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.paging import check_paging
from app.api.security import Principal, require_admin
from app.data.database import get_db
from app.domain.common import ApiResponse, PaginatedResponse
from app.domain.errors import ValidationFailed
from app.domain.schemas import (
    ProductCreate,
    ProductOut,
    ProductStatistics,
    ProductUpdate,
    StockUpdate,
)
from app.services.cache_service import CacheService, get_cache
from app.services.notification_service import NotificationService, get_notifier
from app.services.product_service import ProductService
from app.utils.logging import get_logger
from app.utils.settings import DEFAULT_PAGE_SIZE, LOW_STOCK_THRESHOLD

logger = get_logger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def get_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache),
    notifier: NotificationService = Depends(get_notifier),
) -> ProductService:
    return ProductService(db, cache=cache, notifier=notifier)


@router.get("", response_model=ApiResponse[PaginatedResponse[ProductOut]])
def get_products(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice"),
    svc: ProductService = Depends(get_service),
):
    """Lista produktow ze stronicowaniem, wyszukiwaniem i filtrami (kategoria, cena)."""
    check_paging(page_number, page_size)
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationFailed("Minimum price cannot be greater than maximum price")

    page = svc.get_products(page_number, page_size, search_term, category_id, min_price, max_price)
    return ApiResponse.ok(page, "Products retrieved successfully")


#statyczne sciezki przed /{product_id}
@router.get("/active", response_model=ApiResponse[List[ProductOut]])
def get_active_products(svc: ProductService = Depends(get_service)):
    return ApiResponse.ok(svc.get_active(), "Active products retrieved successfully")


@router.get("/low-stock", response_model=ApiResponse[List[ProductOut]])
def get_low_stock_products(
    threshold: int = Query(LOW_STOCK_THRESHOLD),
    svc: ProductService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    if threshold < 0:
        raise ValidationFailed("Threshold must be non-negative")
    return ApiResponse.ok(svc.get_low_stock(threshold), "Low stock products retrieved successfully")


@router.get("/search", response_model=ApiResponse[List[ProductOut]])
def search_products(
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    svc: ProductService = Depends(get_service),
):
    return ApiResponse.ok(svc.search(search_term or ""), "Search results retrieved successfully")


@router.get("/price-range", response_model=ApiResponse[List[ProductOut]])
def get_products_by_price_range(
    min_price: Decimal = Query(..., alias="minPrice"),
    max_price: Decimal = Query(..., alias="maxPrice"),
    svc: ProductService = Depends(get_service),
):
    return ApiResponse.ok(
        svc.get_by_price_range(min_price, max_price), "Products retrieved successfully"
    )


@router.get("/statistics", response_model=ApiResponse[ProductStatistics])
def get_product_statistics(
    svc: ProductService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    return ApiResponse.ok(svc.get_statistics(), "Product statistics retrieved successfully")


@router.get("/sku/{sku}", response_model=ApiResponse[ProductOut])
def get_product_by_sku(sku: str, svc: ProductService = Depends(get_service)):
    if not sku.strip():
        raise ValidationFailed("SKU cannot be empty")
    return ApiResponse.ok(svc.get_product_by_sku(sku), "Product retrieved successfully")


@router.get("/category/{category_id}", response_model=ApiResponse[List[ProductOut]])
def get_products_by_category(category_id: int, svc: ProductService = Depends(get_service)):
    return ApiResponse.ok(svc.get_by_category(category_id), "Products retrieved successfully")


@router.get("/{product_id}", response_model=ApiResponse[ProductOut])
def get_product(product_id: int, svc: ProductService = Depends(get_service)):
    return ApiResponse.ok(svc.get_product(product_id), "Product retrieved successfully")


@router.post("", response_model=ApiResponse[ProductOut], status_code=201)
def create_product(
    payload: ProductCreate,
    svc: ProductService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    product = svc.create_product(payload)
    return ApiResponse.ok(product, "Product created successfully", status_code=201)


@router.put("/{product_id}", response_model=ApiResponse[ProductOut])
def update_product(
    product_id: int,
    payload: ProductUpdate,
    svc: ProductService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    return ApiResponse.ok(svc.update_product(product_id, payload), "Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[bool])
def delete_product(
    product_id: int,
    svc: ProductService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    svc.delete_product(product_id)
    return ApiResponse.ok(True, "Product deleted successfully")


@router.patch("/{product_id}/stock", response_model=ApiResponse[ProductOut])
def update_stock(
    product_id: int,
    payload: StockUpdate,
    svc: ProductService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    return ApiResponse.ok(svc.update_stock(product_id, payload.quantity), "Stock updated successfully")
