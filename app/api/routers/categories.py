# app/api/routers/categories.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.paging import check_paging
from app.api.security import Principal, require_admin
from app.data.database import get_db
from app.domain.common import ApiResponse, PaginatedResponse
from app.domain.schemas import CategoryCreate, CategoryOut, CategoryUpdate
from app.services.cache_service import CacheService, get_cache
from app.services.category_service import CategoryService
from app.utils.settings import DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/categories", tags=["categories"])


def get_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache),
) -> CategoryService:
    return CategoryService(db, cache=cache)


@router.get("", response_model=ApiResponse[PaginatedResponse[CategoryOut]])
def get_categories(
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    svc: CategoryService = Depends(get_service),
):
    check_paging(page_number, page_size)
    page = svc.get_categories(page_number, page_size, search_term)
    return ApiResponse.ok(page, "Categories retrieved successfully")


@router.get("/{category_id}", response_model=ApiResponse[CategoryOut])
def get_category(category_id: int, svc: CategoryService = Depends(get_service)):
    return ApiResponse.ok(svc.get_category(category_id), "Category retrieved successfully")


@router.post("", response_model=ApiResponse[CategoryOut], status_code=201)
def create_category(
    payload: CategoryCreate,
    svc: CategoryService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    category = svc.create_category(payload)
    return ApiResponse.ok(category, "Category created successfully", status_code=201)


@router.put("/{category_id}", response_model=ApiResponse[CategoryOut])
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    svc: CategoryService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    return ApiResponse.ok(svc.update_category(category_id, payload), "Category updated successfully")


@router.delete("/{category_id}", response_model=ApiResponse[bool])
def delete_category(
    category_id: int,
    svc: CategoryService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    svc.delete_category(category_id)
    return ApiResponse.ok(True, "Category deleted successfully")
