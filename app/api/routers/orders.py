# app/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.paging import check_paging
from app.api.security import Principal, ensure_self_or_admin, get_current_user, require_admin
from app.data.database import get_db
from app.domain.common import ApiResponse, PaginatedResponse
from app.domain.schemas import OrderCreate, OrderOut, OrderStatusUpdate
from app.services.notification_service import NotificationService, get_notifier
from app.services.order_service import OrderService
from app.utils.settings import DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
) -> OrderService:
    return OrderService(db, notifier=notifier)


@router.post("", response_model=ApiResponse[OrderOut], status_code=201)
def create_order(
    payload: OrderCreate,
    svc: OrderService = Depends(get_service),
    principal: Principal = Depends(get_current_user),
):
    """
    Tworzy zamowienie z listy pozycji, rezerwuje stan magazynowy.
    Wysyla powiadomienie asynchronicznie.
    """
    ensure_self_or_admin(principal, payload.user_id)
    order = svc.create_order(payload)
    return ApiResponse.ok(order, "Order created successfully", status_code=201)


@router.get("", response_model=ApiResponse[PaginatedResponse[OrderOut]])
def get_orders(
    user_id: int = Query(...),
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    svc: OrderService = Depends(get_service),
    principal: Principal = Depends(get_current_user),
):
    ensure_self_or_admin(principal, user_id)
    check_paging(page_number, page_size)
    page = svc.get_orders_for_user(user_id, page_number, page_size)
    return ApiResponse.ok(page, "Orders retrieved successfully")


@router.get("/{order_id}", response_model=ApiResponse[OrderOut])
def get_order(
    order_id: int,
    user_id: int = Query(...),
    svc: OrderService = Depends(get_service),
    principal: Principal = Depends(get_current_user),
):
    """
    Pobiera szczegoly zamowienia, admin widzi wszystkie.
    """
    ensure_self_or_admin(principal, user_id)
    order = svc.get_order(order_id, None if principal.is_admin else user_id)
    return ApiResponse.ok(order, "Order retrieved successfully")


@router.patch("/{order_id}/status", response_model=ApiResponse[OrderOut])
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    svc: OrderService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    order = svc.update_status(order_id, payload.as_enum())
    return ApiResponse.ok(order, "Order status updated successfully")


@router.delete("/{order_id}", response_model=ApiResponse[bool])
def delete_order(
    order_id: int,
    svc: OrderService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    svc.delete_order(order_id)
    return ApiResponse.ok(True, "Order deleted successfully")
