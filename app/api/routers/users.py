# app/api/routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.security import Principal, ensure_self_or_admin, get_current_user, require_admin
from app.data.database import get_db
from app.domain.common import ApiResponse
from app.domain.schemas import UserCreate, UserOut, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("", response_model=ApiResponse[UserOut], status_code=201)
def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    user = service.create_user(payload)
    return ApiResponse.ok(user, "User created successfully", status_code=201)


@router.get("/{user_id}", response_model=ApiResponse[UserOut])
def get_user(
    user_id: int,
    service: UserService = Depends(get_service),
    principal: Principal = Depends(get_current_user),
):
    ensure_self_or_admin(principal, user_id)
    return ApiResponse.ok(service.get_user(user_id), "User retrieved successfully")


@router.put("/{user_id}", response_model=ApiResponse[UserOut])
def update_user(
    user_id: int,
    payload: UserUpdate,
    service: UserService = Depends(get_service),
    principal: Principal = Depends(get_current_user),
):
    ensure_self_or_admin(principal, user_id)
    return ApiResponse.ok(service.update_user(user_id, payload), "User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[bool])
def delete_user(
    user_id: int,
    service: UserService = Depends(get_service),
    _: Principal = Depends(require_admin),
):
    service.delete_user(user_id)
    return ApiResponse.ok(True, "User deleted successfully")
