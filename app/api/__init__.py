# app/api/__init__.py
from fastapi import APIRouter

from app.api.routers import categories, orders, products, users

API_PREFIX = "/api/v1"

api_router = APIRouter(prefix=API_PREFIX)
api_router.include_router(products.router)
api_router.include_router(categories.router)
api_router.include_router(users.router)
api_router.include_router(orders.router)
