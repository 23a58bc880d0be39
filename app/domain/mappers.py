# app/domain/mappers.py
"""
Mapowanie encja <-> DTO, pole po polu.

Schematy create/update nigdy nie dotykaja id, pol audytowych, is_deleted
ani kolekcji nawigacyjnych - pilnuja tego zbiory *_FIELDS ponizej.
"""
from pydantic import BaseModel

from app.data.models.category import CategoryModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.data.models.product import ProductModel
from app.data.models.user import UserModel
from app.domain.schemas import (
    CategoryOut,
    OrderItemOut,
    OrderOut,
    ProductOut,
    UserOut,
)

PRODUCT_FIELDS = ("name", "description", "price", "stock_quantity", "sku", "is_active", "category_id")
CATEGORY_FIELDS = ("name", "description", "is_active")
USER_FIELDS = ("user_name", "email", "first_name", "last_name", "date_of_birth", "is_active")


def _copy_fields(source: BaseModel, target, fields: tuple) -> None:
    data = source.model_dump()
    for field in fields:
        if field in data:
            setattr(target, field, data[field])


# =====================================================
# CATEGORY
# =====================================================
def category_to_dto(category: CategoryModel, product_count: int | None = None) -> CategoryOut:
    dto = CategoryOut.model_validate(category)
    dto.product_count = product_count
    return dto


def category_from_dto(payload: BaseModel) -> CategoryModel:
    category = CategoryModel(is_active=True)
    _copy_fields(payload, category, CATEGORY_FIELDS)
    return category


def apply_category_update(category: CategoryModel, payload: BaseModel) -> CategoryModel:
    _copy_fields(payload, category, CATEGORY_FIELDS)
    return category


# =====================================================
# PRODUCT
# =====================================================
def product_to_dto(product: ProductModel) -> ProductOut:
    category = None
    if product.category is not None:
        category = category_to_dto(product.category)

    return ProductOut(
        id=product.id,
        name=product.name,
        description=product.description or "",
        price=product.price,
        stock_quantity=product.stock_quantity,
        sku=product.sku,
        is_active=product.is_active,
        category_id=product.category_id,
        category=category,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def products_to_dto(products) -> list[ProductOut]:
    return [product_to_dto(p) for p in products]


def product_from_dto(payload: BaseModel) -> ProductModel:
    product = ProductModel(is_active=True)
    _copy_fields(payload, product, PRODUCT_FIELDS)
    return product


def apply_product_update(product: ProductModel, payload: BaseModel) -> ProductModel:
    _copy_fields(payload, product, PRODUCT_FIELDS)
    return product


# =====================================================
# USER
# =====================================================
def user_to_dto(user: UserModel) -> UserOut:
    return UserOut.model_validate(user)


def user_from_dto(payload: BaseModel) -> UserModel:
    user = UserModel(is_active=True)
    _copy_fields(payload, user, USER_FIELDS)
    return user


def apply_user_update(user: UserModel, payload: BaseModel) -> UserModel:
    #email i user_name nie zmieniaja sie przy aktualizacji
    _copy_fields(payload, user, ("first_name", "last_name", "date_of_birth", "is_active"))
    return user


# =====================================================
# ORDER
# =====================================================
def order_item_to_dto(item: OrderItemModel) -> OrderItemOut:
    return OrderItemOut(
        id=item.id,
        product_id=item.product_id,
        product_name=item.product.name if item.product is not None else None,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_price=item.total_price,
        discount=item.discount,
        final_price=item.final_price,
    )


def order_to_dto(order: OrderModel) -> OrderOut:
    return OrderOut(
        id=order.id,
        order_number=order.order_number,
        user_id=order.user_id,
        status=order.status.name.title(),
        total_amount=order.total_amount,
        shipping_address=order.shipping_address,
        billing_address=order.billing_address,
        notes=order.notes,
        order_date=order.order_date,
        shipped_date=order.shipped_date,
        delivered_date=order.delivered_date,
        items=[order_item_to_dto(i) for i in order.items if not i.is_deleted],
    )
