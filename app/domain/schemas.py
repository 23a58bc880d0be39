# app/domain/schemas.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.data.models.order import OrderStatus
from app.domain import validators as rules


# =====================================================
# CATEGORY
# =====================================================
class CategoryOut(BaseModel):
    """Schema dla kategorii (response)."""

    id: int
    name: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None
    product_count: int | None = None

    model_config = ConfigDict(from_attributes=True)


class CategoryCreate(BaseModel):
    """Schema dla tworzenia kategorii."""

    model_config = ConfigDict(validate_default=True)

    name: str = ""
    description: str = ""

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return rules.category_name(v)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return rules.category_description(v)


class CategoryUpdate(CategoryCreate):
    """Schema dla aktualizacji kategorii."""

    is_active: bool = True


# =====================================================
# PRODUCT
# =====================================================
class ProductOut(BaseModel):
    """Schema dla produktu (response)."""

    id: int
    name: str
    description: str
    price: Decimal
    stock_quantity: int
    sku: str
    is_active: bool
    category_id: int
    category: CategoryOut | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu."""

    model_config = ConfigDict(validate_default=True)

    name: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    stock_quantity: int = 0
    sku: str = ""
    category_id: int = 0

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return rules.product_name(v)

    @field_validator("description")
    @classmethod
    def _description(cls, v: str) -> str:
        return rules.product_description(v)

    @field_validator("price")
    @classmethod
    def _price(cls, v: Decimal) -> Decimal:
        return rules.product_price(v)

    @field_validator("stock_quantity")
    @classmethod
    def _stock(cls, v: int) -> int:
        return rules.stock_quantity(v)

    @field_validator("sku")
    @classmethod
    def _sku(cls, v: str) -> str:
        return rules.product_sku(v)

    @field_validator("category_id")
    @classmethod
    def _category(cls, v: int) -> int:
        return rules.category_id(v)


class ProductUpdate(ProductCreate):
    """Schema dla aktualizacji produktu."""

    is_active: bool = True


class StockUpdate(BaseModel):
    """Zmiana stanu magazynowego o `quantity` (moze byc ujemna)."""

    quantity: int


class ProductStatistics(BaseModel):
    total_products: int = 0
    active_products: int = 0
    low_stock_products: int = 0
    total_inventory_value: Decimal = Decimal("0.00")
    average_price: Decimal = Decimal("0.00")


# =====================================================
# USER
# =====================================================
class UserOut(BaseModel):
    """Schema dla uzytkownika (response)."""

    id: int
    user_name: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    date_of_birth: date | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Schema dla aktualizacji uzytkownika."""

    model_config = ConfigDict(validate_default=True)

    first_name: str = ""
    last_name: str = ""
    date_of_birth: date | None = None
    is_active: bool = True

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v: str) -> str:
        return rules.person_name(v, "First name")

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v: str) -> str:
        return rules.person_name(v, "Last name")

    @field_validator("date_of_birth")
    @classmethod
    def _dob(cls, v: date | None) -> date | None:
        return rules.date_of_birth(v)


class UserCreate(UserUpdate):
    """Schema dla tworzenia uzytkownika."""

    user_name: str = ""
    email: str = ""

    @field_validator("user_name")
    @classmethod
    def _user_name(cls, v: str) -> str:
        return rules.user_name(v)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return rules.email(v)


# =====================================================
# ORDER
# =====================================================
class OrderItemIn(BaseModel):
    """Pozycja zamowienia (request)."""

    model_config = ConfigDict(validate_default=True)

    product_id: int = Field(..., gt=0, description="ID produktu (musi byc > 0)")
    quantity: int = 1
    discount: Decimal = Decimal("0.00")

    @field_validator("quantity")
    @classmethod
    def _quantity(cls, v: int) -> int:
        return rules.item_quantity(v)

    @field_validator("discount")
    @classmethod
    def _discount(cls, v: Decimal) -> Decimal:
        return rules.discount(v)


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamowienia."""

    model_config = ConfigDict(validate_default=True)

    user_id: int = Field(..., gt=0, description="ID uzytkownika (musi byc > 0)")
    shipping_address: str = ""
    billing_address: str = ""
    notes: Optional[str] = None
    items: List[OrderItemIn] = Field(default_factory=list)

    @field_validator("shipping_address")
    @classmethod
    def _shipping(cls, v: str) -> str:
        return rules.address(v, "Shipping address")

    @field_validator("billing_address")
    @classmethod
    def _billing(cls, v: str) -> str:
        return rules.address(v, "Billing address")

    @field_validator("notes")
    @classmethod
    def _notes(cls, v: str | None) -> str | None:
        return rules.order_notes(v)

    @field_validator("items")
    @classmethod
    def _items(cls, v: list) -> list:
        if not v:
            raise ValueError("Order must contain at least one item")
        return v


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    discount: Decimal
    final_price: Decimal


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    order_number: str
    user_id: int
    status: str
    total_amount: Decimal
    shipping_address: str
    billing_address: str
    notes: str | None = None
    order_date: datetime
    shipped_date: datetime | None = None
    delivered_date: datetime | None = None
    items: List[OrderItemOut] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def _status(cls, v: str) -> str:
        name = (v or "").strip().upper()
        if name not in OrderStatus.__members__:
            allowed = ", ".join(s.name.title() for s in OrderStatus)
            raise ValueError(f"Status must be one of: {allowed}")
        return name

    def as_enum(self) -> OrderStatus:
        return OrderStatus[self.status]
