# app/domain/validators.py
"""
Deklaratywne reguly walidacji pol, uzywane przez schematy pydantic.

Kazda regula albo zwraca wartosc, albo rzuca ValueError z komunikatem
przeznaczonym dla klienta API (pydantic zamienia to na blad pola -> 400).
"""
import re
from datetime import date
from decimal import Decimal

SKU_PATTERN = re.compile(r"^[A-Z0-9\-_]+$")
USER_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")
PERSON_NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MAX_PRICE = Decimal("999999.99")
MAX_STOCK = 999_999


def required(value: str | None, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{label} is required")
    return value


def length(value: str | None, label: str, *, min_len: int | None = None, max_len: int | None = None):
    if value is None:
        return value
    if max_len is not None and len(value) > max_len:
        raise ValueError(f"{label} cannot exceed {max_len} characters")
    if min_len is not None and len(value) < min_len:
        raise ValueError(f"{label} must be at least {min_len} characters long")
    return value


def matches(value: str, pattern: re.Pattern, message: str) -> str:
    if not pattern.match(value):
        raise ValueError(message)
    return value


# ---------------------------------------------------------------
# product
# ---------------------------------------------------------------
def product_name(v: str) -> str:
    required(v, "Product name")
    return length(v, "Product name", min_len=2, max_len=100)


def product_description(v: str) -> str:
    return length(v, "Product description", max_len=500)


def product_price(v: Decimal) -> Decimal:
    if v <= 0:
        raise ValueError("Product price must be greater than 0")
    if v > MAX_PRICE:
        raise ValueError("Product price cannot exceed 999,999.99")
    return v


def stock_quantity(v: int) -> int:
    if v < 0:
        raise ValueError("Stock quantity cannot be negative")
    if v > MAX_STOCK:
        raise ValueError("Stock quantity cannot exceed 999,999")
    return v


def product_sku(v: str) -> str:
    required(v, "Product SKU")
    length(v, "Product SKU", max_len=50)
    return matches(
        v,
        SKU_PATTERN,
        "Product SKU can only contain uppercase letters, numbers, hyphens, and underscores",
    )


def category_id(v: int) -> int:
    if v <= 0:
        raise ValueError("Valid category is required")
    return v


# ---------------------------------------------------------------
# category
# ---------------------------------------------------------------
def category_name(v: str) -> str:
    required(v, "Category name")
    return length(v, "Category name", min_len=2, max_len=100)


def category_description(v: str) -> str:
    return length(v, "Category description", max_len=500)


# ---------------------------------------------------------------
# user
# ---------------------------------------------------------------
def user_name(v: str) -> str:
    required(v, "Username")
    length(v, "Username", min_len=3, max_len=50)
    return matches(
        v,
        USER_NAME_PATTERN,
        "Username can only contain letters, numbers, dots, underscores, and hyphens",
    )


def email(v: str) -> str:
    required(v, "Email")
    matches(v, EMAIL_PATTERN, "Invalid email format")
    return length(v, "Email", max_len=100)


def person_name(v: str, label: str) -> str:
    required(v, label)
    length(v, label, max_len=50)
    return matches(v, PERSON_NAME_PATTERN, f"{label} can only contain letters and spaces")


def date_of_birth(v: date | None, today: date | None = None) -> date | None:
    if v is None:
        return v
    today = today or date.today()
    if v >= today:
        raise ValueError("Date of birth cannot be in the future")
    try:
        oldest = today.replace(year=today.year - 120)
    except ValueError:
        #29 lutego
        oldest = today.replace(year=today.year - 120, day=28)
    if v <= oldest:
        raise ValueError("Date of birth seems invalid")
    return v


# ---------------------------------------------------------------
# order
# ---------------------------------------------------------------
def address(v: str, label: str) -> str:
    required(v, label)
    return length(v, label, max_len=500)


def order_notes(v: str | None) -> str | None:
    return length(v, "Notes", max_len=1000)


def item_quantity(v: int) -> int:
    if v < 1:
        raise ValueError("Quantity must be greater than 0")
    return v


def discount(v: Decimal) -> Decimal:
    if v < 0:
        raise ValueError("Discount cannot be negative")
    return v
