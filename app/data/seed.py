# app/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.database import SessionLocal
from app.data.models import CategoryModel, ProductModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = [
    ("Electronics", "Electronic devices and gadgets"),
    ("Books", "Books and publications"),
    ("Clothing", "Apparel and accessories"),
]

#(kategoria, nazwa, opis, cena, stan, sku)
PRODUCTS = [
    ("Electronics", "iPhone 15 Pro", "Latest iPhone with advanced features", "999.99", 50, "IPHONE-15-PRO"),
    ("Books", "Clean Code by Robert Martin", "A handbook of agile software craftsmanship", "49.99", 100, "BOOK-CLEAN-CODE"),
    ("Clothing", "Cotton T-Shirt", "Comfortable cotton t-shirt", "19.99", 200, "TSHIRT-COTTON"),
]


def seed_catalog(db: Session) -> bool:
    """Wrzuca kategorie i produkty startowe. Nic nie robi, gdy katalog nie jest pusty."""
    if db.execute(select(CategoryModel.id).limit(1)).first():
        return False

    db.info.setdefault("actor", "seed")

    categories = {name: CategoryModel(name=name, description=desc, is_active=True) for name, desc in CATEGORIES}
    db.add_all(categories.values())

    for category, name, description, price, stock, sku in PRODUCTS:
        db.add(
            ProductModel(
                name=name,
                description=description,
                price=Decimal(price),
                stock_quantity=stock,
                sku=sku,
                is_active=True,
                category=categories[category],
            )
        )

    db.commit()
    logger.info(f"Seeded {len(CATEGORIES)} categories and {len(PRODUCTS)} products")
    return True


def seed():
    db = SessionLocal()
    try:
        seed_catalog(db)
    finally:
        db.close()
