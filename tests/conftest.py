# tests/conftest.py
import os

#przed importem app.*, settings czyta env przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["API_TOKENS"] = (
    "admin-token:admin@test.local:Admin|User,"
    "user-token:jan@example.com:User,"
    "other-token:other@test.local:User"
)

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.data.database import Base, SessionLocal, engine, get_db
from app.data.models import CategoryModel, ProductModel, UserModel
from app.main import create_app
from app.services.cache_service import CacheService, get_cache
from app.services.notification_service import NotificationService, get_notifier


@pytest.fixture(scope="function")
def db():
    """Swieza baza in-memory dla kazdego testu."""
    import app.data.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def cache():
    """Mock cache, domyslnie zawsze miss."""
    mock = MagicMock(spec=CacheService)
    mock.key.side_effect = lambda *parts: "test:" + ":".join(str(p) for p in parts)
    mock.get_json.return_value = None
    return mock


@pytest.fixture(scope="function")
def notifier():
    return MagicMock(spec=NotificationService)


@pytest.fixture(scope="function")
def client(db, cache, notifier):
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_notifier] = lambda: notifier

    #bez `with`, lifespan (init_db/seed) nie startuje
    return TestClient(app)


@pytest.fixture
def category(db):
    c = CategoryModel(name="Electronics", description="Electronic devices and gadgets", is_active=True)
    db.add(c)
    db.commit()
    return c


@pytest.fixture
def make_product(db, category):
    def _make(
        name="iPhone 15 Pro",
        sku="IPHONE-15-PRO",
        price="999.99",
        stock=50,
        is_active=True,
        description="Latest iPhone with advanced features",
        category_id=None,
    ):
        p = ProductModel(
            name=name,
            description=description,
            price=Decimal(price),
            stock_quantity=stock,
            sku=sku,
            is_active=is_active,
            category_id=category_id or category.id,
        )
        db.add(p)
        db.commit()
        return p

    return _make


@pytest.fixture
def user(db):
    u = UserModel(
        user_name="jan.kowalski",
        email="jan@example.com",
        first_name="Jan",
        last_name="Kowalski",
        is_active=True,
    )
    db.add(u)
    db.commit()
    return u
