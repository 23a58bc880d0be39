# tests/test_category_service.py
import pytest
from sqlalchemy.exc import IntegrityError

from app.data.models import CategoryModel, ProductModel
from app.domain.errors import ConflictError, NotFoundError
from app.domain.schemas import CategoryCreate, CategoryUpdate
from app.services.category_service import CategoryService


def test_create_and_get_with_product_count(db, make_product):
    service = CategoryService(db)
    books = service.create_category(CategoryCreate(name="Books", description="Books and publications"))
    make_product(name="Clean Code", sku="BOOK-CLEAN-CODE", category_id=books.id)

    fetched = service.get_category(books.id)

    assert fetched.name == "Books"
    assert fetched.product_count == 1


def test_duplicate_name_is_conflict(db, category):
    with pytest.raises(ConflictError):
        CategoryService(db).create_category(CategoryCreate(name="electronics"))


def test_delete_with_products_is_rejected(db, category, make_product):
    make_product()

    with pytest.raises(ConflictError, match="1 products"):
        CategoryService(db).delete_category(category.id)


def test_delete_allowed_once_products_are_deleted(db, category, make_product):
    from app.services.product_service import ProductService

    product = make_product()
    ProductService(db).delete_product(product.id)

    service = CategoryService(db)
    service.delete_category(category.id)

    with pytest.raises(NotFoundError):
        service.get_category(category.id)


def test_update_category(db, category):
    updated = CategoryService(db).update_category(
        category.id, CategoryUpdate(name="Gadgets", description="Small gadgets", is_active=False)
    )

    assert updated.name == "Gadgets"
    assert updated.is_active is False


def test_list_is_searchable(db, category):
    service = CategoryService(db)
    service.create_category(CategoryCreate(name="Books"))

    page = service.get_categories(1, 10, search_term="book")

    assert page.total_count == 1
    assert page.items[0].name == "Books"
    assert page.items[0].product_count == 0


def test_repo_product_counts_skip_deleted(db, category, make_product):
    from app.repos.category_repo import CategoryRepo

    make_product()
    gone = make_product(name="Old", sku="OLD")
    repo = CategoryRepo(db)
    repo.remove(gone)
    repo.commit()

    assert repo.count_products(category.id) == 1
    assert [(c.name, n) for c, n in repo.get_with_product_counts()] == [("Electronics", 1)]
    assert repo.get_by_name("ELECTRONICS").id == category.id


def test_search_treats_like_wildcards_literally(db, category):
    service = CategoryService(db)

    assert service.get_categories(1, 10, search_term="%").total_count == 0
    assert service.get_categories(1, 10, search_term="_").total_count == 0
    assert service.get_categories(1, 10, search_term="TRON").total_count == 1


def test_update_invalidates_cached_products(db, category, make_product, cache):
    first = make_product()
    second = make_product(name="Cable", sku="CABLE")
    gone = make_product(name="Old", sku="OLD")
    gone.soft_delete()
    db.commit()

    CategoryService(db, cache=cache).update_category(
        category.id, CategoryUpdate(name="Gadgets", description="Small gadgets")
    )

    keys = cache.invalidate.call_args.args
    assert sorted(keys) == sorted([f"test:product:{first.id}", f"test:product:{second.id}"])


def test_database_restricts_deleting_category_with_products(db, category, make_product):
    product_id = make_product().id
    category_id = category.id

    db.delete(category)
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()

    assert db.get(CategoryModel, category_id) is not None
    assert db.get(ProductModel, product_id).category_id == category_id
