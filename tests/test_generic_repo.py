# tests/test_generic_repo.py
from app.data.models import CategoryModel
from app.repos.generic_repo import GenericRepo


def _categories(db, count):
    repo = GenericRepo(db, CategoryModel)
    repo.add_range(CategoryModel(name=f"Category {i:02d}", description="") for i in range(count))
    repo.commit()
    return repo


def test_add_sets_id_and_audit_fields(db):
    db.info["actor"] = "tester"
    repo = GenericRepo(db, CategoryModel)

    category = repo.add(CategoryModel(name="Books", description="Books and publications"))
    repo.commit()

    assert category.id is not None
    assert category.created_at is not None
    assert category.updated_at is not None
    assert category.created_by == "tester"
    assert category.is_deleted is False


def test_update_sets_updated_by(db):
    repo = GenericRepo(db, CategoryModel)
    category = repo.add(CategoryModel(name="Books", description=""))
    repo.commit()

    db.info["actor"] = "editor"
    category.description = "Changed"
    repo.update(category)
    repo.commit()

    assert category.updated_by == "editor"


def test_soft_deleted_entities_are_hidden(db):
    repo = _categories(db, 3)
    victim = repo.get_all()[0]

    repo.remove(victim)
    repo.commit()

    assert repo.get(victim.id) is None
    assert victim.id not in [c.id for c in repo.get_all()]
    assert repo.find(CategoryModel.id == victim.id) == []
    assert repo.count() == 2
    assert repo.exists(CategoryModel.id == victim.id) is False

    items, total = repo.paginate(1, 10)
    assert total == 2
    assert victim.id not in [c.id for c in items]

    #rekord zostaje w bazie
    assert db.get(CategoryModel, victim.id).is_deleted is True


def test_remove_by_id(db):
    repo = _categories(db, 1)
    category_id = repo.get_all()[0].id

    assert repo.remove_by_id(category_id) is True
    assert repo.remove_by_id(category_id) is False
    assert repo.remove_by_id(999) is False


def test_remove_range(db):
    repo = _categories(db, 4)
    repo.remove_range(repo.get_all()[:3])
    repo.commit()

    assert repo.count() == 1


def test_paginate_second_page(db):
    repo = _categories(db, 25)

    items, total = repo.paginate(2, 10)

    assert total == 25
    assert len(items) == 10
    #domyslnie po id
    assert [c.name for c in items] == [f"Category {i:02d}" for i in range(10, 20)]


def test_paginate_counts_filtered_rows(db):
    repo = _categories(db, 25)

    items, total = repo.paginate(3, 10, CategoryModel.name.like("Category 1%"), order_by=CategoryModel.name)

    assert total == 10
    assert items == []


def test_single_or_default_and_exists(db):
    repo = _categories(db, 2)

    found = repo.single_or_default(CategoryModel.name == "Category 01")

    assert found is not None
    assert repo.single_or_default(CategoryModel.name == "missing") is None
    assert repo.exists(CategoryModel.name == "Category 00") is True
    assert repo.count(CategoryModel.name.like("Category%")) == 2


def test_update_range(db):
    repo = _categories(db, 3)
    categories = repo.get_all()
    for c in categories:
        c.is_active = False

    repo.update_range(categories)
    repo.commit()

    assert repo.count(CategoryModel.is_active.is_(False)) == 3
