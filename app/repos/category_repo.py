# app/repos/category_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.repos.generic_repo import GenericRepo


class CategoryRepo(GenericRepo[CategoryModel]):
    model = CategoryModel

    def __init__(self, db: Session):
        super().__init__(db)

    def get_all(self) -> list[CategoryModel]:
        stmt = self._select().order_by(CategoryModel.name)
        return list(self.db.execute(stmt).scalars().all())

    def get_active(self) -> list[CategoryModel]:
        stmt = self._select(CategoryModel.is_active.is_(True)).order_by(CategoryModel.name)
        return list(self.db.execute(stmt).scalars().all())

    def get_by_name(self, name: str) -> CategoryModel | None:
        stmt = self._select(func.lower(CategoryModel.name) == name.lower())
        return self.db.execute(stmt).scalars().first()

    def count_products(self, category_id: int) -> int:
        """Liczba nieusunietych produktow w kategorii."""
        stmt = select(func.count(ProductModel.id)).where(
            ProductModel.category_id == category_id,
            ProductModel.is_deleted.is_(False),
        )
        return int(self.db.execute(stmt).scalar_one())

    def product_ids(self, category_id: int) -> list[int]:
        stmt = select(ProductModel.id).where(
            ProductModel.category_id == category_id,
            ProductModel.is_deleted.is_(False),
        )
        return list(self.db.execute(stmt).scalars().all())

    def product_counts(self) -> dict[int, int]:
        #jedno zapytanie zamiast count_products dla kazdej kategorii
        stmt = (
            select(ProductModel.category_id, func.count(ProductModel.id))
            .where(ProductModel.is_deleted.is_(False))
            .group_by(ProductModel.category_id)
        )
        return {category_id: count for category_id, count in self.db.execute(stmt).all()}

    def get_with_product_counts(self) -> list[tuple[CategoryModel, int]]:
        counts = self.product_counts()
        return [(c, counts.get(c.id, 0)) for c in self.get_all()]

