# app/repos/product_repo.py
from decimal import Decimal

from sqlalchemy import case, or_, select, update
from sqlalchemy.orm import Session, selectinload

from app.data.models.base import utcnow
from app.data.models.product import ProductModel
from app.domain.schemas import ProductStatistics
from app.repos.generic_repo import GenericRepo, contains_ci
from app.utils.settings import LOW_STOCK_THRESHOLD


class ProductRepo(GenericRepo[ProductModel]):
    model = ProductModel

    def __init__(self, db: Session):
        super().__init__(db)

    def _load_options(self) -> list:
        #kategoria ladowana od razu, ProductOut ja zwraca
        return [selectinload(ProductModel.category)]

    def get_all(self) -> list[ProductModel]:
        stmt = self._select().order_by(ProductModel.name)
        return list(self.db.execute(stmt).scalars().all())

    def get_by_category(self, category_id: int) -> list[ProductModel]:
        return self.find(
            ProductModel.category_id == category_id,
            ProductModel.is_active.is_(True),
        )

    def get_active(self) -> list[ProductModel]:
        return self.find(ProductModel.is_active.is_(True))

    def get_low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[ProductModel]:
        return self.find(ProductModel.stock_quantity <= threshold)

    @staticmethod
    def search_criteria(term: str):
        """Wyszukiwanie bez rozrozniania wielkosci liter po nazwie, opisie i SKU."""
        return or_(
            contains_ci(ProductModel.name, term),
            contains_ci(ProductModel.description, term),
            contains_ci(ProductModel.sku, term),
        )

    def search(self, term: str) -> list[ProductModel]:
        return self.find(ProductModel.is_active.is_(True), self.search_criteria(term))

    def get_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[ProductModel]:
        stmt = self._select(
            ProductModel.is_active.is_(True),
            ProductModel.price >= min_price,
            ProductModel.price <= max_price,
        ).order_by(ProductModel.price)
        return list(self.db.execute(stmt).scalars().all())

    def get_by_sku(self, sku: str) -> ProductModel | None:
        return self.db.execute(self._select(ProductModel.sku == sku)).scalars().first()

    def _expire_cached(self, product_id: int) -> None:
        #UPDATE poszedl obok ORM, obiekt w sesji ma stary stan
        cached = self.db.identity_map.get(self.db.identity_key(ProductModel, product_id))
        if cached is not None:
            self.db.expire(cached)

    def update_stock(self, product_id: int, quantity: int) -> bool:
        """
        stock = max(0, stock + quantity), jednym UPDATE.
        Zwraca False gdy produkt nie istnieje albo jest usuniety.
        """
        new_stock = ProductModel.stock_quantity + quantity
        stmt = (
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.is_deleted.is_(False))
            .values(
                stock_quantity=case((new_stock < 0, 0), else_=new_stock),
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)

        self._expire_cached(product_id)

        #jak 0 rows affected to nie ma czego aktualizowac
        return result.rowcount > 0

    def reserve_stock(self, product_id: int, quantity: int) -> bool:
        """
        stock -= quantity tylko gdy starcza towaru (WHERE stock >= quantity).
        False = produkt nie istnieje albo ktos zdazyl wykupic.
        """
        stmt = (
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.is_deleted.is_(False),
                ProductModel.stock_quantity >= quantity,
            )
            .values(stock_quantity=ProductModel.stock_quantity - quantity, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)

        self._expire_cached(product_id)

        return result.rowcount > 0

    def get_statistics(self) -> ProductStatistics:
        products = self.db.execute(
            select(ProductModel).where(ProductModel.is_deleted.is_(False))
        ).scalars().all()

        total = len(products)
        average = (
            sum((Decimal(p.price) for p in products), Decimal("0.00")) / total
            if total
            else Decimal("0.00")
        )

        return ProductStatistics(
            total_products=total,
            active_products=sum(1 for p in products if p.is_active),
            low_stock_products=sum(1 for p in products if p.stock_quantity <= LOW_STOCK_THRESHOLD),
            total_inventory_value=sum(
                (Decimal(p.price) * p.stock_quantity for p in products), Decimal("0.00")
            ),
            average_price=average.quantize(Decimal("0.01")),
        )
