# app/services/product_service.py
from decimal import Decimal

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain import mappers
from app.domain.common import PaginatedResponse
from app.domain.errors import ConflictError, NotFoundError, ValidationFailed
from app.domain.schemas import ProductCreate, ProductOut, ProductStatistics, ProductUpdate
from app.repos.category_repo import CategoryRepo
from app.repos.product_repo import ProductRepo
from app.services.cache_service import CacheService
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger
from app.utils.settings import LOW_STOCK_THRESHOLD

logger = get_logger(__name__)


class ProductService:
    """
    Use case dla domeny produktow.

    -query: lista ze stronicowaniem i filtrami, pojedynczy produkt (z cache), statystyki
    -commands: create/update/delete (soft), zmiana stanu magazynowego

    Kazdy blad jest logowany i leci dalej bez zmian, router mapuje go na status HTTP.
    """

    def __init__(
        self,
        db: Session,
        cache: CacheService | None = None,
        notifier: NotificationService | None = None,
    ):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)
        self.cache = cache or CacheService(enabled=False)
        self.notifier = notifier or NotificationService()

    # =====================================================
    # QUERY
    # =====================================================
    def get_products(
        self,
        page_number: int = 1,
        page_size: int = 10,
        search_term: str | None = None,
        category_id: int | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
    ) -> PaginatedResponse[ProductOut]:
        logger.info(f"Getting products page={page_number} size={page_size}")

        criteria = []
        if search_term:
            criteria.append(ProductRepo.search_criteria(search_term))
        if category_id is not None:
            criteria.append(ProductModel.category_id == category_id)
        if min_price is not None:
            criteria.append(ProductModel.price >= min_price)
        if max_price is not None:
            criteria.append(ProductModel.price <= max_price)

        try:
            items, total = self.repo.paginate(
                page_number, page_size, *criteria, order_by=ProductModel.name
            )
        except SQLAlchemyError as e:
            logger.error(f"Error while getting products: {e}")
            raise

        logger.info(f"Retrieved {len(items)} products out of {total}")
        return PaginatedResponse.create(mappers.products_to_dto(items), total, page_number, page_size)

    def get_product(self, product_id: int) -> ProductOut:
        logger.info(f"Getting product {product_id}")
        key = self.cache.key("product", product_id)

        try:
            cached = self.cache.get_json(key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {key}, falling back to database: {e}")
            cached = None
        if cached is not None:
            return ProductOut.model_validate(cached)

        product = self.repo.get(product_id)
        if product is None:
            logger.warning(f"Product with ID {product_id} not found")
            raise NotFoundError(f"Product with ID {product_id} not found")

        dto = mappers.product_to_dto(product)
        try:
            self.cache.set_json(key, dto.model_dump(mode="json"))
        except RedisError as e:
            logger.warning(f"Cache write failed for {key}: {e}")
        return dto

    def get_product_by_sku(self, sku: str) -> ProductOut:
        logger.info(f"Getting product by SKU {sku}")
        product = self.repo.get_by_sku(sku)
        if product is None:
            logger.warning(f"Product with SKU {sku} not found")
            raise NotFoundError(f"Product with SKU '{sku}' not found")
        return mappers.product_to_dto(product)

    def get_by_category(self, category_id: int) -> list[ProductOut]:
        return mappers.products_to_dto(self.repo.get_by_category(category_id))

    def get_active(self) -> list[ProductOut]:
        return mappers.products_to_dto(self.repo.get_active())

    def get_low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[ProductOut]:
        if threshold < 0:
            raise ValidationFailed("Threshold cannot be negative")
        return mappers.products_to_dto(self.repo.get_low_stock(threshold))

    def search(self, search_term: str) -> list[ProductOut]:
        if not search_term or not search_term.strip():
            raise ValidationFailed("Search term is required")
        logger.info(f"Searching products for '{search_term}'")
        return mappers.products_to_dto(self.repo.search(search_term.strip()))

    def get_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[ProductOut]:
        if min_price < 0 or max_price < 0:
            raise ValidationFailed("Prices cannot be negative")
        if min_price > max_price:
            raise ValidationFailed("Minimum price cannot be greater than maximum price")
        return mappers.products_to_dto(self.repo.get_by_price_range(min_price, max_price))

    def get_statistics(self) -> ProductStatistics:
        logger.info("Getting product statistics")
        return self.repo.get_statistics()

    def is_sku_unique(self, sku: str, exclude_id: int | None = None) -> bool:
        #soft-deleted produkty nie blokuja SKU, repo je pomija
        existing = self.repo.get_by_sku(sku)
        return existing is None or existing.id == exclude_id

    # =====================================================
    # COMMANDS
    # =====================================================
    def _ensure_category(self, category_id: int) -> None:
        if self.categories.get(category_id) is None:
            raise NotFoundError(f"Category with ID {category_id} not found")

    def create_product(self, payload: ProductCreate) -> ProductOut:
        logger.info(f"Creating new product: {payload.name}")

        if not self.is_sku_unique(payload.sku):
            logger.warning(f"Duplicate SKU {payload.sku}")
            raise ConflictError(f"Product with SKU '{payload.sku}' already exists")
        self._ensure_category(payload.category_id)

        try:
            product = self.repo.add(mappers.product_from_dto(payload))
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while creating product {payload.sku}: {e}")
            raise

        logger.info(f"Successfully created product with ID: {product.id}")
        self._notify(product.id, "created")
        return mappers.product_to_dto(self.repo.get(product.id))

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductOut:
        logger.info(f"Updating product {product_id}")

        product = self.repo.get(product_id)
        if product is None:
            logger.warning(f"Product with ID {product_id} not found for update")
            raise NotFoundError(f"Product with ID {product_id} not found")

        if not self.is_sku_unique(payload.sku, exclude_id=product_id):
            logger.warning(f"Duplicate SKU {payload.sku}")
            raise ConflictError(f"Product with SKU '{payload.sku}' already exists")
        if payload.category_id != product.category_id:
            self._ensure_category(payload.category_id)

        try:
            mappers.apply_product_update(product, payload)
            self.repo.update(product)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while updating product {product_id}: {e}")
            raise

        self._invalidate(product_id)
        self._notify(product_id, "updated")
        logger.info(f"Successfully updated product with ID: {product_id}")
        return mappers.product_to_dto(self.repo.get(product_id))

    def delete_product(self, product_id: int) -> None:
        logger.info(f"Deleting product {product_id}")

        try:
            removed = self.repo.remove_by_id(product_id)
            if removed:
                self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while deleting product {product_id}: {e}")
            raise

        if not removed:
            logger.warning(f"Product with ID {product_id} not found for deletion")
            raise NotFoundError(f"Product with ID {product_id} not found")

        self._invalidate(product_id)
        self._notify(product_id, "deleted")
        logger.info(f"Successfully deleted product with ID: {product_id}")

    def update_stock(self, product_id: int, quantity: int) -> ProductOut:
        logger.info(f"Updating stock for product {product_id}, quantity {quantity}")

        try:
            updated = self.repo.update_stock(product_id, quantity)
            if updated:
                self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while updating stock for product {product_id}: {e}")
            raise

        if not updated:
            logger.warning(f"Failed to update stock for product {product_id}")
            raise NotFoundError(f"Product with ID {product_id} not found")

        self._invalidate(product_id)
        product = self.repo.get(product_id)
        if product.stock_quantity <= LOW_STOCK_THRESHOLD:
            try:
                self.notifier.send_stock_alert(product.id, product.sku, product.stock_quantity)
            except Exception as e:
                logger.warning(f"Failed to send stock alert for product {product_id}: {e}")
        return mappers.product_to_dto(product)

    # =====================================================
    # POMOCNICZE
    # =====================================================
    def _invalidate(self, product_id: int) -> None:
        key = self.cache.key("product", product_id)
        try:
            self.cache.invalidate(key)
        except RedisError as e:
            #TTL i tak wyczysci wpis
            logger.warning(f"Cache invalidation failed for {key}: {e}")

    def _notify(self, product_id: int, action: str) -> None:
        try:
            self.notifier.send_product_update(product_id, action)
        except Exception as e:
            logger.warning(f"Failed to send product notification for {product_id}: {e}")
