# app/services/category_service.py
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.category import CategoryModel
from app.domain import mappers
from app.domain.common import PaginatedResponse
from app.domain.errors import ConflictError, NotFoundError
from app.domain.schemas import CategoryCreate, CategoryOut, CategoryUpdate
from app.repos.category_repo import CategoryRepo
from app.repos.generic_repo import contains_ci
from app.services.cache_service import CacheService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    """
    CRUD kategorii.
    Nazwa kategorii jest unikalna (bez wielkosci liter), kategorii z produktami nie da sie usunac.
    """

    def __init__(self, db: Session, cache: CacheService | None = None):
        self.repo = CategoryRepo(db)
        self.cache = cache or CacheService(enabled=False)

    def get_categories(
        self,
        page_number: int = 1,
        page_size: int = 10,
        search_term: str | None = None,
    ) -> PaginatedResponse[CategoryOut]:
        criteria = []
        if search_term:
            criteria.append(contains_ci(CategoryModel.name, search_term))

        items, total = self.repo.paginate(page_number, page_size, *criteria, order_by=CategoryModel.name)
        counts = self.repo.product_counts()

        return PaginatedResponse.create(
            [mappers.category_to_dto(c, counts.get(c.id, 0)) for c in items],
            total,
            page_number,
            page_size,
        )

    def get_category(self, category_id: int) -> CategoryOut:
        category = self.repo.get(category_id)
        if category is None:
            logger.warning(f"Category with ID {category_id} not found")
            raise NotFoundError(f"Category with ID {category_id} not found")
        return mappers.category_to_dto(category, self.repo.count_products(category_id))

    def create_category(self, payload: CategoryCreate) -> CategoryOut:
        logger.info(f"Creating category {payload.name}")

        if self.repo.get_by_name(payload.name) is not None:
            raise ConflictError(f"Category with name '{payload.name}' already exists")

        try:
            category = self.repo.add(mappers.category_from_dto(payload))
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while creating category {payload.name}: {e}")
            raise

        logger.info(f"Created category {category.id}")
        return mappers.category_to_dto(category, 0)

    def update_category(self, category_id: int, payload: CategoryUpdate) -> CategoryOut:
        category = self.repo.get(category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")

        existing = self.repo.get_by_name(payload.name)
        if existing is not None and existing.id != category_id:
            raise ConflictError(f"Category with name '{payload.name}' already exists")

        try:
            mappers.apply_category_update(category, payload)
            self.repo.update(category)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while updating category {category_id}: {e}")
            raise

        #produkty w cache maja zagniezdzona kategorie
        self._invalidate_products(category_id)
        logger.info(f"Updated category {category_id}")
        return mappers.category_to_dto(category, self.repo.count_products(category_id))

    def delete_category(self, category_id: int) -> None:
        category = self.repo.get(category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")

        #produkty musza byc najpierw usuniete albo przeniesione
        product_count = self.repo.count_products(category_id)
        if product_count:
            logger.warning(f"Category {category_id} still has {product_count} products")
            raise ConflictError(
                f"Cannot delete category with ID {category_id} because it has {product_count} products"
            )

        try:
            self.repo.remove(category)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while deleting category {category_id}: {e}")
            raise

        logger.info(f"Deleted category {category_id}")

    def _invalidate_products(self, category_id: int) -> None:
        keys = [self.cache.key("product", pid) for pid in self.repo.product_ids(category_id)]
        try:
            self.cache.invalidate(*keys)
        except RedisError as e:
            logger.warning(f"Cache invalidation failed for category {category_id}: {e}")
