# app/repos/generic_repo.py
from typing import Any, Generic, Iterable, Sequence, Type, TypeVar

from sqlalchemy import Select, String, func, select
from sqlalchemy.orm import Session

from app.data.models.base import BaseEntity

T = TypeVar("T", bound=BaseEntity)


def contains_ci(column, term: str):
    """Podciag bez rozrozniania wielkosci liter, % i _ z termu traktowane doslownie."""
    return func.lower(column, type_=String).contains(term.lower(), autoescape=True)


class GenericRepo(Generic[T]):
    """
    Wspolne operacje CRUD dla dowolnej encji dziedziczacej po BaseEntity.

    Wszystkie odczyty pomijaja rekordy z is_deleted=True, a `remove`
    to soft delete (flaga + updated_at), nigdy DELETE w bazie.
    Kryteria (`*criteria`) to wyrazenia SQLAlchemy, np. ProductModel.price > 10.
    """

    model: Type[T]

    def __init__(self, db: Session, model: Type[T] | None = None):
        self.db = db
        if model is not None:
            self.model = model

    def _query(self, *criteria: Any) -> Select:
        stmt = select(self.model).where(self.model.is_deleted.is_(False))
        if criteria:
            stmt = stmt.where(*criteria)
        return stmt

    def _load_options(self) -> list:
        return []

    def _select(self, *criteria: Any) -> Select:
        """Jak _query, ale z opcjami ladowania relacji (tylko dla zapytan zwracajacych encje)."""
        return self._query(*criteria).options(*self._load_options())

    # =====================================================
    # READ
    # =====================================================
    def get(self, entity_id: int) -> T | None:
        return self.db.execute(self._select(self.model.id == entity_id)).scalar_one_or_none()

    def get_all(self) -> list[T]:
        return list(self.db.execute(self._select()).scalars().all())

    def find(self, *criteria: Any) -> list[T]:
        return list(self.db.execute(self._select(*criteria)).scalars().all())

    def single_or_default(self, *criteria: Any) -> T | None:
        return self.db.execute(self._select(*criteria)).scalar_one_or_none()

    def exists(self, *criteria: Any) -> bool:
        stmt = select(self._query(*criteria).exists())
        return bool(self.db.execute(stmt).scalar())

    def count(self, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(self._query(*criteria).subquery())
        return int(self.db.execute(stmt).scalar_one())

    def paginate(
        self,
        page_number: int,
        page_size: int,
        *criteria: Any,
        order_by: Any = None,
    ) -> tuple[list[T], int]:
        """
        Zwraca (elementy strony, liczba wszystkich pasujacych przed stronicowaniem).
        Strony liczone od 1, walidacja page/size po stronie wywolujacego.
        """
        stmt = self._query(*criteria)

        total_count = int(
            self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        )

        #domyslnie sortowanie po id
        stmt = stmt.options(*self._load_options()).order_by(order_by if order_by is not None else self.model.id)

        items = (
            self.db.execute(stmt.offset((page_number - 1) * page_size).limit(page_size))
            .scalars()
            .all()
        )
        return list(items), total_count

    # =====================================================
    # WRITE
    # =====================================================
    def add(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def add_range(self, entities: Iterable[T]) -> list[T]:
        entities = list(entities)
        self.db.add_all(entities)
        self.db.flush()
        return entities

    def update(self, entity: T) -> T:
        #updated_at ustawia listener before_flush
        self.db.add(entity)
        self.db.flush()
        return entity

    def update_range(self, entities: Iterable[T]) -> list[T]:
        entities = list(entities)
        self.db.add_all(entities)
        self.db.flush()
        return entities

    def remove(self, entity: T) -> None:
        entity.soft_delete()
        self.db.add(entity)
        self.db.flush()

    def remove_by_id(self, entity_id: int) -> bool:
        entity = self.get(entity_id)
        if entity is None:
            return False
        self.remove(entity)
        return True

    def remove_range(self, entities: Sequence[T]) -> None:
        for entity in entities:
            entity.soft_delete()
            self.db.add(entity)
        self.db.flush()

    # =====================================================
    # TRANSACTION
    # =====================================================
    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
