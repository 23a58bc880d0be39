# app/services/user_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain import mappers
from app.domain.errors import ConflictError, NotFoundError
from app.domain.schemas import UserCreate, UserOut, UserUpdate
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserOut:
        logger.info(f"Creating user {payload.user_name}")

        if self.repo.get_by_email(payload.email) is not None:
            raise ConflictError(f"User with email '{payload.email}' already exists")
        if self.repo.get_by_user_name(payload.user_name) is not None:
            raise ConflictError(f"User with username '{payload.user_name}' already exists")

        try:
            user = self.repo.add(mappers.user_from_dto(payload))
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while creating user {payload.user_name}: {e}")
            raise

        logger.info(f"Created user {user.id}")
        return mappers.user_to_dto(user)

    def get_user(self, user_id: int) -> UserOut:
        user = self.repo.get(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return mappers.user_to_dto(user)

    def update_user(self, user_id: int, payload: UserUpdate) -> UserOut:
        user = self.repo.get(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")

        try:
            mappers.apply_user_update(user, payload)
            self.repo.update(user)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while updating user {user_id}: {e}")
            raise

        logger.info(f"Updated user {user_id}")
        return mappers.user_to_dto(user)

    def delete_user(self, user_id: int) -> None:
        try:
            removed = self.repo.remove_by_id(user_id)
            if removed:
                self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while deleting user {user_id}: {e}")
            raise

        if not removed:
            raise NotFoundError(f"User with ID {user_id} not found")
        logger.info(f"Deleted user {user_id}")
