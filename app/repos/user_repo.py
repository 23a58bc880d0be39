# app/repos/user_repo.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.repos.generic_repo import GenericRepo


class UserRepo(GenericRepo[UserModel]):
    model = UserModel

    def __init__(self, db: Session):
        super().__init__(db)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = self._select(func.lower(UserModel.email) == email.lower())
        return self.db.execute(stmt).scalars().first()

    def get_by_user_name(self, user_name: str) -> UserModel | None:
        stmt = self._select(func.lower(UserModel.user_name) == user_name.lower())
        return self.db.execute(stmt).scalars().first()
