# app/api/security.py
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import ForbiddenError, UnauthorizedError
from app.repos.user_repo import UserRepo
from app.utils.settings import API_TOKENS

ADMIN = "Admin"
USER = "User"

bearer = HTTPBearer(auto_error=False)


class Principal(BaseModel):
    name: str
    roles: list[str] = []
    #id wiersza users o emailu == name, None gdy brak konta
    user_id: int | None = None

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(ADMIN)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> Principal:
    """Bearer token -> Principal, nazwa trafia do pol audytowych (created_by/updated_by)."""
    if credentials is None:
        raise UnauthorizedError("Authentication required")

    entry = API_TOKENS.get(credentials.credentials)
    if entry is None:
        raise UnauthorizedError("Invalid or expired token")

    user = UserRepo(db).get_by_email(entry["name"])
    principal = Principal(
        name=entry["name"],
        roles=entry["roles"],
        user_id=user.id if user is not None and user.is_active else None,
    )
    db.info["actor"] = principal.name
    return principal


def require_role(role: str):
    def dependency(principal: Principal = Depends(get_current_user)) -> Principal:
        #Admin ma wszystkie uprawnienia
        if not (principal.has_role(role) or principal.is_admin):
            raise ForbiddenError(f"Role '{role}' is required")
        return principal

    return dependency


require_admin = require_role(ADMIN)


def ensure_self_or_admin(principal: Principal, user_id: int) -> None:
    """Zwykly uzytkownik ma dostep tylko do wlasnego konta i zamowien."""
    if principal.is_admin:
        return
    if principal.user_id is None or principal.user_id != user_id:
        raise ForbiddenError("Access to another user's data is denied")
