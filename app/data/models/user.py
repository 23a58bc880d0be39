from sqlalchemy import Column, String, Boolean, Date
from sqlalchemy.orm import relationship

from app.data.models.base import BaseEntity


class UserModel(BaseEntity):
    __tablename__ = "users"

    user_name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    orders = relationship("OrderModel", back_populates="user")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
