# app/data/models/category.py
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from app.data.models.base import BaseEntity


class CategoryModel(BaseEntity):
    __tablename__ = "categories"

    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)

    #usuwanie kategorii z produktami blokuje FK (RESTRICT), ORM nie zeruje category_id
    products = relationship("ProductModel", back_populates="category", passive_deletes="all")
