# app/data/models/product.py
from sqlalchemy import Column, Integer, ForeignKey, String, Boolean, Numeric, CheckConstraint
from sqlalchemy.orm import relationship

from app.data.models.base import BaseEntity


class ProductModel(BaseEntity):
    __tablename__ = "products"

    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False, default="")
    price = Column(Numeric(18, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    #unikalnosc sku tylko wsrod nieusunietych, pilnuje tego ProductService
    sku = Column(String(50), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    category = relationship("CategoryModel", back_populates="products")
    order_items = relationship("OrderItemModel", back_populates="product")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock"),
    )
