from decimal import Decimal

from sqlalchemy import Column, Integer, ForeignKey, Numeric, CheckConstraint
from sqlalchemy.orm import relationship

from app.data.models.base import BaseEntity


class OrderItemModel(BaseEntity):
    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)

    quantity = Column(Integer, nullable=False)
    #cena z momentu zamowienia
    unit_price = Column(Numeric(18, 2), nullable=False)
    total_price = Column(Numeric(18, 2), nullable=False)
    discount = Column(Numeric(18, 2), nullable=False, default=Decimal("0.00"))
    final_price = Column(Numeric(18, 2), nullable=False)

    order = relationship("OrderModel", back_populates="items")
    product = relationship("ProductModel", back_populates="order_items")

    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),)

    def compute_prices(self) -> None:
        self.total_price = Decimal(self.unit_price) * self.quantity
        self.final_price = self.total_price - Decimal(self.discount or 0)
