import enum

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, Enum
from sqlalchemy.orm import relationship

from app.data.models.base import BaseEntity, utcnow


class OrderStatus(enum.IntEnum):
    PENDING = 0
    CONFIRMED = 1
    PROCESSING = 2
    SHIPPED = 3
    DELIVERED = 4
    CANCELLED = 5
    REFUNDED = 6

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.CANCELLED, OrderStatus.REFUNDED)


class OrderModel(BaseEntity):
    __tablename__ = "orders"

    order_number = Column(String(50), nullable=False, unique=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    total_amount = Column(Numeric(18, 2), nullable=False, default=0)
    status = Column(
        Enum(OrderStatus, native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
    )

    shipping_address = Column(String(500), nullable=False)
    billing_address = Column(String(500), nullable=False)
    notes = Column(String(1000), nullable=True)

    order_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    shipped_date = Column(DateTime(timezone=True), nullable=True)
    delivered_date = Column(DateTime(timezone=True), nullable=True)

    user = relationship("UserModel", back_populates="orders")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        order_by="OrderItemModel.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
