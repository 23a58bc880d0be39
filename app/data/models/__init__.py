#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.base import BaseEntity
from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.data.models.user import UserModel
from app.data.models.order import OrderModel, OrderStatus
from app.data.models.order_item import OrderItemModel

__all__ = [
    "BaseEntity",
    "CategoryModel",
    "ProductModel",
    "UserModel",
    "OrderModel",
    "OrderStatus",
    "OrderItemModel",
]
