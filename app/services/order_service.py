# app/services/order_service.py
import uuid
from collections import Counter
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.base import utcnow
from app.data.models.order import OrderModel, OrderStatus
from app.data.models.order_item import OrderItemModel
from app.domain import mappers
from app.domain.common import PaginatedResponse
from app.domain.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailed
from app.domain.schemas import OrderCreate, OrderOut
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger

logger = get_logger(__name__)


def generate_order_number() -> str:
    #ORD-20240115-1A2B3C4D
    return f"ORD-{utcnow():%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.

    1. Tworzenie zamowienia z listy pozycji (cena z momentu zamowienia, rezerwacja stanu)
    2. Odczyt z kontrola wlasciciela
    3. Zmiana statusu (Cancelled/Refunded sa koncowe)
    4. Soft delete razem z pozycjami
    """

    def __init__(self, db: Session, notifier: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.notifier = notifier or NotificationService()

    def create_order(self, payload: OrderCreate) -> OrderOut:
        logger.info(f"Creating order for user {payload.user_id} with {len(payload.items)} items")

        user = self.users.get(payload.user_id)
        if not user:
            raise NotFoundError(f"User with ID {payload.user_id} not found")
        if not user.is_active:
            raise ValidationFailed(f"User with ID {payload.user_id} is not active")

        #ta sama pozycja moze wystapic kilka razy, stan sprawdzamy lacznie
        requested = Counter()
        for line in payload.items:
            requested[line.product_id] += line.quantity

        products = {}
        for product_id, quantity in requested.items():
            product = self.products.get(product_id)
            if not product:
                raise NotFoundError(f"Product with ID {product_id} not found")
            if not product.is_active:
                raise ValidationFailed(f"Product '{product.name}' is not available")
            if product.stock_quantity < quantity:
                raise ConflictError(
                    f"Insufficient stock for product '{product.name}'. "
                    f"Available: {product.stock_quantity}, requested: {quantity}"
                )
            products[product_id] = product

        order = OrderModel(
            order_number=generate_order_number(),
            user_id=user.id,
            status=OrderStatus.PENDING,
            shipping_address=payload.shipping_address,
            billing_address=payload.billing_address,
            notes=payload.notes,
            order_date=utcnow(),
        )

        total = Decimal("0.00")
        for line in payload.items:
            item = OrderItemModel(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=products[line.product_id].price,
                discount=line.discount,
            )
            item.compute_prices()
            if item.final_price < 0:
                raise ValidationFailed("Discount cannot exceed the item total")
            total += item.final_price
            order.items.append(item)
        order.total_amount = total

        try:
            for product_id, quantity in requested.items():
                if not self.products.reserve_stock(product_id, quantity):
                    #ktos wykupil towar miedzy odczytem a UPDATE
                    raise ConflictError(f"Insufficient stock for product with ID {product_id}")
            created = self.repo.add(order)
            self.repo.commit()
        except (ConflictError, SQLAlchemyError) as e:
            self.repo.rollback()
            logger.error(f"Error while creating order for user {payload.user_id}: {e}")
            raise

        logger.info(f"Order {created.order_number} created for user {user.id}")
        self._notify(created)
        return mappers.order_to_dto(self.repo.get_with_items(created.id))

    def get_order(self, order_id: int, user_id: int | None = None) -> OrderOut:
        """user_id=None pomija kontrole wlasciciela (admin)."""
        order = self.repo.get_with_items(order_id)

        if not order:
            raise NotFoundError(f"Order with ID {order_id} not found")

        if user_id is not None and order.user_id != user_id:
            raise ForbiddenError("Access to this order is denied")

        return mappers.order_to_dto(order)

    def get_orders_for_user(
        self,
        user_id: int,
        page_number: int = 1,
        page_size: int = 10,
    ) -> PaginatedResponse[OrderOut]:
        items, total = self.repo.get_for_user(user_id, page_number, page_size)
        return PaginatedResponse.create(
            [mappers.order_to_dto(o) for o in items], total, page_number, page_size
        )

    def update_status(self, order_id: int, status: OrderStatus) -> OrderOut:
        order = self.repo.get_with_items(order_id)
        if not order:
            raise NotFoundError(f"Order with ID {order_id} not found")

        if order.status == status:
            return mappers.order_to_dto(order)

        if order.status.is_terminal:
            raise ConflictError(
                f"Order {order.order_number} is {order.status.name.title()} and cannot be changed"
            )

        now = utcnow()
        if status == OrderStatus.SHIPPED:
            order.shipped_date = now
        elif status == OrderStatus.DELIVERED:
            order.delivered_date = now
            if order.shipped_date is None:
                order.shipped_date = now

        previous = order.status
        order.status = status

        try:
            self.repo.update(order)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while updating status of order {order_id}: {e}")
            raise

        logger.info(f"Order {order_id} status {previous.name} -> {status.name}")
        self._notify(order)
        return mappers.order_to_dto(self.repo.get_with_items(order_id))

    def delete_order(self, order_id: int) -> None:
        order = self.repo.get_with_items(order_id)
        if not order:
            raise NotFoundError(f"Order with ID {order_id} not found")

        try:
            self.repo.remove_with_items(order)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Error while deleting order {order_id}: {e}")
            raise

        logger.info(f"Order {order_id} deleted with {len(order.items)} items")

    def _notify(self, order: OrderModel) -> None:
        try:
            self.notifier.send_order_notification(order.user_id, order.id, order.status.name.title())
        except Exception as e:
            logger.warning(f"Failed to send notification for order {order.id}: {e}")
