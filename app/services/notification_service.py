# app/services/notification_service.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int, status: str):
        """Powiadomienie o zmianie statusu zamowienia."""
        send_order_notification_task.delay(user_id, order_id, status)

    @staticmethod
    def send_product_update(product_id: int, action: str):
        send_product_update_task.delay(product_id, action)

    @staticmethod
    def send_stock_alert(product_id: int, sku: str, stock_quantity: int):
        send_stock_alert_task.delay(product_id, sku, stock_quantity)


def get_notifier() -> NotificationService:
    return NotificationService()


@celery_app.task(name="app.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, status: str):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is {status}")
    return {"user_id": user_id, "order_id": order_id, "status": status}


@celery_app.task(name="app.services.notification_service.send_product_update_task")
def send_product_update_task(product_id: int, action: str):
    logger.info(f"[NOTIFICATION] Product {product_id} {action}")
    return {"product_id": product_id, "action": action}


@celery_app.task(name="app.services.notification_service.send_stock_alert_task")
def send_stock_alert_task(product_id: int, sku: str, stock_quantity: int):
    logger.warning(f"[STOCK ALERT] Product {product_id} ({sku}) has only {stock_quantity} items left")
    return {"product_id": product_id, "sku": sku, "stock_quantity": stock_quantity}
