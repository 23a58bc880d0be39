# app/tasks/low_stock.py
from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.repos.product_repo import ProductRepo
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger
from app.utils.settings import LOW_STOCK_THRESHOLD

logger = get_logger(__name__)


@celery_app.task(name="app.tasks.low_stock.scan_low_stock_task")
def scan_low_stock_task(threshold: int = LOW_STOCK_THRESHOLD):
    logger.info("Low stock scan started")

    db = SessionLocal()
    try:
        products = [p for p in ProductRepo(db).get_low_stock(threshold) if p.is_active]

        logger.info(f"Found {len(products)} products with stock <= {threshold}")

        for product in products:
            try:
                NotificationService.send_stock_alert(product.id, product.sku, product.stock_quantity)
            except Exception as e:
                #broker niedostepny, nastepny skan sprobuje jeszcze raz
                logger.warning(f"Failed to send stock alert for product {product.id}: {e}")

        return [p.id for p in products]
    finally:
        db.close()
