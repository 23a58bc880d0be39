# app/celery_worker.py
from celery import Celery

from app.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
    LOW_STOCK_SCAN_SECONDS,
)

celery_app = Celery(
    "store",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAZNE: explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "app.tasks.low_stock",
    "app.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "scan-low-stock": {
        "task": "app.tasks.low_stock.scan_low_stock_task",
        "schedule": float(LOW_STOCK_SCAN_SECONDS),
    },
}

celery_app.conf.timezone = "UTC"

#w testach i lokalnie bez brokera taski wykonuja sie od razu
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.task_store_eager_result = False
