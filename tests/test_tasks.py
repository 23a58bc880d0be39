# tests/test_tasks.py
from unittest.mock import patch

from app.services.notification_service import (
    send_order_notification_task,
    send_stock_alert_task,
)
from app.tasks.low_stock import scan_low_stock_task


def test_scan_low_stock_alerts_active_products(make_product):
    low = make_product(name="Low", sku="LOW", stock=2)
    make_product(name="Plenty", sku="PLENTY", stock=100)
    make_product(name="Hidden", sku="HIDDEN", stock=1, is_active=False)

    with patch("app.tasks.low_stock.NotificationService.send_stock_alert") as send:
        result = scan_low_stock_task()

    assert result == [low.id]
    send.assert_called_once_with(low.id, "LOW", 2)


def test_scan_survives_broker_errors(make_product):
    make_product(stock=0)

    with patch("app.tasks.low_stock.NotificationService.send_stock_alert", side_effect=ConnectionError("down")):
        assert len(scan_low_stock_task()) == 1


def test_notification_tasks_return_payload():
    assert send_order_notification_task(1, 2, "Shipped") == {"user_id": 1, "order_id": 2, "status": "Shipped"}
    assert send_stock_alert_task(3, "SKU", 1)["stock_quantity"] == 1
