# tests/test_models.py
from datetime import datetime, timedelta

from order_management.models import Order, OrderStatus, User

JAN_1 = datetime(2026, 1, 1)


def test_password_expiry():
    user = User(password_date=JAN_1, password_period=30)
    assert user.password_expires_at() == JAN_1 + timedelta(days=30)
    assert user.is_password_expired(JAN_1 + timedelta(days=30)) is False
    assert user.is_password_expired(JAN_1 + timedelta(days=30, seconds=1)) is True


def test_password_without_period_or_date_never_expires():
    far_future = JAN_1 + timedelta(days=10000)
    assert User(password_date=JAN_1, password_period=0).is_password_expired(far_future) is False
    assert User(password_date=JAN_1, password_period=None).is_password_expired(far_future) is False
    assert User(password_date=None, password_period=30).is_password_expired(far_future) is False


def test_status_names():
    assert Order(status=int(OrderStatus.PENDING)).status_name == "Pending"
    assert Order(status=int(OrderStatus.SHIPPED)).status_name == "Shipped"
    assert Order(status=int(OrderStatus.DELIVERED)).status_name == "Delivered"
    assert Order(status=None).status_name == "Pending"
    assert Order(status=9).status_name == "9"
