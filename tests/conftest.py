# tests/conftest.py
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from order_management import models
from order_management.config.settings import Settings
from order_management.database.session import Base

NOW = datetime(2026, 10, 19, 12, 0, 0)


def db_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database unavailable"))


@pytest.fixture
def db_url(tmp_path):
    # file-backed so the session and the raw fallback connections see the same data
    return f"sqlite:///{tmp_path / 'orders.db'}"


@pytest.fixture
def engine(db_url):
    engine = create_engine(db_url, future=True)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def settings(db_url):
    return Settings(database_url=db_url, connect_retries=0, retry_base_delay=0, default_salesman_id=7)


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, future=True)()
    yield session
    session.close()


@pytest.fixture
def break_orm(monkeypatch, db):
    """Make every ORM call on the session fail so repositories take the raw SQL path."""
    def _break():
        for name in ("query", "get", "add"):
            monkeypatch.setattr(db, name, db_down)
    return _break


@pytest.fixture
def break_sql(monkeypatch):
    """Make the raw SQL path fail to connect."""
    def _break():
        monkeypatch.setattr("order_management.repositories.base.open_connection", db_down)
    return _break


@pytest.fixture
def make_user(db):
    def _make(user_name="admin", password="secret", password_date=NOW - timedelta(days=10),
              password_period=30, company_id=1):
        user = models.User(
            user_name=user_name,
            password=password,
            password_date=password_date,
            password_period=password_period,
            company_id=company_id,
        )
        db.add(user)
        db.commit()
        return user
    return _make


@pytest.fixture
def make_customer(db):
    def _make(name="Acme Ltd", number=None, **fields):
        customer = models.Customer(name_english=name, customer_number=number, **fields)
        db.add(customer)
        db.commit()
        return customer
    return _make


@pytest.fixture
def make_order(db):
    def _make(number, amount="0", order_date=NOW, customer_id=1, customer_name="Acme Ltd", **fields):
        order = models.Order(
            order_number=number,
            order_date=order_date,
            customer_id=customer_id,
            customer_name=customer_name,
            amount=Decimal(amount),
            status=int(models.OrderStatus.PENDING),
            **fields,
        )
        db.add(order)
        db.commit()
        return order
    return _make
