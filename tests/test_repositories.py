# tests/test_repositories.py
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError

from order_management.models import Customer, InventoryItem, Order, OrderDetail, OrderStatus, Unit
from order_management.repositories import (
    BaseRepository, CustomerRepository, InventoryRepository, OrderRepository, UserRepository,
)

from .conftest import NOW


# ---------- BaseRepository.run ----------
def test_run_uses_primary_when_it_works(db, settings):
    repo = BaseRepository(db, settings)
    assert repo.run("op", lambda: "orm", lambda: "sql") == "orm"


def test_run_falls_back_on_primary_failure(db, settings):
    def primary():
        raise OperationalError("SELECT", {}, Exception("timeout"))

    assert BaseRepository(db, settings).run("op", primary, lambda: "sql") == "sql"


def test_run_returns_default_when_both_fail(db, settings):
    def fail():
        raise RuntimeError("down")

    assert BaseRepository(db, settings).run("op", fail, fail, default=[]) == []


def test_run_reraises_without_default(db, settings):
    def fail():
        raise RuntimeError("down")

    with pytest.raises(RuntimeError):
        BaseRepository(db, settings).run("op", fail, fail)


def test_run_skips_fallback_for_listed_errors(db, settings):
    calls = []

    def primary():
        raise IntegrityError("INSERT", {}, Exception("duplicate"))

    with pytest.raises(IntegrityError):
        BaseRepository(db, settings).run(
            "op", primary, lambda: calls.append("sql"), no_fallback=(IntegrityError,)
        )
    assert calls == []


# ---------- orders ----------
def test_orders_newest_number_first(db, settings, make_order):
    for number in (3, 1, 2):
        make_order(number)
    assert [o.order_number for o in OrderRepository(db, settings).get_orders()] == [3, 2, 1]


def test_orders_through_fallback(db, settings, make_order, break_orm):
    make_order(1, amount="110.00")
    make_order(2, amount="15.50", customer_name=None)
    break_orm()

    orders = OrderRepository(db, settings).get_orders()

    assert [o.order_number for o in orders] == [2, 1]
    assert orders[0].customer_name is None
    assert orders[1].amount == Decimal("110")
    assert orders[1].order_date == NOW
    assert orders[1].status == OrderStatus.PENDING


def test_orders_empty_when_both_paths_fail(db, settings, make_order, break_orm, break_sql):
    make_order(1)
    break_orm()
    break_sql()
    assert OrderRepository(db, settings).get_orders() == []


def test_order_by_id_with_details(db, settings, make_order):
    order = make_order(1)
    db.add_all([
        OrderDetail(order_id=order.order_id, item_child_id=10, item_description="Chair",
                    order_quantity=2, price=Decimal("50"), bar_code="111"),
        OrderDetail(order_id=order.order_id, item_child_id=11, item_description="Lamp",
                    order_quantity=1, price=Decimal("20"), discount_percent=Decimal("50")),
    ])
    db.commit()
    order_id = order.order_id

    found = OrderRepository(db, settings).get_order_by_id(order_id)
    assert [d.item_child_id for d in found.details] == [10, 11]


def test_order_by_id_through_fallback(db, settings, make_order, break_orm):
    order = make_order(1)
    db.add(OrderDetail(order_id=order.order_id, item_child_id=10, item_description="Chair",
                       order_quantity=2, price=Decimal("12.50")))
    db.commit()
    order_id = order.order_id
    break_orm()

    found = OrderRepository(db, settings).get_order_by_id(order_id)
    assert found.order_id == order_id
    assert len(found.details) == 1
    detail = found.details[0]
    assert detail.price == Decimal("12.5")
    assert detail.bonus_quantity == 0
    assert detail.bar_code == ""
    assert detail.item_notes is None


def test_missing_order(db, settings, break_orm):
    repo = OrderRepository(db, settings)
    assert repo.get_order_by_id(404) is None
    break_orm()
    assert repo.get_order_by_id(404) is None


def test_next_order_number(db, settings, make_order, break_orm):
    repo = OrderRepository(db, settings)
    assert repo.get_next_order_number() == 1
    make_order(41)
    assert repo.get_next_order_number() == 42
    break_orm()
    assert repo.get_next_order_number() == 42


def test_next_order_number_raises_when_unreadable(db, settings, break_orm, break_sql):
    break_orm()
    break_sql()
    with pytest.raises(OperationalError):
        OrderRepository(db, settings).get_next_order_number()


def _new_order(number):
    return Order(
        order_number=number, order_date=NOW, customer_id=1, customer_name="Acme Ltd",
        amount=Decimal("99.90"), status=int(OrderStatus.PENDING), salesman_id=1, user_id=2,
    )


def test_create_order_through_fallback(db, settings, break_orm, engine):
    break_orm()
    order_id = OrderRepository(db, settings).create_order(_new_order(5))

    with engine.connect() as conn:
        row = conn.execute(
            text("SELECT Order_no, amount, notes FROM Inv_Orders_Master WHERE orderId = :id"),
            {"id": order_id},
        ).one()
    assert row.Order_no == 5
    assert Decimal(str(row.amount)) == Decimal("99.90")
    assert row.notes is None


def test_duplicate_order_number_is_not_retried_on_raw_path(db, settings, make_order, monkeypatch):
    make_order(5)
    repo = OrderRepository(db, settings)
    fallback_calls = []
    monkeypatch.setattr(repo, "_create_order_sql", lambda values: fallback_calls.append(values))

    with pytest.raises(IntegrityError):
        repo.create_order(_new_order(5))
    assert fallback_calls == []


def _order_count(engine):
    with engine.connect() as conn:
        return conn.execute(text("SELECT COUNT(*) FROM Inv_Orders_Master")).scalar()


def test_duplicate_order_number_on_raw_path_rolls_back(db, settings, make_order, break_orm, engine):
    make_order(5)
    break_orm()

    with pytest.raises(IntegrityError):
        OrderRepository(db, settings).create_order(_new_order(5))
    assert _order_count(engine) == 1


def test_create_order_raises_when_both_paths_fail(db, settings, break_orm, break_sql, engine):
    break_orm()
    break_sql()

    with pytest.raises(OperationalError):
        OrderRepository(db, settings).create_order(_new_order(1))
    assert _order_count(engine) == 0


def test_create_order_detail_through_fallback(db, settings, make_order, break_orm):
    order = make_order(1)
    order_id = order.order_id
    break_orm()

    repo = OrderRepository(db, settings)
    saved = repo.create_order_detail(OrderDetail(
        order_id=order_id, item_child_id=10, item_description="Chair", order_quantity=3,
        price=Decimal("12.50"), discount_percent=Decimal("10"), bar_code=None,
    ))

    assert saved is True
    [detail] = repo.get_order_details(order_id)
    assert detail.order_quantity == 3
    assert detail.discount_percent == Decimal("10")


def test_create_order_detail_false_when_both_fail(db, settings, break_orm, break_sql):
    break_orm()
    break_sql()
    detail = OrderDetail(order_id=1, item_child_id=10, item_description="Chair",
                         order_quantity=1, price=Decimal("1"))
    assert OrderRepository(db, settings).create_order_detail(detail) is False


# ---------- customers ----------
def test_customers_sorted_by_name(db, settings, make_customer):
    make_customer("Zeta")
    make_customer("Alpha")
    assert [c.name_english for c in CustomerRepository(db, settings).get_customers()] == ["Alpha", "Zeta"]


def test_create_customer_through_fallback_stores_nulls(db, settings, break_orm, engine):
    break_orm()
    repo = CustomerRepository(db, settings)
    customer_id = repo.create_customer(Customer(
        name_english="Acme Ltd", customer_number="C-1", discount_percent=Decimal("2.5"),
        is_release_tax=False, is_project_account=True,
    ))

    with engine.connect() as conn:
        row = conn.execute(
            text("SELECT Name_a, Phone1, E_mail, Is_Project_Account FROM Cust_Sup WHERE Cust_Sup_id = :id"),
            {"id": customer_id},
        ).one()
    assert row.Name_a is None
    assert row.Phone1 is None
    assert row.E_mail is None
    assert bool(row.Is_Project_Account) is True

    found = repo.get_customer_by_id(customer_id)
    assert found.name_english == "Acme Ltd"
    assert found.discount_percent == Decimal("2.5")
    assert found.is_release_tax is False


def test_customer_number_exists(db, settings, make_customer, break_orm):
    make_customer(number="C-100")
    repo = CustomerRepository(db, settings)
    assert repo.customer_number_exists("C-100") is True
    assert repo.customer_number_exists("C-200") is False
    break_orm()
    assert repo.customer_number_exists("C-100") is True


def test_customer_number_check_raises_when_unreadable(db, settings, break_orm, break_sql):
    break_orm()
    break_sql()
    with pytest.raises(OperationalError):
        CustomerRepository(db, settings).customer_number_exists("C-1")


# ---------- users ----------
def test_user_lookups(db, settings, make_user, break_orm):
    user = make_user()
    user_id = user.user_id
    repo = UserRepository(db, settings)

    assert repo.get_user_by_credentials("admin", "secret").user_id == user_id
    assert repo.get_user_by_credentials("admin", "wrong") is None
    assert repo.user_exists("admin") is True

    break_orm()
    fallback_user = repo.get_user_by_credentials("admin", "secret")
    assert fallback_user.user_id == user_id
    assert isinstance(fallback_user.password_date, datetime)
    assert repo.get_user_by_id(user_id).company_id == 1
    assert repo.user_exists("nobody") is False


# ---------- inventory ----------
def test_inventory_lookups(db, settings, break_orm):
    db.add(Unit(unit_id=1, description_english="Piece"))
    db.add_all([
        InventoryItem(item_description="Lamp", price=Decimal("20"), bar_code="222", unit_id=1),
        InventoryItem(item_description="Chair", price=Decimal("50"), bar_code="111", unit_id=1),
    ])
    db.commit()
    repo = InventoryRepository(db, settings)

    assert [i.item_description for i in repo.get_inventory_items()] == ["Chair", "Lamp"]
    break_orm()
    items = repo.get_inventory_items()
    assert [i.item_description for i in items] == ["Chair", "Lamp"]
    assert items[0].price == Decimal("50")
    assert [u.description_english for u in repo.get_units()] == ["Piece"]
    assert repo.get_inventory_item_by_id(items[1].item_child_id).bar_code == "222"
