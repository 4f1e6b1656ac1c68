# order_management/repositories/order_repository.py
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from order_management.database.sql import (
    as_decimal, as_datetime, as_int, as_str, bound, column, insert_returning_identity,
    insert_statement,
)
from order_management.models import Order, OrderDetail, OrderStatus

from .base import BaseRepository

logger = logging.getLogger(__name__)

ORDER_COLUMNS = (
    "orderId, Order_no, Order_date, rcvd_date, Customer_id, Customer_Name, amount, "
    "Delivery_Terms, Payment_Terms, Status, notes, Salesman_id, User_id"
)
DETAIL_COLUMNS = (
    "Order_Detail_id, Order_id, Item_Child_id, Item_Desc, Ord_Qty, Qty_Bonus, "
    "Price, Discount_Percent, Bar_Code, Unit_id, Item_Notes"
)


def _row_to_order(row: Mapping[str, Any]) -> Order:
    return Order(
        order_id=as_int(column(row, "orderId")),
        order_number=as_int(column(row, "Order_no"), 0),
        order_date=as_datetime(column(row, "Order_date")),
        received_date=as_datetime(column(row, "rcvd_date")),
        customer_id=as_int(column(row, "Customer_id"), 0),
        customer_name=as_str(column(row, "Customer_Name")),
        amount=as_decimal(column(row, "amount")),
        delivery_terms=as_str(column(row, "Delivery_Terms")),
        payment_terms=as_str(column(row, "Payment_Terms")),
        status=as_int(column(row, "Status"), int(OrderStatus.PENDING)),
        notes=as_str(column(row, "notes")),
        salesman_id=as_int(column(row, "Salesman_id")),
        user_id=as_int(column(row, "User_id")),
    )


def _row_to_detail(row: Mapping[str, Any]) -> OrderDetail:
    return OrderDetail(
        order_detail_id=as_int(column(row, "Order_Detail_id")),
        order_id=as_int(column(row, "Order_id")),
        item_child_id=as_int(column(row, "Item_Child_id"), 0),
        item_description=as_str(column(row, "Item_Desc"), ""),
        order_quantity=as_int(column(row, "Ord_Qty"), 0),
        bonus_quantity=as_int(column(row, "Qty_Bonus"), 0),
        price=as_decimal(column(row, "Price")),
        discount_percent=as_decimal(column(row, "Discount_Percent")),
        bar_code=as_str(column(row, "Bar_Code"), ""),
        unit_id=as_int(column(row, "Unit_id")),
        item_notes=as_str(column(row, "Item_Notes")),
    )


def _order_values(order: Order) -> Dict[str, Any]:
    return {
        "Order_no": order.order_number,
        "Order_date": order.order_date,
        "rcvd_date": order.received_date,
        "Customer_id": order.customer_id,
        "Customer_Name": order.customer_name,
        "amount": order.amount,
        "Delivery_Terms": order.delivery_terms,
        "Payment_Terms": order.payment_terms,
        "Status": int(order.status if order.status is not None else OrderStatus.PENDING),
        "notes": order.notes,
        "Salesman_id": order.salesman_id,
        "User_id": order.user_id,
    }


def _detail_values(detail: OrderDetail) -> Dict[str, Any]:
    return {
        "Order_id": detail.order_id,
        "Item_Child_id": detail.item_child_id,
        "Bar_Code": detail.bar_code,
        "Item_Desc": detail.item_description,
        "Ord_Qty": detail.order_quantity,
        "Qty_Bonus": detail.bonus_quantity or 0,
        "Price": detail.price,
        "Discount_Percent": detail.discount_percent or 0,
        "Unit_id": detail.unit_id,
        "Item_Notes": detail.item_notes,
    }


class OrderRepository(BaseRepository):

    # ---------- reads ----------
    def get_orders(self) -> List[Order]:
        """All orders, newest order number first. Empty list when nothing can be read."""
        return self.run(
            "get_orders",
            lambda: self.db.query(Order).order_by(Order.order_number.desc()).all(),
            self._get_orders_sql,
            default=[],
        )

    def _get_orders_sql(self) -> List[Order]:
        with self.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {ORDER_COLUMNS} FROM Inv_Orders_Master ORDER BY Order_no DESC")
            ).mappings().all()
        orders = [_row_to_order(r) for r in rows]
        logger.info(f"Retrieved {len(orders)} orders using raw SQL")
        return orders

    def get_order_by_id(self, order_id: int) -> Optional[Order]:
        return self.run(
            f"get_order_by_id({order_id})",
            lambda: self._get_order_orm(order_id),
            lambda: self._get_order_sql(order_id),
            default=None,
        )

    def _get_order_orm(self, order_id: int) -> Optional[Order]:
        order = (
            self.db.query(Order)
            .options(selectinload(Order.details))
            .filter(Order.order_id == order_id)
            .first()
        )
        if order is None:
            logger.warning(f"Order with ID {order_id} not found")
        return order

    def _get_order_sql(self, order_id: int) -> Optional[Order]:
        with self.connect() as conn:
            row = conn.execute(
                text(f"SELECT {ORDER_COLUMNS} FROM Inv_Orders_Master WHERE orderId = :order_id"),
                {"order_id": order_id},
            ).mappings().first()
            if row is None:
                return None
            order = _row_to_order(row)
            order.details = self._select_details(conn, order_id)
        return order

    def get_order_details(self, order_id: int) -> List[OrderDetail]:
        return self.run(
            f"get_order_details({order_id})",
            lambda: (
                self.db.query(OrderDetail)
                .filter(OrderDetail.order_id == order_id)
                .order_by(OrderDetail.order_detail_id)
                .all()
            ),
            lambda: self._get_order_details_sql(order_id),
            default=[],
        )

    def _get_order_details_sql(self, order_id: int) -> List[OrderDetail]:
        with self.connect() as conn:
            return self._select_details(conn, order_id)

    @staticmethod
    def _select_details(conn: Connection, order_id: int) -> List[OrderDetail]:
        rows = conn.execute(
            text(
                f"SELECT {DETAIL_COLUMNS} FROM Inv_Orders_Details "
                "WHERE Order_id = :order_id ORDER BY Order_Detail_id"
            ),
            {"order_id": order_id},
        ).mappings().all()
        return [_row_to_detail(r) for r in rows]

    def get_next_order_number(self) -> int:
        """max(Order_no) + 1, or 1 for an empty table. Raises if neither path can read."""
        return self.run(
            "get_next_order_number",
            lambda: (self.db.query(func.max(Order.order_number)).scalar() or 0) + 1,
            self._get_next_order_number_sql,
        )

    def _get_next_order_number_sql(self) -> int:
        with self.connect() as conn:
            value = conn.execute(
                text("SELECT COALESCE(MAX(Order_no), 0) + 1 FROM Inv_Orders_Master")
            ).scalar()
        return int(value or 1)

    # ---------- writes ----------
    def create_order(self, order: Order) -> int:
        """
        Insert the master row inside a transaction and return its identity.
        A duplicate order number is not retried here; the caller allocates a new one.
        """
        values = _order_values(order)
        return self.run(
            f"create_order(number={order.order_number})",
            lambda: self._create_order_orm(order),
            lambda: self._create_order_sql(values),
            no_fallback=(IntegrityError,),
        )

    def _create_order_orm(self, order: Order) -> int:
        try:
            self.db.add(order)
            self.db.flush()
            order_id = order.order_id
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Created order {order_id} (number {order.order_number})")
        return order_id

    def _create_order_sql(self, values: Dict[str, Any]) -> int:
        with self.connect() as conn:
            with conn.begin():
                order_id = insert_returning_identity(conn, "Inv_Orders_Master", values, "orderId")
        logger.info(f"Created order {order_id} (number {values['Order_no']}) using raw SQL")
        return order_id

    def create_order_detail(self, detail: OrderDetail) -> bool:
        """Each line is written on its own; failure is reported as False."""
        values = _detail_values(detail)
        return self.run(
            f"create_order_detail(order={detail.order_id}, item={detail.item_child_id})",
            lambda: self._create_order_detail_orm(detail),
            lambda: self._create_order_detail_sql(values),
            default=False,
        )

    def _create_order_detail_orm(self, detail: OrderDetail) -> bool:
        try:
            self.db.add(detail)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return detail.order_detail_id is not None

    def _create_order_detail_sql(self, values: Dict[str, Any]) -> bool:
        with self.connect() as conn:
            with conn.begin():
                inserted = conn.execute(
                    bound(insert_statement("Inv_Orders_Details", values), values)
                ).rowcount
        return inserted > 0
