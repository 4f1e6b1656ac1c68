# order_management/services/order_service.py
import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from order_management.config.settings import Settings, get_settings
from order_management.models import Customer, Order, OrderDetail, OrderStatus
from order_management.repositories import CustomerRepository, InventoryRepository, OrderRepository
from order_management.schemas import (
    InventoryItemOut, OrderCreate, OrderCreationResult, OrderDetailCreate, OrderOut,
    OrderSummary, UnitOut,
)

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def calculate_order_total(lines: Iterable[OrderDetailCreate]) -> Decimal:
    """Σ (qty × price − qty × price × discount%) over lines with a positive quantity."""
    total = Decimal("0")
    for line in lines:
        if line.quantity <= 0:
            continue
        line_total = line.quantity * line.price
        total += line_total - line_total * (line.discount_percent / HUNDRED)
    return total


def to_summary(order: Order) -> OrderSummary:
    return OrderSummary(
        order_id=order.order_id,
        order_number=order.order_number,
        order_date=order.order_date,
        customer_name=order.customer_name or "N/A",
        amount=order.amount if order.amount is not None else Decimal("0"),
        status=order.status_name,
    )


class OrderService:

    def __init__(self, db: Session, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.orders = OrderRepository(db, self.settings)
        self.customers = CustomerRepository(db, self.settings)
        self.inventory = InventoryRepository(db, self.settings)

    # ---------- queries ----------
    def get_order_summaries(self) -> List[OrderSummary]:
        try:
            return [to_summary(o) for o in self.orders.get_orders()]
        except Exception as e:
            logger.error(f"Error getting order summaries: {e!r}")
            return []

    def get_order_by_id(self, order_id: int) -> Optional[OrderOut]:
        try:
            order = self.orders.get_order_by_id(order_id)
            return OrderOut.model_validate(order) if order is not None else None
        except Exception as e:
            logger.error(f"Error getting order {order_id}: {e!r}")
            return None

    def get_inventory_items(self) -> List[InventoryItemOut]:
        try:
            return [InventoryItemOut.model_validate(i) for i in self.inventory.get_inventory_items()]
        except Exception as e:
            logger.error(f"Error getting inventory items: {e!r}")
            return []

    def get_units(self) -> List[UnitOut]:
        try:
            return [UnitOut.model_validate(u) for u in self.inventory.get_units()]
        except Exception as e:
            logger.error(f"Error getting units: {e!r}")
            return []

    def get_next_order_number(self) -> Optional[int]:
        """Preview of the number the next order would get; None when it cannot be read."""
        try:
            return self.orders.get_next_order_number()
        except Exception as e:
            logger.error(f"Error getting next order number: {e!r}")
            return None

    # ---------- create ----------
    def create_order(self, request: OrderCreate, user_id: int) -> OrderCreationResult:
        try:
            customer = self.customers.get_customer_by_id(request.customer_id)
            if customer is None:
                return OrderCreationResult(success=False, error_message="Customer not found")

            amount = calculate_order_total(request.order_details)
            order_id, order_number = self._insert_master(request, customer, amount, user_id)

            for line in request.order_details:
                if line.quantity <= 0:
                    continue
                detail = OrderDetail(
                    order_id=order_id,
                    item_child_id=line.item_child_id,
                    item_description=line.item_description,
                    order_quantity=line.quantity,
                    bonus_quantity=line.bonus_quantity,
                    price=line.price,
                    discount_percent=line.discount_percent,
                    bar_code=line.bar_code,
                    unit_id=line.unit_id,
                    item_notes=line.item_notes,
                )
                if not self.orders.create_order_detail(detail):
                    logger.warning(f"Order {order_id}: line for item {line.item_child_id} was not saved")

            logger.info(f"Order created successfully. OrderId: {order_id}, OrderNumber: {order_number}")
            return OrderCreationResult(success=True, order_id=order_id, order_number=order_number)
        except Exception as e:
            logger.error(f"Error creating order: {e!r}")
            return OrderCreationResult(success=False, error_message=f"Failed to create order: {e}")

    def _insert_master(
        self, request: OrderCreate, customer: Customer, amount: Decimal, user_id: int
    ) -> Tuple[int, int]:
        # Order_no is unique; a concurrent insert that took our number surfaces as IntegrityError
        attempts = self.settings.order_number_retries + 1
        for attempt in range(1, attempts + 1):
            order_number = self.orders.get_next_order_number()
            order = Order(
                order_number=order_number,
                order_date=request.order_date,
                received_date=request.received_date,
                customer_id=request.customer_id,
                customer_name=customer.name_english,
                amount=amount,
                delivery_terms=request.delivery_terms,
                payment_terms=request.payment_terms,
                status=int(OrderStatus.PENDING),
                notes=request.notes,
                salesman_id=self.settings.default_salesman_id,
                user_id=user_id,
            )
            try:
                return self.orders.create_order(order), order_number
            except IntegrityError:
                if attempt >= attempts:
                    raise
                logger.warning(
                    f"Order number {order_number} was taken concurrently, "
                    f"allocating a new one (attempt {attempt}/{attempts})"
                )
