# order_management/models/order_model.py
import enum

from sqlalchemy import Column, DateTime, Integer, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from order_management.database.session import Base


class OrderStatus(enum.IntEnum):
    """Stored as an int in Inv_Orders_Master.Status. Forward only: Pending -> Shipped -> Delivered."""
    PENDING = 0
    SHIPPED = 1
    DELIVERED = 2


class Order(Base):
    __tablename__ = "Inv_Orders_Master"

    order_id       = Column("orderId", Integer, primary_key=True, autoincrement=True)
    order_number   = Column("Order_no", Integer, nullable=False, unique=True, index=True)
    order_date     = Column("Order_date", DateTime, nullable=False)
    received_date  = Column("rcvd_date", DateTime)
    customer_id    = Column("Customer_id", Integer, nullable=False)
    customer_name  = Column("Customer_Name", Unicode(100))  # snapshot at creation
    amount         = Column("amount", Numeric(18, 2), nullable=False, default=0)
    delivery_terms = Column("Delivery_Terms", Unicode(500))
    payment_terms  = Column("Payment_Terms", Unicode(500))
    status         = Column("Status", Integer, nullable=False, default=int(OrderStatus.PENDING))
    notes          = Column("notes", Unicode(1000))
    salesman_id    = Column("Salesman_id", Integer)
    user_id        = Column("User_id", Integer)

    details = relationship(
        "OrderDetail",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderDetail.order_detail_id",
    )

    @property
    def status_name(self) -> str:
        try:
            return OrderStatus(self.status or 0).name.title()
        except ValueError:
            return str(self.status)
