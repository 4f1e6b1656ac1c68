# order_management/models/order_detail_model.py
from sqlalchemy import Column, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from order_management.database.session import Base


class OrderDetail(Base):
    __tablename__ = "Inv_Orders_Details"

    order_detail_id  = Column("Order_Detail_id", Integer, primary_key=True, autoincrement=True)
    order_id         = Column("Order_id", Integer, ForeignKey("Inv_Orders_Master.orderId", ondelete="CASCADE"), nullable=False, index=True)
    # not a live FK: the item may change or disappear after the order is written
    item_child_id    = Column("Item_Child_id", Integer, nullable=False)
    item_description = Column("Item_Desc", Unicode(200), nullable=False)
    order_quantity   = Column("Ord_Qty", Integer, nullable=False, default=0)
    bonus_quantity   = Column("Qty_Bonus", Integer, nullable=False, default=0)
    price            = Column("Price", Numeric(18, 2), nullable=False, default=0)
    discount_percent = Column("Discount_Percent", Numeric(5, 2), nullable=False, default=0)
    bar_code         = Column("Bar_Code", Unicode(50))
    unit_id          = Column("Unit_id", Integer)
    item_notes       = Column("Item_Notes", Unicode(500))

    order = relationship("Order", back_populates="details")
