# order_management/models/inventory_model.py
from sqlalchemy import Column, Integer, Numeric
from sqlalchemy.types import Unicode

from order_management.database.session import Base


class InventoryItem(Base):
    __tablename__ = "Inv_Item_Index_Child"

    item_child_id    = Column("Item_Child_id", Integer, primary_key=True, autoincrement=True)
    item_description = Column("Item_Child_Desc_e", Unicode(200), nullable=False)
    price            = Column("Price", Numeric(18, 2), nullable=False, default=0)
    bar_code         = Column("Bar_Code", Unicode(50), nullable=False)  # not unique
    unit_id          = Column("Unit_id", Integer)


class Unit(Base):
    __tablename__ = "Inv_Units"

    unit_id             = Column("Unit_id", Integer, primary_key=True, autoincrement=True)
    description_english = Column("Unit_Desc_e", Unicode(50), nullable=False)
    description_arabic  = Column("Unit_Desc_a", Unicode(50))
