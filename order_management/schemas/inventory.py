# order_management/schemas/inventory.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class InventoryItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    item_child_id: int
    item_description: str
    price: Decimal
    bar_code: str
    unit_id: Optional[int] = None


class UnitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    unit_id: int
    description_english: str
    description_arabic: Optional[str] = None
