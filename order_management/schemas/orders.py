# order_management/schemas/orders.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _today() -> datetime:
    return datetime.combine(date.today(), datetime.min.time())


class OrderDetailCreate(BaseModel):
    bar_code: str = Field(max_length=50)
    item_child_id: int
    item_description: str = Field(max_length=200)
    unit_id: int
    quantity: int = Field(ge=0)
    bonus_quantity: int = Field(default=0, ge=0)
    price: Decimal = Field(ge=0)
    discount_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    item_notes: Optional[str] = Field(default=None, max_length=500)


class OrderCreate(BaseModel):
    customer_id: int = Field(gt=0)
    order_date: datetime = Field(default_factory=_today)
    received_date: Optional[datetime] = None
    delivery_terms: Optional[str] = Field(default=None, max_length=500)
    payment_terms: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)
    order_details: List[OrderDetailCreate] = []


class OrderCreationResult(BaseModel):
    success: bool
    error_message: Optional[str] = None
    order_id: Optional[int] = None
    order_number: Optional[int] = None


class OrderDetailOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_detail_id: int
    order_id: int
    item_child_id: int
    item_description: str
    order_quantity: int
    bonus_quantity: int = 0
    price: Decimal
    discount_percent: Decimal = Decimal("0")
    bar_code: Optional[str] = None
    unit_id: Optional[int] = None
    item_notes: Optional[str] = None


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: int
    order_number: int
    order_date: Optional[datetime] = None
    received_date: Optional[datetime] = None
    customer_id: int
    customer_name: Optional[str] = None
    amount: Decimal
    delivery_terms: Optional[str] = None
    payment_terms: Optional[str] = None
    status: str = Field(validation_alias="status_name")
    notes: Optional[str] = None
    salesman_id: Optional[int] = None
    user_id: Optional[int] = None
    details: List[OrderDetailOut] = []


class OrderSummary(BaseModel):
    order_id: int
    order_number: int
    order_date: Optional[datetime] = None
    customer_name: str
    amount: Decimal
    status: str
