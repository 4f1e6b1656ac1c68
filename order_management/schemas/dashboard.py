# order_management/schemas/dashboard.py
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from .orders import OrderSummary


class DashboardData(BaseModel):
    user_name: str = ""
    total_orders: int = 0
    total_amount: Decimal = Decimal("0")
    recent_orders: int = 0
    orders: List[OrderSummary] = []
    error_message: Optional[str] = None
