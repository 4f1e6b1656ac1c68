# order_management/models/__init__.py
from .user_model import User
from .customer_model import Customer
from .order_model import Order, OrderStatus
from .order_detail_model import OrderDetail
from .inventory_model import InventoryItem, Unit

__all__ = ["User", "Customer", "Order", "OrderStatus", "OrderDetail", "InventoryItem", "Unit"]
