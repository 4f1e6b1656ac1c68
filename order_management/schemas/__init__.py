# order_management/schemas/__init__.py

# users
from .users import LoginErrorType, LoginResult

# customers
from .customers import CustomerCreate, CustomerOut, CustomerCreationResult, CustomerNumberCheck

# orders
from .orders import (
    OrderCreate, OrderDetailCreate, OrderCreationResult,
    OrderOut, OrderDetailOut, OrderSummary,
)

# inventory
from .inventory import InventoryItemOut, UnitOut

# dashboard
from .dashboard import DashboardData

__all__ = [
    # users
    "LoginErrorType", "LoginResult",
    # customers
    "CustomerCreate", "CustomerOut", "CustomerCreationResult", "CustomerNumberCheck",
    # orders
    "OrderCreate", "OrderDetailCreate", "OrderCreationResult",
    "OrderOut", "OrderDetailOut", "OrderSummary",
    # inventory
    "InventoryItemOut", "UnitOut",
    # dashboard
    "DashboardData",
]
