# order_management/services/__init__.py
from .auth_service import AuthenticationService
from .customer_service import CustomerService
from .dashboard_service import DashboardService, summarize_orders
from .order_service import OrderService, calculate_order_total

__all__ = [
    "AuthenticationService", "CustomerService", "DashboardService", "OrderService",
    "calculate_order_total", "summarize_orders",
]
