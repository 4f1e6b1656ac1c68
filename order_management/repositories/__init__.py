# order_management/repositories/__init__.py
from .base import BaseRepository
from .customer_repository import CustomerRepository
from .inventory_repository import InventoryRepository
from .order_repository import OrderRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository", "CustomerRepository", "InventoryRepository", "OrderRepository", "UserRepository",
]
