# order_management/services/dashboard_service.py
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional, Sequence

from sqlalchemy.orm import Session

from order_management.config.settings import Settings, get_settings
from order_management.models import Order
from order_management.repositories import OrderRepository
from order_management.schemas import DashboardData

from .auth_service import AuthenticationService
from .order_service import to_summary

logger = logging.getLogger(__name__)


def summarize_orders(
    orders: Sequence[Order],
    now: datetime,
    recent_days: int = 7,
    max_orders: int = 50,
) -> DashboardData:
    """
    Totals over the whole list; the summaries keep the list order
    (newest order number first) and are capped at max_orders.
    """
    cutoff = now - timedelta(days=recent_days)
    recent = sum(1 for o in orders if o.order_date is not None and o.order_date >= cutoff)
    total_amount = sum((o.amount or Decimal("0") for o in orders), Decimal("0"))

    return DashboardData(
        total_orders=len(orders),
        total_amount=total_amount,
        recent_orders=recent,
        orders=[to_summary(o) for o in orders[:max_orders]],
    )


class DashboardService:

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or get_settings()
        self.orders = OrderRepository(db, self.settings)
        self.auth = AuthenticationService(db, self.settings, now=now)
        self.now = now

    def get_dashboard_data(self, user_id: int) -> DashboardData:
        try:
            user_name = self.auth.get_user_name(user_id)
            data = summarize_orders(
                self.orders.get_orders(),
                self.now(),
                recent_days=self.settings.dashboard_recent_days,
                max_orders=self.settings.dashboard_max_orders,
            )
            data.user_name = user_name
            return data
        except Exception as e:
            logger.error(f"Error getting dashboard data for user {user_id}: {e!r}")
            return DashboardData(error_message=f"Failed to load dashboard: {e}")
