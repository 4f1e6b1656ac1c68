# order_management/repositories/base.py
import logging
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from order_management.config.settings import Settings
from order_management.database.session import open_connection

logger = logging.getLogger(__name__)

T = TypeVar("T")

# marker: no default, re-raise when the fallback fails too
RAISE = object()


class BaseRepository:
    """
    Every operation goes through `run`: the ORM path against the request
    session first, then hand-written SQL on a fresh connection.
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None) -> None:
        self.db = db
        self.settings = settings

    def connect(self) -> Connection:
        kwargs = {}
        if self.settings is not None:
            kwargs = {
                "retries": self.settings.connect_retries,
                "base_delay": self.settings.retry_base_delay,
                "max_delay": self.settings.retry_max_delay,
            }
        return open_connection(self.db.get_bind(), **kwargs)

    def run(
        self,
        operation: str,
        primary: Callable[[], T],
        fallback: Callable[[], T],
        default: Any = RAISE,
        no_fallback: Tuple[Type[BaseException], ...] = (),
    ) -> T:
        try:
            return primary()
        except no_fallback:
            self._reset_session()
            raise
        except Exception as orm_error:
            self._reset_session()
            logger.warning(f"{operation}: ORM query failed ({orm_error!r}), falling back to raw SQL")

        try:
            return fallback()
        except Exception as sql_error:
            logger.error(f"{operation}: raw SQL fallback failed as well: {sql_error!r}")
            if default is RAISE:
                raise
            return default

    def _reset_session(self) -> None:
        try:
            self.db.rollback()
        except Exception as e:
            logger.debug(f"Session rollback after ORM failure did not complete: {e!r}")
