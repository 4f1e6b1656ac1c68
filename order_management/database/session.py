# order_management/database/session.py
import logging
import time
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from order_management.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# errors worth another connection attempt
TRANSIENT_ERRORS = (OperationalError, InterfaceError)


def create_database_engine(settings: Settings) -> Engine:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        future=True,
        echo=settings.sql_echo,
    )

    if engine.dialect.name == "mssql":
        command_timeout = settings.command_timeout

        @event.listens_for(engine, "connect")
        def _apply_command_timeout(dbapi_connection, connection_record):
            # pyodbc: query timeout in seconds for every cursor on this connection
            dbapi_connection.timeout = command_timeout

    return engine


SessionLocal = sessionmaker(autoflush=False, autocommit=False)

_engine: Optional[Engine] = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_database_engine(get_settings())
        SessionLocal.configure(bind=_engine)
    return _engine


def get_db() -> Iterator[Session]:
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def open_connection(
    engine: Engine,
    retries: int = 5,
    base_delay: float = 0.5,
    max_delay: float = 30.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Connection:
    """
    Open a raw connection, retrying transient failures with exponential backoff.
    After `retries` extra attempts the last error is re-raised.
    """
    attempt = 0
    while True:
        try:
            return engine.connect()
        except TRANSIENT_ERRORS as e:
            if attempt >= retries:
                logger.error(f"Giving up on database connection after {attempt + 1} attempts: {e}")
                raise
            delay = min(base_delay * (2 ** attempt), max_delay)
            logger.warning(
                f"Database connection attempt {attempt + 1} failed ({e.__class__.__name__}), "
                f"retrying in {delay:.1f}s"
            )
            sleep(delay)
            attempt += 1
