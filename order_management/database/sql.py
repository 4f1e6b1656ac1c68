# order_management/database/sql.py
"""Hand-built parameterized SQL used by the raw fallback path."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection
from sqlalchemy.sql.elements import TextClause


def bound(stmt: str, values: Dict[str, Any]) -> TextClause:
    """
    text() with one bind per value. Each bind takes its SQL type from the value,
    so Decimal and datetime go through the dialect's own conversion.
    """
    return text(stmt).bindparams(*(bindparam(k, v) for k, v in values.items()))


def insert_statement(table: str, values: Dict[str, Any], returning: Optional[str] = None) -> str:
    columns = ", ".join(values)
    params = ", ".join(f":{c}" for c in values)
    if returning is None:
        return f"INSERT INTO {table} ({columns}) VALUES ({params})"
    return f"INSERT INTO {table} ({columns}) VALUES ({params}) RETURNING {returning}"


def identity_insert_statement(dialect: str, table: str, values: Dict[str, Any], pk: str) -> Optional[str]:
    """
    INSERT that hands back the generated identity as its only result row,
    or None when the dialect needs a LAST_INSERT_ID() follow-up.
    SQL Server routes OUTPUT through a table variable: a bare OUTPUT clause
    is rejected on tables with enabled triggers.
    """
    if dialect == "mssql":
        columns = ", ".join(values)
        params = ", ".join(f":{c}" for c in values)
        return (
            "SET NOCOUNT ON; "
            "DECLARE @inserted TABLE (id INT); "
            f"INSERT INTO {table} ({columns}) OUTPUT INSERTED.{pk} INTO @inserted VALUES ({params}); "
            "SELECT id FROM @inserted;"
        )
    if dialect in ("sqlite", "postgresql"):
        return insert_statement(table, values, returning=pk)
    return None


def insert_returning_identity(conn: Connection, table: str, values: Dict[str, Any], pk: str) -> int:
    """INSERT with an explicit column list and return the generated identity."""
    stmt = identity_insert_statement(conn.dialect.name, table, values, pk)
    if stmt is not None:
        return int(conn.execute(bound(stmt, values)).scalar_one())

    conn.execute(bound(insert_statement(table, values), values))
    return int(conn.execute(text("SELECT LAST_INSERT_ID()")).scalar_one())


def column(row: Mapping[str, Any], name: str, default: Optional[Any] = None) -> Any:
    """Read a column from a result mapping; absent or NULL gives `default`."""
    value = row.get(name)
    return default if value is None else value


def as_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    return default if value is None else int(value)


def as_decimal(value: Any, default: Optional[Decimal] = Decimal("0")) -> Optional[Decimal]:
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    # drivers without native decimals hand back floats
    return Decimal(str(value))


def as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    # SQLite keeps DATETIME columns as ISO text
    return datetime.fromisoformat(str(value))


def as_bool(value: Any) -> bool:
    return bool(value) if value is not None else False


def as_str(value: Any, default: Optional[str] = None) -> Optional[str]:
    return default if value is None else str(value)
