# order_management/config/settings.py
import os
from functools import lru_cache
from typing import Mapping, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_ODBC_DRIVER = "ODBC Driver 17 for SQL Server"


class Settings(BaseModel):
    database_url: str
    # seconds; applied to every SQL Server command
    command_timeout: int = Field(default=120, ge=1)
    connect_retries: int = Field(default=5, ge=0)
    retry_base_delay: float = Field(default=0.5, ge=0)
    retry_max_delay: float = Field(default=30.0, ge=0)
    default_salesman_id: int = 1
    dashboard_recent_days: int = Field(default=7, ge=0)
    dashboard_max_orders: int = Field(default=50, ge=0)
    order_number_retries: int = Field(default=3, ge=0)
    sql_echo: bool = False


def build_database_url(env: Mapping[str, str]) -> str:
    """
    DATABASE_URL wins; otherwise a SQL Server ODBC url is assembled
    from DB_HOST / DB_PORT / DB_NAME / DB_USER / DB_PASSWORD.
    """
    url = (env.get("DATABASE_URL") or "").strip()
    if url:
        return url

    host = (env.get("DB_HOST") or "").strip()
    name = (env.get("DB_NAME") or "").strip()
    user = (env.get("DB_USER") or "").strip()
    password = (env.get("DB_PASSWORD") or "").strip()
    port = (env.get("DB_PORT") or "1433").strip()
    driver = (env.get("DB_DRIVER") or DEFAULT_ODBC_DRIVER).strip()

    missing = [
        key for key, value in (
            ("DB_HOST", host), ("DB_NAME", name), ("DB_USER", user), ("DB_PASSWORD", password),
        ) if not value
    ]
    if missing:
        raise RuntimeError(f"Missing DB env vars: {', '.join(missing)} (or set DATABASE_URL)")

    odbc_str = (
        f"DRIVER={driver};"
        f"SERVER={host},{port};"
        f"DATABASE={name};"
        f"UID={user};"
        f"PWD={password};"
        "Encrypt=yes;"
        "TrustServerCertificate=yes;"
        "Connection Timeout=30;"
    )
    return "mssql+pyodbc:///?odbc_connect=" + quote_plus(odbc_str)


def _env_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    values = {"database_url": build_database_url(env)}

    numeric = {
        "DB_COMMAND_TIMEOUT": ("command_timeout", int),
        "DB_CONNECT_RETRIES": ("connect_retries", int),
        "DB_RETRY_BASE_DELAY": ("retry_base_delay", float),
        "DB_RETRY_MAX_DELAY": ("retry_max_delay", float),
        "DEFAULT_SALESMAN_ID": ("default_salesman_id", int),
        "DASHBOARD_RECENT_DAYS": ("dashboard_recent_days", int),
        "DASHBOARD_MAX_ORDERS": ("dashboard_max_orders", int),
        "ORDER_NUMBER_RETRIES": ("order_number_retries", int),
    }
    for key, (field, cast) in numeric.items():
        raw = env.get(key)
        if raw is not None and raw.strip():
            values[field] = cast(raw.strip())

    values["sql_echo"] = _env_bool(env.get("SQL_ECHO"))
    return Settings(**values)


@lru_cache
def get_settings() -> Settings:
    return load_settings()
