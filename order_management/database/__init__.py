from .session import Base, SessionLocal, create_database_engine, get_db, get_engine, open_connection

__all__ = ["Base", "SessionLocal", "create_database_engine", "get_db", "get_engine", "open_connection"]
