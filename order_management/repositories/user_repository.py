# order_management/repositories/user_repository.py
from typing import Any, Mapping, Optional

from sqlalchemy import text

from order_management.database.sql import as_datetime, as_int, as_str, column
from order_management.models import User

from .base import BaseRepository

USER_COLUMNS = "User_ID, User_Name, Password, Password_Date, Password_Period, Company_ID"


def _row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        user_id=as_int(column(row, "User_ID")),
        user_name=as_str(column(row, "User_Name"), ""),
        password=as_str(column(row, "Password"), ""),
        password_date=as_datetime(column(row, "Password_Date")),
        password_period=as_int(column(row, "Password_Period")),
        company_id=as_int(column(row, "Company_ID")),
    )


class UserRepository(BaseRepository):
    """
    Lookups here raise when both paths fail, so that authentication can tell
    "no such user" apart from "database unavailable".
    """

    def get_user_by_credentials(self, username: str, password: str) -> Optional[User]:
        # TODO: move to hashed passwords once the legacy Users table can be migrated
        return self.run(
            f"get_user_by_credentials({username!r})",
            lambda: (
                self.db.query(User)
                .filter(User.user_name == username, User.password == password)
                .first()
            ),
            lambda: self._get_user_by_credentials_sql(username, password),
        )

    def _get_user_by_credentials_sql(self, username: str, password: str) -> Optional[User]:
        with self.connect() as conn:
            row = conn.execute(
                text(
                    f"SELECT {USER_COLUMNS} FROM Users "
                    "WHERE User_Name = :username AND Password = :password"
                ),
                {"username": username, "password": password},
            ).mappings().first()
        return _row_to_user(row) if row is not None else None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.run(
            f"get_user_by_id({user_id})",
            lambda: self.db.get(User, user_id),
            lambda: self._get_user_by_id_sql(user_id),
        )

    def _get_user_by_id_sql(self, user_id: int) -> Optional[User]:
        with self.connect() as conn:
            row = conn.execute(
                text(f"SELECT {USER_COLUMNS} FROM Users WHERE User_ID = :user_id"),
                {"user_id": user_id},
            ).mappings().first()
        return _row_to_user(row) if row is not None else None

    def user_exists(self, username: str) -> bool:
        return self.run(
            f"user_exists({username!r})",
            lambda: self.db.query(User.user_id).filter(User.user_name == username).first() is not None,
            lambda: self._user_exists_sql(username),
        )

    def _user_exists_sql(self, username: str) -> bool:
        with self.connect() as conn:
            count = conn.execute(
                text("SELECT COUNT(*) FROM Users WHERE User_Name = :username"),
                {"username": username},
            ).scalar()
        return (count or 0) > 0
