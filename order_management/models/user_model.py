# order_management/models/user_model.py
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.types import Unicode

from order_management.database.session import Base


class User(Base):
    __tablename__ = "Users"
    user_id         = Column("User_ID", Integer, primary_key=True, autoincrement=True)
    user_name       = Column("User_Name", Unicode(50), unique=True, nullable=False)
    password        = Column("Password", Unicode(100), nullable=False)  # legacy plaintext, compared as-is
    password_date   = Column("Password_Date", DateTime)
    password_period = Column("Password_Period", Integer)  # days
    company_id      = Column("Company_ID", Integer)

    def password_expires_at(self) -> Optional[datetime]:
        if self.password_date is None or not self.password_period or self.password_period <= 0:
            return None
        return self.password_date + timedelta(days=self.password_period)

    def is_password_expired(self, now: datetime) -> bool:
        expires_at = self.password_expires_at()
        return expires_at is not None and now > expires_at
