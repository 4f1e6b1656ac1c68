# order_management/schemas/users.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class LoginErrorType(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INCORRECT_PASSWORD = "INCORRECT_PASSWORD"
    PASSWORD_EXPIRED = "PASSWORD_EXPIRED"
    NO_COMPANY_ID = "NO_COMPANY_ID"
    SERVER_ERROR = "SERVER_ERROR"


class LoginResult(BaseModel):
    success: bool = False
    error_message: Optional[str] = None
    error_type: Optional[LoginErrorType] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    company_id: Optional[int] = None

    @classmethod
    def failure(cls, error_type: LoginErrorType, message: str) -> "LoginResult":
        return cls(success=False, error_type=error_type, error_message=message)
