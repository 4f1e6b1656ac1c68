# order_management/services/auth_service.py
import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from order_management.config.settings import Settings, get_settings
from order_management.repositories import UserRepository
from order_management.schemas import LoginErrorType, LoginResult

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"


class AuthenticationService:
    """
    Credential check against the legacy Users table.
    authenticate() never raises: every outcome is a classified LoginResult.
    """

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or get_settings()
        self.users = UserRepository(db, self.settings)
        self.now = now

    def authenticate(self, username: Optional[str], password: Optional[str]) -> LoginResult:
        try:
            if not username or not username.strip() or not password or not password.strip():
                return LoginResult.failure(LoginErrorType.INVALID_INPUT, "Username and password are required")

            logger.info(f"Authentication attempt for username: {username}")
            user = self.users.get_user_by_credentials(username, password)

            if user is None:
                user_exists = self.users.user_exists(username)
                logger.warning(f"Authentication failed for username: {username}")
                if user_exists:
                    return LoginResult.failure(LoginErrorType.INCORRECT_PASSWORD, "Invalid password")
                return LoginResult.failure(LoginErrorType.USER_NOT_FOUND, "Username not found")

            if user.is_password_expired(self.now()):
                logger.warning(f"Password expired for user: {username}")
                return LoginResult.failure(
                    LoginErrorType.PASSWORD_EXPIRED,
                    "Your password has expired. Please reset your password.",
                )

            if user.company_id is None:
                logger.warning(f"No company associated with user: {username}")
                return LoginResult.failure(
                    LoginErrorType.NO_COMPANY_ID,
                    "No company associated with this user. Please contact support.",
                )

            logger.info(f"Authentication successful for user: {username}")
            return LoginResult(
                success=True,
                user_id=user.user_id,
                user_name=user.user_name,
                company_id=user.company_id,
            )
        except Exception as e:
            logger.error(f"Error during authentication for username {username}: {e!r}")
            return LoginResult.failure(
                LoginErrorType.SERVER_ERROR,
                "An error occurred during authentication. Please try again.",
            )

    def is_user_logged_in(self, user_id: int) -> bool:
        try:
            return self.users.get_user_by_id(user_id) is not None
        except Exception as e:
            logger.error(f"Error checking user {user_id}: {e!r}")
            return False

    def get_user_name(self, user_id: int) -> str:
        try:
            user = self.users.get_user_by_id(user_id)
            return user.user_name if user is not None and user.user_name else UNKNOWN_USER
        except Exception as e:
            logger.error(f"Error getting username for user {user_id}: {e!r}")
            return UNKNOWN_USER
