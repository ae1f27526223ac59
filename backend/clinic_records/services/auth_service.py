import logging
from typing import Optional

from clinic_records.core.auth_decorators import require_admin
from clinic_records.core.security import hash_password, verify_password
from clinic_records.domain.entities import ADMIN_ROLE, Account, Session
from clinic_records.services.clinic_service import ClinicService

logger = logging.getLogger(__name__)


class AuthService:
    """Application service for accounts, login and logout.

    Sessions are plain values returned to the caller; this service keeps
    no notion of a "current user".
    """

    def __init__(self, store: ClinicService) -> None:
        self.store = store

    def _new_admin(self, account_id: str, username: str, password: str) -> Account:
        if not username:
            raise ValueError("Username is required")
        if not password:
            raise ValueError("Password is required")
        return Account(
            id=account_id,
            username=username,
            password_hash=hash_password(password),
            role=ADMIN_ROLE,
        )

    @require_admin
    def register_admin(
        self, session: Session, account_id: str, username: str, password: str
    ) -> Account:
        """Register another administrator account.

        Raises:
            NotAuthorizedError: If ``session`` is not an administrator session
            DuplicateUsernameError: If the username is taken
            ValueError: If username or password is empty
        """
        return self.store.add_account(self._new_admin(account_id, username, password))

    def ensure_default_admin(
        self, account_id: str, username: str, password: str
    ) -> Optional[Account]:
        """Create the first administrator when no accounts exist.

        Returns:
            The created account, or None if accounts already exist
        """
        if self.store.accounts:
            return None
        account = self.store.add_account(
            self._new_admin(account_id, username, password)
        )
        logger.warning(
            "Default admin account created",
            extra={"context": {"username": username}},
        )
        return account

    def login(self, username: str, password: str) -> Optional[Session]:
        """Authenticate with username and password.

        Returns:
            An authenticated Session if successful, None otherwise
        """
        account = self.store.find_account(username)
        if account is None or not verify_password(password, account.password_hash):
            logger.warning("Login failed", extra={"context": {"username": username}})
            return None

        logger.info(
            "Login succeeded",
            extra={"context": {"username": username, "admin": account.is_admin}},
        )
        return Session(account=account)

    def logout(self, session: Session) -> Session:
        """End ``session`` and return an anonymous one."""
        if session.is_authenticated:
            logger.info("Logout", extra={"context": {"username": session.username}})
        return Session.anonymous()
