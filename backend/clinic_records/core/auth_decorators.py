"""
Authorization helpers for this application.

Guarded operations receive the caller's Session explicitly as their first
argument after ``self``; there is no process-wide "current user".

DECORATOR GUIDE:
- @require_admin: every mutating operation on clinical records or accounts.
  The check runs before the wrapped body, so an unauthorized caller never
  learns whether an id exists.

Examples:
    class ClinicService:
        @require_admin
        def register_doctor(self, session, doctor):
            ...
"""

import logging
from functools import wraps

from clinic_records.core.exceptions import NotAuthorizedError
from clinic_records.domain.entities import Session

logger = logging.getLogger(__name__)


def ensure_admin(session: Session, operation: str = "operation") -> None:
    """Raise NotAuthorizedError unless ``session`` is an authenticated admin."""
    if not isinstance(session, Session) or not session.is_authenticated:
        logger.warning(
            "Rejected unauthenticated call",
            extra={"context": {"operation": operation}},
        )
        raise NotAuthorizedError("Access denied: login required")

    if not session.is_admin:
        logger.warning(
            "Rejected non-admin call",
            extra={"context": {"operation": operation, "username": session.username}},
        )
        raise NotAuthorizedError()


def require_admin(f):
    """Decorator requiring an administrator Session as the first argument."""

    @wraps(f)
    def decorated_function(self, session, *args, **kwargs):
        ensure_admin(session, f.__name__)
        return f(self, session, *args, **kwargs)

    return decorated_function
