"""SQLAlchemy models."""

from account_service.models.account import Account
from account_service.models.user import User

__all__ = [
    "User",
    "Account",
]
