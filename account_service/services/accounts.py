"""User and account persistence."""

import logging
import random
from collections.abc import Callable
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_service.errors import UsernameTakenError
from account_service.models.account import Account
from account_service.models.user import User

logger = logging.getLogger(__name__)

MAX_INITIAL_BALANCE = 10000

BalancePolicy = Callable[[], int]


def random_initial_balance() -> int:
    """Starting balance in ``[0, MAX_INITIAL_BALANCE)``.

    Uses the non-cryptographic :mod:`random` generator; never use it for
    anything security related.
    """
    return random.randrange(MAX_INITIAL_BALANCE)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def register_user(
    db: Session,
    *,
    username: str,
    first_name: str,
    last_name: str,
    password_hash: str,
    balance: int,
) -> User:
    """Create a user and its account in a single transaction.

    Raises UsernameTakenError if a concurrent registration claimed the
    username. Any other failure, including one from the account insert,
    rolls back both rows and propagates unchanged.
    """
    user = User(
        username=username,
        first_name=first_name,
        last_name=last_name,
        password_hash=password_hash,
    )
    try:
        db.add(user)
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Registration conflict for username {username!r}")
        raise UsernameTakenError() from e
    except Exception:
        db.rollback()
        raise

    try:
        db.add(Account(user_id=user.id, balance=balance))
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    return user


def update_user(db: Session, user: User, changes: dict[str, Any]) -> User:
    """Apply only the given column changes to ``user``."""
    for field, value in changes.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user


def find_users(db: Session, name_filter: str = "") -> list[User]:
    """Users whose first or last name contains ``name_filter``, ignoring case.

    The filter is a literal substring; an empty filter matches everyone.
    """
    query = db.query(User)
    if name_filter:
        query = query.filter(
            or_(
                User.first_name.icontains(name_filter, autoescape=True),
                User.last_name.icontains(name_filter, autoescape=True),
            )
        )
    return query.order_by(User.id).all()
