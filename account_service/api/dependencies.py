"""FastAPI dependencies for authentication and account services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from account_service.config import get_settings
from account_service.errors import NotAuthenticatedError
from account_service.services.accounts import BalancePolicy, random_initial_balance
from account_service.services.auth import PasswordHasher, TokenIssuer

security = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get the process-wide password hasher."""
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Get the token issuer, built once from settings."""
    settings = get_settings()
    return TokenIssuer(settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_balance_policy() -> BalancePolicy:
    """Get the policy used to pick a new account's starting balance."""
    return random_initial_balance


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> int:
    """Resolve the caller's user id from the bearer token.

    Only the token is inspected; the store is not consulted.
    """
    if credentials is None:
        raise NotAuthenticatedError()

    user_id = issuer.verify(credentials.credentials)
    if user_id is None:
        raise NotAuthenticatedError()

    return user_id
