"""User account API endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from account_service.api.dependencies import (
    get_balance_policy,
    get_current_user_id,
    get_password_hasher,
    get_token_issuer,
)
from account_service.database import get_db
from account_service.errors import (
    InvalidCredentialsError,
    InvalidInputError,
    UsernameTakenError,
    UserNotFoundError,
)
from account_service.schemas.user import (
    MessageResponse,
    SigninBody,
    SigninResponse,
    SignupBody,
    SignupResponse,
    UpdateBody,
    UserListResponse,
    UserResponse,
)
from account_service.services.accounts import (
    BalancePolicy,
    find_users,
    get_user_by_id,
    get_user_by_username,
    register_user,
    update_user,
)
from account_service.services.auth import PasswordHasher, TokenIssuer
from account_service.services.validation import safe_parse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/user", tags=["user"])


async def read_json_body(request: Request) -> Any:
    """Decode the request body, returning None when it is not valid JSON."""
    body = await request.body()
    if not body:
        return {}
    try:
        return await request.json()
    except ValueError:
        return None


@router.post("/signup", response_model=SignupResponse)
async def signup(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    balance_policy: Annotated[BalancePolicy, Depends(get_balance_policy)],
):
    """Register a new user and open their account."""
    parsed = safe_parse(SignupBody, await read_json_body(request))
    if not parsed.success:
        raise InvalidInputError()
    data = parsed.data

    if get_user_by_username(db, data.username):
        raise UsernameTakenError()

    # Refuse before writing anything if no token could be issued afterwards
    issuer.require_secret()

    password_hash = await run_in_threadpool(hasher.hash, data.password)
    user = register_user(
        db,
        username=data.username,
        first_name=data.first_name,
        last_name=data.last_name,
        password_hash=password_hash,
        balance=balance_policy(),
    )
    logger.info(f"Registered user {user.id}")

    return SignupResponse(message="User created successfully", token=issuer.issue(user.id))


@router.post("/signin", response_model=SigninResponse)
async def signin(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
):
    """Login with username and password."""
    parsed = safe_parse(SigninBody, await read_json_body(request))
    if not parsed.success:
        raise InvalidInputError()
    data = parsed.data

    user = get_user_by_username(db, data.username)
    if user is None:
        raise UserNotFoundError()

    if not await run_in_threadpool(hasher.verify, data.password, user.password_hash):
        logger.warning(f"Failed sign-in for user {user.id}")
        raise InvalidCredentialsError()

    return SigninResponse(token=issuer.issue(user.id))


@router.put("/", response_model=MessageResponse)
@router.put("", response_model=MessageResponse, include_in_schema=False)
async def update_profile(
    user_id: Annotated[int, Depends(get_current_user_id)],
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Update the caller's password and/or name."""
    parsed = safe_parse(UpdateBody, await read_json_body(request))
    if not parsed.success:
        raise InvalidInputError("Error while updating information")

    changes = parsed.data.model_dump(exclude_unset=True)
    user = get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError()

    if "password" in changes:
        changes["password_hash"] = await run_in_threadpool(hasher.hash, changes.pop("password"))

    update_user(db, user, changes)
    logger.info(f"Updated {sorted(changes)} for user {user_id}")

    return MessageResponse(message="Updated successfully")


@router.get("/bulk", response_model=UserListResponse)
async def list_users(
    db: Annotated[Session, Depends(get_db)],
    name_filter: Annotated[str, Query(alias="filter")] = "",
):
    """List users whose first or last name contains the filter (case-insensitive)."""
    users = find_users(db, name_filter)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/getUser", response_model=UserResponse)
async def get_current_user(
    user_id: Annotated[int, Depends(get_current_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the caller's own user record."""
    user = get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError()
    return UserResponse.model_validate(user)
