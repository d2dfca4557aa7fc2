"""Account service exceptions mapped to HTTP responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AccountServiceError(Exception):
    """Base class for errors rendered as ``{"message": ...}`` responses."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Bad request"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInputError(AccountServiceError):
    """Request payload failed schema validation."""

    status_code = status.HTTP_411_LENGTH_REQUIRED
    message = "Incorrect inputs"


class UsernameTakenError(AccountServiceError):
    """A user with the requested username already exists."""

    status_code = status.HTTP_411_LENGTH_REQUIRED
    message = "Email already taken"


class UserNotFoundError(AccountServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class InvalidCredentialsError(AccountServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Wrong credentials"


class NotAuthenticatedError(AccountServiceError):
    """Missing, malformed, expired or badly signed bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}


class SigningSecretMissingError(AccountServiceError):
    """No JWT secret is configured, so tokens can be neither issued nor verified."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "JWT secret is missing"


async def account_service_error_handler(request: Request, exc: AccountServiceError) -> JSONResponse:
    """Render an AccountServiceError as a JSON message body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers,
    )
