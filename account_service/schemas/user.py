"""User request and response schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from account_service.services.auth import MAX_PASSWORD_BYTES

NAME_MAX_LENGTH = 255


def check_password(value: str) -> str:
    """Reject passwords bcrypt cannot hash without truncating or erroring."""
    if "\x00" in value:
        raise ValueError("password must not contain NUL characters")
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class SignupBody(BaseModel):
    """User registration request."""

    username: EmailStr
    first_name: str = Field(..., alias="firstName", max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., alias="lastName", max_length=NAME_MAX_LENGTH)
    password: str

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class SigninBody(BaseModel):
    """User login request."""

    username: EmailStr
    password: str


class UpdateBody(BaseModel):
    """Partial profile update; omitted fields are left untouched."""

    password: str | None = None
    first_name: str | None = Field(None, alias="firstName", max_length=NAME_MAX_LENGTH)
    last_name: str | None = Field(None, alias="lastName", max_length=NAME_MAX_LENGTH)

    @field_validator("password", "first_name", "last_name", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Fields may be omitted but not sent as null
        if value is None:
            raise ValueError("must be a string when provided")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)
