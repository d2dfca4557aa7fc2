"""Password hashing and JWT issuance."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordTruncateError

from account_service.errors import SigningSecretMissingError

TOKEN_LIFETIME = timedelta(hours=1)

# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted one-way password hashing backed by bcrypt.

    Passwords longer than ``MAX_PASSWORD_BYTES`` are refused rather than
    truncated, so two passwords sharing a 72-byte prefix never collide.
    """

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt.

        Raises PasswordTruncateError if the UTF-8 encoding exceeds the bcrypt limit.
        """
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PasswordTruncateError(self.pwd_context.handler("bcrypt"))
        return self.pwd_context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        if len(plain_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False


class TokenIssuer:
    """Issues and verifies signed bearer tokens carrying a ``userId`` claim.

    The signing secret is fixed at construction. When it is missing every
    call to :meth:`issue` or :meth:`verify` raises
    :class:`SigningSecretMissingError` instead of falling back to a default key.
    """

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        expires_delta: timedelta = TOKEN_LIFETIME,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def require_secret(self) -> str:
        """Return the signing secret or raise if none is configured."""
        if not self._secret:
            raise SigningSecretMissingError()
        return self._secret

    def issue(self, user_id: int) -> str:
        """Create a signed token for ``user_id`` expiring after ``expires_delta``."""
        secret = self.require_secret()
        issued_at = datetime.now(UTC)
        to_encode = {
            "userId": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int | None:
        """Return the user id in ``token``, or None if it is expired, malformed or badly signed."""
        secret = self.require_secret()
        try:
            payload = jwt.decode(
                token, secret, algorithms=[self.algorithm], options={"require_exp": True}
            )
        except JWTError:
            return None

        user_id = payload.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            return None
        return user_id
