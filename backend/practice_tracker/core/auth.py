"""Password hashing and bearer token issue/validation."""

import logging
from typing import Any

import bcrypt
from jose import JWTError, jwt

from practice_tracker.config import Settings
from practice_tracker.core.exceptions import Internal, Unauthorized

logger = logging.getLogger(__name__)

# Only signature integrity and subject presence are checked; every standard
# registered claim is ignored.
_IGNORED_CLAIM_CHECKS = {
    "verify_aud": False,
    "verify_iat": False,
    "verify_nbf": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


def hash_password(password: str) -> str:
    """Hash password with bcrypt. Bytes truncated to 72 (bcrypt limit)."""
    pwd_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(pwd_bytes, bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify password with bcrypt. A malformed stored hash counts as a mismatch."""
    plain_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(plain_bytes, password_hash.encode("utf-8"))
    except ValueError:
        return False


class TokenService:
    """
    Issues and validates HS256 bearer tokens carrying a user id in ``sub``.

    Expiry policy: tokens are issued without ``exp`` and, with the default
    ``verify_expiry=False``, validation ignores any ``exp`` a token carries.
    Once issued a token stays valid until the signing secret changes.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", verify_expiry: bool = False):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.verify_expiry = verify_expiry

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        if settings.uses_default_jwt_secret:
            logger.warning(
                "JWT_SECRET is not set; signing tokens with the built-in insecure default. "
                "Anyone with the source can forge tokens. Set JWT_SECRET before exposing this service."
            )
        return cls(settings.effective_jwt_secret, algorithm=settings.jwt_algorithm)

    def issue(self, user_id: int) -> str:
        payload = {"sub": str(user_id)}
        try:
            return jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except JWTError as e:
            logger.error("Failed to create token: %s", e)
            raise Internal("Failed to create token") from e

    def decode(self, token: str) -> dict[str, Any]:
        options = dict(_IGNORED_CLAIM_CHECKS, verify_exp=self.verify_expiry)
        return jwt.decode(token, self._secret, algorithms=[self._algorithm], options=options)

    def validate(self, token: str) -> int:
        """Return the user id bound to ``token`` or raise Unauthorized."""
        try:
            payload = self.decode(token)
        except JWTError as e:
            raise Unauthorized("Invalid token") from e
        sub = payload.get("sub")
        if sub is None or isinstance(sub, bool):
            raise Unauthorized("Invalid token")
        try:
            return int(sub)
        except (TypeError, ValueError) as e:
            raise Unauthorized("Invalid token") from e
