"""Bearer token issuing and verification.

Tokens are HS256 JWTs carrying the user's ``username`` and ``id``. The login
password is a single configured placeholder, not a credential scheme.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from common.constants import USERS
from common.env import env
from common.logger import get_logger
from store import DocumentStore, Row

logger = get_logger(__name__)

ALGORITHM = "HS256"
BEARER_PREFIX = "bearer "


@dataclass
class AuthConfig:
    """Token signing configuration.

    Attributes:
        secret: Signing secret
        login_password: Password accepted for every user
        token_ttl_minutes: Token lifetime, None for tokens without expiry
    """

    secret: str
    login_password: str = "secret"
    token_ttl_minutes: int | None = None

    def __post_init__(self):
        if not self.secret:
            raise ValueError("JWT_SECRET is required")

    @classmethod
    def from_env(cls) -> "AuthConfig":
        return cls(
            secret=env.jwt_secret(),
            login_password=env.login_password(),
            token_ttl_minutes=env.token_ttl_minutes(),
        )


def create_token(user: Row, config: AuthConfig) -> str:
    """Sign a token for a stored user.

    Args:
        user: User document with "username" and "id"
        config: Signing configuration

    Returns:
        Encoded JWT
    """
    claims = {"username": user["username"], "id": user["id"]}
    if config.token_ttl_minutes is not None:
        claims["exp"] = datetime.now(timezone.utc) + timedelta(minutes=config.token_ttl_minutes)
    return jwt.encode(claims, config.secret, algorithm=ALGORITHM)


def decode_token(token: str, config: AuthConfig) -> dict:
    """Verify a token and return its claims.

    Raises:
        jwt.InvalidTokenError: If the signature is wrong, the token is
            malformed or it has expired
    """
    return jwt.decode(token, config.secret, algorithms=[ALGORITHM])


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


async def resolve_current_user(
    store: DocumentStore, authorization: str | None, config: AuthConfig
) -> Row | None:
    """Resolve the user a request is authenticated as.

    Args:
        store: Document store holding users
        authorization: Raw Authorization header value, if any
        config: Signing configuration

    Returns:
        User document, or None for unauthenticated requests
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return None

    try:
        claims = decode_token(token, config)
    except jwt.InvalidTokenError as e:
        logger.debug(f"Ignoring invalid token: {e}")
        return None

    user_id = claims.get("id")
    if not user_id:
        return None
    return await store.find_one(USERS, {"id": user_id})
