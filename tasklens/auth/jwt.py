"""Access tokens for tasklens sessions.

Tokens are HS256 JWTs whose subject is the user id. A token is stateless:
logging out only means the client forgets it, so the lifetime is the only
thing that ends a session.
"""

import os
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from dotenv import load_dotenv

load_dotenv()

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

TOKEN_ISSUER = "tasklens"
TOKEN_TYPE = "access"
ACCESS_TOKEN_LIFETIME = timedelta(hours=JWT_EXPIRATION_HOURS)


class AccessTokenError(ValueError):
    """Raised when a bearer token cannot establish a session."""


class ExpiredAccessTokenError(AccessTokenError):
    """The token was valid once but its lifetime has passed."""


def create_access_token(user_id: str, expires_in: Optional[timedelta] = None) -> str:
    """Issue a session token for `user_id`.

    Args:
        user_id: Owner of the session
        expires_in: Token lifetime (defaults to ACCESS_TOKEN_LIFETIME); a
            negative value issues an already-expired token

    Returns:
        Encoded JWT
    """
    now = datetime.utcnow()
    lifetime = expires_in if expires_in is not None else ACCESS_TOKEN_LIFETIME
    payload = {
        "sub": user_id,
        "iss": TOKEN_ISSUER,
        "typ": TOKEN_TYPE,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify a session token and return its claims.

    Raises:
        ExpiredAccessTokenError: If the token has expired
        AccessTokenError: If the signature, issuer, type or subject is wrong
    """
    try:
        claims = jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            issuer=TOKEN_ISSUER,
            options={"require": ["sub", "exp", "iat", "iss"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredAccessTokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise AccessTokenError(f"Invalid token: {type(e).__name__}") from e

    if claims.get("typ") != TOKEN_TYPE or not claims.get("sub"):
        raise AccessTokenError("Invalid token: not a session token")
    return claims


def get_user_id_from_token(token: str) -> str:
    """Return the user id a valid session token was issued to.

    Raises:
        AccessTokenError: See `decode_access_token`
    """
    return decode_access_token(token)["sub"]
