from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from research_portfolio.errors import AuthError
from research_portfolio.util.time import utcnow


_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
_JWT_ALG = "HS256"

# Fixed session length. There is no refresh: log in again after expiry.
TOKEN_TTL = timedelta(hours=24)


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return _pwd.verify(password, password_hash)
    except (ValueError, TypeError):
        # Malformed or unknown hash format.
        return False


def create_access_token(
    *,
    secret: str,
    username: str,
    role: str,
    now: Optional[datetime] = None,
) -> str:
    """Issue a signed token for `username` that expires TOKEN_TTL after `now`."""
    if not secret:
        raise ValueError("jwt_secret_blank")

    issued = now or utcnow()
    exp = issued + TOKEN_TTL

    payload: Dict[str, Any] = {
        "username": username,
        "role": role,
        "iat": int(issued.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=_JWT_ALG)


def decode_access_token(*, token: str, secret: str) -> Dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises AuthError("token_expired") or AuthError("token_invalid").
    """
    if not token:
        raise AuthError("missing_token")
    if not secret:
        raise ValueError("jwt_secret_blank")
    try:
        return jwt.decode(token, secret, algorithms=[_JWT_ALG])
    except jwt.ExpiredSignatureError as e:
        raise AuthError("token_expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthError("token_invalid") from e
