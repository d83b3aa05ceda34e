from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from research_portfolio.errors import AuthError, InternalError
from research_portfolio.models import Identity

from .security import decode_access_token


_bearer = HTTPBearer(auto_error=False)


class AuthMode(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


def _identity_from_request(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Identity:
    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise InternalError("server_config_missing")

    # HTTPBearer yields None for a missing header or a non-Bearer scheme.
    if credentials is None or not credentials.credentials:
        raise AuthError("missing_token")

    payload = decode_access_token(token=credentials.credentials, secret=cfg.AUTH_JWT_SECRET)

    username = payload.get("username")
    if not username:
        raise AuthError("token_invalid")
    return Identity(username=str(username), role=str(payload.get("role") or ""))


def authenticate(mode: AuthMode) -> Callable[..., Optional[Identity]]:
    """Build a dependency that resolves the caller's identity.

    REQUIRED: missing/invalid/expired token -> 401.
    OPTIONAL: any failure resolves to None and the request proceeds.
    """

    def _dependency(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    ) -> Optional[Identity]:
        if mode is AuthMode.REQUIRED:
            return _identity_from_request(request, credentials)

        try:
            return _identity_from_request(request, credentials)
        except AuthError:
            return None

    return _dependency


require_admin = authenticate(AuthMode.REQUIRED)
optional_identity = authenticate(AuthMode.OPTIONAL)
