from __future__ import annotations

from dataclasses import dataclass

from research_portfolio.config import Config
from research_portfolio.errors import AuthError
from research_portfolio.models import Identity

from .security import hash_password, verify_password

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class AdminCredentials:
    """The single administrator account.

    Only a password hash is kept. It comes from ADMIN_PASSWORD_HASH when set,
    otherwise ADMIN_PASSWORD is hashed once when the store is built.
    """

    username: str
    password_hash: str

    @classmethod
    def from_config(cls, cfg: Config) -> "AdminCredentials":
        username = (cfg.ADMIN_USERNAME or "").strip()
        if not username:
            raise ValueError("admin_username_blank")

        password_hash = cfg.ADMIN_PASSWORD_HASH or hash_password(cfg.ADMIN_PASSWORD)
        return cls(username=username, password_hash=password_hash)

    def authenticate(self, username: str, password: str) -> Identity:
        """Check a login attempt; raises AuthError("invalid_credentials") on mismatch."""
        # Hash check runs even on a username miss so both failures cost the same.
        password_ok = verify_password(password, self.password_hash)
        if username != self.username or not password_ok:
            raise AuthError("invalid_credentials")
        return Identity(username=self.username, role=ADMIN_ROLE)
