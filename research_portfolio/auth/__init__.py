"""Authentication / authorization helpers.

Auth is deliberately small:

- One administrator account from configuration (no users table)
- Stateless JWT bearer tokens, 24h lifetime, no revocation

Routes pick a mode: `require_admin` for writes, `optional_identity` for reads.
"""

from .credentials import AdminCredentials
from .deps import AuthMode, authenticate, optional_identity, require_admin

__all__ = [
    "AdminCredentials",
    "AuthMode",
    "authenticate",
    "optional_identity",
    "require_admin",
]
