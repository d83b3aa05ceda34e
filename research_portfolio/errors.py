"""Error taxonomy shared by repositories, auth and the API layer.

Each error carries the HTTP status it maps to and a short machine-readable
`detail` string (e.g. "article_not_found") that is returned to clients as-is.
"""

from __future__ import annotations


class PortfolioError(Exception):
    status_code: int = 500
    default_detail: str = "internal_error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(PortfolioError):
    status_code = 400
    default_detail = "invalid_request"


class AuthError(PortfolioError):
    status_code = 401
    default_detail = "unauthorized"


class NotFoundError(PortfolioError):
    status_code = 404
    default_detail = "not_found"


class ConflictError(PortfolioError):
    status_code = 409
    default_detail = "conflict"


class InternalError(PortfolioError):
    status_code = 500
    default_detail = "internal_error"
