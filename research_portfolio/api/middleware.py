import logging
import time
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from research_portfolio.logger import get_logger

log = get_logger(__name__)


def _level_for(status: int, quiet: bool) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.DEBUG if quiet else logging.INFO


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """One line per request: `METHOD path -> status Nms`.

    5xx logs at ERROR and 4xx at WARNING (rejected logins show up without
    raising LOG_LEVEL). Successful hits on `quiet_paths` drop to DEBUG.
    An exception escaping the app is logged as 500.
    """

    def __init__(self, app: ASGIApp, quiet_paths: Iterable[str] = ("/api/health",)):
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            ms = int((time.perf_counter() - start) * 1000)
            path = request.url.path
            log.log(
                _level_for(status, path in self.quiet_paths),
                "%s %s -> %d %dms",
                request.method,
                path,
                status,
                ms,
            )
