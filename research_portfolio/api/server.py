from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from research_portfolio.api.middleware import RequestLoggerMiddleware
from research_portfolio.api.payloads import (
    ArticlePayload,
    BookPayload,
    IndicatorPayload,
    LoginRequest,
    StockPayload,
    VerifyRequest,
    require_fields,
)
from research_portfolio.auth import AdminCredentials, optional_identity, require_admin
from research_portfolio.auth.security import create_access_token, decode_access_token
from research_portfolio.config import DEFAULT_JWT_SECRET, Config, load_config
from research_portfolio.db import Database, init_db
from research_portfolio.errors import AuthError, PortfolioError, ValidationError
from research_portfolio.logger import get_logger
from research_portfolio.models import Identity
from research_portfolio.repositories import BOOK_STATUSES, Repositories, build_repositories
from research_portfolio.seed import seed_initial_data

log = get_logger(__name__)

router = APIRouter(prefix="/api")


def get_config(request: Request) -> Config:
    return request.app.state.cfg


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repos


def get_credentials(request: Request) -> AdminCredentials:
    return request.app.state.credentials


# -----------------------------
# Health
# -----------------------------


@router.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "OK", "message": "Research Portfolio API is running"}


# -----------------------------
# Auth
# -----------------------------


@router.post("/auth/login")
def auth_login(
    payload: LoginRequest,
    cfg: Config = Depends(get_config),
    credentials: AdminCredentials = Depends(get_credentials),
) -> Dict[str, Any]:
    if not payload.username or not payload.password:
        raise ValidationError("username_and_password_required")

    identity = credentials.authenticate(payload.username, payload.password)
    token = create_access_token(
        secret=cfg.AUTH_JWT_SECRET,
        username=identity.username,
        role=identity.role,
    )
    log.info("Admin login: username=%s", identity.username)
    return {
        "message": "Login successful",
        "token": token,
        "token_type": "bearer",
        "user": identity.as_dict(),
    }


@router.post("/auth/verify")
def auth_verify(payload: VerifyRequest, cfg: Config = Depends(get_config)) -> Dict[str, Any]:
    if not payload.token:
        raise ValidationError("token_required")
    claims = decode_access_token(token=payload.token, secret=cfg.AUTH_JWT_SECRET)
    return {"valid": True, "user": claims}


@router.post("/auth/logout")
def auth_logout() -> Dict[str, Any]:
    """Tokens are stateless; the client just drops its copy."""
    return {"message": "Logout successful"}


# -----------------------------
# Articles
# -----------------------------


@router.get("/articles")
def list_articles(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> List[Dict[str, Any]]:
    return repos.articles.list(category=category, search=search)


@router.get("/articles/{article_id}")
def get_article(
    article_id: str,
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> Dict[str, Any]:
    return repos.articles.get(article_id)


@router.post("/articles", status_code=201)
def create_article(
    payload: ArticlePayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    require_fields(payload, "id", "title", "category", "content", "date")
    new_id = repos.articles.create(payload.as_record())
    return {"message": "Article created successfully", "id": new_id}


@router.put("/articles/{article_id}")
def update_article(
    article_id: str,
    payload: ArticlePayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    require_fields(payload, "title", "category", "content", "date")
    repos.articles.update(article_id, payload.as_record())
    return {"message": "Article updated successfully"}


@router.delete("/articles/{article_id}")
def delete_article(
    article_id: str,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    repos.articles.delete(article_id)
    return {"message": "Article deleted successfully"}


# -----------------------------
# Stocks
# -----------------------------


@router.get("/stocks")
def list_stocks(
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> List[Dict[str, Any]]:
    return repos.stocks.list()


@router.get("/stocks/{stock_id}")
def get_stock(
    stock_id: str,
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> Dict[str, Any]:
    return repos.stocks.get(stock_id)


@router.post("/stocks", status_code=201)
def create_stock(
    payload: StockPayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    require_fields(payload, "symbol", "company_name")
    new_id = repos.stocks.create(payload.as_record())
    return {"message": "Stock created successfully", "id": new_id}


@router.put("/stocks/{stock_id}")
def update_stock(
    stock_id: str,
    payload: StockPayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    # symbol is fixed at creation; only the descriptive fields are replaced.
    require_fields(payload, "company_name")
    repos.stocks.update(stock_id, payload.as_record())
    return {"message": "Stock updated successfully"}


@router.delete("/stocks/{stock_id}")
def delete_stock(
    stock_id: str,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    repos.stocks.delete(stock_id)
    return {"message": "Stock deleted successfully"}


# -----------------------------
# Economic indicators
# -----------------------------


@router.get("/indicators")
def list_indicators(
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> List[Dict[str, Any]]:
    return repos.indicators.list()


@router.get("/indicators/{indicator_id}")
def get_indicator(
    indicator_id: str,
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> Dict[str, Any]:
    return repos.indicators.get(indicator_id)


@router.post("/indicators", status_code=201)
def create_indicator(
    payload: IndicatorPayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    require_fields(payload, "name", "value", "date")
    new_id = repos.indicators.create(payload.as_record())
    return {"message": "Indicator created successfully", "id": new_id}


@router.put("/indicators/{indicator_id}")
def update_indicator(
    indicator_id: str,
    payload: IndicatorPayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    require_fields(payload, "name", "value", "date")
    repos.indicators.update(indicator_id, payload.as_record())
    return {"message": "Indicator updated successfully"}


@router.delete("/indicators/{indicator_id}")
def delete_indicator(
    indicator_id: str,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    repos.indicators.delete(indicator_id)
    return {"message": "Indicator deleted successfully"}


# -----------------------------
# Books
# -----------------------------


def _check_book(payload: BookPayload) -> None:
    require_fields(payload, "title", "author")

    rating = payload.rating
    if rating is not None and (rating < 1 or rating > 5):
        raise ValidationError("invalid_rating")

    status = (payload.status or "").strip()
    if status and status not in BOOK_STATUSES:
        raise ValidationError("invalid_status")


@router.get("/books")
def list_books(
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> List[Dict[str, Any]]:
    return repos.books.list()


@router.get("/books/{book_id}")
def get_book(
    book_id: str,
    repos: Repositories = Depends(get_repositories),
    _viewer: Optional[Identity] = Depends(optional_identity),
) -> Dict[str, Any]:
    return repos.books.get(book_id)


@router.post("/books", status_code=201)
def create_book(
    payload: BookPayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    _check_book(payload)
    new_id = repos.books.create(payload.as_record())
    return {"message": "Book created successfully", "id": new_id}


@router.put("/books/{book_id}")
def update_book(
    book_id: str,
    payload: BookPayload,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    _check_book(payload)
    repos.books.update(book_id, payload.as_record())
    return {"message": "Book updated successfully"}


@router.delete("/books/{book_id}")
def delete_book(
    book_id: str,
    repos: Repositories = Depends(get_repositories),
    _admin: Identity = Depends(require_admin),
) -> Dict[str, Any]:
    repos.books.delete(book_id)
    return {"message": "Book deleted successfully"}


# -----------------------------
# App factory
# -----------------------------


def _install_error_handlers(app: FastAPI, cfg: Config) -> None:
    @app.exception_handler(PortfolioError)
    async def _portfolio_error(request: Request, exc: PortfolioError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        if exc.status_code >= 500:
            log.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": "invalid_request", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        log.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        message = "Internal server error" if cfg.is_production else str(exc)
        return JSONResponse(status_code=500, content={"detail": "internal_error", "message": message})


def create_app(cfg: Optional[Config] = None, repos: Optional[Repositories] = None) -> FastAPI:
    """Build the API.

    The store handle and repositories are created here, once, and shared by every
    request through `app.state`. Pass `repos` to substitute them (tests); their
    store is then the one initialized at startup, and the caller still owns it.
    Schema creation and seeding run at startup.
    """
    cfg = cfg or load_config()
    owns_db = repos is None
    if repos is None:
        repos = build_repositories(Database(cfg.DB_DSN))
    db = repos.db

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Starting Research Portfolio API (%s, store=%s)", cfg.APP_ENV, db.describe())
        if cfg.is_production and cfg.AUTH_JWT_SECRET == DEFAULT_JWT_SECRET:
            log.warning("AUTH_JWT_SECRET is the development default; set a strong secret in production")

        init_db(db)
        if cfg.SEED_ON_STARTUP:
            seed_initial_data(repos)

        yield

        if owns_db:
            db.close()
        log.info("Research Portfolio API stopped")

    app = FastAPI(title="Research Portfolio API", version="0.1.0", lifespan=lifespan)
    app.state.cfg = cfg
    app.state.db = db
    app.state.repos = repos
    app.state.credentials = AdminCredentials.from_config(cfg)

    app.add_middleware(RequestLoggerMiddleware)

    cors_origins = cfg.cors_origins()
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    _install_error_handlers(app, cfg)
    app.include_router(router)
    return app


app = create_app()
