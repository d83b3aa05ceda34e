import os
from dataclasses import dataclass
from typing import List, Optional

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    # If python-dotenv isn't installed or .env isn't present, that's fine.
    pass


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Parse a boolean environment variable.

    Returns:
      - True/False if the env var is set to a recognizable value
      - default if unset or unrecognized

    Accepted truthy: 1, true, yes, y, on
    Accepted falsy:  0, false, no, n, off
    """

    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return default


def _env_first(*names: str, default: str = "") -> str:
    for name in names:
        raw = os.environ.get(name)
        if raw is not None and raw.strip():
            return raw.strip()
    return default


MEMORY_DSN = ":memory:"
DEFAULT_JWT_SECRET = "dev_change_me"

_APP_ENV = _env_first("APP_ENV", "NODE_ENV", default="development").lower()


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide the admin password and JWT secret via environment variables
    or a .env file. The defaults below are for local development only.
    """

    # -----------------
    # Core
    # -----------------
    APP_ENV: str = _APP_ENV
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    API_HOST: str = os.environ.get("API_HOST", "0.0.0.0")
    API_PORT: int = int(_env_first("API_PORT", "PORT", default="3001"))

    # SQLite file path, or ":memory:" for a process-local store.
    # Production deployments run on a read-only filesystem, so they default to memory.
    DB_DSN: str = os.environ.get(
        "RESEARCH_DB_PATH",
        MEMORY_DSN if _APP_ENV == "production" else "./research_portfolio.sqlite",
    )

    # Insert example rows when the articles table is empty.
    SEED_ON_STARTUP: bool = _env_bool("SEED_ON_STARTUP", True) is True

    # -----------------
    # Auth
    # -----------------
    # Single administrator account. ADMIN_PASSWORD_HASH (pbkdf2_sha256, see
    # scripts/hash_password.py) wins over the plaintext ADMIN_PASSWORD.
    ADMIN_USERNAME: str = os.environ.get("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.environ.get("ADMIN_PASSWORD", "admin123")
    ADMIN_PASSWORD_HASH: str | None = (os.environ.get("ADMIN_PASSWORD_HASH") or "").strip() or None

    # NOTE: In dev, this defaults to a fixed string so you can get started.
    # In production, you MUST set AUTH_JWT_SECRET to a strong random value.
    AUTH_JWT_SECRET: str = _env_first("AUTH_JWT_SECRET", "JWT_SECRET", default=DEFAULT_JWT_SECRET)

    # -----------------
    # CORS
    # -----------------
    # Vite dev servers pick the next free port, hence the range.
    CORS_ALLOW_ORIGINS: str = os.environ.get(
        "CORS_ALLOW_ORIGINS",
        "http://localhost:5173,http://localhost:5174,http://localhost:5175",
    )
    FRONTEND_URL: str | None = (os.environ.get("FRONTEND_URL") or "").strip() or None
    VERCEL_URL: str | None = (os.environ.get("VERCEL_URL") or "").strip() or None
    CUSTOM_DOMAIN: str | None = (os.environ.get("CUSTOM_DOMAIN") or "").strip() or None

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.strip().lower() == "production"

    @property
    def is_memory_db(self) -> bool:
        return self.DB_DSN.strip() == MEMORY_DSN

    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
        if self.FRONTEND_URL:
            origins.append(self.FRONTEND_URL)
        # Hostnames only; both are served over https.
        if self.VERCEL_URL:
            origins.append(f"https://{self.VERCEL_URL}")
        if self.CUSTOM_DOMAIN:
            origins.append(f"https://{self.CUSTOM_DOMAIN}")
        # Keep order, drop duplicates.
        return list(dict.fromkeys(origins))


def load_config() -> Config:
    return Config()
