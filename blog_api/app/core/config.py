"""
Configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Every field has a default except the token
signing secret: ``JWT_SECRET`` must be present when the settings are
loaded, otherwise start‑up fails with ``RuntimeError``.

Values are read when ``load_settings`` is called, so tests can adjust
the environment before building the application.  A ``.env`` file in the
working directory (or the file named by ``ENV_FILE``) is loaded first;
variables already set in the environment win over it.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    jwt_secret: str
    project_name: str = "Blog API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = ""

    # Lifetime of issued bearer tokens, in seconds.
    access_token_expire_seconds: int = 60 * 60

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by ``core.db``.
    database_url: str = "blog.db"

    # Optional prefix under which the API router is mounted, e.g. "/api/v1".
    api_prefix: str = ""

    host: str = "0.0.0.0"
    port: int = 3000


def load_settings() -> Settings:
    """Build ``Settings`` from the current environment.

    Raises
    ------
    RuntimeError
        If ``JWT_SECRET`` is missing or empty.
    """
    load_dotenv(os.getenv("ENV_FILE", ".env"))
    secret = os.getenv("JWT_SECRET", "")
    if not secret:
        raise RuntimeError("Missing required environment variable: JWT_SECRET")
    return Settings(
        jwt_secret=secret,
        project_name=os.getenv("PROJECT_NAME", "Blog API"),
        api_version=os.getenv("API_VERSION", "1.0.0"),
        debug=_env_flag("DEBUG"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", ""),
        access_token_expire_seconds=int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", str(60 * 60))),
        database_url=os.getenv("DATABASE_URL", "blog.db"),
        api_prefix=os.getenv("API_PREFIX", ""),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )
