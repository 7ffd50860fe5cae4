"""
Centralized configuration for fqdnproxy.

All configuration is loaded from environment variables with sensible defaults.
A ``.env`` file in the working directory is loaded first when present.

Usage:
    from fqdnproxy.config import get_config
    cfg = get_config()
    print(cfg.db.backend)        # "sqlite"
    print(cfg.proxy.timeout)     # 30.0
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DB_BACKENDS = ("sqlite", "postgres")


@dataclass(frozen=True)
class DatabaseConfig:
    """Entry store parameters for both backends."""

    backend: str = "sqlite"
    sqlite_path: Path = field(default_factory=lambda: Path("data") / "auu.db")

    # PostgreSQL
    host: str = ""  # empty = Unix socket (peer auth); set to 127.0.0.1 for TCP
    port: int = 5432
    name: str = "fqdnproxy"
    user: str = "fqdnproxy"
    password: str = ""
    min_conn: int = 1
    max_conn: int = 10

    @property
    def dict(self) -> dict[str, str | int]:
        """Return a psycopg2.connect() kwargs dict."""
        d: dict[str, str | int] = {
            "dbname": self.name,
            "port": self.port,
        }
        if self.host:
            d["host"] = self.host
        if self.user:
            d["user"] = self.user
        if self.password:
            d["password"] = self.password
        return d


@dataclass(frozen=True)
class ProxyConfig:
    """Outbound request parameters."""

    timeout: float = 30.0
    verify_tls: bool = True
    default_accept: str = "application/json"


@dataclass(frozen=True)
class ServerConfig:
    """HTTP listener parameters."""

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: tuple[str, ...] = ("*",)


@dataclass(frozen=True)
class Config:
    """Top-level fqdnproxy configuration."""

    trace_log: Path | None = None
    log_level: str = "INFO"

    db: DatabaseConfig = field(default_factory=DatabaseConfig)
    proxy: ProxyConfig = field(default_factory=ProxyConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    if Path(".env").exists():
        load_dotenv(".env")

    data_dir = Path(os.environ.get("FQDNPROXY_DATA_DIR", "data"))

    backend = os.environ.get("FQDNPROXY_DB_BACKEND", "sqlite").strip().lower()
    if backend not in DB_BACKENDS:
        raise ValueError(
            f"FQDNPROXY_DB_BACKEND must be one of {', '.join(DB_BACKENDS)}, got {backend!r}"
        )

    db = DatabaseConfig(
        backend=backend,
        sqlite_path=Path(os.environ.get("FQDNPROXY_SQLITE_PATH", data_dir / "auu.db")),
        host=os.environ.get("FQDNPROXY_DB_HOST", ""),
        port=int(os.environ.get("FQDNPROXY_DB_PORT", "5432")),
        name=os.environ.get("FQDNPROXY_DB_NAME", "fqdnproxy"),
        user=os.environ.get("FQDNPROXY_DB_USER", os.environ.get("USER", "fqdnproxy")),
        password=os.environ.get("FQDNPROXY_DB_PASSWORD", ""),
        min_conn=int(os.environ.get("FQDNPROXY_DB_MIN_CONN", "1")),
        max_conn=int(os.environ.get("FQDNPROXY_DB_MAX_CONN", "10")),
    )

    proxy = ProxyConfig(
        timeout=float(os.environ.get("FQDNPROXY_PROXY_TIMEOUT", "30")),
        verify_tls=_env_bool("FQDNPROXY_VERIFY_TLS", True),
        default_accept=os.environ.get("FQDNPROXY_DEFAULT_ACCEPT", "") or "application/json",
    )

    origins = os.environ.get("FQDNPROXY_CORS_ORIGINS", "*")
    server = ServerConfig(
        host=os.environ.get("FQDNPROXY_HOST", "0.0.0.0"),
        port=int(os.environ.get("FQDNPROXY_PORT", "3000")),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )

    trace_log = os.environ.get("FQDNPROXY_TRACE_LOG", "")

    return Config(
        trace_log=Path(trace_log) if trace_log else None,
        log_level=os.environ.get("FQDNPROXY_LOG_LEVEL", "INFO").upper(),
        db=db,
        proxy=proxy,
        server=server,
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
