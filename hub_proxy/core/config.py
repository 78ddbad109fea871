"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import find_dotenv
from dotenv import load_dotenv

DEFAULT_HUB_RPC_URL = "https://nemes.farcaster.xyz:2281"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "info"


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return float(raw)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return int(raw)


@dataclass(frozen=True)
class ProxySettings:
    """Runtime settings for the proxy process and its hub calls."""

    hub_rpc_url: str
    http_timeout_seconds: float
    host: str
    port: int
    log_level: str

    def safe_for_logging(self) -> dict[str, str | int | float]:
        """Return settings in a form suitable for startup logs."""
        return {
            "hub_rpc_url": self.hub_rpc_url,
            "http_timeout_seconds": self.http_timeout_seconds,
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
        }


def load_environment(dotenv_path: str | os.PathLike[str] | None = None) -> bool:
    """Load a `.env` file into the process environment.

    Without a path, the nearest `.env` above the working directory is used. Variables
    already set in the environment are left as they are.
    """
    if dotenv_path is None:
        dotenv_path = find_dotenv(".env", usecwd=True)
    return load_dotenv(dotenv_path)


@lru_cache(maxsize=1)
def get_settings() -> ProxySettings:
    """Load proxy settings from the environment."""
    return ProxySettings(
        hub_rpc_url=os.getenv("MAINNET_HUB_RPC_URL") or DEFAULT_HUB_RPC_URL,
        http_timeout_seconds=_get_float_env("HUB_PROXY_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
        host=os.getenv("HOST") or DEFAULT_HOST,
        port=_get_int_env("PORT", DEFAULT_PORT),
        log_level=(os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).lower(),
    )
