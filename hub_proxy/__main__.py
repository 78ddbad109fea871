"""Run the proxy with uvicorn: ``python -m hub_proxy``."""

from __future__ import annotations

import uvicorn

from hub_proxy.core.config import get_settings
from hub_proxy.core.config import load_environment
from hub_proxy.core.logging_config import configure_logging


def main() -> None:
    load_environment()
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "hub_proxy.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
