"""
unkey_gateway.api.__main__

Entrypoint for running the gateway via `python -m unkey_gateway.api` or the
`unkey-gateway` console script.
"""

from __future__ import annotations

import uvicorn

from unkey_gateway.api.app import create_app
from unkey_gateway.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.gateway_host,
        port=settings.gateway_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
