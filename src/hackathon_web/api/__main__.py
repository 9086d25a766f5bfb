"""
hackathon_web.api.__main__

Entrypoint for running the app via `python -m hackathon_web.api` (or `hackathon-web`).
"""

from __future__ import annotations

import uvicorn

from hackathon_web.api.app import create_app
from hackathon_web.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
