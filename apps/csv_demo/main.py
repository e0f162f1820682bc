"""csv-demo entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from oafrwp.application.services.csv_demo_service import CsvDemoService
from oafrwp.config.settings import load_settings
from oafrwp.infrastructure.http.csv_demo_router import build_csv_demo_router
from oafrwp.infrastructure.logging import configure_logging

CSV_DEMO_HOST = "0.0.0.0"
CSV_DEMO_PORT = 3000
logger = logging.getLogger(__name__)


def create_app(*, csv_path: Path | None = None) -> FastAPI:
    """Create FastAPI app serving the CSV demo routes."""

    if csv_path is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)
        csv_path = Path(settings.csv_file_path)

    app = FastAPI()
    app.include_router(build_csv_demo_router(csv_service=CsvDemoService(csv_path=csv_path)))
    return app


def run_asgi_server(*, host: str = CSV_DEMO_HOST, port: int = CSV_DEMO_PORT) -> None:
    """Run csv-demo as a long-lived ASGI process using application factory mode."""

    logger.info("server is listening at http://localhost:%s", port)
    uvicorn.run(
        "apps.csv_demo.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run csv-demo runtime process."""

    configure_logging(level=load_settings().log_level)
    run_asgi_server()


if __name__ == "__main__":
    main()
