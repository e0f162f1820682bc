"""FastAPI router for the CSV append/fetch demo endpoints."""

from __future__ import annotations

import csv
import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from oafrwp.application.services.csv_demo_service import CsvDemoService, CsvFormatError

UPDATE_OK_BODY = "asdf"
UPDATE_ERROR_BODY = "err"
logger = logging.getLogger(__name__)


def build_csv_demo_router(*, csv_service: CsvDemoService) -> APIRouter:
    """Build router exposing `/update` and `/fetch`."""

    router = APIRouter(tags=["csv-demo"])

    @router.get("/update", response_class=PlainTextResponse)
    async def update_csv() -> PlainTextResponse:
        try:
            await csv_service.append_fixed_row()
        except OSError as exc:
            logger.error("csv_update_failed path=%s error=%s", csv_service.csv_path, exc)
            return PlainTextResponse(UPDATE_ERROR_BODY)

        logger.info("csv_update_appended path=%s", csv_service.csv_path)
        return PlainTextResponse(UPDATE_OK_BODY)

    @router.get("/fetch")
    async def fetch_csv() -> JSONResponse:
        try:
            records = await csv_service.read_records()
        except (OSError, UnicodeDecodeError, csv.Error, CsvFormatError) as exc:
            logger.error("csv_fetch_failed path=%s error=%s", csv_service.csv_path, exc)
            return JSONResponse(_error_payload(exc))

        return JSONResponse(records)

    return router


def _error_payload(exc: Exception) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": str(exc), "type": type(exc).__name__}
    if isinstance(exc, OSError) and exc.errno is not None:
        payload["errno"] = exc.errno
    return payload
