from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY, HTTP_500_INTERNAL_SERVER_ERROR

from api.http_logging import install_http_logging
from api.routes import actions, admin
from webform_actions.settings import SettingsError

logger = logging.getLogger("api")


def _repo_root() -> Path:
    # `api/main.py` lives at `<repo>/api/main.py`
    return Path(__file__).resolve().parents[1]


def _request_id(prefix: str) -> str:
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def create_app() -> FastAPI:
    # Load `.env` + `.env.local` when present (local dev convenience).
    load_dotenv(_repo_root() / ".env", override=False)
    load_dotenv(_repo_root() / ".env.local", override=False)

    app = FastAPI(title="webform-actions-service", version="0.1.0")
    router = APIRouter(prefix="/v1/api")

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        request_id = _request_id("val")
        # Keep server logs useful without dumping full bodies.
        logger.warning("422 validation_error requestId=%s path=%s errors=%s", request_id, request.url.path, exc.errors())
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "ok": False,
                "error": "validation_error",
                "message": "Request body did not match expected schema.",
                "requestId": request_id,
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(SettingsError)
    async def _settings_error_handler(request: Request, exc: SettingsError) -> JSONResponse:
        request_id = _request_id("cfg")
        logger.error("500 settings_error requestId=%s path=%s err=%s", request_id, request.url.path, exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "ok": False,
                "error": "settings_error",
                "message": str(exc),
                "requestId": request_id,
            },
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = _request_id("err")
        logger.error("500 internal_error requestId=%s path=%s", request_id, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "ok": False,
                "error": "internal_error",
                "message": "Unhandled server error.",
                "requestId": request_id,
            },
        )

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True, "service": "webform-actions-service", "ts": int(time.time() * 1000)}

    router.include_router(actions.router)
    router.include_router(admin.router)
    app.include_router(router)
    install_http_logging(app)
    return app


app = create_app()
