from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Dict, Iterable, Optional, Tuple

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from webform_actions.settings import env_bool

logger = logging.getLogger("api.http")


_SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "apikey",
}


def _decode_headers(headers: Optional[Iterable[Tuple[bytes, bytes]]]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for k, v in headers or []:
        key = k.decode("latin-1").lower()
        out[key] = "***" if key in _SENSITIVE_HEADERS else v.decode("latin-1", errors="replace")
    return out


def _request_id(headers: Iterable[Tuple[bytes, bytes]]) -> Optional[str]:
    for k, v in headers:
        if k.lower() == b"x-request-id":
            return v.decode("latin-1", errors="replace")
    return None


class HttpLoggingMiddleware:
    """One JSON log line per HTTP request: method, path, status, duration."""

    def __init__(self, app: ASGIApp, *, log_headers: bool) -> None:
        self.app = app
        self.log_headers = log_headers

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        started_at = time.perf_counter()
        req_headers = list(scope.get("headers") or [])
        request_id = _request_id(req_headers) or uuid.uuid4().hex[:12]
        status: Optional[int] = None

        async def send_wrapped(message: Message) -> None:
            nonlocal status
            if message.get("type") == "http.response.start":
                status = int(message.get("status") or 0)
            await send(message)

        err: Optional[BaseException] = None
        try:
            await self.app(scope, receive, send_wrapped)
        except BaseException as e:  # noqa: BLE001 - log then re-raise
            err = e
            raise
        finally:
            record: Dict[str, Any] = {
                "id": request_id,
                "method": str(scope.get("method") or "").upper(),
                "path": str(scope.get("path") or ""),
                "status": status,
                "dur_ms": int((time.perf_counter() - started_at) * 1000),
            }
            if self.log_headers:
                record["headers"] = _decode_headers(req_headers)
            if err is not None:
                record["error"] = {"type": type(err).__name__, "message": str(err)}
            logger.info(json.dumps(record, ensure_ascii=False, separators=(",", ":")))


def install_http_logging(app: Any) -> None:
    """
    Enable request logging via env vars.

    - `WEBFORM_HTTP_LOG=1` enables middleware
    - `WEBFORM_HTTP_LOG_HEADERS=1` adds request headers (redacted)
    """
    if not env_bool("WEBFORM_HTTP_LOG", default=False):
        return
    app.add_middleware(HttpLoggingMiddleware, log_headers=env_bool("WEBFORM_HTTP_LOG_HEADERS", default=False))
