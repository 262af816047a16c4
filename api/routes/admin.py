from __future__ import annotations

from typing import Any, Dict

import anyio
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from api.models import HtmlToTextRequest, HtmlToTextResponse
from webform_actions.html_to_text import HtmlToTextConverter, html_file_requirements
from webform_actions.html_to_text.store import FileStore
from webform_actions.html_to_text.supabase_store import SupabaseFileStore

router = APIRouter(prefix="/admin", tags=["admin"])


def get_file_store() -> FileStore:
    return SupabaseFileStore.from_env()


@router.get("/html-to-text")
def html_to_text_confirm(store: FileStore = Depends(get_file_store)) -> Dict[str, Any]:
    converter = HtmlToTextConverter(store)
    return {
        "ok": True,
        "total": converter.count_pending(),
        "question": converter.question(),
        "description": converter.description(),
        "confirmText": converter.confirm_text(),
    }


@router.post("/html-to-text", response_model=HtmlToTextResponse, response_model_by_alias=True)
async def html_to_text_run(body: HtmlToTextRequest, store: FileStore = Depends(get_file_store)) -> Any:
    if not body.confirm:
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={
                "ok": False,
                "error": "confirmation_required",
                "message": "Set `confirm: true` to convert HTML files to text.",
            },
        )

    converter = HtmlToTextConverter(store, batch_limit=body.page_size)
    result = await anyio.to_thread.run_sync(converter.run)
    return HtmlToTextResponse(
        success=result.success,
        message=result.message,
        converted=result.progress.converted,
        failed=result.progress.failed,
        total=result.progress.max,
        failed_fids=result.failed_fids,
    )


@router.get("/status")
def status_report(store: FileStore = Depends(get_file_store)) -> Dict[str, Any]:
    requirements = html_file_requirements(store)
    return {"ok": True, "requirements": [r.model_dump() for r in requirements]}
