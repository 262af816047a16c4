from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from api.models import ElementRequest, ResolveRequest
from webform_actions.element import mode_flags_from_settings, resolve_element
from webform_actions.resolver import resolve

router = APIRouter(prefix="/actions", tags=["actions"])


@router.post("/resolve")
def resolve_actions(body: ResolveRequest) -> Dict[str, Any]:
    """
    Resolve a typed button configuration.

    The host hides its own default actions container once this group renders.
    """
    group = resolve(body.buttons, body.modes)
    return {"ok": True, **group.model_dump(by_alias=True, mode="json")}


@router.post("/element")
def resolve_actions_element(body: ElementRequest) -> Dict[str, Any]:
    """Resolve flat element properties against form settings."""
    modes = mode_flags_from_settings(
        draft=body.settings.draft,
        preview=body.settings.preview,
        wizard_pages=body.settings.wizard_pages,
    )
    group = resolve_element(body.properties, modes)
    return {"ok": True, "modes": modes.model_dump(), **group.model_dump(by_alias=True, mode="json")}
