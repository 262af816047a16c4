from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from webform_actions.schemas.actions import ButtonConfig, ButtonKind, FormModeFlags


class ResolveRequest(BaseModel):
    """Typed per-button configuration plus the form's current modes."""

    buttons: Dict[str, ButtonConfig] = Field(
        default_factory=dict,
        description="Per-button config keyed by button kind (submit, draft, wizard_prev, ...)",
    )
    modes: FormModeFlags = Field(default_factory=FormModeFlags)

    @field_validator("buttons", mode="before")
    @classmethod
    def _drop_unknown_kinds(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return {}
        return {k: cfg for k, cfg in v.items() if ButtonKind.coerce(k) is not None}


class FormSettings(BaseModel):
    """Form-level settings the modes are derived from."""

    draft: str = Field(default="none", description="Draft setting: none | authenticated | all")
    preview: Union[int, str] = Field(default=0, description="Preview setting: 0 disabled, 1 optional, 2 required")
    wizard_pages: int = Field(default=0, ge=0, alias="wizardPages")

    model_config = ConfigDict(populate_by_name=True)


class ElementRequest(BaseModel):
    """Flat element properties as stored by the host (`submit__label`, `draft_hide`, ...)."""

    properties: Dict[str, Any] = Field(default_factory=dict)
    settings: FormSettings = Field(default_factory=FormSettings)


class HtmlToTextRequest(BaseModel):
    confirm: bool = Field(default=False, description="Must be true to run the conversion")
    page_size: Optional[int] = Field(default=None, ge=1, le=1000, alias="pageSize")

    model_config = ConfigDict(populate_by_name=True)


class HtmlToTextResponse(BaseModel):
    ok: bool = True
    success: bool
    message: str
    converted: int
    failed: int
    total: int
    failed_fids: List[int] = Field(default_factory=list, alias="failedFids")

    model_config = ConfigDict(populate_by_name=True)
