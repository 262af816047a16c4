"""
Data models for the webform actions (button group) element.

These classes are the typed boundary between host-stored settings and the
resolver: hosts build `ButtonConfig` / `FormModeFlags` per render and read back
an `ActionGroup`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ButtonKind(str, Enum):
    """Action buttons in render order. Member order is significant."""

    SUBMIT = "submit"
    DRAFT = "draft"
    WIZARD_PREV = "wizard_prev"
    WIZARD_NEXT = "wizard_next"
    PREVIEW_PREV = "preview_prev"
    PREVIEW_NEXT = "preview_next"

    @classmethod
    def coerce(cls, value: Any) -> Optional["ButtonKind"]:
        if isinstance(value, ButtonKind):
            return value
        t = str(value or "").strip().lower()
        try:
            return cls(t)
        except ValueError:
            return None


BUTTON_KINDS: List[ButtonKind] = list(ButtonKind)


def class_tokens(value: Any) -> List[str]:
    """
    Normalize a class value to an ordered token list.

    Accepts a list of tokens or a whitespace separated string ("a b").
    Duplicates are kept.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for item in value:
            if item is None:
                continue
            out.extend(str(item).split())
        return out
    return str(value).split()


class ButtonConfig(BaseModel):
    hidden: bool = False
    label: Optional[str] = None
    attribute_overrides: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("attribute_overrides", "attributeOverrides", "attributes"),
        serialization_alias="attributeOverrides",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("label", mode="before")
    @classmethod
    def _blank_label_is_unset(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        t = str(v)
        return t if t.strip() else None

    @field_validator("attribute_overrides", mode="before")
    @classmethod
    def _attributes_mapping(cls, v: Any) -> Dict[str, Any]:
        return dict(v) if isinstance(v, Mapping) else {}


class FormModeFlags(BaseModel):
    draft_enabled: bool = Field(default=False, validation_alias=AliasChoices("draft_enabled", "draftEnabled"))
    wizard_enabled: bool = Field(default=False, validation_alias=AliasChoices("wizard_enabled", "wizardEnabled"))
    preview_enabled: bool = Field(default=False, validation_alias=AliasChoices("preview_enabled", "previewEnabled"))

    model_config = ConfigDict(populate_by_name=True)

    def is_relevant(self, kind: ButtonKind) -> bool:
        if kind is ButtonKind.DRAFT:
            return self.draft_enabled
        if kind in (ButtonKind.WIZARD_PREV, ButtonKind.WIZARD_NEXT):
            return self.wizard_enabled
        if kind in (ButtonKind.PREVIEW_PREV, ButtonKind.PREVIEW_NEXT):
            return self.preview_enabled
        return True


class ButtonDefaults(BaseModel):
    """
    What a button looks like before any element configuration is applied.

    `custom` marks a label that was already set by earlier custom logic; such a
    label is never replaced by the element's `label` override.
    """

    label: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    custom: bool = False


class ResolvedButton(BaseModel):
    kind: ButtonKind
    access_granted: bool = Field(..., serialization_alias="accessGranted")
    label: str
    attributes: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class ActionGroup(BaseModel):
    visible: bool
    buttons: List[ResolvedButton] = Field(default_factory=list)
    attributes: Dict[str, Any] = Field(default_factory=dict)

    def button(self, kind: ButtonKind | str) -> Optional[ResolvedButton]:
        k = ButtonKind.coerce(kind)
        for b in self.buttons:
            if b.kind is k:
                return b
        return None

    def granted(self) -> List[ButtonKind]:
        return [b.kind for b in self.buttons if b.access_granted]
