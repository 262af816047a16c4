"""
The "Submit button(s)" element as the host stores it.

Hosts persist the element as a flat property dict, e.g.

    {"title": "", "draft_hide": True, "submit__label": "Send",
     "submit__attributes": {"class": ["big"], "style": "color: green"}}

This module converts that shape into the typed inputs of `resolve()`.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from webform_actions.resolver import resolve
from webform_actions.schemas.actions import (
    BUTTON_KINDS,
    ActionGroup,
    ButtonConfig,
    ButtonDefaults,
    ButtonKind,
    FormModeFlags,
)

DRAFT_NONE = "none"
PREVIEW_DISABLED = 0


def hide_property(kind: ButtonKind) -> str:
    return f"{kind.value}_hide"


def label_property(kind: ButtonKind) -> str:
    return f"{kind.value}__label"


def attributes_property(kind: ButtonKind) -> str:
    return f"{kind.value}__attributes"


def default_properties() -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "title": "",
        "attributes": {},
        "states": {},
    }
    for kind in BUTTON_KINDS:
        properties[hide_property(kind)] = False
        properties[label_property(kind)] = ""
        properties[attributes_property(kind)] = {}
    return properties


def _as_bool(value: Any) -> bool:
    # Host truthiness: any non-empty string other than "0" is set.
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def button_configs_from_properties(properties: Mapping[str, Any]) -> Dict[ButtonKind, ButtonConfig]:
    """
    Build per-kind configs from flat element properties.

    A kind is configured when any of its three properties is present. Bad
    values degrade to defaults instead of raising.
    """
    props = properties if isinstance(properties, Mapping) else {}
    out: Dict[ButtonKind, ButtonConfig] = {}
    for kind in BUTTON_KINDS:
        keys = (hide_property(kind), label_property(kind), attributes_property(kind))
        if not any(k in props for k in keys):
            continue
        label = props.get(label_property(kind))
        attributes = props.get(attributes_property(kind))
        out[kind] = ButtonConfig(
            hidden=_as_bool(props.get(hide_property(kind))),
            label=label if isinstance(label, str) else None,
            attribute_overrides=attributes if isinstance(attributes, dict) else {},
        )
    return out


def mode_flags_from_settings(
    *,
    draft: Any = DRAFT_NONE,
    preview: Any = PREVIEW_DISABLED,
    wizard_pages: int = 0,
) -> FormModeFlags:
    """
    Derive form modes from form settings.

    - draft: enabled unless the setting is "none" (other values: "authenticated", "all")
    - preview: enabled unless 0 / "disabled" (1 = optional, 2 = required)
    - wizard: enabled when the form has at least one wizard page
    """
    draft_norm = str(draft if draft is not None else DRAFT_NONE).strip().lower()
    preview_norm = str(preview if preview is not None else PREVIEW_DISABLED).strip().lower()
    try:
        pages = int(wizard_pages or 0)
    except (TypeError, ValueError):
        pages = 0
    return FormModeFlags(
        draft_enabled=draft_norm not in {"", DRAFT_NONE},
        preview_enabled=preview_norm not in {"", "0", "disabled", "false"},
        wizard_enabled=pages > 0,
    )


def resolve_element(
    properties: Mapping[str, Any],
    mode_flags: FormModeFlags,
    catalog: Optional[Mapping[ButtonKind, ButtonDefaults]] = None,
) -> ActionGroup:
    props = properties if isinstance(properties, Mapping) else {}
    container = props.get("attributes")
    return resolve(
        button_configs_from_properties(props),
        mode_flags,
        catalog=catalog,
        container_attributes=container if isinstance(container, dict) else None,
    )
