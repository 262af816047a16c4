from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from webform_actions.schemas.actions import (
    BUTTON_KINDS,
    ActionGroup,
    ButtonConfig,
    ButtonDefaults,
    ButtonKind,
    FormModeFlags,
    ResolvedButton,
    class_tokens,
)

CONTAINER_CLASSES = ["form-actions", "webform-actions"]


def merge_attributes(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Apply attribute overrides on top of `base`.

    `class` values are appended to the existing class list (order kept, no dedup);
    every other attribute is replaced outright.
    """
    out: Dict[str, Any] = {}
    for name, value in (base or {}).items():
        out[name] = class_tokens(value) if name == "class" else value
    for name, value in (overrides or {}).items():
        if name == "class":
            out["class"] = list(out.get("class") or []) + class_tokens(value)
        else:
            out[name] = value
    return out


def _config_from_raw(raw: Any) -> ButtonConfig:
    """
    Coerce one raw per-button value. Anything that does not validate keeps its
    usable label/attributes but is not granted.
    """
    if isinstance(raw, ButtonConfig):
        return raw
    if not isinstance(raw, Mapping):
        return ButtonConfig(hidden=True)
    data = dict(raw)
    try:
        return ButtonConfig.model_validate(data)
    except ValidationError:
        label = data.get("label")
        return ButtonConfig(
            hidden=True,
            label=label if isinstance(label, str) else None,
            attribute_overrides=data.get("attribute_overrides") or data.get("attributeOverrides") or data.get("attributes"),
        )


def _normalize_configs(button_configs: Mapping[Any, Any]) -> Dict[ButtonKind, ButtonConfig]:
    out: Dict[ButtonKind, ButtonConfig] = {}
    items = button_configs.items() if isinstance(button_configs, Mapping) else ()
    for key, raw in items:
        kind = ButtonKind.coerce(key)
        if kind is None:
            continue
        out[kind] = _config_from_raw(raw)
    return out


def _default_catalog() -> Dict[ButtonKind, ButtonDefaults]:
    from webform_actions.settings import load_settings

    return load_settings().button_catalog()


def resolve(
    button_configs: Mapping[Any, Any],
    mode_flags: FormModeFlags,
    catalog: Optional[Mapping[ButtonKind, ButtonDefaults]] = None,
    container_attributes: Optional[Mapping[str, Any]] = None,
) -> ActionGroup:
    """
    Decide which action buttons render, with what label and attributes.

    Buttons come out in `ButtonKind` order; kinds missing from `button_configs`
    produce no entry. The group is visible when any button is granted.
    """
    configs = _normalize_configs(button_configs)
    defaults = catalog if catalog is not None else _default_catalog()

    buttons: List[ResolvedButton] = []
    visible = False
    for kind in BUTTON_KINDS:
        config = configs.get(kind)
        if config is None:
            continue
        default = defaults.get(kind) or ButtonDefaults(label=kind.value.replace("_", " ").capitalize())

        access_granted = mode_flags.is_relevant(kind) and not config.hidden

        label = default.label
        if config.label and not default.custom:
            label = config.label

        buttons.append(
            ResolvedButton(
                kind=kind,
                access_granted=access_granted,
                label=label,
                attributes=merge_attributes(default.attributes, config.attribute_overrides),
            )
        )
        visible = visible or access_granted

    container = merge_attributes(container_attributes or {}, {"class": CONTAINER_CLASSES})
    return ActionGroup(visible=visible, buttons=buttons, attributes=container)
