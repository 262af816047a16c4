from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from webform_actions.schemas.actions import BUTTON_KINDS, ButtonDefaults, ButtonKind

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    pass


_DEFAULT_LABELS: Dict[str, str] = {
    "submit": "Submit",
    "draft": "Save Draft",
    "wizard_prev": "< Previous Page",
    "wizard_next": "Next Page >",
    "preview_prev": "< Previous",
    "preview_next": "Preview",
}

_DEFAULT_CLASSES: Dict[str, List[str]] = {
    "submit": ["webform-button--submit", "button--primary"],
    "draft": ["webform-button--draft"],
    "wizard_prev": ["webform-button--previous", "js-webform-novalidate"],
    "wizard_next": ["webform-button--next"],
    "preview_prev": ["webform-button--previous", "js-webform-novalidate"],
    "preview_next": ["webform-button--preview"],
}


class WebformSettings(BaseModel):
    """
    Site-wide webform settings the actions element and the file tools read.

    Mirrors the `webform.settings` keys the host stores:
    `settings.default_<kind>_button_label`, `settings.button_classes`,
    `file.xss_block`.
    """

    default_submit_button_label: str = _DEFAULT_LABELS["submit"]
    default_draft_button_label: str = _DEFAULT_LABELS["draft"]
    default_wizard_prev_button_label: str = _DEFAULT_LABELS["wizard_prev"]
    default_wizard_next_button_label: str = _DEFAULT_LABELS["wizard_next"]
    default_preview_prev_button_label: str = _DEFAULT_LABELS["preview_prev"]
    default_preview_next_button_label: str = _DEFAULT_LABELS["preview_next"]
    button_classes: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in _DEFAULT_CLASSES.items()})
    html_to_text_batch_limit: int = Field(default=100, ge=1)
    file_xss_block: bool = True

    def default_label(self, kind: ButtonKind) -> str:
        return str(getattr(self, f"default_{kind.value}_button_label"))

    def button_catalog(self) -> Dict[ButtonKind, ButtonDefaults]:
        catalog: Dict[ButtonKind, ButtonDefaults] = {}
        for kind in BUTTON_KINDS:
            classes = self.button_classes.get(kind.value)
            if classes is None:
                classes = _DEFAULT_CLASSES[kind.value]
            catalog[kind] = ButtonDefaults(
                label=self.default_label(kind),
                attributes={"class": list(classes)},
            )
        return catalog


def env_bool(name: str, default: bool = False) -> bool:
    v = (os.getenv(name) or "").strip().lower()
    if not v:
        return default
    return v in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring non-integer %s=%r", name, raw)
        return default


def settings_file() -> Optional[Path]:
    raw = (os.getenv("WEBFORM_SETTINGS_FILE") or "").strip()
    return Path(raw) if raw else None


def _read_settings_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SettingsError(f"Unable to read webform settings from {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Webform settings in {path} must be a JSON object")
    # Accept the nested host layout ({"settings": {...}, "file": {...}}) as well as flat keys.
    out: Dict[str, Any] = {}
    nested = data.get("settings")
    if isinstance(nested, dict):
        out.update(nested)
    file_section = data.get("file")
    if isinstance(file_section, dict) and "xss_block" in file_section:
        out["file_xss_block"] = file_section["xss_block"]
    out.update({k: v for k, v in data.items() if k not in {"settings", "file"}})
    # The host stores `button_classes` as the class choices offered in its UI
    # (a newline separated string), not as per-kind defaults.
    if "button_classes" in out and not isinstance(out["button_classes"], dict):
        logger.debug("ignoring non per-kind button_classes in %s", path)
        out.pop("button_classes")
    return out


def _env_overrides(base: WebformSettings) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for kind in BUTTON_KINDS:
        raw = os.getenv(f"WEBFORM_DEFAULT_{kind.value.upper()}_BUTTON_LABEL")
        if raw is not None and raw.strip():
            out[f"default_{kind.value}_button_label"] = raw
    out["html_to_text_batch_limit"] = env_int("WEBFORM_HTML_TO_TEXT_BATCH_LIMIT", base.html_to_text_batch_limit)
    out["file_xss_block"] = env_bool("WEBFORM_FILE_XSS_BLOCK", default=base.file_xss_block)
    return out


def build_settings(overrides: Optional[Dict[str, Any]] = None) -> WebformSettings:
    """
    Build settings from defaults, then the optional JSON file, then env vars.

    - `WEBFORM_SETTINGS_FILE=/path/webform.settings.json`
    - `WEBFORM_DEFAULT_<KIND>_BUTTON_LABEL=...`
    - `WEBFORM_HTML_TO_TEXT_BATCH_LIMIT=100`
    - `WEBFORM_FILE_XSS_BLOCK=1`
    """
    values: Dict[str, Any] = {}
    path = settings_file()
    if path is not None:
        values.update(_read_settings_file(path))
    values.update(overrides or {})
    try:
        base = WebformSettings.model_validate(values)
        return WebformSettings.model_validate({**base.model_dump(), **_env_overrides(base)})
    except ValidationError as exc:
        raise SettingsError(f"Invalid webform settings: {exc}") from exc


@lru_cache(maxsize=1)
def load_settings() -> WebformSettings:
    return build_settings()


def reset_settings_cache() -> None:
    load_settings.cache_clear()
