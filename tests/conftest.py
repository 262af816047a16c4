from __future__ import annotations

import sys
from pathlib import Path

import pytest


_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
for _p in (_REPO_ROOT, _SRC):
    if _p.exists() and str(_p) not in sys.path:
        sys.path.insert(0, str(_p))


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "WEBFORM_SETTINGS_FILE",
        "WEBFORM_HTML_TO_TEXT_BATCH_LIMIT",
        "WEBFORM_FILE_XSS_BLOCK",
        "WEBFORM_HTTP_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
    for kind in ("SUBMIT", "DRAFT", "WIZARD_PREV", "WIZARD_NEXT", "PREVIEW_PREV", "PREVIEW_NEXT"):
        monkeypatch.delenv(f"WEBFORM_DEFAULT_{kind}_BUTTON_LABEL", raising=False)

    from webform_actions.settings import reset_settings_cache

    reset_settings_cache()
    yield
    reset_settings_cache()
