import json

import pytest

from webform_actions.schemas.actions import ButtonKind
from webform_actions.settings import SettingsError, build_settings, load_settings, reset_settings_cache


def test_defaults_without_file_or_env():
    settings = build_settings()
    assert settings.default_submit_button_label == "Submit"
    assert settings.default_preview_next_button_label == "Preview"
    assert settings.html_to_text_batch_limit == 100
    assert settings.file_xss_block is True


def test_settings_file_nested_layout(tmp_path, monkeypatch):
    path = tmp_path / "webform.settings.json"
    path.write_text(
        json.dumps(
            {
                "settings": {
                    "default_submit_button_label": "Send",
                    "button_classes": {"submit": ["btn", "btn-primary"]},
                },
                "file": {"xss_block": False},
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("WEBFORM_SETTINGS_FILE", str(path))
    settings = build_settings()
    assert settings.default_submit_button_label == "Send"
    assert settings.file_xss_block is False

    catalog = settings.button_catalog()
    assert catalog[ButtonKind.SUBMIT].attributes["class"] == ["btn", "btn-primary"]
    assert catalog[ButtonKind.DRAFT].attributes["class"] == ["webform-button--draft"]


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"default_draft_button_label": "From file"}), encoding="utf-8")
    monkeypatch.setenv("WEBFORM_SETTINGS_FILE", str(path))
    monkeypatch.setenv("WEBFORM_DEFAULT_DRAFT_BUTTON_LABEL", "From env")
    monkeypatch.setenv("WEBFORM_HTML_TO_TEXT_BATCH_LIMIT", "25")
    settings = build_settings()
    assert settings.default_draft_button_label == "From env"
    assert settings.html_to_text_batch_limit == 25


def test_bad_env_int_keeps_default(monkeypatch):
    monkeypatch.setenv("WEBFORM_HTML_TO_TEXT_BATCH_LIMIT", "lots")
    assert build_settings().html_to_text_batch_limit == 100


def test_unreadable_settings_file_raises(tmp_path, monkeypatch):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("WEBFORM_SETTINGS_FILE", str(path))
    with pytest.raises(SettingsError):
        build_settings()


def test_invalid_settings_value_raises(monkeypatch):
    monkeypatch.setenv("WEBFORM_HTML_TO_TEXT_BATCH_LIMIT", "0")
    with pytest.raises(SettingsError):
        build_settings()


def test_load_settings_is_cached_until_reset(monkeypatch):
    first = load_settings()
    monkeypatch.setenv("WEBFORM_DEFAULT_SUBMIT_BUTTON_LABEL", "Changed")
    assert load_settings() is first
    reset_settings_cache()
    assert load_settings().default_submit_button_label == "Changed"


def test_host_settings_export_with_class_choices_string(tmp_path, monkeypatch):
    from webform_actions.resolver import resolve
    from webform_actions.schemas.actions import FormModeFlags

    path = tmp_path / "webform.settings.json"
    path.write_text(
        json.dumps(
            {
                "settings": {
                    "default_submit_button_label": "Send",
                    "button_classes": "",
                    "default_form_close_message": "Closed",
                },
                "file": {"xss_block": True},
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("WEBFORM_SETTINGS_FILE", str(path))
    reset_settings_cache()

    settings = load_settings()
    assert settings.button_catalog()[ButtonKind.SUBMIT].attributes["class"] == [
        "webform-button--submit",
        "button--primary",
    ]

    group = resolve({"submit": {}}, FormModeFlags())
    assert group.button("submit").label == "Send"
    assert group.button("submit").access_granted is True
