import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from api.routes.admin import get_file_store
from webform_actions.html_to_text import FileRecord, InMemoryFileStore


@pytest.fixture
def store():
    return InMemoryFileStore(
        [
            FileRecord(fid=1, filename="a.html", uri="private://webform/f/1/a.html", filemime="text/html"),
            FileRecord(fid=2, filename="b.htm", uri="private://webform/f/2/b.htm", filemime="text/html"),
        ]
    )


@pytest.fixture
def client(store):
    app = create_app()
    app.dependency_overrides[get_file_store] = lambda: store
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_resolve_endpoint(client):
    resp = client.post(
        "/v1/api/actions/resolve",
        json={
            "buttons": {
                "preview_next": {},
                "submit": {"label": "Send", "attributeOverrides": {"class": ["big"]}},
                "draft": {"hidden": True},
                "unknown": {},
            },
            "modes": {"draftEnabled": True, "previewEnabled": False},
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert data["visible"] is True
    assert [b["kind"] for b in data["buttons"]] == ["submit", "draft", "preview_next"]
    submit = data["buttons"][0]
    assert submit["accessGranted"] is True
    assert submit["label"] == "Send"
    assert submit["attributes"]["class"] == ["webform-button--submit", "button--primary", "big"]
    assert data["buttons"][1]["accessGranted"] is False
    assert data["buttons"][2]["accessGranted"] is False


def test_resolve_endpoint_hidden_submit_only(client):
    resp = client.post("/v1/api/actions/resolve", json={"buttons": {"submit": {"hidden": True}}})
    assert resp.status_code == 200
    assert resp.json()["visible"] is False


def test_resolve_endpoint_validation_error(client):
    resp = client.post("/v1/api/actions/resolve", json={"buttons": {"submit": {"hidden": {"x": 1}}}})
    assert resp.status_code == 422
    body = resp.json()
    assert body["ok"] is False
    assert body["error"] == "validation_error"
    assert body["requestId"].startswith("val_")


def test_element_endpoint(client):
    resp = client.post(
        "/v1/api/actions/element",
        json={
            "properties": {"submit__label": "Go", "wizard_next_hide": True, "wizard_prev__label": ""},
            "settings": {"draft": "none", "preview": 0, "wizardPages": 3},
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["modes"]["wizard_enabled"] is True
    granted = {b["kind"]: b["accessGranted"] for b in data["buttons"]}
    assert granted == {"submit": True, "wizard_prev": True, "wizard_next": False}
    assert data["buttons"][0]["label"] == "Go"
    assert data["attributes"]["class"] == ["form-actions", "webform-actions"]


def test_html_to_text_confirm_page(client):
    resp = client.get("/v1/api/admin/html-to-text")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert data["question"] == "Are you sure you want to convert 2 files(s) from HTML to text?"
    assert data["confirmText"] == "Convert HTML files to text"


def test_html_to_text_requires_confirmation(client, store):
    resp = client.post("/v1/api/admin/html-to-text", json={})
    assert resp.status_code == 400
    assert resp.json()["error"] == "confirmation_required"
    assert store.count_pending() == 2


def test_html_to_text_run(client, store):
    resp = client.post("/v1/api/admin/html-to-text", json={"confirm": True, "pageSize": 1})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["converted"] == 2
    assert data["failedFids"] == []
    assert store.count_pending() == 0


def test_status_report(client):
    resp = client.get("/v1/api/admin/status")
    assert resp.status_code == 200
    keys = [r["key"] for r in resp.json()["requirements"]]
    assert keys == ["webform_file_html", "webform_file_xss_block"]


def test_unhandled_errors_use_envelope(store):
    app = create_app()

    def _broken_store():
        raise RuntimeError("boom")

    app.dependency_overrides[get_file_store] = _broken_store
    resp = TestClient(app, raise_server_exceptions=False).get("/v1/api/admin/status")
    assert resp.status_code == 500
    assert resp.json()["error"] == "internal_error"
