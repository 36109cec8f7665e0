from feedback_portal.extensions import db
from feedback_portal.models import AdminSettings, AdminSettingsRevision
from feedback_portal.services.settings import DEFAULT_SETTINGS

from conftest import TEST_DOMAIN


def test_read_without_prior_write_returns_defaults(client):
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["domains"] == [TEST_DOMAIN]
    assert data["concern_types"] == DEFAULT_SETTINGS["concern_types"]
    assert data["concern_texts"] == DEFAULT_SETTINGS["concern_texts"]
    assert "Störung" in data["concern_types"]


def test_write_then_read_returns_written_values(client):
    body = {
        "domains": ["https://a.example.test", "https://b.example.test"],
        "concern_texts": {"Störung": "Wie lief die Entstörung?"},
        "concern_types": ["Störung", "Sonstiges"],
    }
    saved = client.post("/api/settings", json=body)
    assert saved.status_code == 200
    assert saved.get_json()["data"]["settings_version"] == 1

    data = client.get("/api/settings").get_json()["data"]
    assert data["domains"] == body["domains"]
    assert data["concern_texts"] == body["concern_texts"]
    assert data["concern_types"] == body["concern_types"]


def test_saves_update_one_row_and_keep_revision_log(app, client):
    for i in range(3):
        client.post("/api/settings", json={
            "domains": [f"https://v{i}.example.test"],
            "concern_texts": {},
            "concern_types": ["Sonstiges"],
        })

    data = client.get("/api/settings").get_json()["data"]
    assert data["domains"] == ["https://v2.example.test"]
    assert data["settings_version"] == 3

    with app.app_context():
        assert db.session.query(AdminSettings).count() == 1
        revisions = db.session.query(AdminSettingsRevision).order_by(AdminSettingsRevision.id).all()
        assert [r.settings_version for r in revisions] == [1, 2, 3]
        assert revisions[0].snapshot["domains"] == ["https://v0.example.test"]


def test_write_requires_all_three_fields(client):
    full = {"domains": ["https://a.example.test"], "concern_texts": {}, "concern_types": ["Sonstiges"]}
    for field in full:
        body = {k: v for k, v in full.items() if k != field}
        resp = client.post("/api/settings", json=body)
        assert resp.status_code == 400
        assert resp.get_json()["field"] == field

    # Nothing stored: still defaults
    assert client.get("/api/settings").get_json()["data"]["domains"] == [TEST_DOMAIN]


def test_write_rejects_bad_shapes(client):
    bad_bodies = [
        {"domains": "https://a.example.test", "concern_texts": {}, "concern_types": []},
        {"domains": ["ftp://a.example.test"], "concern_texts": {}, "concern_types": []},
        {"domains": [], "concern_texts": [], "concern_types": []},
        {"domains": [], "concern_texts": {}, "concern_types": ["A", "A"]},
        {"domains": [], "concern_texts": {}, "concern_types": [""]},
    ]
    for body in bad_bodies:
        assert client.post("/api/settings", json=body).status_code == 400, body
