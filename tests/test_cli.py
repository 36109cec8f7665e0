import json

from feedback_portal.extensions import db
from feedback_portal.models import AdminCredential, AdminSettings, AdminSettingsRevision
from feedback_portal.services.credentials import authenticate


def test_admin_set_password(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["admin", "set-password", "--username", "chef", "--password", "sehr-geheim-1"])
    assert result.exit_code == 0, result.output
    assert "chef" in result.output

    with app.app_context():
        assert db.session.query(AdminCredential).count() == 1
        assert authenticate("chef", "sehr-geheim-1") is not None


def test_admin_set_password_rejects_short_password(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["admin", "set-password", "--username", "chef", "--password", "kurz"])
    assert result.exit_code != 0
    with app.app_context():
        assert db.session.query(AdminCredential).count() == 0


def test_settings_show_prints_defaults(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["settings", "show"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert "Störung" in data["concern_types"]
    assert data["settings_version"] == 0


def test_settings_reset(app, client):
    client.post("/api/settings", json={
        "domains": ["https://alt.example.test"],
        "concern_texts": {},
        "concern_types": ["Sonstiges"],
    })

    runner = app.test_cli_runner()
    result = runner.invoke(args=["settings", "reset", "--yes"])
    assert result.exit_code == 0, result.output
    assert "version 2" in result.output

    with app.app_context():
        row = db.session.query(AdminSettings).one()
        assert "Beratung" in row.concern_types
        assert db.session.query(AdminSettingsRevision).count() == 2
