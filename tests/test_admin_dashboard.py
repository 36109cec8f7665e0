import csv
import io
from datetime import datetime, timedelta, timezone

from feedback_portal.extensions import db
from feedback_portal.models import Feedback, FeedbackLink


def _seed_feedback(app, client, make_link, rows):
    """rows: (rating, comment, customer_number, days_ago)"""
    now = datetime.now(timezone.utc)
    for rating, comment, customer, days_ago in rows:
        link_id = make_link(customer_number=customer)
        client.post("/api/feedback", json={"rating": rating, "refId": link_id, "comment": comment})
        with app.app_context():
            fb = db.session.query(Feedback).filter_by(ref_id=link_id).one()
            fb.timestamp = now - timedelta(days=days_ago, minutes=1)
            db.session.commit()


def test_dashboard_renders_stats_and_links(app, client, make_link):
    _seed_feedback(app, client, make_link, [(5, "Super", "K-1", 0), (1, "Schlecht", "K-2", 1)])
    make_link(customer_number="K-open")

    resp = client.get("/admin/")
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Admin Dashboard" in html
    assert "Super" in html and "Schlecht" in html
    assert "K-open" in html
    assert "3.0" in html  # average of 5 and 1


def test_dashboard_filters_by_rating_and_search(app, client, make_link):
    _seed_feedback(app, client, make_link, [
        (5, "Sehr freundlich", "K-1", 0),
        (3, "Geht so", "K-2", 0),
        (2, "Zu langsam", "K-3", 0),
    ])

    html = client.get("/admin/?rating=high").get_data(as_text=True)
    assert "Sehr freundlich" in html
    assert "Geht so" not in html and "Zu langsam" not in html

    html = client.get("/admin/?q=langsam").get_data(as_text=True)
    assert "Zu langsam" in html
    assert "Sehr freundlich" not in html


def test_csv_export_respects_filters(app, client, make_link):
    _seed_feedback(app, client, make_link, [
        (5, 'Er sagte "danke", toll', "K-1", 0),
        (4, "Alt", "K-2", 40),
    ])

    resp = client.get("/admin/feedback/export.csv?period=month")
    assert resp.status_code == 200
    assert resp.headers["Content-Type"].startswith("text/csv")
    assert "feedback-export-" in resp.headers["Content-Disposition"]

    rows = list(csv.reader(io.StringIO(resp.get_data(as_text=True))))
    assert rows[0] == ["Datum", "Kunde", "Name", "Anliegen", "Bewertung", "Kommentar"]
    assert len(rows) == 2
    assert rows[1][1] == "K-1"
    assert rows[1][2] == "Max Mustermann"
    assert rows[1][4] == "5"
    assert rows[1][5] == 'Er sagte "danke", toll'


def test_create_link_from_dashboard_form(app, client):
    resp = client.post("/admin/links", data={
        "customer_number": "K-7", "concern": "Beratung", "first_name": "Eva", "last_name": "Beispiel",
    })
    assert resp.status_code == 201
    html = resp.get_data(as_text=True)
    assert "api.qrserver.com" in html
    assert "Wie hilfreich war unser Beratungsgespräch?" in html

    with app.app_context():
        link = db.session.query(FeedbackLink).one()
        assert link.customer_number == "K-7"


def test_create_link_form_error_keeps_entered_values(app, client):
    resp = client.post("/admin/links", data={
        "customer_number": "K-4711", "concern": "Beratung", "first_name": "Eva", "last_name": "",
    })
    assert resp.status_code == 400
    html = resp.get_data(as_text=True)
    assert "Bitte geben Sie einen Nachnamen ein." in html
    assert "Missing required field" not in html
    assert 'value="K-4711"' in html
    assert 'value="Eva"' in html
    assert '<option value="Beratung" selected>' in html
    with app.app_context():
        assert db.session.query(FeedbackLink).count() == 0


def test_delete_link_from_dashboard(app, client, make_link):
    open_id = make_link(customer_number="K-open")
    used_id = make_link(customer_number="K-used")
    client.post("/api/feedback", json={"rating": 4, "refId": used_id})

    client.post(f"/admin/links/{open_id}/delete")
    resp = client.post(f"/admin/links/{used_id}/delete", follow_redirects=True)
    assert "Zu diesem Link liegt bereits Feedback vor." in resp.get_data(as_text=True)

    with app.app_context():
        assert db.session.get(FeedbackLink, open_id) is None
        assert db.session.get(FeedbackLink, used_id) is not None


def test_settings_form_round_trip(app, client):
    resp = client.post("/admin/settings", data={
        "domains": "https://neu.example.test\n",
        "concern_types": "Störung\nUmzug",
        "concern_name": ["Störung"],
        "concern_text": ["Ist die Störung behoben?"],
    })
    assert resp.status_code == 302

    data = client.get("/api/settings").get_json()["data"]
    assert data["domains"] == ["https://neu.example.test"]
    assert data["concern_types"] == ["Störung", "Umzug"]
    assert data["concern_texts"]["Störung"] == "Ist die Störung behoben?"
    assert data["concern_texts"]["Umzug"] == "Wie war Ihre Erfahrung mit unserem Service?"

    page = client.get("/admin/settings").get_data(as_text=True)
    assert "https://neu.example.test" in page


def test_credentials_form_requires_matching_passwords(app, client):
    resp = client.post("/admin/credentials", data={
        "username": "admin", "password": "long-enough-1", "password_confirm": "long-enough-2",
    }, follow_redirects=True)
    assert "Die Passwörter stimmen nicht überein." in resp.get_data(as_text=True)


def test_settings_form_error_keeps_submitted_values(app, client):
    resp = client.post("/admin/settings", data={
        "domains": "ftp://bad.example.test",
        "concern_types": "Störung\nNeuesAnliegen",
        "concern_name": ["Störung"],
        "concern_text": ["Eigener Text zur Störung"],
    })
    assert resp.status_code == 400
    html = resp.get_data(as_text=True)
    assert "Bitte geben Sie gültige Domains mit http:// oder https:// an." in html
    assert "ftp://bad.example.test" in html
    assert "NeuesAnliegen" in html
    assert "Eigener Text zur Störung" in html

    # Nothing stored
    assert client.get("/api/settings").get_json()["data"]["settings_version"] == 0


def test_dashboard_shows_comment_and_today_counts(app, client, make_link):
    _seed_feedback(app, client, make_link, [
        (5, "Mit Text", "K-1", 0),
        (4, "", "K-2", 0),
        (3, "Gestern", "K-3", 2),
    ])

    html = client.get("/admin/").get_data(as_text=True)
    assert '<span class="label">Mit Kommentar</span><span class="value">2</span>' in html
    assert '<span class="label">Heute</span><span class="value">2</span>' in html


def test_search_treats_wildcards_literally(app, client, make_link):
    _seed_feedback(app, client, make_link, [
        (5, "erster", "K_1", 0),
        (4, "zweiter", "KX1", 0),
        (3, "100% zufrieden", "K-3", 0),
        (2, "1000 Probleme", "K-4", 0),
    ])

    html = client.get("/admin/?q=K_1").get_data(as_text=True)
    assert "erster" in html
    assert "zweiter" not in html

    html = client.get("/admin/?q=100%25").get_data(as_text=True)
    assert "100% zufrieden" in html
    assert "1000 Probleme" not in html
