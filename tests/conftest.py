import os
# Ensure the app factory picks the Testing config & SQLite memory DB
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///:memory:")

import pytest
from feedback_portal import create_app
from feedback_portal.extensions import db
from feedback_portal.services import links as link_service

TEST_DOMAIN = "https://feedback.example.test"


@pytest.fixture(scope="session")
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "WTF_CSRF_ENABLED": False,
        "LOGIN_DISABLED": True,
        "RATELIMIT_ENABLED": False,
        "DEFAULT_FEEDBACK_DOMAIN": TEST_DOMAIN,
        "SECRET_KEY": "test-secret",
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def _db_clean(app):
    # Clean BEFORE each test
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()
    yield
    # And AFTER each test (keeps state hermetic even if a test fails mid-transaction)
    with app.app_context():
        db.session.rollback()
        for tbl in reversed(db.metadata.sorted_tables):
            db.session.execute(tbl.delete())
        db.session.commit()


@pytest.fixture()
def make_link(app):
    """Create a feedback link through the service layer; returns its id."""
    def _make(customer_number="K-1", concern="Rechnung", first_name="Max", last_name="Mustermann"):
        with app.app_context():
            link, _ = link_service.create_link(customer_number, concern, first_name, last_name)
            return link.id
    return _make
