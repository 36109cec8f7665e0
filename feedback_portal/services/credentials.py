from __future__ import annotations

from flask import current_app

from feedback_portal.extensions import db
from feedback_portal.models import AdminCredential
from feedback_portal.utils.validators import clean_str
from .errors import ValidationError

MIN_PASSWORD_LENGTH = 8


def upsert_credentials(username, password) -> AdminCredential:
    """Create or update the admin account keyed by username. Passwords are stored hashed."""
    name = clean_str(username if isinstance(username, str) else None, max_len=150)
    if not name:
        raise ValidationError("username", "Missing required field: username")
    if not isinstance(password, str) or not password.strip():
        raise ValidationError("password", "Missing required field: password")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    cred = db.session.execute(
        db.select(AdminCredential).where(AdminCredential.username == name)
    ).scalar_one_or_none()
    created = cred is None
    if created:
        cred = AdminCredential(username=name)
        db.session.add(cred)
    cred.set_password(password)
    db.session.commit()

    current_app.logger.info(
        "admin_credentials_updated",
        extra={"event": "admin_credentials_updated", "username": name, "new_account": created},
    )
    return cred


def authenticate(username, password) -> AdminCredential | None:
    name = clean_str(username if isinstance(username, str) else None, max_len=150)
    if not name or not password:
        return None
    cred = db.session.execute(
        db.select(AdminCredential).where(AdminCredential.username == name)
    ).scalar_one_or_none()
    if cred is None or not cred.check_password(password):
        return None
    return cred
