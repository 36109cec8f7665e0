from __future__ import annotations

from copy import deepcopy
from typing import Any

from flask import current_app

from feedback_portal.extensions import db
from feedback_portal.models import AdminSettings, AdminSettingsRevision
from feedback_portal.utils.validators import clean_str, is_valid_base_url
from .errors import ValidationError

SETTINGS_ROW_ID = 1

GENERIC_CONCERN_TEXT = "Wie war Ihre Erfahrung mit unserem Service?"

DEFAULT_SETTINGS: dict[str, Any] = {
    "concern_texts": {
        "Internet-Freischaltung": "Kürzlich wurde Ihr Internet freigeschaltet. Wie war Ihre Erfahrung mit unserem Service?",
        "Störung": "Wir haben Ihre gemeldete Störung bearbeitet. Wie zufrieden sind Sie mit der Lösung?",
        "Servicebesuch": "Unser Techniker war bei Ihnen vor Ort. Wie bewerten Sie den Servicebesuch?",
        "Beratung": "Sie haben eine Beratung bei uns erhalten. Wie hilfreich war unser Beratungsgespräch?",
        "Rechnung": "Bezüglich Ihrer Rechnungsanfrage: Wie zufrieden sind Sie mit der Bearbeitung?",
        "Kündigung": "Ihre Kündigung wurde bearbeitet. Wie bewerten Sie unseren Kündigungsprozess?",
        "Sonstiges": GENERIC_CONCERN_TEXT,
    },
    "concern_types": [
        "Internet-Freischaltung",
        "Störung",
        "Servicebesuch",
        "Beratung",
        "Rechnung",
        "Kündigung",
        "Sonstiges",
    ],
}


def default_settings() -> dict:
    """Built-in configuration; the link domain comes from DEFAULT_FEEDBACK_DOMAIN."""
    data = deepcopy(DEFAULT_SETTINGS)
    data["domains"] = [current_app.config["DEFAULT_FEEDBACK_DOMAIN"].rstrip("/")]
    data.update(settings_version=0, updated_at=None)
    return data


def _current_row() -> AdminSettings | None:
    return db.session.get(AdminSettings, SETTINGS_ROW_ID)


def get_current_settings() -> dict:
    """Current configuration, or the built-in defaults when nothing was saved yet."""
    row = _current_row()
    if row is None:
        return default_settings()
    return row.to_dict()


def concern_text_for(concern: str, settings: dict | None = None) -> str:
    settings = settings if settings is not None else get_current_settings()
    text = (settings.get("concern_texts") or {}).get(concern)
    return text or GENERIC_CONCERN_TEXT


def _coerce_domains(value) -> list[str]:
    if not isinstance(value, list):
        raise ValidationError("domains", "domains must be a list of URLs")
    out = []
    for raw in value:
        d = clean_str(raw if isinstance(raw, str) else None, max_len=255)
        if not d or not is_valid_base_url(d):
            raise ValidationError("domains", f"Invalid domain: {raw!r}")
        d = d.rstrip("/")
        if d not in out:
            out.append(d)
    return out


def _coerce_concern_types(value) -> list[str]:
    if not isinstance(value, list):
        raise ValidationError("concern_types", "concern_types must be a list of names")
    out = []
    for raw in value:
        name = clean_str(raw if isinstance(raw, str) else None, max_len=100)
        if not name:
            raise ValidationError("concern_types", "Concern type names must not be empty")
        if name in out:
            raise ValidationError("concern_types", f"Duplicate concern type: {name}")
        out.append(name)
    return out


def _coerce_concern_texts(value) -> dict[str, str]:
    if not isinstance(value, dict):
        raise ValidationError("concern_texts", "concern_texts must be an object")
    out = {}
    for key, text in value.items():
        if not isinstance(key, str) or not isinstance(text, str):
            raise ValidationError("concern_texts", "concern_texts must map names to texts")
        out[key.strip()] = text.strip()
    return out


def save_settings(domains, concern_texts, concern_types, saved_by: str | None = None) -> dict:
    """
    Validate and store the current configuration in place.
    Each save bumps settings_version and appends a snapshot to the revision log.
    """
    for name, value in (("domains", domains), ("concern_texts", concern_texts), ("concern_types", concern_types)):
        if value is None:
            raise ValidationError(name, f"Missing required field: {name}")

    coerced = {
        "domains": _coerce_domains(domains),
        "concern_texts": _coerce_concern_texts(concern_texts),
        "concern_types": _coerce_concern_types(concern_types),
    }

    row = _current_row()
    if row is None:
        row = AdminSettings(id=SETTINGS_ROW_ID, settings_version=1, **coerced)
        db.session.add(row)
    else:
        row.domains = coerced["domains"]
        row.concern_texts = coerced["concern_texts"]
        row.concern_types = coerced["concern_types"]
        row.settings_version = (row.settings_version or 0) + 1

    db.session.add(AdminSettingsRevision(
        settings_version=row.settings_version,
        snapshot=coerced,
        saved_by=saved_by,
    ))
    db.session.commit()

    current_app.logger.info(
        "settings_saved",
        extra={"event": "settings_saved", "settings_version": row.settings_version, "saved_by": saved_by},
    )
    return row.to_dict()


def reset_settings(saved_by: str | None = None) -> dict:
    defaults = default_settings()
    return save_settings(
        defaults["domains"],
        defaults["concern_texts"],
        defaults["concern_types"],
        saved_by=saved_by,
    )
