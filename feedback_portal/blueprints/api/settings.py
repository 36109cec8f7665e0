from flask import jsonify
from flask_login import current_user

from feedback_portal.services import settings as settings_service
from feedback_portal.services.policy import admin_required
from . import bp, json_body


@bp.get("/settings")
@admin_required
def get_settings():
    return jsonify(success=True, data=settings_service.get_current_settings())


@bp.post("/settings")
@admin_required
def save_settings():
    """Body: { domains: [...], concern_texts: {...}, concern_types: [...] }"""
    data = json_body()
    saved = settings_service.save_settings(
        domains=data.get("domains"),
        concern_texts=data.get("concern_texts"),
        concern_types=data.get("concern_types"),
        saved_by=getattr(current_user, "username", None),
    )
    return jsonify(success=True, data=saved)
