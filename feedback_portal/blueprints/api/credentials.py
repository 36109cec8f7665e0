from flask import jsonify

from feedback_portal.models._common import isoformat
from feedback_portal.services import credentials as credential_service
from feedback_portal.services.policy import admin_required
from . import bp, json_body


@bp.post("/admin-credentials")
@admin_required
def upsert_admin_credentials():
    data = json_body()
    cred = credential_service.upsert_credentials(data.get("username"), data.get("password"))
    return jsonify(success=True, data={"username": cred.username, "updatedAt": isoformat(cred.updated_at)})
