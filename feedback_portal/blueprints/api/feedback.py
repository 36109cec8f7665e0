from flask import current_app, jsonify

from feedback_portal.extensions import limiter
from feedback_portal.services import feedback as feedback_service
from feedback_portal.services.policy import admin_required
from . import bp, json_body


@bp.post("/feedback")
@limiter.limit(lambda: current_app.config.get("FEEDBACK_RATE_LIMIT", "30 per minute"))
def submit_feedback():
    """
    Body: { rating, refId, comment?, customer?, customerName?, concern? }
    Returns: { success }
    """
    data = json_body()
    feedback_service.submit_feedback(
        rating=data.get("rating"),
        ref_id=data.get("refId"),
        comment=data.get("comment"),
        customer=data.get("customer"),
        customer_name=data.get("customerName"),
        concern=data.get("concern"),
    )
    return jsonify(success=True), 201


@bp.get("/feedback")
@admin_required
def list_feedback():
    return jsonify(success=True, data=[fb.to_dict() for fb in feedback_service.list_feedback()])
