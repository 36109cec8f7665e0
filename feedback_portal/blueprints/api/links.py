from flask import jsonify

from feedback_portal.services import links as link_service
from feedback_portal.services.policy import admin_required
from . import bp, json_body


@bp.post("/feedback-links")
@admin_required
def create_feedback_link():
    """
    Body: { customerNumber, concern, firstName, lastName }
    Returns: { success, data: { id, feedbackUrl, qrCodeUrl, concernText, createdAt } }
    """
    data = json_body()
    link, concern_text = link_service.create_link(
        customer_number=data.get("customerNumber"),
        concern=data.get("concern"),
        first_name=data.get("firstName"),
        last_name=data.get("lastName"),
    )
    payload = link.to_dict()
    return jsonify(success=True, data={
        "id": payload["id"],
        "feedbackUrl": payload["feedbackUrl"],
        "qrCodeUrl": payload["qrCodeUrl"],
        "concernText": concern_text,
        "createdAt": payload["createdAt"],
    }), 201


@bp.get("/feedback-links")
@admin_required
def list_feedback_links():
    return jsonify(success=True, data=[link.to_dict() for link in link_service.list_links()])


# Public: the customer page resolves its link through this
@bp.get("/feedback-links/<link_id>")
def get_feedback_link(link_id: str):
    return jsonify(success=True, data=link_service.get_link(link_id).to_dict())


@bp.delete("/feedback-links/<link_id>")
@admin_required
def delete_feedback_link(link_id: str):
    link_service.delete_link(link_id)
    return jsonify(success=True)
