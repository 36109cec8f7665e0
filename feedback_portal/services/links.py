from __future__ import annotations

from urllib.parse import urlencode

from flask import current_app

from feedback_portal.extensions import db
from feedback_portal.models import Feedback, FeedbackLink
from feedback_portal.models._common import new_id
from feedback_portal.utils.validators import clean_str
from .errors import ConflictError, NotFoundError, ValidationError
from .settings import concern_text_for, get_current_settings

# (field, API name, max length)
_REQUIRED_FIELDS = (
    ("customer_number", "customerNumber", 64),
    ("concern", "concern", 100),
    ("first_name", "firstName", 100),
    ("last_name", "lastName", 100),
)


def resolve_base_domain(settings: dict | None = None) -> str:
    settings = settings if settings is not None else get_current_settings()
    domains = settings.get("domains") or []
    base = domains[0] if domains else current_app.config["DEFAULT_FEEDBACK_DOMAIN"]
    return base.rstrip("/")


def build_feedback_url(base: str, link_id: str) -> str:
    return f"{base.rstrip('/')}/?ref={link_id}"


def build_qr_code_url(feedback_url: str) -> str:
    cfg = current_app.config
    query = urlencode({"size": cfg.get("QR_CODE_SIZE", "200x200"), "data": feedback_url})
    return f"{cfg['QR_CODE_API_URL']}?{query}"


def create_link(customer_number, concern, first_name, last_name) -> tuple[FeedbackLink, str]:
    """
    Issue a new feedback link.
    Returns the persisted link and the prompt text for its concern.
    """
    raw = {
        "customer_number": customer_number,
        "concern": concern,
        "first_name": first_name,
        "last_name": last_name,
    }
    values = {}
    for field, api_name, max_len in _REQUIRED_FIELDS:
        v = clean_str(raw[field] if isinstance(raw[field], str) else None, max_len=max_len)
        if not v:
            raise ValidationError(api_name, f"Missing required field: {api_name}")
        values[field] = v

    settings = get_current_settings()
    if values["concern"] not in (settings.get("concern_types") or []):
        raise ValidationError("concern", f"Unknown concern: {values['concern']}")

    link_id = new_id()
    feedback_url = build_feedback_url(resolve_base_domain(settings), link_id)
    link = FeedbackLink(
        id=link_id,
        feedback_url=feedback_url,
        qr_code_url=build_qr_code_url(feedback_url),
        used=False,
        **values,
    )
    db.session.add(link)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "feedback_link_created",
        extra={"event": "feedback_link_created", "link_id": link.id, "concern": link.concern},
    )
    return link, concern_text_for(link.concern, settings)


def get_link(link_id: str) -> FeedbackLink:
    link = db.session.get(FeedbackLink, link_id) if link_id else None
    if link is None:
        raise NotFoundError("Not found")
    return link


def list_links() -> list[FeedbackLink]:
    return (
        db.session.execute(db.select(FeedbackLink).order_by(FeedbackLink.created_at.desc()))
        .scalars()
        .all()
    )


def delete_link(link_id: str) -> None:
    link = get_link(link_id)

    feedback_count = db.session.scalar(
        db.select(db.func.count()).select_from(Feedback).where(Feedback.ref_id == link.id)
    )
    if feedback_count or link.used:
        raise ConflictError("Feedback already exists for this link")

    db.session.delete(link)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "feedback_link_deleted",
        extra={"event": "feedback_link_deleted", "link_id": link_id},
    )
