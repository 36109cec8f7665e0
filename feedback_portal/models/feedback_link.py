from __future__ import annotations

from sqlalchemy import Index, text

from feedback_portal.extensions import db
from ._common import isoformat, new_id, utcnow


class FeedbackLink(db.Model):
    __tablename__ = "feedback_links"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    customer_number = db.Column(db.String(64), nullable=False)
    concern         = db.Column(db.String(100), nullable=False)
    first_name      = db.Column(db.String(100), nullable=False)
    last_name       = db.Column(db.String(100), nullable=False)

    # Derived once at creation and stored as issued
    feedback_url = db.Column(db.String(500), nullable=False)
    qr_code_url  = db.Column(db.String(1000), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    used       = db.Column(db.Boolean, nullable=False, default=False, server_default=text("false"))

    feedback = db.relationship("Feedback", back_populates="link", uselist=False)

    __table_args__ = (
        Index("ix_feedback_links_created_at", created_at),
        Index("ix_feedback_links_customer_number", customer_number),
    )

    @property
    def customer_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customerNumber": self.customer_number,
            "concern": self.concern,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "feedbackUrl": self.feedback_url,
            "qrCodeUrl": self.qr_code_url,
            "createdAt": isoformat(self.created_at),
            "used": bool(self.used),
        }

    def __repr__(self) -> str:
        return f"<FeedbackLink id={self.id} customer={self.customer_number!r} used={self.used}>"
