from feedback_portal.extensions import db
from ._common import isoformat, new_id, utcnow


class Feedback(db.Model):
    __tablename__ = "feedback"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=False, default="")

    # Copies of the link's fields at submission time
    customer = db.Column(db.String(64), nullable=False, default="Anonymous")
    customer_name = db.Column(db.String(201), nullable=False, default="")
    concern = db.Column(db.String(100), nullable=False, default="")

    # One feedback per link
    ref_id = db.Column(
        db.String(36),
        db.ForeignKey("feedback_links.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    )
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    link = db.relationship("FeedbackLink", back_populates="feedback")

    __table_args__ = (
        db.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating_range"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "rating": self.rating,
            "comment": self.comment or "",
            "timestamp": isoformat(self.timestamp),
            "customer": self.customer,
            "customer_name": self.customer_name,
            "concern": self.concern,
            "ref_id": self.ref_id,
        }
