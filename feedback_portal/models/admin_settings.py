from feedback_portal.extensions import db
from ._common import isoformat, utcnow


class AdminSettings(db.Model):
    __tablename__ = "admin_settings"

    id = db.Column(db.Integer, primary_key=True)  # singleton: id=1
    domains = db.Column(db.JSON, nullable=False, default=list)
    concern_texts = db.Column(db.JSON, nullable=False, default=dict)
    concern_types = db.Column(db.JSON, nullable=False, default=list)
    settings_version = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return dict(
            domains=list(self.domains or []),
            concern_texts=dict(self.concern_texts or {}),
            concern_types=list(self.concern_types or []),
            settings_version=self.settings_version,
            updated_at=isoformat(self.updated_at),
        )


class AdminSettingsRevision(db.Model):
    """Audit trail of saved settings. Never consulted for the current configuration."""

    __tablename__ = "admin_settings_revisions"

    id = db.Column(db.Integer, primary_key=True)
    settings_version = db.Column(db.Integer, nullable=False)
    snapshot = db.Column(db.JSON, nullable=False)
    saved_by = db.Column(db.String(150), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)
