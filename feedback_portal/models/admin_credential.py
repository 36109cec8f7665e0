from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from feedback_portal.extensions import db, login_manager
from ._common import utcnow


class AdminCredential(db.Model, UserMixin):
    __tablename__ = "admin_credentials"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # helpers
    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def get_id(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"<AdminCredential id={self.id} username={self.username!r}>"


@login_manager.user_loader
def load_admin(admin_id: str):
    try:
        return db.session.get(AdminCredential, int(admin_id))
    except (TypeError, ValueError):
        return None
