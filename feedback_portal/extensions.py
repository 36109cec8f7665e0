from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager, current_user
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect

db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()

login_manager = LoginManager()
login_manager.login_view = "auth.login_get"
login_manager.login_message = "Bitte melden Sie sich als Administrator an."
login_manager.login_message_category = "warning"
login_manager.session_protection = "strong"


def _limit_bucket() -> str:
    """Signed-in admins share one bucket per account; customers are limited per client IP."""
    if getattr(current_user, "is_authenticated", False):
        return f"admin:{current_user.get_id()}"
    return f"ip:{get_remote_address()}"


# Storage URI is set on app.config before limiter.init_app()
limiter = Limiter(key_func=_limit_bucket)
