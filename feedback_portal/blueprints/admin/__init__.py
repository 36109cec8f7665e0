from flask import Blueprint, redirect, request, url_for

from feedback_portal.services.policy import admin_signed_in

bp = Blueprint("admin", __name__)


@bp.before_request
def _require_admin_login():
    if admin_signed_in():
        return None
    return redirect(url_for("auth.login_get", next=request.full_path))


# Import submodules so their routes register on the same bp
from . import routes  # noqa: E402,F401
from . import settings  # noqa: E402,F401
