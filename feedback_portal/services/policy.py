from functools import wraps

from flask import current_app, jsonify, redirect, request, url_for
from flask_login import current_user


def admin_signed_in() -> bool:
    if current_app.config.get("LOGIN_DISABLED"):
        return True
    return bool(getattr(current_user, "is_authenticated", False))


def admin_required(fn):
    @wraps(fn)
    def _wrap(*args, **kwargs):
        if not admin_signed_in():
            return _unauthorized()
        return fn(*args, **kwargs)
    return _wrap


def wants_json() -> bool:
    accept = (request.headers.get("Accept") or "").lower()
    return (
        "application/json" in accept
        or request.is_json
        or request.path.startswith("/api/")
    )


def _unauthorized():
    # JSON 401 for API callers, login redirect for the admin pages
    if wants_json():
        return jsonify({"success": False, "error": "unauthorized"}), 401
    return redirect(url_for("auth.login_get", next=request.full_path))
