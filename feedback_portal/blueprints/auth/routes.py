from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_user, logout_user

from feedback_portal.extensions import limiter
from feedback_portal.services.credentials import authenticate
from . import bp


def _login_username_scope():
    username = (request.form.get("username") or "").strip().lower()
    # Keep a stable scope even if username is blank
    return f"login-username:{username or 'missing'}"


# Only allow internal paths like "/admin/" (no external URLs or "//" protocol-relative).
def _safe_next_path(next_raw: str) -> str:
    next_raw = (next_raw or "").strip()
    if next_raw.startswith("/") and not next_raw.startswith("//"):
        return next_raw
    return url_for("admin.dashboard")


@bp.get("/login")
def login_get():
    if current_user.is_authenticated:
        return redirect(_safe_next_path(request.args.get("next")))
    return render_template("auth/login.html", next=request.args.get("next") or "")


@bp.post("/login")
@limiter.limit(lambda: current_app.config.get("LOGIN_RATE_LIMIT", "10 per minute"))
@limiter.limit("5 per minute; 20 per hour", key_func=_login_username_scope)
def login_post():
    username = (request.form.get("username") or "").strip()
    password = request.form.get("password") or ""
    next_path = request.form.get("next") or ""

    if not username or not password:
        return render_template("auth/login.html", error="Benutzername und Passwort sind erforderlich", next=next_path), 400

    admin = authenticate(username, password)
    if admin is None:
        current_app.logger.info(
            "admin_login_failed",
            extra={"event": "admin_login_failed", "username": username},
        )
        return render_template("auth/login.html", error="Benutzername oder Passwort ist falsch", next=next_path), 400

    login_user(admin)
    current_app.logger.info("admin_login", extra={"event": "admin_login", "username": admin.username})
    return redirect(_safe_next_path(next_path))


@bp.post("/logout")
def logout():
    logout_user()
    flash("Sie wurden abgemeldet.", "info")
    return redirect(url_for("auth.login_get"))
