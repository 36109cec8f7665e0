from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user

from feedback_portal.services import credentials as credential_service
from feedback_portal.services import settings as settings_service
from feedback_portal.services.errors import ServiceError
from . import bp
from .messages import form_error_message


def _lines(raw: str | None) -> list[str]:
    return [ln.strip() for ln in (raw or "").splitlines() if ln.strip()]


@bp.get("/settings")
def settings():
    return render_template("admin/settings.html", settings=settings_service.get_current_settings())


@bp.post("/settings")
def save_settings():
    form = request.form
    concern_types = _lines(form.get("concern_types"))

    # Texts arrive as parallel name/text lists; new types get the generic prompt
    submitted = dict(zip(form.getlist("concern_name"), form.getlist("concern_text")))
    concern_texts = {
        name: (submitted.get(name) or "").strip() or settings_service.GENERIC_CONCERN_TEXT
        for name in concern_types
    }

    try:
        settings_service.save_settings(
            domains=_lines(form.get("domains")),
            concern_texts=concern_texts,
            concern_types=concern_types,
            saved_by=getattr(current_user, "username", None),
        )
    except ServiceError as exc:
        flash(form_error_message(exc), "warning")
        # Show what was submitted, not the stored row, so nothing typed is lost
        submitted_settings = dict(
            settings_service.get_current_settings(),
            domains=_lines(form.get("domains")),
            concern_types=concern_types,
            concern_texts=concern_texts,
        )
        return render_template("admin/settings.html", settings=submitted_settings), 400

    flash("Einstellungen gespeichert.", "success")
    return redirect(url_for("admin.settings"))


@bp.post("/credentials")
def save_credentials():
    username = request.form.get("username")
    password = request.form.get("password") or ""
    confirm = request.form.get("password_confirm") or ""

    if password != confirm:
        flash("Die Passwörter stimmen nicht überein.", "warning")
        return redirect(url_for("admin.settings"))
    try:
        credential_service.upsert_credentials(username, password)
    except ServiceError as exc:
        flash(form_error_message(exc), "warning")
        return redirect(url_for("admin.settings"))

    flash("Zugangsdaten aktualisiert.", "success")
    return redirect(url_for("admin.settings"))
