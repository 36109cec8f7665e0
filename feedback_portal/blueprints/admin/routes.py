from datetime import datetime, timezone

from flask import current_app, flash, make_response, redirect, render_template, request, url_for

from feedback_portal.services import feedback as feedback_service
from feedback_portal.services import links as link_service
from feedback_portal.services.errors import ServiceError
from feedback_portal.services.settings import get_current_settings
from . import bp
from .messages import form_error_message

_LINK_FIELDS = ("customer_number", "concern", "first_name", "last_name")


def _filters() -> dict:
    rating = (request.args.get("rating") or "all").strip().lower()
    period = (request.args.get("period") or "all").strip().lower()
    return {
        "search": (request.args.get("q") or "").strip(),
        "rating": rating if rating in feedback_service.RATING_FILTERS else "all",
        "period": period if period in feedback_service.PERIOD_FILTERS else "all",
    }


def _render_dashboard(link_form: dict | None = None, status: int = 200):
    filters = _filters()
    return render_template(
        "admin/dashboard.html",
        items=feedback_service.filter_feedback(**filters),
        stats=feedback_service.feedback_stats(),
        filters=filters,
        links=link_service.list_links(),
        concern_types=get_current_settings().get("concern_types") or [],
        link_form=link_form or {},
    ), status


@bp.get("/")
def dashboard():
    return _render_dashboard()


@bp.post("/links")
def create_link():
    link_form = {name: request.form.get(name) or "" for name in _LINK_FIELDS}
    try:
        link, concern_text = link_service.create_link(**link_form)
    except ServiceError as exc:
        flash(form_error_message(exc), "warning")
        # Keep the generator form filled so the admin can correct and resubmit
        return _render_dashboard(link_form=link_form, status=400)

    flash("Feedback-Link erstellt.", "success")
    return render_template(
        "admin/link_created.html",
        link=link,
        concern_text=concern_text,
    ), 201


@bp.post("/links/<link_id>/delete")
def delete_link(link_id: str):
    try:
        link_service.delete_link(link_id)
    except ServiceError as exc:
        flash(form_error_message(exc), "warning")
        return redirect(url_for("admin.dashboard"))
    flash("Feedback-Link gelöscht.", "success")
    return redirect(url_for("admin.dashboard"))


@bp.get("/feedback/export.csv")
def export_feedback_csv():
    """CSV of the feedback matching the dashboard filters."""
    items = feedback_service.filter_feedback(**_filters())
    csv_str = feedback_service.export_csv(items)

    stamp = datetime.now(timezone.utc).strftime("%d.%m.%Y")
    filename = f"feedback-export-{stamp}.csv"
    current_app.logger.info(
        "feedback_exported",
        extra={"event": "feedback_exported", "rows": len(items)},
    )

    resp = make_response(csv_str)
    resp.headers["Content-Type"] = "text/csv; charset=utf-8"
    resp.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp
