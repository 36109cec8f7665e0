from flask import current_app, flash, redirect, render_template, request, url_for

from feedback_portal.extensions import db, limiter
from feedback_portal.models import Feedback
from feedback_portal.services import feedback as feedback_service
from feedback_portal.services import links as link_service
from feedback_portal.services.errors import ConflictError, NotFoundError, ValidationError
from feedback_portal.services.settings import concern_text_for
from . import bp


def _invalid_link():
    return render_template("customer/invalid.html"), 404


def _feedback_form(link, status=200, rating=None, comment=""):
    return render_template(
        "customer/feedback.html",
        link=link,
        prompt=concern_text_for(link.concern),
        rating=rating,
        comment=comment,
    ), status


@bp.get("/")
def feedback_page():
    """Customer entry point: /?ref=<link id>."""
    ref = (request.args.get("ref") or "").strip()
    if not ref:
        return _invalid_link()
    try:
        link = link_service.get_link(ref)
    except NotFoundError:
        return _invalid_link()
    if link.used:
        return render_template("customer/already_submitted.html", link=link)
    return _feedback_form(link)


@bp.post("/feedback")
@limiter.limit(lambda: current_app.config.get("FEEDBACK_RATE_LIMIT", "30 per minute"))
def feedback_post():
    ref = (request.form.get("ref") or "").strip()
    rating = request.form.get("rating")
    comment = request.form.get("comment") or ""

    try:
        link = link_service.get_link(ref)
    except NotFoundError:
        return _invalid_link()

    if link.used:
        return render_template("customer/already_submitted.html", link=link), 409

    try:
        feedback_service.submit_feedback(rating=rating, ref_id=ref, comment=comment)
    except ValidationError as exc:
        flash("Bitte wählen Sie eine Bewertung von 1 bis 5 Sternen." if exc.field == "rating" else exc.message, "warning")
        # Keep what the customer typed so they can resubmit
        return _feedback_form(link, status=400, rating=rating, comment=comment)
    except ConflictError:
        return render_template("customer/already_submitted.html", link=link), 409

    return redirect(url_for("main.thanks", ref=ref))


@bp.get("/thanks")
def thanks():
    ref = (request.args.get("ref") or "").strip()
    fb = db.session.execute(
        db.select(Feedback).where(Feedback.ref_id == ref)
    ).scalar_one_or_none() if ref else None
    if fb is None:
        return _invalid_link()
    return render_template("customer/thanks.html", feedback=fb)
