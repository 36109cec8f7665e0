from __future__ import annotations

import csv
import io
from datetime import datetime, time, timedelta, timezone

from flask import current_app
from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError

from feedback_portal.extensions import db
from feedback_portal.models import Feedback, FeedbackLink
from feedback_portal.utils.validators import clean_str, clean_text, is_blank, parse_rating
from .errors import ConflictError, NotFoundError, ValidationError

ANONYMOUS_CUSTOMER = "Anonymous"

RATING_FILTERS = ("all", "low", "medium", "high", "1", "2", "3", "4", "5")
PERIOD_FILTERS = ("all", "today", "week", "month")

CSV_HEADERS = ["Datum", "Kunde", "Name", "Anliegen", "Bewertung", "Kommentar"]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _db_time(value: datetime) -> datetime:
    # SQLite stores naive UTC strings
    if db.engine.dialect.name == "sqlite":
        return value.replace(tzinfo=None)
    return value


def _pick(explicit, fallback: str, max_len: int) -> str:
    v = clean_str(explicit if isinstance(explicit, str) else None, max_len=max_len)
    return v if v else (fallback or "")


def submit_feedback(rating, ref_id, comment=None, customer=None, customer_name=None, concern=None) -> Feedback:
    """
    Store a rating against a link and consume the link in one transaction.

    The link is claimed with a conditional UPDATE (used = false -> true); a link
    that is already used, or a concurrent submission tripping the unique ref_id,
    yields ConflictError and nothing is written.
    """
    if is_blank(rating):
        raise ValidationError("rating", "Missing required field: rating")
    value = parse_rating(rating)
    if value is None:
        raise ValidationError("rating", "Rating must be a whole number between 1 and 5")
    if is_blank(ref_id) or not isinstance(ref_id, str):
        raise ValidationError("refId", "Missing required field: refId")
    ref_id = ref_id.strip()

    link = db.session.get(FeedbackLink, ref_id)
    if link is None:
        raise NotFoundError("Feedback link not found")

    claimed = db.session.execute(
        update(FeedbackLink)
        .where(FeedbackLink.id == ref_id, FeedbackLink.used.is_(False))
        .values(used=True)
        .execution_options(synchronize_session=False)
    )
    if claimed.rowcount != 1:
        db.session.rollback()
        raise ConflictError("Feedback has already been submitted for this link")

    fb = Feedback(
        rating=value,
        comment=clean_text(comment),
        customer=_pick(customer, link.customer_number, 64) or ANONYMOUS_CUSTOMER,
        customer_name=_pick(customer_name, link.customer_name, 201),
        concern=_pick(concern, link.concern, 100),
        ref_id=ref_id,
    )
    db.session.add(fb)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("Feedback has already been submitted for this link")
    except Exception:
        db.session.rollback()
        raise

    db.session.refresh(link)

    # No comment body in logs
    current_app.logger.info(
        "feedback_submitted",
        extra={"event": "feedback_submitted", "link_id": ref_id, "rating": value},
    )
    return fb


def list_feedback() -> list[Feedback]:
    return (
        db.session.execute(db.select(Feedback).order_by(Feedback.timestamp.desc()))
        .scalars()
        .all()
    )


def _escape_like(term: str) -> str:
    # % and _ in the search box are literal characters
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _period_start(period: str, now: datetime) -> datetime | None:
    if period == "today":
        return datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return now - timedelta(days=30)
    return None


def filter_feedback(search: str | None = None, rating: str = "all", period: str = "all",
                    now: datetime | None = None) -> list[Feedback]:
    """
    Dashboard/export query: free-text search over comment and customer fields,
    a rating band (low/medium/high) or exact star, and a time window.
    Unknown filter values behave like "all".
    """
    now = _as_utc(now) if now else datetime.now(timezone.utc)
    query = db.select(Feedback)

    term = clean_str(search, max_len=200)
    if term:
        like = f"%{_escape_like(term)}%"
        query = query.where(or_(
            Feedback.comment.ilike(like, escape="\\"),
            Feedback.customer.ilike(like, escape="\\"),
            Feedback.customer_name.ilike(like, escape="\\"),
        ))

    rating = (rating or "all").strip().lower()
    if rating == "low":
        query = query.where(Feedback.rating <= 2)
    elif rating == "medium":
        query = query.where(Feedback.rating == 3)
    elif rating == "high":
        query = query.where(Feedback.rating >= 4)
    elif rating in ("1", "2", "3", "4", "5"):
        query = query.where(Feedback.rating == int(rating))

    start = _period_start((period or "all").strip().lower(), now)
    if start is not None:
        query = query.where(Feedback.timestamp >= _db_time(start))

    return db.session.execute(query.order_by(Feedback.timestamp.desc())).scalars().all()


def feedback_stats(now: datetime | None = None) -> dict:
    """
    Totals over all feedback: count, average, how many carry a comment,
    how many arrived today (UTC), per-star distribution and a last-7-days timeline.
    """
    now = _as_utc(now) if now else datetime.now(timezone.utc)

    total, avg = db.session.execute(
        db.select(db.func.count(Feedback.id), db.func.avg(Feedback.rating))
    ).one()

    with_comment = db.session.execute(
        db.select(db.func.count(Feedback.id)).where(db.func.length(db.func.trim(Feedback.comment)) > 0)
    ).scalar_one()
    today = db.session.execute(
        db.select(db.func.count(Feedback.id)).where(Feedback.timestamp >= _db_time(_period_start("today", now)))
    ).scalar_one()

    counts = dict(
        db.session.execute(
            db.select(Feedback.rating, db.func.count(Feedback.id)).group_by(Feedback.rating)
        ).all()
    )
    distribution = [{"rating": r, "count": int(counts.get(r, 0))} for r in range(1, 6)]

    first_day = now.date() - timedelta(days=6)
    buckets: dict = {first_day + timedelta(days=i): [] for i in range(7)}
    window_start = _db_time(datetime.combine(first_day, time.min, tzinfo=timezone.utc))
    recent = db.session.execute(
        db.select(Feedback.timestamp, Feedback.rating).where(Feedback.timestamp >= window_start)
    ).all()
    for ts, r in recent:
        day = _as_utc(ts).date()
        if day in buckets:
            buckets[day].append(r)

    timeline = [
        {
            "date": day.isoformat(),
            "count": len(ratings),
            "avg_rating": round(sum(ratings) / len(ratings), 2) if ratings else 0.0,
        }
        for day, ratings in sorted(buckets.items())
    ]

    return {
        "total": int(total or 0),
        "avg_rating": round(float(avg), 2) if avg is not None else 0.0,
        "with_comment": int(with_comment or 0),
        "today": int(today or 0),
        "distribution": distribution,
        "timeline": timeline,
    }


def export_csv(items: list[Feedback]) -> str:
    buf = io.StringIO(newline="")
    w = csv.writer(buf)
    w.writerow(CSV_HEADERS)
    for fb in items:
        w.writerow([
            _as_utc(fb.timestamp).strftime("%d.%m.%Y"),
            fb.customer,
            fb.customer_name,
            fb.concern,
            fb.rating,
            fb.comment or "",
        ])
    return buf.getvalue()
