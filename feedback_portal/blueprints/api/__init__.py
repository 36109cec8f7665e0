from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from feedback_portal.extensions import db
from feedback_portal.services.errors import ServiceError, ValidationError

bp = Blueprint("api", __name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("body", "Request body must be a JSON object")
    return data


@bp.errorhandler(ServiceError)
def _service_error(exc: ServiceError):
    return jsonify(exc.to_dict()), exc.status_code


@bp.errorhandler(SQLAlchemyError)
def _database_error(exc: SQLAlchemyError):
    db.session.rollback()
    current_app.logger.exception("api_database_error", extra={"event": "api_database_error"})
    return jsonify({"success": False, "error": "Database error", "details": str(exc.__class__.__name__)}), 500


from . import health  # noqa: E402,F401
from . import links  # noqa: E402,F401
from . import feedback  # noqa: E402,F401
from . import settings  # noqa: E402,F401
from . import credentials  # noqa: E402,F401
