from . import bp
from feedback_portal.extensions import limiter


@bp.get("/health")
@limiter.exempt
def health():
    return {"status": "ok"}, 200
