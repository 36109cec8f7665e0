import os
from logging.config import dictConfig

from pythonjsonlogger import jsonlogger

# Request bodies on these paths carry customer comments and admin passwords
_SCRUBBED_PATHS = ("/feedback", "/api/feedback", "/auth/login", "/api/admin-credentials", "/admin/credentials")


def init_logging(app):
    """JSON lines on stdout in staging/prod; Flask's console logger in dev/tests."""
    app_env = (os.getenv("APP_ENV", "development") or "development").lower()
    level = app.config.get("LOG_LEVEL", "INFO")
    if app_env not in ("staging", "production"):
        app.logger.setLevel(level)
        return

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s %(event)s",
                "rename_fields": {"levelname": "level", "asctime": "ts"},
            },
        },
        "handlers": {"stdout": {"class": "logging.StreamHandler", "formatter": "json"}},
        "loggers": {
            # werkzeug access lines duplicate the platform router logs
            "werkzeug": {"level": "WARNING"},
        },
        "root": {"level": level, "handlers": ["stdout"]},
    })


def _scrub_event(event, hint):
    request = event.get("request") or {}
    url = request.get("url") or ""
    if any(url.split("?", 1)[0].endswith(p) for p in _SCRUBBED_PATHS):
        request.pop("data", None)
    return event


def init_sentry(app):
    """Report errors to Sentry when SENTRY_DSN is set."""
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration

    sentry_sdk.init(
        dsn=dsn,
        integrations=[FlaskIntegration()],
        traces_sample_rate=float(os.getenv("SENTRY_TRACES", "0.0")),
        environment=os.getenv("APP_ENV", "development"),
        release=os.getenv("APP_RELEASE"),
        send_default_pii=False,
        before_send=_scrub_event,
    )
    app.logger.info("sentry_enabled", extra={"event": "sentry_enabled"})
