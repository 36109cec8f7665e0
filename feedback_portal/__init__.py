import os
from flask import Flask, render_template

# Load .env only for local/dev. In prod, env vars come from the platform.
if os.getenv("APP_ENV", "development") != "production":
    from dotenv import load_dotenv
    load_dotenv(".env", override=False)


from .config import get_config
from .extensions import db, migrate, csrf, login_manager, limiter
from .security import init_security
from .observability import init_logging, init_sentry
from .services.policy import wants_json


def create_app(config_overrides=None):
    app = Flask(__name__, template_folder="templates", static_folder="static")

    # ---- Rate limiting storage ----
    app_env = (os.getenv("APP_ENV", "development") or "development").lower()
    use_redis = app_env in ("staging", "production")
    storage_uri = os.environ.get("REDIS_URL") if use_redis else "memory://"
    if use_redis and not storage_uri:
        # Never run stage/prod without shared rate-limit storage
        raise RuntimeError("REDIS_URL is required in staging/production for rate limiting")
    app.config["RATELIMIT_STORAGE_URI"] = storage_uri
    app.config.setdefault("RATELIMIT_HEADERS_ENABLED", True)

    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    if app_env in ("staging", "production"):
        for name in ("SECRET_KEY", "SQLALCHEMY_DATABASE_URI"):
            if not app.config.get(name):
                raise RuntimeError(f"Missing required configuration: {name}")

    init_logging(app)
    init_sentry(app)

    # HTTPS, HSTS & CSP only in staging/production
    if app_env in ("staging", "production"):
        init_security(app)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(os.path.dirname(app.root_path), "migrations"))
    csrf.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    # Models register their tables and the login user_loader on import
    from . import models  # noqa: F401

    from .blueprints.api import bp as api_bp
    from .blueprints.main import bp as main_bp
    from .blueprints.auth import bp as auth_bp
    from .blueprints.admin import bp as admin_bp

    # JSON API is called with fetch(), not forms
    csrf.exempt(api_bp)

    app.register_blueprint(main_bp)                       # "/?ref=<id>", "/feedback"
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(api_bp, url_prefix="/api")

    @app.context_processor
    def inject_globals():
        from datetime import datetime, timezone
        return {
            "current_year": datetime.now(timezone.utc).year,
            "SITE_NAME": app.config.get("SITE_NAME", "Kundenfeedback"),
        }

    @app.errorhandler(404)
    def not_found(e):
        if wants_json():
            return {"success": False, "error": "Not found"}, 404
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def server_error(e):
        if wants_json():
            return {"success": False, "error": "Internal server error"}, 500
        return ("Internal Server Error", 500)

    # CSRF error handler (clean 400 instead of generic 500)
    from flask_wtf.csrf import CSRFError

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        return (f"CSRF validation failed: {e.description}", 400)

    # 429 Too Many Requests with Retry-After
    @app.errorhandler(429)
    def too_many_requests(e):
        retry_after = getattr(e, "retry_after", None)
        headers = {}
        if retry_after is not None:
            headers["Retry-After"] = str(int(retry_after))
        if wants_json():
            payload = {"success": False, "error": "rate_limited"}
            if retry_after is not None:
                payload["retry_after"] = int(retry_after)
            return (payload, 429, headers)
        return (render_template("errors/429.html", retry_after=retry_after), 429, headers)

    from .cli import register_cli
    register_cli(app)

    return app
