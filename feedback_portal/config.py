import os

from dotenv import dotenv_values

# Values from a local .env file; real environment variables take precedence
_ENV_FALLBACK = dotenv_values(".env")


class BaseConfig:
    # Secrets (env in prod; dev/test may use defaults)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-not-secure")
    WTF_CSRF_SECRET_KEY = SECRET_KEY
    WTF_CSRF_TIME_LIMIT = None  # settings edits can take a while

    # Database (env in prod; dev/test may use default)
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("DATABASE_URL")
        or _ENV_FALLBACK.get("DATABASE_URL")
        or "sqlite:///feedback.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging / misc
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Cookies: secure-by-default
    SESSION_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # Flask-Limiter: prefer per-route limits
    RATELIMIT_DEFAULT = None
    FEEDBACK_RATE_LIMIT = os.getenv("FEEDBACK_RATE_LIMIT", "30 per minute")
    LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "10 per minute; 100 per hour")

    # --- Feedback links ---
    # Used when no domain has been saved in the admin settings yet
    DEFAULT_FEEDBACK_DOMAIN = os.getenv("DEFAULT_FEEDBACK_DOMAIN", "https://feedback.home-ki.eu")
    QR_CODE_API_URL = os.getenv("QR_CODE_API_URL", "https://api.qrserver.com/v1/create-qr-code/")
    QR_CODE_SIZE = os.getenv("QR_CODE_SIZE", "200x200")

    SITE_NAME = os.getenv("SITE_NAME", "Kundenfeedback")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
    # Read lazily in create_app(); a missing value fails startup there
    SECRET_KEY = os.environ.get("SECRET_KEY")
    WTF_CSRF_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True
    SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    # Set to 0 when TLS is terminated by a proxy that already redirects
    FORCE_HTTPS = os.environ.get("FORCE_HTTPS", "1") != "0"


class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    RATELIMIT_ENABLED = False


_ENV_MAP = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "staging": ProductionConfig,
    "testing": TestingConfig,
}


def get_config():
    env = os.environ.get("APP_ENV", "development").lower()
    return _ENV_MAP.get(env, DevelopmentConfig)
