from urllib.parse import urlsplit

from flask_talisman import Talisman


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def init_security(app):
    """
    HTTPS, HSTS and CSP for staging/production.
    QR codes are hot-linked from the QR service, so its origin is allowed for images.
    """
    csp = {
        "default-src": ["'self'"],
        "script-src": ["'self'"],
        # dashboard bar widths are inline styles
        "style-src": ["'self'", "'unsafe-inline'"],
        "img-src": ["'self'", "data:", _origin(app.config["QR_CODE_API_URL"])],
        "connect-src": ["'self'"],
        "frame-ancestors": ["'none'"],
        "base-uri": ["'self'"],
        "form-action": ["'self'"],
    }

    Talisman(
        app,
        content_security_policy=csp,
        force_https=app.config.get("FORCE_HTTPS", True),
        strict_transport_security=True,
        session_cookie_secure=True,
        frame_options="DENY",
        referrer_policy="no-referrer",
        permissions_policy={"camera": "()", "geolocation": "()", "microphone": "()"},
    )
