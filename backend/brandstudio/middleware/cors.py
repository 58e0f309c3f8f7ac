from flask_cors import CORS

ALLOWED_HEADERS = [
    "Authorization",
    "apikey",
    "Content-Type",
    "X-Client-Info",
    "If-Match",
    "If-Unmodified-Since",
]
ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]


def setup_cors(app):
    """The builder runs on its own origin; every route answers preflight."""
    origins = app.config.get("CORS_ORIGINS") or "*"
    if origins == ["*"]:
        origins = "*"

    CORS(
        app,
        origins=origins,
        allow_headers=ALLOWED_HEADERS,
        methods=ALLOWED_METHODS,
        max_age=86400,
    )
