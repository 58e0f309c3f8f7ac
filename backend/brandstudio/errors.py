import logging

from flask import g, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from brandstudio.domain.exceptions import InternalError, StudioError
from brandstudio.extensions import db

logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str):
    # Layout endpoints answer with a structured envelope, the rest with a bare string
    if g.get("error_envelope") == "structured":
        body = {"error": {"code": code, "message": message}}
    else:
        body = {"error": message}

    response = jsonify(body)
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(StudioError)
    def handle_studio_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", error.code, error.message)
        return error_response(error.status_code, error.code, error.message)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.exception("Database error")
        internal = InternalError()
        return error_response(internal.status_code, internal.code, internal.message)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        code = (error.name or "error").upper().replace(" ", "_")
        return error_response(error.code, code, error.description)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error")
        internal = InternalError()
        return error_response(internal.status_code, internal.code, internal.message)


def register_jwt_callbacks(jwt):
    """Session-auth failures render in the same JSON shape as everything else."""
    from brandstudio.models.user import User

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        return db.session.get(User, jwt_data["sub"])

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response(401, "MISSING_AUTH", reason)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response(401, "INVALID_TOKEN", reason)

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return error_response(401, "TOKEN_EXPIRED", "Token has expired")

    @jwt.user_lookup_error_loader
    def unknown_user(_jwt_header, _jwt_data):
        return error_response(401, "INVALID_TOKEN", "User not found")
