from functools import wraps
from flask import g, request
from flask_jwt_extended import current_user, get_jwt, verify_jwt_in_request

from brandstudio.application.tokens.issue_token import TOKEN_USE_SESSION
from brandstudio.application.tokens.verify_token import verify_bearer
from brandstudio.domain.exceptions import AuthorizationError, InvalidTokenError


def builder_token_required(fn):
    """Verify the bearer token before the view touches anything else."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.claims = verify_bearer(request.headers.get("Authorization"))
        return fn(*args, **kwargs)
    return wrapper


def session_user_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()

        if get_jwt().get("token_use") != TOKEN_USE_SESSION:
            raise InvalidTokenError("A dashboard session token is required")

        if not current_user or not current_user.is_active:
            raise AuthorizationError("User account disabled")

        g.current_user = current_user
        return fn(*args, **kwargs)
    return wrapper


def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if g.current_user.role not in allowed_roles:
                raise AuthorizationError("Insufficient permissions")

            return fn(*args, **kwargs)
        return wrapper
    return decorator
