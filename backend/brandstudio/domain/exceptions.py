"""
Error taxonomy for the brand content backend.

Every error carries a stable ``code`` and the HTTP status it maps to, so the
top-level error handlers never need to guess.
"""


class StudioError(Exception):
    """Base exception for all brand content errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "STUDIO_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


# ------------------------
# Token verification (401)
# ------------------------

class AuthenticationError(StudioError):
    """Bearer credential could not be turned into trusted claims."""

    status_code = 401


class MissingAuthError(AuthenticationError):
    def __init__(self, message: str = "Missing or invalid Authorization header"):
        super().__init__(message, "MISSING_AUTH")


class InvalidTokenError(AuthenticationError):
    def __init__(self, message: str = "Token verification failed"):
        super().__init__(message, "INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, "TOKEN_EXPIRED")


class MalformedClaimsError(AuthenticationError):
    def __init__(self, message: str = "Invalid token: missing brand_id"):
        super().__init__(message, "MALFORMED_CLAIMS")


# ------------------------
# Request level
# ------------------------

class AuthorizationError(StudioError):
    """Verified caller acting on a brand (or capability) it does not hold."""

    status_code = 403

    def __init__(self, message: str = "Unauthorized: brand_id mismatch"):
        super().__init__(message, "UNAUTHORIZED")


class ValidationError(StudioError):
    """Missing or malformed required field."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message, "INVALID_REQUEST")


class NotFoundError(StudioError):
    status_code = 404

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} {identifier} not found"
        super().__init__(message, "NOT_FOUND")


class ConflictError(StudioError):
    """Concurrent modification or natural-key collision."""

    status_code = 409

    def __init__(self, message: str, code: str = "VERSION_CONFLICT"):
        super().__init__(message, code)


class IllegalTransitionError(StudioError):
    status_code = 409

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Illegal status transition: {from_status} -> {to_status}",
            "INVALID_STATUS_TRANSITION",
        )


class InternalError(StudioError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, "INTERNAL_ERROR")
