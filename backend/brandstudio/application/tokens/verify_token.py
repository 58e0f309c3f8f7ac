# brandstudio/application/tokens/verify_token.py
import logging
from typing import Any, Dict, Optional

import jwt as pyjwt
from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTDecodeError

from brandstudio.domain.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MalformedClaimsError,
    MissingAuthError,
)
from .issue_token import TOKEN_USE_SESSION

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer(header: Optional[str]) -> str:
    if not header or not header.startswith(BEARER_PREFIX):
        raise MissingAuthError()

    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise MissingAuthError()
    return token


def verify_bearer(header: Optional[str]) -> Dict[str, Any]:
    """
    Turn an Authorization header into trusted claims.

    Each failure maps to its own error kind: missing header, bad signature or
    algorithm, expiry, and claims without a brand binding.
    """
    token = extract_bearer(header)

    try:
        claims = decode_token(token)
    except pyjwt.ExpiredSignatureError:
        raise ExpiredTokenError() from None
    except JWTDecodeError as exc:
        raise MalformedClaimsError(f"Invalid token: {exc}") from None
    except pyjwt.InvalidTokenError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise InvalidTokenError(f"Token verification failed: {exc}") from None

    if claims.get("token_use") == TOKEN_USE_SESSION:
        raise InvalidTokenError("Session tokens cannot be used against the content API")

    if not claims.get("brand_id"):
        raise MalformedClaimsError()

    return claims
