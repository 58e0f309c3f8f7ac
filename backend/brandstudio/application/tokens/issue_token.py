# brandstudio/application/tokens/issue_token.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from flask import current_app
from flask_jwt_extended import create_access_token

from brandstudio.config import MAX_BUILDER_TOKEN_TTL_MINUTES
from brandstudio.domain.exceptions import AuthorizationError, NotFoundError, ValidationError
from brandstudio.models.brand import Brand

logger = logging.getLogger(__name__)

TOKEN_USE_BUILDER = "builder"
TOKEN_USE_SESSION = "session"

ALL_BRANDS_ROLES = ("admin", "operator")


def resolve_scopes(requested: Optional[Iterable[str]]) -> list[str]:
    known = tuple(current_app.config["BUILDER_SCOPES"])

    if requested is None:
        return list(known)

    if not isinstance(requested, list) or not all(isinstance(s, str) for s in requested):
        raise ValidationError("scopes must be a list of strings", field="scopes")

    scopes = list(dict.fromkeys(requested))
    unknown = [s for s in scopes if s not in known]
    if unknown:
        raise ValidationError(f"Unknown scopes: {', '.join(unknown)}", field="scopes")
    if not scopes:
        raise ValidationError("At least one scope is required", field="scopes")

    return scopes


def assert_brand_entitlement(user, brand_id: str) -> None:
    """Admins and operators may act for any brand; everyone else only for their own."""
    if user.role in ALL_BRANDS_ROLES:
        return
    if not user.brand_id or user.brand_id != brand_id:
        raise AuthorizationError("User is not entitled to this brand")


def issue_builder_token(
    *,
    session,
    user,
    brand_id: Optional[str] = None,
    scopes: Optional[Iterable[str]] = None,
    ttl: Optional[timedelta] = None,
) -> Dict[str, Any]:
    """
    Mint a short-lived token binding the caller to exactly one brand.

    The caller is already authenticated by the session layer. Nothing is
    persisted: the signature over brand_id, sub, scope, iat and exp is the
    whole guarantee.
    """
    brand_id = brand_id or user.brand_id
    if not brand_id:
        raise ValidationError("brand_id is required", field="brand_id")

    assert_brand_entitlement(user, brand_id)

    brand = session.get(Brand, brand_id)
    if brand is None or not brand.is_active:
        raise NotFoundError("Brand", brand_id)

    granted = resolve_scopes(scopes)

    if ttl is None:
        ttl = timedelta(minutes=current_app.config["BUILDER_TOKEN_TTL_MINUTES"])
    ttl = min(ttl, timedelta(minutes=MAX_BUILDER_TOKEN_TTL_MINUTES))

    issued_at = datetime.now(timezone.utc)
    token = create_access_token(
        identity=str(user.id),
        additional_claims={
            "brand_id": brand_id,
            "scope": granted,
            "token_use": TOKEN_USE_BUILDER,
        },
        expires_delta=ttl,
    )

    logger.info(
        "Builder token issued brand=%s sub=%s scopes=%s ttl=%ss",
        brand_id,
        user.id,
        granted,
        int(ttl.total_seconds()),
    )

    return {
        "token": token,
        "brand_id": brand_id,
        "scope": granted,
        "expires_at": (issued_at + ttl).isoformat(),
    }


def issue_session_token(*, user) -> str:
    """Dashboard session credential; never accepted by the content API."""
    return create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role, "token_use": TOKEN_USE_SESSION},
        expires_delta=timedelta(minutes=current_app.config["SESSION_TOKEN_TTL_MINUTES"]),
    )
