import logging
from typing import Optional

from flask import g, has_app_context

logger = logging.getLogger("brandstudio.audit")


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """Emit one structured line per content mutation."""
    claims = getattr(g, "claims", None) if has_app_context() else None
    claims = claims or {}

    logger.info(
        "%s %s=%s brand=%s actor=%s payload=%s",
        action,
        entity_type,
        entity_id,
        claims.get("brand_id"),
        claims.get("sub"),
        payload or {},
    )
