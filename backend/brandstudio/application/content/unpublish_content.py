# brandstudio/application/content/unpublish_content.py
from typing import Any, Dict, Mapping, Optional

from brandstudio.domain.lifecycle.content import assert_content_transition
from brandstudio.models.content_mixin import STATUS_DRAFT
from brandstudio.utils.audit import log_action
from brandstudio.utils.transaction import transactional
from .publish_content import resolve_target


def unpublish_content(
    *,
    repo,
    claims: Mapping[str, Any],
    data: Mapping[str, Any],
    entity_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Take a content entity off the live site.

    The published snapshot is kept so the last rendering can be shown or
    re-published later.
    """
    family = repo.family
    entity = resolve_target(repo, claims, data, entity_id)

    assert_content_transition(from_status=entity.status, to_status=STATUS_DRAFT)

    with transactional(repo.session):
        repo.mark_draft(entity)

    log_action(
        action=f"{family.key}.unpublish",
        entity_type=family.key,
        entity_id=entity.id,
        payload={"version": entity.version},
    )

    return {
        "ok": True,
        "id": entity.id,
        "status": entity.status,
        "version": entity.version,
    }
