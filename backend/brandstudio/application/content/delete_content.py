# brandstudio/application/content/delete_content.py
from typing import Any, Dict, Mapping

from brandstudio.domain.exceptions import NotFoundError
from brandstudio.domain.invariants.content import assert_brand_owner
from brandstudio.utils.audit import log_action
from brandstudio.utils.transaction import transactional


def delete_content(
    *,
    repo,
    claims: Mapping[str, Any],
    entity_id: str,
) -> Dict[str, Any]:
    """
    Hard-delete a content entity.

    Notes:
    - no history is kept; the row is gone once this returns
    - a row owned by another brand is refused with AuthorizationError,
      never reported as missing
    """
    family = repo.family

    entity = repo.get(entity_id)
    if entity is None:
        raise NotFoundError(family.label, entity_id)

    assert_brand_owner(claims, entity)

    with transactional(repo.session):
        repo.delete(entity)

    log_action(
        action=f"{family.key}.delete",
        entity_type=family.key,
        entity_id=entity_id,
        payload={},
    )

    return {"ok": True}
