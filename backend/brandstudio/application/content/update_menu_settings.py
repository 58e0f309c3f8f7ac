# brandstudio/application/content/update_menu_settings.py
from typing import Any, Dict, Mapping

from brandstudio.domain.exceptions import NotFoundError, ValidationError
from brandstudio.domain.invariants.content import assert_brand_owner, read_extra_fields
from brandstudio.utils.audit import log_action
from brandstudio.utils.transaction import transactional

MENU_FIELDS = ("show_in_menu", "parent_slug", "menu_order")


def update_menu_settings(
    *,
    repo,
    claims: Mapping[str, Any],
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Change where a page appears in the brand menu.

    Menu placement is navigation metadata, not authored content: it does not
    bump the draft version.
    """
    family = repo.family

    page_id = data.get("page_id") or data.get("id")
    if not page_id:
        raise ValidationError("page_id is required", field="page_id")

    page = repo.get(page_id)
    if page is None:
        raise NotFoundError(family.label, page_id)

    assert_brand_owner(claims, page)

    updates = {
        field: value
        for field, value in read_extra_fields(family, data).items()
        if field in MENU_FIELDS
    }
    if not updates:
        raise ValidationError("No menu settings provided")

    with transactional(repo.session):
        repo.update_fields(page, updates)

    log_action(
        action=f"{family.key}.menu_settings",
        entity_type=family.key,
        entity_id=page.id,
        payload={"fields": sorted(updates)},
    )

    return {"ok": True}
