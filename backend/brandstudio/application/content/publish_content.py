# brandstudio/application/content/publish_content.py
from typing import Any, Dict, Mapping, Optional

from brandstudio.domain.exceptions import NotFoundError, ValidationError
from brandstudio.domain.invariants.content import (
    assert_brand_access,
    assert_brand_owner,
    read_snapshot,
    require_brand_id,
)
from brandstudio.domain.lifecycle.content import assert_content_transition
from brandstudio.models.brand import Brand
from brandstudio.models.content_mixin import STATUS_PUBLISHED
from brandstudio.normalizers.content import iso_utc
from brandstudio.utils.audit import log_action
from brandstudio.utils.transaction import transactional
from .save_draft import resolve_entity_id


def public_url(session, family, entity) -> Optional[str]:
    if family.url_segment is None:
        return None

    brand = session.get(Brand, entity.brand_id)
    brand_slug = brand.slug if brand is not None else "brand"
    parts = [brand_slug, family.url_segment, entity.slug]
    return "/" + "/".join(part for part in parts if part)


def resolve_target(repo, claims: Mapping[str, Any], data: Mapping[str, Any], entity_id=None):
    """
    Find the entity a lifecycle call addresses: by path id, by body id, or by
    (brand_id, slug). Raises NotFoundError for unknown rows and
    AuthorizationError for rows owned by another brand.
    """
    family = repo.family

    if entity_id is None:
        brand_id = require_brand_id(data)
        assert_brand_access(claims, brand_id)

        entity_id = resolve_entity_id(family, data)
        if entity_id is None:
            slug = data.get("slug") or family.fixed_slug
            if not slug:
                raise ValidationError("brand_id and (id or slug) required", field="slug")

            entity = repo.find_by_key(brand_id, slug)
            if entity is None:
                raise NotFoundError(family.label, slug)
            return entity
    elif data.get("brand_id") is not None:
        assert_brand_access(claims, data.get("brand_id"))

    entity = repo.get(entity_id)
    if entity is None:
        raise NotFoundError(family.label, entity_id)

    assert_brand_owner(claims, entity)
    return entity


def publish_content(
    *,
    repo,
    claims: Mapping[str, Any],
    data: Mapping[str, Any],
    entity_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Publish a content entity with the rendering supplied by the caller.

    Responsibilities:
    - ownership check before any write
    - lifecycle transition enforcement
    - snapshot storage and published_at stamp
    - audit logging

    Re-publishing an already published entity simply replaces the snapshot.
    """
    family = repo.family
    entity = resolve_target(repo, claims, data, entity_id)

    snapshot = read_snapshot(family, data, entity)
    assert_content_transition(from_status=entity.status, to_status=STATUS_PUBLISHED)

    with transactional(repo.session):
        repo.mark_published(entity, snapshot)

    log_action(
        action=f"{family.key}.publish",
        entity_type=family.key,
        entity_id=entity.id,
        payload={"version": entity.version},
    )

    return {
        "ok": True,
        "id": entity.id,
        "slug": entity.slug,
        "status": entity.status,
        "version": entity.version,
        "published_at": iso_utc(entity.published_at),
        "url": public_url(repo.session, family, entity),
    }
