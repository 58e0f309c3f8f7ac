# brandstudio/application/content/save_draft.py
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from brandstudio.domain.exceptions import ConflictError, NotFoundError
from brandstudio.domain.invariants.content import (
    assert_brand_access,
    assert_brand_owner,
    read_draft_content,
    read_extra_fields,
    require_brand_id,
    validate_slug,
    validate_title,
)
from brandstudio.utils.audit import log_action
from brandstudio.utils.optimistic_lock import enforce_optimistic_lock
from brandstudio.utils.transaction import transactional


def resolve_entity_id(family, data: Mapping[str, Any]) -> Optional[str]:
    for key in ("id", *family.id_aliases):
        if data.get(key):
            return str(data[key])
    return None


def _expected_version(data: Mapping[str, Any], header_version: Optional[int]) -> Optional[int]:
    if header_version is not None:
        return header_version
    version = data.get("version")
    if isinstance(version, int) and not isinstance(version, bool):
        return version
    return None


def save_draft(
    *,
    repo,
    claims: Mapping[str, Any],
    data: Mapping[str, Any],
    expected_version: Optional[int] = None,
    unmodified_since=None,
) -> Dict[str, Any]:
    """
    Save the authoring document of a content entity.

    Resolution order:
    - explicit id: update that row, only if it belongs to the caller's brand
    - otherwise (brand_id, slug): update the existing row instead of
      inserting a duplicate
    - otherwise insert at version 1 in draft status

    Status and published snapshot are never touched here.
    """
    family = repo.family

    brand_id = require_brand_id(data)
    assert_brand_access(claims, brand_id)

    if family.slug_bearing:
        title = validate_title(data.get("title"))
        slug = validate_slug(data.get("slug"))
    else:
        title = data.get("title") or family.label
        title = validate_title(title)
        slug = family.fixed_slug

    content = read_draft_content(family, data)
    extras = read_extra_fields(family, data)

    entity_id = resolve_entity_id(family, data)
    if entity_id:
        entity = repo.get(entity_id)
        if entity is None:
            raise NotFoundError(family.label, entity_id)
        # Wrong tenant is always 403, whether or not the row exists elsewhere
        assert_brand_owner(claims, entity)
    else:
        entity = repo.find_by_key(brand_id, slug)

    # ------------------------
    # Insert
    # ------------------------
    if entity is None:
        try:
            with transactional(repo.session):
                entity = repo.insert(
                    brand_id=brand_id,
                    slug=slug,
                    title=title,
                    draft_content=content if content is not None else {},
                    extras=extras,
                    created_by=claims.get("sub"),
                )
        except IntegrityError as exc:
            # Lost an insert race on (brand_id, slug); the client can retry as an update
            raise ConflictError(
                f"A {family.label.lower()} with slug '{slug}' already exists",
                code="SLUG_CONFLICT",
            ) from exc

        log_action(
            action=f"{family.key}.create",
            entity_type=family.key,
            entity_id=entity.id,
            payload={"slug": slug, "version": entity.version},
        )
        return {"id": entity.id, "slug": entity.slug, "version": entity.version}

    # ------------------------
    # Update
    # ------------------------
    enforce_optimistic_lock(
        entity,
        expected_version=_expected_version(data, expected_version),
        unmodified_since=unmodified_since,
    )

    if slug != entity.slug and repo.slug_taken(brand_id, slug, exclude_id=entity.id):
        raise ConflictError(
            f"A {family.label.lower()} with slug '{slug}' already exists",
            code="SLUG_CONFLICT",
        )

    values = {"title": title, "slug": slug, **extras}
    # A save without content keeps the stored document
    if content is not None:
        values["draft_content"] = content

    with transactional(repo.session):
        version = repo.update_draft(entity, read_version=entity.version, values=values)

    log_action(
        action=f"{family.key}.save_draft",
        entity_type=family.key,
        entity_id=entity.id,
        payload={"slug": slug, "version": version},
    )

    return {"id": entity.id, "slug": entity.slug, "version": version}
