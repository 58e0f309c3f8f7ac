from typing import Any, Dict, Optional

from brandstudio.utils.optimistic_lock import normalize_ts


def iso_utc(ts) -> Optional[str]:
    # SQLite hands datetimes back naive; they were stored as UTC
    return normalize_ts(ts).isoformat() if ts is not None else None


def normalize_entity(entity, family, admin=True) -> Dict[str, Any]:
    data = {
        "id": entity.id,
        "brand_id": entity.brand_id,
        "title": entity.title,
        "slug": entity.slug,
        "status": entity.status,
        "version": entity.version,
        "published_at": iso_utc(entity.published_at),
        "updated_at": iso_utc(entity.updated_at),
    }

    for field in family.extra_fields:
        data[field] = getattr(entity, field)

    if admin:
        data["content"] = entity.draft_content
        data[family.snapshot_key] = entity.published_snapshot
        data["created_at"] = iso_utc(entity.created_at)
        data["created_by"] = entity.created_by

    return data


def normalize_published(entity, family) -> Dict[str, Any]:
    """Renderer-facing view: only what the live site needs."""
    return {
        "id": entity.id,
        "title": entity.title,
        "slug": entity.slug,
        family.snapshot_key: entity.published_snapshot,
        "version": entity.version,
        "published_at": iso_utc(entity.published_at),
    }


def empty_published(family, slug: Optional[str] = None) -> Dict[str, Any]:
    data = {
        family.snapshot_key: family.empty_snapshot(),
        "version": 0,
        "published_at": None,
    }
    if slug is not None:
        data["slug"] = slug
        data["title"] = ""
    return data


def normalize_menu_entry(page) -> Dict[str, Any]:
    return {
        "title": page.title,
        "slug": page.slug,
        "url": f"/{page.slug}",
        "show_in_menu": page.show_in_menu,
        "parent_slug": page.parent_slug,
        "order": page.menu_order,
    }
