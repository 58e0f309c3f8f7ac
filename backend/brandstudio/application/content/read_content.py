# brandstudio/application/content/read_content.py
"""
Read side of the content API. None of these require a token: drafts are
visible to anyone who knows the brand id, mirroring how the dashboard reads.
"""
from typing import Any, Dict, Optional

from sqlalchemy import select

from brandstudio.domain.exceptions import NotFoundError, ValidationError
from brandstudio.domain.families import LAYOUT_FAMILIES, NEWS
from brandstudio.models.content_mixin import STATUS_DRAFT, STATUS_PUBLISHED
from brandstudio.models.news_assignment import (
    NewsBrandAssignment,
    VISIBLE_ASSIGNMENT_STATUSES,
)
from brandstudio.models.news_item import NewsItem
from brandstudio.normalizers.content import (
    empty_published,
    normalize_entity,
    normalize_menu_entry,
    normalize_published,
)
from brandstudio.normalizers.pagination import normalize_pagination
from brandstudio.repositories.content import ContentRepository

MAX_PER_PAGE = 100


def _require_brand(brand_id: Optional[str]) -> str:
    if not brand_id:
        raise ValidationError("brand_id is required", field="brand_id")
    return brand_id


def _check_status(status: Optional[str]) -> Optional[str]:
    if status and status not in (STATUS_DRAFT, STATUS_PUBLISHED):
        raise ValidationError(f"Invalid status: {status}", field="status")
    return status


def list_items(
    *,
    repo,
    brand_id: Optional[str],
    status: Optional[str] = None,
    slug: Optional[str] = None,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
) -> Dict[str, Any]:
    family = repo.family
    brand_id = _require_brand(brand_id)
    status = _check_status(status)

    if slug:
        entity = repo.find_by_key(brand_id, slug)
        if entity is None:
            raise NotFoundError(family.label, slug)
        return {"item": normalize_entity(entity, family)}

    if page is None:
        items = repo.list_for_brand(brand_id, status=status)
        return normalize_pagination(items, lambda e: normalize_entity(e, family))

    if page < 1 or not per_page or per_page < 1:
        raise ValidationError("page and per_page must be positive")
    per_page = min(per_page, MAX_PER_PAGE)

    items = repo.list_for_brand(
        brand_id,
        status=status,
        limit=per_page,
        offset=(page - 1) * per_page,
    )
    return normalize_pagination(
        items,
        lambda e: normalize_entity(e, family),
        page=page,
        per_page=per_page,
        total=repo.count_for_brand(brand_id, status=status),
    )


def get_item(*, repo, brand_id: Optional[str], entity_id: str) -> Dict[str, Any]:
    family = repo.family
    brand_id = _require_brand(brand_id)

    entity = repo.get(entity_id)
    if entity is None or entity.brand_id != brand_id:
        raise NotFoundError(family.label, entity_id)

    return {"item": normalize_entity(entity, family)}


def list_menu_pages(*, repo, brand_id: Optional[str], menu_key: Optional[str] = None) -> Dict[str, Any]:
    """Published pages in menu order, shaped for the site navigation."""
    brand_id = _require_brand(brand_id)
    model = repo.model

    filters = {"show_in_menu": True} if menu_key else {}
    pages = repo.list_for_brand(
        brand_id,
        status=STATUS_PUBLISHED,
        order_by=(model.menu_order.asc(), model.title.asc()),
        **filters,
    )
    return {"items": [normalize_menu_entry(p) for p in pages]}


def list_news_with_assignments(*, session, brand_id: str, status: Optional[str] = None) -> Dict[str, Any]:
    """The brand's own news plus admin news it accepted or must carry."""
    repo = ContentRepository(session, NEWS)
    own = repo.list_for_brand(brand_id, status=status)
    items = [dict(normalize_entity(n, NEWS), assignment_status=None) for n in own]
    seen = {n.id for n in own}

    assigned = session.execute(
        select(NewsItem, NewsBrandAssignment.status)
        .join(NewsBrandAssignment, NewsBrandAssignment.news_id == NewsItem.id)
        .where(
            NewsBrandAssignment.brand_id == brand_id,
            NewsBrandAssignment.status.in_(VISIBLE_ASSIGNMENT_STATUSES),
        )
        .order_by(NewsItem.updated_at.desc())
    ).all()

    for news, assignment_status in assigned:
        if news.id in seen:
            continue
        if status and news.status != status:
            continue
        entry = normalize_entity(news, NEWS)
        entry["author_type"] = news.author_type or "admin"
        entry["assignment_status"] = assignment_status
        items.append(entry)
        seen.add(news.id)

    return {"items": items}


def list_published_items(
    *,
    repo,
    brand_id: Optional[str],
    status: Optional[str] = STATUS_PUBLISHED,
    include_assigned: bool = False,
) -> Dict[str, Any]:
    family = repo.family
    brand_id = _require_brand(brand_id)
    status = _check_status(status)

    if include_assigned and family.key == "news":
        return list_news_with_assignments(session=repo.session, brand_id=brand_id, status=status)

    items = repo.list_for_brand(brand_id, status=status)
    return normalize_pagination(items, lambda e: normalize_entity(e, family))


def published_view(*, repo, brand_id: str, slug: Optional[str] = None) -> Dict[str, Any]:
    """
    What the public site renders. Missing content yields empty defaults,
    never an error, so a fresh brand renders a blank shell.
    """
    family = repo.family

    if not family.slug_bearing:
        entity = repo.published_for_brand(brand_id, family.fixed_slug)
        return normalize_published(entity, family) if entity else empty_published(family)

    if slug:
        entity = repo.published_for_brand(brand_id, slug)
        return normalize_published(entity, family) if entity else empty_published(family, slug)

    return {
        "items": [normalize_published(e, family) for e in repo.published_for_brand(brand_id)]
    }


def published_layouts(*, session, brand_id: str) -> Dict[str, Any]:
    """Header, footer and menu in the single shape the site renderer expects."""
    result: Dict[str, Any] = {}
    version = 0

    for family in LAYOUT_FAMILIES:
        entity = ContentRepository(session, family).published_for_brand(brand_id, family.fixed_slug)
        key = "menu_json" if family.key == "menu" else f"{family.key}_html"

        if entity is None:
            result[key] = family.empty_snapshot()
            continue

        result[key] = entity.published_snapshot
        version = max(version, entity.version)

    result["version"] = version
    return result
