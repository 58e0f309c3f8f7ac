# brandstudio/application/content/assign_news.py
from typing import Any, Dict, Iterable, Mapping

from sqlalchemy import select

from brandstudio.domain.exceptions import NotFoundError, ValidationError
from brandstudio.domain.invariants.content import assert_brand_owner
from brandstudio.models.brand import Brand
from brandstudio.models.news_assignment import NewsBrandAssignment
from brandstudio.models.news_item import NewsItem
from brandstudio.utils.audit import log_action
from brandstudio.utils.transaction import transactional

BRAND_RESPONSES = ("accepted", "rejected")


def _normalize_assignment(assignment) -> Dict[str, Any]:
    return {
        "id": assignment.id,
        "news_id": assignment.news_id,
        "brand_id": assignment.brand_id,
        "status": assignment.status,
    }


def assign_news(*, session, news_id: str, brand_ids: Iterable[str]) -> Dict[str, Any]:
    """
    Offer a news item to other brands (admin only).

    Mandatory news is imposed rather than offered. Existing assignments are
    left as they are so a brand's earlier answer is not overwritten.
    """
    news = session.get(NewsItem, news_id)
    if news is None:
        raise NotFoundError("News", news_id)

    if (
        not isinstance(brand_ids, list)
        or not brand_ids
        or not all(isinstance(b, str) for b in brand_ids)
    ):
        raise ValidationError("brand_ids must be a non-empty list of strings", field="brand_ids")

    status = "mandatory" if news.is_mandatory else "pending"
    assignments = []

    with transactional(session):
        for brand_id in dict.fromkeys(brand_ids):
            if session.get(Brand, brand_id) is None:
                raise NotFoundError("Brand", brand_id)

            assignment = session.execute(
                select(NewsBrandAssignment).where(
                    NewsBrandAssignment.news_id == news.id,
                    NewsBrandAssignment.brand_id == brand_id,
                )
            ).scalar_one_or_none()

            if assignment is None:
                assignment = NewsBrandAssignment(
                    news_id=news.id, brand_id=brand_id, status=status
                )
                session.add(assignment)
            assignments.append(assignment)

        session.flush()

    log_action(
        action="news.assign",
        entity_type="news",
        entity_id=news.id,
        payload={"brands": [a.brand_id for a in assignments], "status": status},
    )

    return {"items": [_normalize_assignment(a) for a in assignments]}


def respond_to_assignment(
    *,
    session,
    claims: Mapping[str, Any],
    assignment_id: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    """A brand accepts or rejects news offered to it."""
    assignment = session.get(NewsBrandAssignment, assignment_id)
    if assignment is None:
        raise NotFoundError("Assignment", assignment_id)

    assert_brand_owner(claims, assignment)

    status = data.get("status")
    if status not in BRAND_RESPONSES:
        raise ValidationError(
            f"status must be one of: {', '.join(BRAND_RESPONSES)}", field="status"
        )
    if assignment.status == "mandatory":
        raise ValidationError("Mandatory news cannot be declined or re-answered")

    with transactional(session):
        assignment.status = status
        session.flush()

    log_action(
        action=f"news.assignment_{status}",
        entity_type="news_assignment",
        entity_id=assignment.id,
        payload={"news_id": assignment.news_id},
    )

    return _normalize_assignment(assignment)
