"""
Generic versioned-entity repository.

One instance wraps one content family and an injected SQLAlchemy session;
nothing here reaches for a global client, so tests can hand in any session.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update

from brandstudio.domain.exceptions import ConflictError
from brandstudio.models.base import utcnow
from brandstudio.models.content_mixin import STATUS_DRAFT, STATUS_PUBLISHED


class ContentRepository:
    def __init__(self, session, family):
        self.session = session
        self.family = family
        self.model = family.model

    # ------------------------
    # Reads
    # ------------------------

    def get(self, entity_id: str):
        return self.session.get(self.model, entity_id)

    def find_by_key(self, brand_id: str, slug: str):
        return self.session.execute(
            select(self.model).where(
                self.model.brand_id == brand_id,
                self.model.slug == slug,
            )
        ).scalar_one_or_none()

    def slug_taken(self, brand_id: str, slug: str, *, exclude_id: Optional[str] = None) -> bool:
        stmt = select(self.model.id).where(
            self.model.brand_id == brand_id,
            self.model.slug == slug,
        )
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def _brand_query(self, brand_id: str, status: Optional[str] = None, **filters):
        stmt = select(self.model).where(self.model.brand_id == brand_id)
        if status:
            stmt = stmt.where(self.model.status == status)
        for column, value in filters.items():
            stmt = stmt.where(getattr(self.model, column) == value)
        return stmt

    def list_for_brand(
        self,
        brand_id: str,
        *,
        status: Optional[str] = None,
        order_by=None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **filters,
    ) -> List[Any]:
        stmt = self._brand_query(brand_id, status, **filters)

        if order_by is None:
            order_by = (self.model.updated_at.desc(), self.model.id.desc())
        stmt = stmt.order_by(*order_by)

        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        return list(self.session.execute(stmt).scalars())

    def count_for_brand(self, brand_id: str, *, status: Optional[str] = None) -> int:
        stmt = self._brand_query(brand_id, status)
        return self.session.execute(
            select(func.count()).select_from(stmt.subquery())
        ).scalar_one()

    def published_for_brand(self, brand_id: str, slug: Optional[str] = None):
        if slug is not None:
            return self.session.execute(
                self._brand_query(brand_id, STATUS_PUBLISHED, slug=slug)
            ).scalar_one_or_none()
        return self.list_for_brand(brand_id, status=STATUS_PUBLISHED)

    # ------------------------
    # Writes (caller owns the transaction)
    # ------------------------

    def insert(
        self,
        *,
        brand_id: str,
        slug: str,
        title: str,
        draft_content: Any,
        extras: Dict[str, Any],
        created_by: Optional[str] = None,
    ):
        entity = self.model()
        entity.brand_id = brand_id
        entity.slug = slug
        entity.title = title
        entity.draft_content = draft_content
        entity.status = STATUS_DRAFT
        entity.version = 1
        entity.created_by = created_by

        for field, value in extras.items():
            setattr(entity, field, value)

        self.session.add(entity)
        self.session.flush()  # ensures entity.id exists
        return entity

    def update_draft(self, entity, *, read_version: int, values: Dict[str, Any]) -> int:
        """
        Apply a draft save as a compare-and-swap on the version counter.

        The UPDATE only matches while the row still carries the version the
        caller read, so two racing saves cannot both claim the same bump.
        """
        result = self.session.execute(
            update(self.model)
            .where(
                self.model.id == entity.id,
                self.model.version == read_version,
            )
            .values(version=self.model.version + 1, updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount != 1:
            raise ConflictError(
                f"{self.family.label} {entity.id} was modified concurrently; reload and retry"
            )

        self.session.flush()
        self.session.refresh(entity)
        return entity.version

    def mark_published(self, entity, snapshot: Any) -> None:
        entity.status = STATUS_PUBLISHED
        entity.published_snapshot = snapshot
        entity.published_at = utcnow()
        self.session.flush()

    def mark_draft(self, entity) -> None:
        # The snapshot stays as the last known good rendering.
        entity.status = STATUS_DRAFT
        self.session.flush()

    def update_fields(self, entity, values: Dict[str, Any]) -> None:
        for field, value in values.items():
            setattr(entity, field, value)
        self.session.flush()

    def delete(self, entity) -> None:
        self.session.delete(entity)
        self.session.flush()
