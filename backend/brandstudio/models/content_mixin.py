from sqlalchemy.orm import declared_attr
from brandstudio.extensions import db

STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"


class ContentMixin:
    """
    Columns shared by every versioned content family.

    draft_content is the authoring document, published_snapshot the rendering
    submitted on publish. Only a publish transition writes the snapshot.
    """

    slug = db.Column(db.String(200), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False, default="")
    draft_content = db.Column(db.JSON, nullable=True)
    published_snapshot = db.Column(db.JSON, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=STATUS_DRAFT, index=True)
    version = db.Column(db.Integer, nullable=False, default=1)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_by = db.Column(db.String(36), nullable=True)

    @declared_attr
    def __table_args__(cls):
        return (
            db.UniqueConstraint(
                "brand_id", "slug", name=f"uq_{cls.__tablename__}_brand_slug"
            ),
        )
