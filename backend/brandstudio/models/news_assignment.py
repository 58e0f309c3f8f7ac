from brandstudio.extensions import db
from .base import BaseModel
from .brand_mixin import BrandMixin

VISIBLE_ASSIGNMENT_STATUSES = ("accepted", "mandatory")


class NewsBrandAssignment(BaseModel, BrandMixin):
    """Admin-authored news offered to (or imposed on) another brand."""

    __tablename__ = "news_brand_assignments"

    news_id = db.Column(
        db.String(36),
        db.ForeignKey("news_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = db.Column(db.String(20), nullable=False, default="pending")  # pending | accepted | rejected | mandatory

    news_item = db.relationship("NewsItem", back_populates="assignments")

    __table_args__ = (
        db.UniqueConstraint("news_id", "brand_id", name="uq_news_assignment_brand"),
    )
