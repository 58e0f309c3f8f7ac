from brandstudio.extensions import db
from .base import BaseModel
from .brand_mixin import BrandMixin
from .content_mixin import ContentMixin


class NewsItem(BaseModel, BrandMixin, ContentMixin):
    __tablename__ = "news_items"

    excerpt = db.Column(db.Text, nullable=True)
    featured_image = db.Column(db.String(512), nullable=True)
    tags = db.Column(db.JSON, nullable=True)
    author_type = db.Column(db.String(20), nullable=False, default="brand")  # brand | admin
    is_mandatory = db.Column(db.Boolean, nullable=False, default=False)

    assignments = db.relationship(
        "NewsBrandAssignment",
        back_populates="news_item",
        cascade="all, delete-orphan",
    )
