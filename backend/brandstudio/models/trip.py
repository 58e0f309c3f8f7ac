from brandstudio.extensions import db
from .base import BaseModel
from .brand_mixin import BrandMixin
from .content_mixin import ContentMixin


class Trip(BaseModel, BrandMixin, ContentMixin):
    __tablename__ = "trips"

    destination_slug = db.Column(db.String(200), nullable=True)
    duration_days = db.Column(db.Integer, nullable=True)
    price = db.Column(db.Float, nullable=True)
    featured_image = db.Column(db.String(512), nullable=True)
