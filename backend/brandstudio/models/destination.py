from brandstudio.extensions import db
from .base import BaseModel
from .brand_mixin import BrandMixin
from .content_mixin import ContentMixin


class Destination(BaseModel, BrandMixin, ContentMixin):
    __tablename__ = "destinations"

    country = db.Column(db.String(120), nullable=True)
    region = db.Column(db.String(120), nullable=True)
    featured_image = db.Column(db.String(512), nullable=True)
