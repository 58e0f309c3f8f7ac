from brandstudio.extensions import db
from .base import BaseModel
from .brand_mixin import BrandMixin
from .content_mixin import ContentMixin


class Page(BaseModel, BrandMixin, ContentMixin):
    __tablename__ = "pages"

    # Menu placement, managed through updateMenuSettings or saveDraft
    show_in_menu = db.Column(db.Boolean, nullable=False, default=False)
    parent_slug = db.Column(db.String(200), nullable=True)
    menu_order = db.Column(db.Integer, nullable=False, default=0)
