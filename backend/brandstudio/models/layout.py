from .base import BaseModel
from .brand_mixin import BrandMixin
from .content_mixin import ContentMixin

# One row per brand and fragment; the slug is fixed to the fragment name.


class HeaderLayout(BaseModel, BrandMixin, ContentMixin):
    __tablename__ = "header_layouts"


class FooterLayout(BaseModel, BrandMixin, ContentMixin):
    __tablename__ = "footer_layouts"


class MenuLayout(BaseModel, BrandMixin, ContentMixin):
    __tablename__ = "menu_layouts"
