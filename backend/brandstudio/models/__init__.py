from .brand import Brand
from .user import User
from .page import Page
from .layout import HeaderLayout, FooterLayout, MenuLayout
from .news_item import NewsItem
from .news_assignment import NewsBrandAssignment
from .destination import Destination
from .trip import Trip

__all__ = [
    "Brand",
    "User",
    "Page",
    "HeaderLayout",
    "FooterLayout",
    "MenuLayout",
    "NewsItem",
    "NewsBrandAssignment",
    "Destination",
    "Trip",
]
