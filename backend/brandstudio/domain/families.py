"""
Content family descriptors.

A family bundles everything the generic repository and the HTTP layer need to
know about one kind of tenant-owned content: its model, natural key, the
extra columns callers may set, the write scope, and how its draft and
published documents are named on the wire.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from brandstudio.models import (
    Destination,
    FooterLayout,
    HeaderLayout,
    MenuLayout,
    NewsItem,
    Page,
    Trip,
)


@dataclass(frozen=True, eq=False)
class ContentFamily:
    key: str
    label: str
    model: Type[Any]
    scope: str

    # Accepted column name -> accepted python types (None is always allowed)
    extra_fields: Mapping[str, Tuple[type, ...]] = field(default_factory=dict)

    # Body keys holding the draft document, first match wins
    content_keys: Tuple[str, ...] = ("content", "content_json")
    content_required: bool = False

    # Body key holding the rendered snapshot on publish
    snapshot_key: str = "body_html"
    snapshot_required: bool = True
    empty_snapshot: Callable[[], Any] = str

    # Layout fragments have exactly one row per brand
    fixed_slug: Optional[str] = None

    id_aliases: Tuple[str, ...] = ()

    # Public URL segment between brand slug and entity slug; None = no URL
    url_segment: Optional[str] = None

    structured_errors: bool = False

    @property
    def url_prefix(self) -> str:
        return f"/{self.key}-api"

    @property
    def blueprint_name(self) -> str:
        return f"{self.key}_api"

    @property
    def slug_bearing(self) -> bool:
        return self.fixed_slug is None


PAGES = ContentFamily(
    key="pages",
    label="Page",
    model=Page,
    scope="pages:write",
    extra_fields={
        "show_in_menu": (bool,),
        "parent_slug": (str,),
        "menu_order": (int,),
    },
    id_aliases=("page_id",),
    url_segment="",
)

HEADER = ContentFamily(
    key="header",
    label="Header",
    model=HeaderLayout,
    scope="layouts:write",
    content_required=True,
    fixed_slug="header",
    id_aliases=("header_id",),
    structured_errors=True,
)

FOOTER = ContentFamily(
    key="footer",
    label="Footer",
    model=FooterLayout,
    scope="layouts:write",
    content_required=True,
    fixed_slug="footer",
    id_aliases=("footer_id",),
    structured_errors=True,
)

MENU = ContentFamily(
    key="menu",
    label="Menu",
    model=MenuLayout,
    scope="menus:write",
    content_keys=("menu_json", "content", "content_json"),
    content_required=True,
    # The menu structure is its own rendering; publish falls back to the draft
    snapshot_key="menu_json",
    snapshot_required=False,
    empty_snapshot=list,
    fixed_slug="menu",
    id_aliases=("menu_id",),
    structured_errors=True,
)

NEWS = ContentFamily(
    key="news",
    label="News item",
    model=NewsItem,
    scope="content:write",
    extra_fields={
        "excerpt": (str,),
        "featured_image": (str,),
        "tags": (list,),
        "author_type": (str,),
        "is_mandatory": (bool,),
    },
    id_aliases=("news_id",),
    url_segment="news",
)

DESTINATIONS = ContentFamily(
    key="destinations",
    label="Destination",
    model=Destination,
    scope="content:write",
    extra_fields={
        "country": (str,),
        "region": (str,),
        "featured_image": (str,),
    },
    id_aliases=("destination_id",),
    url_segment="destinations",
)

TRIPS = ContentFamily(
    key="trips",
    label="Trip",
    model=Trip,
    scope="content:write",
    extra_fields={
        "destination_slug": (str,),
        "duration_days": (int,),
        "price": (int, float),
        "featured_image": (str,),
    },
    id_aliases=("trip_id",),
    url_segment="trips",
)

FAMILIES: Dict[str, ContentFamily] = {
    family.key: family
    for family in (PAGES, HEADER, FOOTER, MENU, NEWS, DESTINATIONS, TRIPS)
}

LAYOUT_FAMILIES = (HEADER, FOOTER, MENU)
