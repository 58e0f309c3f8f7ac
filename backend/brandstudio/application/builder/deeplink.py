# brandstudio/application/builder/deeplink.py
"""
Builder hand-off URLs.

The external page builder is opened with everything it needs to call back
into the content API: the brand, a freshly minted token, the API base and,
optionally, which entity to open.
"""
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from brandstudio.domain.exceptions import ValidationError

ENTITY_PARAMS = ("page_id", "template_id", "menu_id", "header_id", "footer_id")


def compose_deeplink(
    *,
    brand_id: str,
    token: str,
    api_base: str,
    builder_base: str,
    page_id: Optional[str] = None,
    template_id: Optional[str] = None,
    menu_id: Optional[str] = None,
    header_id: Optional[str] = None,
    footer_id: Optional[str] = None,
) -> str:
    if not brand_id or not token:
        raise ValidationError("brand_id and token are required")
    if not builder_base:
        raise ValidationError("builder base URL is not configured")

    params = [("brand_id", brand_id), ("token", token), ("api", api_base)]

    refs = {
        "page_id": page_id,
        "template_id": template_id,
        "menu_id": menu_id,
        "header_id": header_id,
        "footer_id": footer_id,
    }
    params.extend((name, refs[name]) for name in ENTITY_PARAMS if refs[name])

    scheme, netloc, path, query, fragment = urlsplit(builder_base)
    if query:
        params = parse_qsl(query, keep_blank_values=True) + params

    return urlunsplit((scheme, netloc, path, urlencode(params), fragment))


def parse_deeplink(url: str) -> Dict[str, str]:
    """Inverse of compose_deeplink: the query parameters plus the builder base."""
    scheme, netloc, path, query, fragment = urlsplit(url)
    params = dict(parse_qsl(query, keep_blank_values=True))
    params["builder_base"] = urlunsplit((scheme, netloc, path, "", fragment))
    return params
