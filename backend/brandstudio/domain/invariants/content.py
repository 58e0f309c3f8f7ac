import re
from typing import Any, Dict, Mapping, Optional

from brandstudio.domain.exceptions import AuthorizationError, ValidationError

SLUG_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_\-/]*$")
MAX_SLUG_LENGTH = 200
MAX_TITLE_LENGTH = 255


# ------------------------
# Tenant isolation
# ------------------------

def assert_brand_access(claims: Mapping[str, Any], brand_id: Optional[str]) -> None:
    """The verified token must be bound to the brand the request names."""
    if claims.get("brand_id") != brand_id:
        raise AuthorizationError()


def assert_brand_owner(claims: Mapping[str, Any], entity) -> None:
    # Same error whether or not the caller could otherwise see the row.
    if claims.get("brand_id") != entity.brand_id:
        raise AuthorizationError()


def assert_scope(claims: Mapping[str, Any], scope: str) -> None:
    scopes = claims.get("scope") or []
    if isinstance(scopes, str):
        scopes = scopes.split()

    if scope not in scopes:
        raise AuthorizationError(f"Token lacks required scope: {scope}")


# ------------------------
# Field validation
# ------------------------

def require_brand_id(data: Mapping[str, Any]) -> str:
    brand_id = data.get("brand_id")
    if not brand_id or not isinstance(brand_id, str):
        raise ValidationError("brand_id is required", field="brand_id")
    return brand_id


def validate_title(title: Any) -> str:
    if not title or not isinstance(title, str) or not title.strip():
        raise ValidationError("title is required", field="title")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(
            f"title must be at most {MAX_TITLE_LENGTH} characters", field="title"
        )
    return title.strip()


def validate_slug(slug: Any) -> str:
    if not slug or not isinstance(slug, str):
        raise ValidationError("slug is required", field="slug")

    slug = slug.strip().strip("/")
    if len(slug) > MAX_SLUG_LENGTH or not SLUG_PATTERN.match(slug):
        raise ValidationError(f"Invalid slug: {slug!r}", field="slug")
    return slug


def read_draft_content(family, data: Mapping[str, Any]) -> Optional[Any]:
    """Return the draft document from the body, or None when the body carries none."""
    for key in family.content_keys:
        if data.get(key) is not None:
            content = data[key]
            break
    else:
        content = None

    if content is None and family.content_required:
        raise ValidationError(
            f"{family.content_keys[0]} is required", field=family.content_keys[0]
        )

    if content is not None and not isinstance(content, (dict, list, str)):
        raise ValidationError("content must be a JSON document", field="content")

    return content


def read_extra_fields(family, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Pick the family-specific columns out of a request body.

    Only whitelisted fields are returned; absent keys are left untouched on
    update rather than reset.
    """
    extras: Dict[str, Any] = {}

    for name, types in family.extra_fields.items():
        if name not in data:
            continue

        value = data[name]
        if value is None and not family.model.__table__.c[name].nullable:
            raise ValidationError(f"{name} cannot be null", field=name)

        # bool is an int subclass; never let True slip into an integer column
        if value is not None and (
            not isinstance(value, types)
            or (isinstance(value, bool) and bool not in types)
        ):
            raise ValidationError(f"Invalid value for {name}", field=name)

        extras[name] = value

    return extras


def read_snapshot(family, data: Mapping[str, Any], entity) -> Any:
    snapshot = data.get(family.snapshot_key)

    if snapshot is None and not family.snapshot_required:
        snapshot = entity.draft_content

    if snapshot is None or snapshot == "":
        raise ValidationError(
            f"{family.snapshot_key} is required", field=family.snapshot_key
        )

    return snapshot
