from datetime import timezone
from typing import Mapping, Optional, Tuple

from dateutil.parser import parse

from brandstudio.domain.exceptions import ConflictError, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def read_lock_headers(headers: Mapping[str, str]) -> Tuple[Optional[int], Optional[object]]:
    """
    Extract the optional optimistic-lock preconditions from request headers.

    If-Match carries the entity version the client edited (plain or quoted),
    If-Unmodified-Since the last updated_at it saw.
    """
    expected_version = None
    unmodified_since = None

    if_match = headers.get("If-Match")
    if if_match:
        raw = if_match.strip().removeprefix("W/").strip('"')
        try:
            expected_version = int(raw)
        except ValueError:
            raise ValidationError("Invalid If-Match header", field="If-Match") from None

    client_ts = headers.get("If-Unmodified-Since")
    if client_ts:
        try:
            unmodified_since = normalize_ts(parse(client_ts))
        except (ValueError, OverflowError):
            raise ValidationError(
                "Invalid If-Unmodified-Since header", field="If-Unmodified-Since"
            ) from None

    return expected_version, unmodified_since


def enforce_optimistic_lock(entity, *, expected_version=None, unmodified_since=None):
    """
    Reject a write whose preconditions no longer hold.
    Raises ConflictError if the entity moved on since the client read it.
    """
    if expected_version is not None and entity.version != expected_version:
        raise ConflictError(
            f"Version conflict: expected {expected_version}, current is {entity.version}"
        )

    if unmodified_since is not None and entity.updated_at is not None:
        if normalize_ts(entity.updated_at).replace(microsecond=0) > unmodified_since:
            raise ConflictError("Conflict detected. Resource has been modified.")
