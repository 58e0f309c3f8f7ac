from typing import Set

from brandstudio.domain.exceptions import IllegalTransitionError
from brandstudio.models.content_mixin import STATUS_DRAFT, STATUS_PUBLISHED

# Explicit allowed state transitions.
# Re-publishing is idempotent and unpublishing a draft is a no-op, so callers
# can safely retry either call.
ALLOWED_CONTENT_TRANSITIONS: dict[str, Set[str]] = {
    STATUS_DRAFT: {STATUS_DRAFT, STATUS_PUBLISHED},
    STATUS_PUBLISHED: {STATUS_PUBLISHED, STATUS_DRAFT},
}


def assert_content_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards content lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_CONTENT_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransitionError(from_status, to_status)
