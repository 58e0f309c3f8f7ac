# brandstudio/normalizers/pagination.py
from typing import Any, Callable, Dict, Iterable, Optional


def normalize_pagination(
    items: Iterable[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    total: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Shape a list response as {"items": [...]}.

    Offset listings also get a "pagination" block; total_pages is only
    reported when the caller counted the full result set.
    """
    response: Dict[str, Any] = {"items": list(map(normalize_fn, items))}

    if page is None or per_page is None:
        return response

    meta: Dict[str, Any] = {"page": page, "per_page": per_page}
    if total is not None:
        meta.update(total=total, total_pages=-(-total // per_page))

    response["pagination"] = meta
    return response
