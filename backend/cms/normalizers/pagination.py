# cms/normalizers/pagination.py
from typing import Any, Callable, Dict, Iterable, Optional


def normalize_pagination(
    items: Iterable[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    total: Optional[int] = None,
    pagination=None,
) -> Dict[str, Any]:
    """
    Normalize a page listing.

    ``items`` may be the ``{id: page}`` mapping the loader returns or any
    iterable of pages. Pass either a ``Pagination`` that has been applied,
    or ``page``/``per_page``/``total`` directly.
    """
    if isinstance(items, dict):
        items = items.values()

    response: Dict[str, Any] = {
        "items": [normalize_fn(item) for item in items],
    }

    if pagination is not None:
        response["pagination"] = pagination.meta()
        return response

    if page is not None and per_page is not None:
        response["pagination"] = {
            "page": page,
            "per_page": per_page,
        }

        if total is not None:
            response["pagination"]["total"] = total
            response["pagination"]["total_pages"] = (
                (total + per_page - 1) // per_page
            )

    return response
