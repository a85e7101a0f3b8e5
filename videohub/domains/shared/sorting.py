from typing import Any, List, Mapping, Optional

from videohub.core.errors import ValidationError

SORT_DIRECTIONS = {"asc": False, "desc": True}


def resolve_sort(
    allowed: Mapping[str, Any],
    sort_by: Optional[str],
    sort_type: Optional[str],
    tie_breaker: Any,
    default_field: str = "createdAt",
) -> List[Any]:
    """ORDER BY по белому списку полей.

    Имя поля от клиента никогда не используется напрямую: оно только
    выбирает заранее известную колонку из allowed.
    """
    field = sort_by or default_field
    if field not in allowed:
        raise ValidationError(
            f"Unsupported sort field '{field}'",
            errors=[{"field": "sortBy", "allowed": sorted(allowed)}],
        )

    direction = (sort_type or "desc").lower()
    if direction not in SORT_DIRECTIONS:
        raise ValidationError(
            f"Unsupported sort direction '{sort_type}'",
            errors=[{"field": "sortType", "allowed": list(SORT_DIRECTIONS)}],
        )

    column = allowed[field]
    if SORT_DIRECTIONS[direction]:
        return [column.desc(), tie_breaker.desc()]
    return [column.asc(), tie_breaker.asc()]
