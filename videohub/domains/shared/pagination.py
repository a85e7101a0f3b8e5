import math
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from videohub.core.config import settings
from videohub.core.errors import ValidationError
from videohub.core.responses import CamelModel

T = TypeVar("T")


class Page(CamelModel, Generic[T]):
    """Страница результата с метаданными"""
    items: List[T]
    total_items: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_prev_page: bool


def normalize_page_params(page: Optional[int], limit: Optional[int]) -> tuple[int, int]:
    """Проверка page/limit; limit ограничивается сверху page_size_max"""
    page = 1 if page is None else page
    limit = settings.page_size_default if limit is None else limit

    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1:
        raise ValidationError("limit must be >= 1")

    return page, min(limit, settings.page_size_max)


def build_page(items: List[T], total_items: int, page: int, limit: int) -> Page[T]:
    total_pages = math.ceil(total_items / limit) if total_items else 0
    return Page(
        items=items,
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        has_next_page=page < total_pages,
        has_prev_page=total_pages > 0 and page > 1,
    )


def paginate_sequence(items: Sequence[T], page: Optional[int] = None, limit: Optional[int] = None) -> Page[T]:
    """Нарезка уже отсортированной последовательности на страницы"""
    page, limit = normalize_page_params(page, limit)
    offset = (page - 1) * limit
    return build_page(list(items[offset:offset + limit]), len(items), page, limit)


async def paginate_query(
    session: AsyncSession,
    stmt: Select,
    mapper: Callable[[Any], T],
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> Page[T]:
    """Пагинация составного запроса.

    Подсчет идет по тому же отфильтрованному и соединенному запросу,
    поэтому totalItems совпадает с тем, что пользователь может увидеть.
    Запрос должен быть полностью упорядочен (с tie-breaker по id),
    иначе страницы могут пересекаться.
    """
    page, limit = normalize_page_params(page, limit)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total_items = (await session.execute(count_stmt)).scalar_one()

    result = await session.execute(stmt.offset((page - 1) * limit).limit(limit))
    items = [mapper(row) for row in result.all()]

    return build_page(items, total_items, page, limit)
