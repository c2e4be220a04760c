# prompt_driver/services/database/database_services.py
from typing import Any, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.sql import Select
from sqlalchemy.ext.asyncio import AsyncSession


async def count_rows(db: AsyncSession, query: Select) -> int:
    """Count the rows a select would return, ignoring its ordering."""
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    result = await db.execute(count_query)
    return result.scalar_one()


async def paginate(db: AsyncSession, query: Select, offset: int, limit: int) -> Tuple[List[Any], int]:
    """
    Runs a select for one page of ORM entities.

    Args:
        db: The database session.
        query: A select over a single ORM entity, already filtered and ordered.
        offset: Number of rows to skip.
        limit: Page size.

    Returns:
        A tuple of (entities on this page, total matching rows).
    """
    total = await count_rows(db, query)
    result = await db.execute(query.offset(offset).limit(limit))
    return list(result.scalars().all()), total


LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """ILIKE pattern that matches `text` literally anywhere. Pair it with escape=LIKE_ESCAPE."""
    escaped = text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
    for wildcard in ("%", "_"):
        escaped = escaped.replace(wildcard, LIKE_ESCAPE + wildcard)
    return f"%{escaped}%"
