"""Helpers shared by the repositories."""

from sqlalchemy import Integer, cast, func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def next_sequence(session: AsyncSession, code_column, prefix: str) -> int:
    """One past the highest number used after ``prefix`` in ``code_column``.

    Deleted records leave gaps; their numbers are never handed out again.
    """
    number = cast(func.substr(code_column, len(prefix) + 1), Integer)
    result = await session.execute(
        select(func.max(number)).where(code_column.startswith(prefix, autoescape=True))
    )
    return (result.scalar() or 0) + 1


async def next_code(session: AsyncSession, code_column, prefix: str, width: int = 4) -> str:
    """Next human-readable code, e.g. ``CUST0007``."""
    return f"{prefix}{await next_sequence(session, code_column, prefix):0{width}d}"
