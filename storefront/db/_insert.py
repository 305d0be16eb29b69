"""
INSERT ... ON CONFLICT DO NOTHING for the dialects storefront runs on.
"""

from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def insert_ignore(
    session: AsyncSession,
    model: type[Any],
    values: dict[str, Any],
    *,
    index_elements: list[str],
) -> Any:
    """Build an insert that silently skips rows violating `index_elements`."""
    dialect = session.get_bind().dialect.name
    match dialect:
        case "sqlite":
            stmt = sqlite_insert(model)
        case "postgresql":
            stmt = pg_insert(model)
        case _:
            raise ValueError(f"Unsupported dialect for insert_ignore: {dialect}")
    return stmt.values(**values).on_conflict_do_nothing(index_elements=index_elements)


__all__ = ("insert_ignore",)
