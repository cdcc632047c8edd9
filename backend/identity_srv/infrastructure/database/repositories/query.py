"""Shared paging / sorting / filtering for repository listings."""

import logging
import uuid
from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from identity_srv.domain.entities import PageResult, QueryOptions, clamp_page_window
from identity_srv.domain.exceptions import ConflictError, InvalidArgumentError

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _coerce(column: InstrumentedAttribute, key: str, raw: str) -> Any:
    """Convert a filter value from its wire string to the column's type."""
    python_type = column.type.python_type
    try:
        if python_type is bool:
            return raw.strip().lower() in _TRUE_VALUES
        if python_type is int:
            return int(raw)
        if python_type is uuid.UUID:
            return uuid.UUID(raw)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid value for filter '{key}': {raw!r}") from exc
    return raw


async def apply_query_options(
    session: AsyncSession,
    stmt: Select,
    model: type,
    options: QueryOptions,
    *,
    filter_columns: dict[str, InstrumentedAttribute] | None = None,
    search_columns: list[InstrumentedAttribute] | None = None,
    order_columns: dict[str, InstrumentedAttribute] | None = None,
) -> tuple[list, PageResult]:
    """Run ``stmt`` with the options applied and return one page of ORM rows.

    Filter and order keys outside the whitelists are ignored. Without an
    order field rows come newest first. Out-of-range page / limit values are
    clamped, so the returned ``PageResult`` always describes the rows sent.
    """
    filter_columns = filter_columns or {}
    order_columns = order_columns if order_columns is not None else filter_columns

    for key, raw in options.filters.items():
        column = filter_columns.get(key)
        if column is None:
            logger.debug("Ignoring unknown filter '%s' on %s", key, model.__name__)
            continue
        stmt = stmt.where(column == _coerce(column, key, raw))

    if options.search and search_columns:
        pattern = f"%{options.search}%"
        stmt = stmt.where(or_(*(column.ilike(pattern) for column in search_columns)))

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar_one()

    order_column = order_columns.get(options.order_field) if options.order_field else None
    if order_column is not None:
        stmt = stmt.order_by(order_column.desc() if options.order_descending else order_column.asc())
    else:
        stmt = stmt.order_by(model.created_at.desc())

    if options.fetch_all:
        page = PageResult.build(total, 1, total)
    else:
        page_number, limit = clamp_page_window(options.page, options.limit)
        stmt = stmt.offset((page_number - 1) * limit).limit(limit)
        page = PageResult.build(total, page_number, limit)

    result = await session.execute(stmt)
    return list(result.scalars().all()), page


async def count_where(session: AsyncSession, model: type, *criteria) -> int:
    stmt = select(func.count()).select_from(model).where(*criteria)
    return (await session.execute(stmt)).scalar_one()


async def flush_or_conflict(session: AsyncSession, entity_type: str) -> None:
    """Flush pending changes, reporting unique-constraint clashes as conflicts."""
    try:
        await session.flush()
    except IntegrityError as exc:
        logger.warning("Integrity violation while saving %s: %s", entity_type, exc.orig)
        raise ConflictError(f"{entity_type} conflicts with an existing record") from exc
