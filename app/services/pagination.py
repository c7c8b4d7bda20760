# app/services/pagination.py

from typing import Any, Callable, Optional
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session
from app.schemas.common import Page


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def count_rows(db: Session, stmt: Select) -> int:
    """Count rows the statement would return, ignoring ordering"""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return db.execute(count_stmt).scalar_one()


def paginate(
    db: Session,
    stmt: Select,
    page: int,
    limit: int,
    transform: Optional[Callable[[Any], Any]] = None,
    scalars: bool = True,
) -> Page:
    """Run a select for one page and wrap it with the total count"""
    skip = page_offset(page, limit)
    total = count_rows(db, stmt)
    result = db.execute(stmt.offset(skip).limit(limit))
    rows = result.scalars().all() if scalars else result.all()
    items = [transform(row) for row in rows] if transform else list(rows)
    return build_page(items, total, page, limit)


def build_page(items: list, total: int, page: int, limit: int) -> Page:
    skip = page_offset(page, limit)
    return Page(
        items=items,
        total=total,
        page=page,
        limit=limit,
        has_more=skip + len(items) < total,
    )
