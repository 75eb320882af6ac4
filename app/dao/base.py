"""
Generic data access helpers.

Free functions parameterized by a session and a model class. Every content
table shares the soft-delete columns from ``ContentBase``, so the helpers
here know how to filter live rows and how to soft delete.

Writes commit by default; pass ``commit=False`` to stage several writes and
commit them together (the caller then owns the commit).
"""

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func
from sqlmodel import Session, SQLModel, select

from app.core.logging_config import get_logger
from app.models.base import utcnow

logger = get_logger(__name__)

M = TypeVar("M", bound=SQLModel)


def live(model: Type[M]):
    """Filter clause selecting rows that are not soft deleted."""
    return model.is_deleted == False  # noqa: E712


def find_one(session: Session, model: Type[M], *conditions) -> Optional[M]:
    return session.exec(select(model).where(*conditions)).first()


def find_many(
    session: Session,
    model: Type[M],
    *conditions,
    order_by: Sequence[Any] = (),
    offset: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[M]:
    query = select(model).where(*conditions)
    if order_by:
        query = query.order_by(*order_by)
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return list(session.exec(query).all())


def count(session: Session, model: Type[M], *conditions) -> int:
    query = select(func.count()).select_from(model).where(*conditions)
    return session.exec(query).one()


def paginate(
    session: Session,
    model: Type[M],
    *conditions,
    page: int = 1,
    limit: int = 10,
    order_by: Sequence[Any] = (),
) -> Tuple[List[M], int, int]:
    """
    One page of matching rows.

    Returns:
        (rows, total, total_pages) where total_pages = ceil(total / limit)
    """
    total = count(session, model, *conditions)
    rows = find_many(
        session,
        model,
        *conditions,
        order_by=order_by,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return rows, total, math.ceil(total / limit) if limit else 0


def insert(session: Session, obj: M, commit: bool = True) -> M:
    session.add(obj)
    if commit:
        session.commit()
        session.refresh(obj)
        logger.info("Record created", table=obj.__tablename__, id=obj.id)
    return obj


def apply_changes(session: Session, obj: M, changes: Dict[str, Any], commit: bool = True) -> M:
    """Assign ``changes`` onto ``obj`` (only the given keys) and persist."""
    for key, value in changes.items():
        setattr(obj, key, value)
    # JSON columns and timestamps are only flushed when touched
    obj.updated_at = utcnow()
    session.add(obj)
    if commit:
        session.commit()
        session.refresh(obj)
        logger.info("Record updated", table=obj.__tablename__, id=obj.id, fields=sorted(changes))
    return obj


def soft_delete(session: Session, obj: M, commit: bool = True) -> M:
    now = utcnow()
    obj.is_deleted = True
    obj.deleted_at = now
    obj.updated_at = now
    session.add(obj)
    if commit:
        session.commit()
        session.refresh(obj)
        logger.info("Record soft deleted", table=obj.__tablename__, id=obj.id)
    return obj
