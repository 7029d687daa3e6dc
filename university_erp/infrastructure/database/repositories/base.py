"""Shared data access helpers"""

import uuid
from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

ModelT = TypeVar("ModelT")


def paginate(query: Query, offset: int, limit: int) -> Tuple[List[Any], int]:
    """Run a page of the query together with a COUNT of the same filter"""
    total = query.order_by(None).count()
    items = query.offset(offset).limit(limit).all()
    return items, total


def search_filter(term: Optional[str], *columns):
    """Case-insensitive substring match over any of the given columns"""
    pattern = f"%{term.strip()}%"
    return or_(*(column.ilike(pattern) for column in columns))


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository; subclasses set `model`"""

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: uuid.UUID) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()  # Get ID without committing
        return entity

    def create(self, **fields) -> ModelT:
        return self.add(self.model(**fields))

    def update(self, entity: ModelT, **fields) -> ModelT:
        for name, value in fields.items():
            setattr(entity, name, value)
        self.db.flush()
        return entity

    def exists(self, **filters) -> bool:
        return self.db.query(self.model.id).filter_by(**filters).first() is not None
