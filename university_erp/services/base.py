"""Transaction handling shared by the service classes"""

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from university_erp.domain.exceptions import ConflictError, DomainException, NotFoundError

logger = logging.getLogger(__name__)


def as_uuid(value: Optional[Union[str, uuid.UUID]]) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class BaseService:
    """Service bound to one request-scoped session"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self, on_conflict: Optional[DomainException] = None) -> Iterator[None]:
        """
        Run a write operation as a single commit.

        Any failure rolls back the session. Integrity violations surface as
        `on_conflict` (a ConflictError by default).
        """
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Integrity violation", extra={"error": str(exc.orig)})
            raise (on_conflict or ConflictError("Resource conflicts with existing data")) from exc
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def require(entity, resource: str):
        if entity is None:
            raise NotFoundError(resource)
        return entity
