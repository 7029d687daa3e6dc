"""Data access for login accounts"""

from typing import Optional

from sqlalchemy import func

from university_erp.infrastructure.database.models import User
from university_erp.infrastructure.database.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()
