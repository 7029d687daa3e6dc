"""Registration, login and token refresh"""

import logging
from typing import Tuple

from university_erp.domain.exceptions import AuthenticationError, ConflictError
from university_erp.infrastructure.database.models import User
from university_erp.infrastructure.database.repositories.users import UserRepository
from university_erp.infrastructure.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from university_erp.services.base import BaseService, as_uuid
from university_erp.utils.date_utils import utcnow

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.users = UserRepository(db)

    @staticmethod
    def issue_tokens(user: User) -> dict:
        return {
            "access_token": create_access_token(user.id, user.email, user.role),
            "refresh_token": create_refresh_token(user.id, user.email, user.role),
            "token_type": "Bearer",
        }

    def register(self, data) -> Tuple[User, dict]:
        """Create an account; emails are unique regardless of case"""
        if self.users.get_by_email(data.email):
            raise ConflictError("User with this email already exists")

        with self.transaction(ConflictError("User with this email already exists")):
            user = self.users.create(
                email=data.email.lower(),
                password_hash=hash_password(data.password),
                first_name=data.first_name,
                last_name=data.last_name,
                role=data.role,
                is_active=True,
            )

        logger.info("User registered", extra={"user_id": str(user.id), "role": user.role})
        return user, self.issue_tokens(user)

    def login(self, email: str, password: str) -> Tuple[User, dict]:
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt", extra={"email": email})
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        with self.transaction():
            self.users.update(user, last_login_at=utcnow())

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return user, self.issue_tokens(user)

    def refresh(self, refresh_token: str) -> dict:
        payload = decode_token(refresh_token, expected_type="refresh")
        user = self.users.get(as_uuid(payload["sub"]))
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid or expired token")
        return self.issue_tokens(user)

    def get_profile(self, user_id) -> User:
        return self.require(self.users.get(as_uuid(user_id)), "User")
