"""Password hashing and JWT issuance/verification"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, FrozenSet, Optional

import bcrypt
from jose import JWTError, jwt

from university_erp.config import settings
from university_erp.domain.exceptions import AuthenticationError

ROLES = ("admin", "faculty", "student", "staff", "librarian", "accountant", "hr")

# Fixed role -> permission table
ROLE_PERMISSIONS: Dict[str, FrozenSet[str]] = {
    "admin": frozenset({"*"}),
    "faculty": frozenset(
        {"students:read", "academics:read", "exams:write", "results:write", "learning:write", "attendance:write"}
    ),
    "student": frozenset({"academics:read", "learning:submit", "certificates:request", "library:read"}),
    "staff": frozenset(
        {"students:read", "students:write", "admissions:write", "certificates:write", "campuses:write", "attendance:write"}
    ),
    "librarian": frozenset({"library:read", "library:write"}),
    "accountant": frozenset({"finance:read", "finance:write", "payroll:read", "payroll:write"}),
    "hr": frozenset({"hr:read", "hr:write", "payroll:read", "payroll:write", "transfers:write"}),
}


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller attached to a request"""

    id: str
    email: str
    role: str
    permissions: FrozenSet[str] = field(default_factory=frozenset)

    def has_permission(self, permission: str) -> bool:
        return "*" in self.permissions or permission in self.permissions


def hash_password(password: str) -> str:
    """Hash password with configurable rounds"""
    # Bcrypt has a 72 byte limit
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def _encode(claims: Dict[str, Any], token_type: str, expires_delta: timedelta, secret: str) -> str:
    to_encode = dict(claims)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta, "type": token_type})
    return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: str, email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a short-lived access token"""
    return _encode(
        {"sub": str(user_id), "email": email, "role": role},
        "access",
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes),
        settings.jwt_secret_key,
    )


def create_refresh_token(user_id: str, email: str, role: str) -> str:
    """Create a long-lived refresh token signed with its own secret"""
    return _encode(
        {"sub": str(user_id), "email": email, "role": role},
        "refresh",
        timedelta(days=settings.refresh_token_expire_days),
        settings.jwt_refresh_secret_key,
    )


def decode_token(token: str, expected_type: str = "access") -> Dict[str, Any]:
    """
    Decode and validate a JWT.

    Raises:
        AuthenticationError: Bad signature, expired, or wrong token type
    """
    secret = settings.jwt_refresh_secret_key if expected_type == "refresh" else settings.jwt_secret_key
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != expected_type or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")
    return payload


def user_from_claims(payload: Dict[str, Any]) -> CurrentUser:
    role = payload.get("role", "student")
    return CurrentUser(
        id=payload["sub"],
        email=payload.get("email", ""),
        role=role,
        permissions=ROLE_PERMISSIONS.get(role, frozenset()),
    )
