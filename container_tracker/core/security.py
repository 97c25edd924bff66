"""Security utilities for password hashing and JWT-based auth."""

from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from container_tracker.core.config import settings
from container_tracker.core.errors import AuthRequiredError, PermissionDeniedError
from container_tracker.db.session import get_db
from container_tracker.models.user import User
from container_tracker.services.user_service import get_user_by_id

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict[str, Any]) -> str:
    """Create a signed JWT access token from payload data."""
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(
        minutes=settings.jwt_expire_minutes
    )
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def create_user_token(user: User) -> str:
    return create_access_token(data={"sub": str(user.id), "username": user.username, "role": user.role})


def verify_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token payload."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as exc:
        raise AuthRequiredError("Token expired") from exc
    except JWTError as exc:
        raise AuthRequiredError("Invalid token") from exc

    return payload


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the acting user from the Authorization header."""
    if credentials is None:
        raise AuthRequiredError("No token provided")

    payload: dict[str, Any] = verify_token(credentials.credentials)
    user_id: str | None = payload.get("sub")
    if user_id is None:
        raise AuthRequiredError("Invalid token")

    try:
        parsed_user_id: int = int(user_id)
    except (TypeError, ValueError) as exc:
        raise AuthRequiredError("Invalid token") from exc

    user: User | None = get_user_by_id(db=db, user_id=parsed_user_id)
    if user is None:
        raise AuthRequiredError("User not found")

    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only administrators through; user management is admin-only."""
    if current_user.role != "admin":
        raise PermissionDeniedError()
    return current_user
