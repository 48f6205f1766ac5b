from typing import Generator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from petflow.ai.client import OpenAIClient
from petflow.core.config import settings
from petflow.core.identity import IdentityProvider, build_identity_provider, unauthorized
from petflow.db.session import SessionLocal
from petflow.models.user import User


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_identity_provider() -> IdentityProvider:
    return build_identity_provider(settings.AUTH_MODE)


def get_ai_client() -> OpenAIClient:
    return OpenAIClient()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> User:
    user = provider.resolve(request, db)
    if user is None:
        raise unauthorized("Missing authentication token")
    return user


def check_role(user: User, required_roles: list[str]) -> User:
    """Raise 403 unless the user holds one of ``required_roles``."""
    allowed_roles = {role.strip().lower() for role in required_roles if role and role.strip()}
    user_role = (user.role or "").lower()

    if not user_role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User role not assigned",
        )

    if user_role not in allowed_roles:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )

    return user


def require_role(required_roles: list[str]):
    def role_checker(user: User = Depends(get_current_user)) -> User:
        return check_role(user, required_roles)

    return role_checker
