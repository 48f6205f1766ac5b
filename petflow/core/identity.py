"""Resolving the current identity from a request.

Business code only depends on ``IdentityProvider``. ``AUTH_MODE`` picks the
implementation: ``mock`` for local development, ``jwt`` for signed session
tokens.
"""

import logging
from abc import ABC, abstractmethod

from fastapi import HTTPException, Request, status
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from petflow.core.config import settings
from petflow.core.security import decode_access_token
from petflow.models.user import User
from petflow.services.user_service import get_user_by_open_id, upsert_user

logger = logging.getLogger(__name__)


def unauthorized(detail: str = "Invalid authentication") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class IdentityProvider(ABC):
    @abstractmethod
    def resolve(self, request: Request, db: Session) -> User | None:
        """Return the user behind the request, or None when anonymous."""


class MockIdentityProvider(IdentityProvider):
    OPEN_ID = "dev-user"
    NAME = "Development User"
    EMAIL = "dev@petflow.local"

    def resolve(self, request: Request, db: Session) -> User:
        user = get_user_by_open_id(db, self.OPEN_ID)
        if user is None:
            logger.warning("Authentication disabled, bootstrapping mock admin identity")
            user = upsert_user(
                db,
                self.OPEN_ID,
                role="admin",
                name=self.NAME,
                email=self.EMAIL,
                login_method="mock",
            )
        return user


class JwtIdentityProvider(IdentityProvider):
    def _token_from(self, request: Request) -> str | None:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if token:
            return token

        header = request.headers.get("Authorization", "")
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
        return None

    def resolve(self, request: Request, db: Session) -> User | None:
        token = self._token_from(request)
        if not token:
            return None

        try:
            payload = decode_access_token(token)
        except ExpiredSignatureError:
            raise unauthorized("Token expired")
        except JWTError:
            raise unauthorized("Invalid authentication token")

        open_id = payload.get("sub")
        if not isinstance(open_id, str) or not open_id.strip():
            raise unauthorized("Invalid token payload")

        # Refreshes profile, last sign-in and owner promotion on every request.
        return upsert_user(
            db,
            open_id,
            name=payload.get("name"),
            email=payload.get("email"),
            login_method=payload.get("login_method") or "jwt",
        )


PROVIDERS = {
    "mock": MockIdentityProvider,
    "jwt": JwtIdentityProvider,
}


def build_identity_provider(mode: str) -> IdentityProvider:
    try:
        return PROVIDERS[mode.strip().lower()]()
    except KeyError:
        raise ValueError(f"Unknown AUTH_MODE '{mode}'")
