import logging

from sqlalchemy.orm import Session

from petflow.core.config import settings
from petflow.db.types import utcnow
from petflow.models.user import User

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "email", "login_method")


def get_user_by_open_id(db: Session, open_id: str) -> User | None:
    return db.query(User).filter(User.open_id == open_id).first()


def upsert_user(
    db: Session,
    open_id: str,
    role: str | None = None,
    **profile,
) -> User:
    """Create or refresh the user row for an identity.

    Profile fields that are not passed keep their stored value. The owner
    configured by ``OWNER_OPEN_ID`` is always an admin.
    """
    if not open_id:
        raise ValueError("open_id is required")

    if role is None and settings.OWNER_OPEN_ID and open_id == settings.OWNER_OPEN_ID:
        role = "admin"

    user = get_user_by_open_id(db, open_id)
    now = utcnow()

    if user is None:
        user = User(open_id=open_id, role=role or "user", created_at=now)
        db.add(user)
        logger.info("Registered user %s", open_id)
    elif role is not None:
        user.role = role

    for field in PROFILE_FIELDS:
        if field in profile and profile[field] is not None:
            setattr(user, field, profile[field])

    user.last_signed_in = now
    db.commit()
    db.refresh(user)
    return user
