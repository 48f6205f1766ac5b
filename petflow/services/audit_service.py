import logging
from typing import Optional

from sqlalchemy.orm import Session

from petflow.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def log_action(
    db: Session,
    user_id: Optional[int],
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    details: Optional[str] = None,
) -> Optional[AuditLog]:
    """Append an audit entry in its own commit.

    A failed write is logged and rolled back; the caller's change has
    already been committed and stays in place.
    """
    entry = AuditLog(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
    )

    try:
        db.add(entry)
        db.commit()
    except Exception:
        logger.exception("Failed to write audit entry %s for %s %s", action, entity_type, entity_id)
        db.rollback()
        return None

    logger.debug("Audit %s on %s %s by user %s", action, entity_type, entity_id, user_id)
    return entry


def list_actions(db: Session, entity_type: str, entity_id: int) -> list[AuditLog]:
    return (
        db.query(AuditLog)
        .filter(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
        .order_by(AuditLog.id)
        .all()
    )
