import logging
from datetime import datetime

from sqlalchemy.orm import Session

from petflow.core.exceptions import ValidationError
from petflow.db.guards import read_or_default
from petflow.db.types import to_naive_utc
from petflow.models.appointment import GroomingAppointment
from petflow.models.client import Client
from petflow.models.product import Product
from petflow.models.transaction import Transaction
from petflow.schemas.transaction import TransactionCreate

logger = logging.getLogger(__name__)

LINKS = (
    ("client_id", Client),
    ("appointment_id", GroomingAppointment),
    ("product_id", Product),
)


@read_or_default()
def list_transactions(db: Session, from_dt: datetime | None = None, to_dt: datetime | None = None):
    from_dt = to_naive_utc(from_dt)
    to_dt = to_naive_utc(to_dt)

    query = db.query(Transaction)

    if from_dt:
        query = query.filter(Transaction.date >= from_dt)

    if to_dt:
        query = query.filter(Transaction.date <= to_dt)

    return query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()


def create_transaction(db: Session, data: TransactionCreate) -> Transaction:
    """Ledger rows are append-only; there is no update or delete."""
    values = data.model_dump()

    for field, model in LINKS:
        linked_id = values.get(field)
        if linked_id is not None and db.query(model.id).filter(model.id == linked_id).first() is None:
            raise ValidationError(f"{field} {linked_id} does not exist")

    values["amount"] = round(float(values["amount"]), 2)
    values["date"] = to_naive_utc(values["date"])

    transaction = Transaction(**values)
    db.add(transaction)
    db.commit()
    db.refresh(transaction)

    logger.info("Recorded %s of %.2f", transaction.type, transaction.amount)
    return transaction
