# Importing every model registers its table on Base.metadata.
from petflow.models.user import User
from petflow.models.audit_log import AuditLog
from petflow.models.product import Product
from petflow.models.client import Client
from petflow.models.pet import Pet
from petflow.models.appointment import GroomingAppointment
from petflow.models.transaction import Transaction
from petflow.models.campaign import MarketingCampaign

__all__ = [
    "User",
    "AuditLog",
    "Product",
    "Client",
    "Pet",
    "GroomingAppointment",
    "Transaction",
    "MarketingCampaign",
]
