import logging
from datetime import datetime

from sqlalchemy.orm import Session

from petflow.core.exceptions import NotFoundError
from petflow.db.guards import read_or_default
from petflow.db.types import utcnow
from petflow.models.campaign import MarketingCampaign
from petflow.models.client import Client
from petflow.schemas.campaign import CampaignCreate, CampaignUpdate
from petflow.services.audit_service import log_action
from petflow.services.client_service import days_since_visit, inactive_clients
from petflow.services.link_service import whatsapp_url

logger = logging.getLogger(__name__)


# ---------------- CAMPAIGNS ----------------

@read_or_default()
def list_campaigns(db: Session):
    return (
        db.query(MarketingCampaign)
        .order_by(MarketingCampaign.created_at.desc(), MarketingCampaign.id.desc())
        .all()
    )


def get_campaign(db: Session, campaign_id: int) -> MarketingCampaign:
    campaign = db.query(MarketingCampaign).filter(MarketingCampaign.id == campaign_id).first()
    if not campaign:
        raise NotFoundError("Campaign not found")
    return campaign


def create_campaign(db: Session, data: CampaignCreate, user_id: int | None = None) -> MarketingCampaign:
    campaign = MarketingCampaign(**data.model_dump())
    db.add(campaign)
    db.commit()
    db.refresh(campaign)

    log_action(
        db=db,
        user_id=user_id,
        action="CREATE_CAMPAIGN",
        entity_type="Campaign",
        entity_id=campaign.id,
        details=f"Campaign '{campaign.name}' created",
    )
    return campaign


def update_campaign(
    db: Session,
    campaign_id: int,
    data: CampaignUpdate,
    user_id: int | None = None,
) -> MarketingCampaign:
    campaign = get_campaign(db, campaign_id)
    changes = data.model_dump(exclude_unset=True)

    for field, value in changes.items():
        setattr(campaign, field, value)

    db.commit()
    db.refresh(campaign)

    if "status" in changes:
        log_action(
            db=db,
            user_id=user_id,
            action="UPDATE_CAMPAIGN_STATUS",
            entity_type="Campaign",
            entity_id=campaign.id,
            details=f"Status set to {campaign.status}",
        )
    return campaign


def delete_campaign(db: Session, campaign_id: int, user_id: int | None = None) -> None:
    campaign = get_campaign(db, campaign_id)
    name = campaign.name
    db.delete(campaign)
    db.commit()

    log_action(
        db=db,
        user_id=user_id,
        action="DELETE_CAMPAIGN",
        entity_type="Campaign",
        entity_id=campaign_id,
        details=f"Campaign '{name}' deleted",
    )


# ---------------- TARGETING ----------------

def render_message(template: str, client: Client, discount_percent: int, days: int | None) -> str:
    """Fill ``{name}``, ``{discount}`` and ``{days}``; unknown braces are left alone."""
    values = {
        "{name}": client.name,
        "{discount}": str(discount_percent),
        "{days}": str(days) if days is not None else "",
    }
    message = template
    for placeholder, value in values.items():
        message = message.replace(placeholder, value)
    return message


def inactive_client_rows(db: Session, days: int, now: datetime | None = None, **page) -> list[dict]:
    now = now or utcnow()
    rows = []

    for client in inactive_clients(db, days, now=now, **page):
        row = {column.name: getattr(client, column.name) for column in Client.__table__.columns}
        row["days_inactive"] = days_since_visit(client, now)
        row["whatsapp_url"] = whatsapp_url(client.phone)
        rows.append(row)

    return rows


def campaign_targets(db: Session, campaign_id: int, now: datetime | None = None) -> list[dict]:
    campaign = get_campaign(db, campaign_id)
    now = now or utcnow()
    targets = []

    for client in inactive_clients(db, campaign.target_days_inactive, now=now):
        days = days_since_visit(client, now)
        message = render_message(campaign.message, client, campaign.discount_percent, days)
        targets.append({
            "client_id": client.id,
            "client_name": client.name,
            "phone": client.phone,
            "days_inactive": days,
            "message": message,
            "whatsapp_url": whatsapp_url(client.phone, message),
        })

    logger.info("Campaign %s has %s targets", campaign.id, len(targets))
    return targets
