from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from petflow.ai.client import OpenAIClient
from petflow.core.dependencies import get_ai_client, get_current_user, get_db
from petflow.schemas.campaign import (
    CampaignCreate,
    CampaignResponse,
    CampaignTarget,
    CampaignUpdate,
    GeneratedMessage,
    GenerateMessageRequest,
)
from petflow.schemas.client import InactiveClientResponse
from petflow.services import ai_service, marketing_service


router = APIRouter(prefix="/marketing", tags=["Marketing"])


# ---------------- CAMPAIGNS ----------------

@router.get("/campaigns", response_model=List[CampaignResponse])
def list_campaigns(
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return marketing_service.list_campaigns(db)


@router.post("/campaigns", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
def create_campaign(
    payload: CampaignCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return marketing_service.create_campaign(db, payload, user_id=user.id)


@router.patch("/campaigns/{campaign_id}", response_model=CampaignResponse)
def update_campaign(
    campaign_id: int,
    payload: CampaignUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return marketing_service.update_campaign(db, campaign_id, payload, user_id=user.id)


@router.delete("/campaigns/{campaign_id}")
def delete_campaign(
    campaign_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    marketing_service.delete_campaign(db, campaign_id, user_id=user.id)
    return {"message": "Campaign deleted"}


@router.get("/campaigns/{campaign_id}/targets", response_model=List[CampaignTarget])
def campaign_targets(
    campaign_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return marketing_service.campaign_targets(db, campaign_id)


# ---------------- INACTIVE CLIENTS ----------------

@router.get("/inactive-clients", response_model=List[InactiveClientResponse])
def inactive_clients(
    days: int = Query(30, ge=0),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return marketing_service.inactive_client_rows(db, days)


@router.post("/generate-message", response_model=GeneratedMessage)
async def generate_message(
    payload: GenerateMessageRequest,
    ai_client: OpenAIClient = Depends(get_ai_client),
    user=Depends(get_current_user),
):
    return await ai_service.generate_campaign_message(
        ai_client,
        payload.pet_name,
        payload.discount_percent,
        payload.days_inactive,
    )
