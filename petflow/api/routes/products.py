from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from petflow.ai.client import OpenAIClient
from petflow.core.dependencies import get_ai_client, get_current_user, get_db
from petflow.schemas.product import (
    ProductCreate,
    ProductGenerateRequest,
    ProductResponse,
    ProductSuggestion,
    ProductUpdate,
)
from petflow.services import ai_service, product_service
from petflow.services.audit_service import log_action


router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[ProductResponse])
def list_products(
    search: str | None = Query(None),
    category: str | None = Query(None),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return product_service.list_products(db, search, category)


@router.get("/low-stock", response_model=List[ProductResponse])
def low_stock(
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return product_service.low_stock_products(db)


@router.post("/generate-ai", response_model=ProductSuggestion)
async def generate_ai(
    payload: ProductGenerateRequest,
    ai_client: OpenAIClient = Depends(get_ai_client),
    user=Depends(get_current_user),
):
    return await ai_service.generate_product_info(
        ai_client,
        payload.product_name,
        category=payload.category,
        brand=payload.brand,
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return product_service.get_product(db, product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return product_service.create_product(db, payload)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return product_service.update_product(db, product_id, payload)


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    product_service.delete_product(db, product_id)

    log_action(
        db=db,
        user_id=user.id,
        action="DELETE_PRODUCT",
        entity_type="Product",
        entity_id=product_id,
    )

    return {"message": "Product deleted"}
