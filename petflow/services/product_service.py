import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from petflow.core.exceptions import NotFoundError, ValidationError
from petflow.db.guards import read_or_default
from petflow.models.product import Product
from petflow.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def _round_money(value: float | None) -> float | None:
    if value is None:
        return None
    return round(float(value), 2)


def _normalize(data: dict) -> dict:
    if "sku" in data and data["sku"]:
        data["sku"] = data["sku"].strip().upper()
    for field in ("price", "cost_price"):
        if field in data:
            data[field] = _round_money(data[field])
    return data


@read_or_default()
def list_products(db: Session, search: str | None = None, category: str | None = None):
    query = db.query(Product)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Product.name.ilike(pattern), Product.sku.ilike(pattern)))

    if category:
        query = query.filter(Product.category == category)

    return query.order_by(Product.created_at.desc(), Product.id.desc()).all()


def get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError("Product not found")
    return product


def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(**_normalize(data.model_dump()))
    db.add(product)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"SKU '{product.sku}' already exists")

    db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.sku)
    return product


def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    product = get_product(db, product_id)
    changes = _normalize(data.model_dump(exclude_unset=True))

    sku = changes.get("sku")
    if sku and db.query(Product.id).filter(Product.sku == sku, Product.id != product_id).first():
        raise ValidationError(f"SKU '{sku}' already exists")

    for field, value in changes.items():
        setattr(product, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Product update conflicts with existing data")

    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = get_product(db, product_id)
    db.delete(product)
    db.commit()


@read_or_default()
def low_stock_products(db: Session):
    return (
        db.query(Product)
        .filter(Product.stock <= Product.min_stock)
        .order_by(Product.stock, Product.name)
        .all()
    )
