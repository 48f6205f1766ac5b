"""Sanitizing and validating product data drafted by the AI backend.

Nothing coming back from the model is trusted as-is: strings are stripped of
control characters and capped, numbers go through ``safe_number`` and the
result is validated against ``ProductSuggestion``. Any failure yields a
fallback record built from the product name, never an exception.
"""

import json
import logging
import math
import re
import secrets
import string
import unicodedata

from pydantic import ValidationError as SchemaValidationError

from petflow.schemas.product import ProductSuggestion

logger = logging.getLogger(__name__)

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
CONTROL_CHARS_EXCEPT_NEWLINE = re.compile(r"[\x00-\x09\x0b-\x1f\x7f]")
MAX_STRING_LENGTH = 500
MAX_UNIT_LENGTH = 20
MAX_TAGS = 10
FALLBACK_TAG_COUNT = 5
MIN_DESCRIPTION_LENGTH = 10
DEFAULT_MIN_STOCK = 5

DEFAULT_NAME = "Unnamed product"
DEFAULT_CATEGORY = "Other"
DEFAULT_BRAND = "Generic"
DEFAULT_UNIT = "un"

SKU_ALPHABET = string.ascii_uppercase + string.digits


def sanitize_string(value, max_length: int = MAX_STRING_LENGTH, keep_newlines: bool = False) -> str:
    if not isinstance(value, str):
        return ""
    pattern = CONTROL_CHARS_EXCEPT_NEWLINE if keep_newlines else CONTROL_CHARS
    return pattern.sub("", value).strip()[:max_length].strip()


def safe_number(value) -> float | None:
    """Parse a number, returning None instead of NaN or an exception."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None

    try:
        number = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(number):
        return None
    return number


def _matching_brace(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index

    return None


def extract_json_object(text) -> dict | None:
    """Parse the first top-level ``{...}`` object in ``text``.

    Tolerates prose around the object and markdown code fences.
    """
    if not isinstance(text, str):
        return None

    cleaned = CONTROL_CHARS.sub(" ", text).strip()
    if not cleaned:
        return None

    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, dict):
            return parsed
    except ValueError:
        pass

    start = cleaned.find("{")
    while start != -1:
        end = _matching_brace(cleaned, start)
        if end is None:
            break
        try:
            parsed = json.loads(cleaned[start:end + 1])
            if isinstance(parsed, dict):
                return parsed
        except ValueError:
            logger.debug("Skipping unparsable object at offset %s", start)
        start = cleaned.find("{", end + 1)

    logger.warning("No JSON object found in AI response")
    return None


def _ascii_code(value: str, length: int) -> str:
    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
    return re.sub(r"[^A-Za-z0-9]", "", ascii_value)[:length].upper()


def generate_sku(product_name: str, category: str | None = None) -> str:
    """``CAT-NAME-XXXX`` with a random suffix."""
    category_code = _ascii_code(category or "PET", 3) or "PET"
    name_code = _ascii_code(product_name or "", 4) or "ITEM"
    suffix = "".join(secrets.choice(SKU_ALPHABET) for _ in range(4))
    return f"{category_code}-{name_code}-{suffix}"


def _tags_from_name(name: str) -> list[str]:
    tags = [sanitize_string(word) for word in name.split()[:FALLBACK_TAG_COUNT]]
    return [tag for tag in tags if tag] or ["product"]


def _parse_tags(value) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return []
    tags = [sanitize_string(tag) for tag in value]
    return [tag for tag in tags if tag][:MAX_TAGS]


def _positive(value: float | None) -> float | None:
    if value is None or value <= 0:
        return None
    return round(value, 2)


def _first(data: dict, *keys):
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


def fallback_product_info(
    product_name: str,
    category: str | None = None,
    brand: str | None = None,
) -> ProductSuggestion:
    name = sanitize_string(product_name) or DEFAULT_NAME

    return ProductSuggestion(
        name=name,
        sku=generate_sku(name, category),
        category=sanitize_string(category) or DEFAULT_CATEGORY,
        brand=sanitize_string(brand) or DEFAULT_BRAND,
        description=f"{name} - details not available",
        suggested_price=None,
        cost_price=None,
        min_stock=DEFAULT_MIN_STOCK,
        unit=DEFAULT_UNIT,
        tags=_tags_from_name(name),
        target_animals="",
        ai_generated=False,
    )


def validate_product_info(
    data,
    product_name: str,
    category: str | None = None,
    brand: str | None = None,
) -> ProductSuggestion:
    if not isinstance(data, dict):
        logger.warning("AI product payload is not an object, using fallback")
        return fallback_product_info(product_name, category, brand)

    name = (
        sanitize_string(_first(data, "name", "product_name", "productName", "nomeProduto"))
        or sanitize_string(product_name)
        or DEFAULT_NAME
    )
    resolved_category = (
        sanitize_string(_first(data, "category", "categoria"))
        or sanitize_string(category)
        or DEFAULT_CATEGORY
    )

    sku = sanitize_string(_first(data, "sku")).upper().replace(" ", "-")
    if not sku:
        sku = generate_sku(name, resolved_category)

    description = sanitize_string(_first(data, "description", "descricao"))
    if len(description) < MIN_DESCRIPTION_LENGTH:
        description = f"{name} - details not available"

    min_stock = safe_number(_first(data, "min_stock", "minStock", "estoqueMinimoSugerido"))
    min_stock = max(1, int(min_stock)) if min_stock is not None else DEFAULT_MIN_STOCK

    tags = _parse_tags(_first(data, "tags")) or _tags_from_name(name)

    try:
        return ProductSuggestion(
            name=name,
            sku=sku,
            category=resolved_category,
            brand=(
                sanitize_string(_first(data, "brand", "marca"))
                or sanitize_string(brand)
                or DEFAULT_BRAND
            ),
            description=description,
            suggested_price=_positive(
                safe_number(_first(data, "suggested_price", "suggestedPrice", "precoSugerido"))
            ),
            cost_price=_positive(
                safe_number(_first(data, "cost_price", "costPrice", "custoEstimado"))
            ),
            min_stock=min_stock,
            unit=sanitize_string(_first(data, "unit", "unidade"), MAX_UNIT_LENGTH) or DEFAULT_UNIT,
            tags=tags,
            target_animals=sanitize_string(_first(data, "target_animals", "targetAnimals")),
            ai_generated=True,
        )
    except SchemaValidationError as exc:
        logger.error("AI product payload failed validation: %s", exc)
        return fallback_product_info(product_name, category, brand)
