import logging

from petflow.ai.client import OpenAIClient
from petflow.ai.product_validator import (
    extract_json_object,
    fallback_product_info,
    sanitize_string,
    validate_product_info,
)
from petflow.core.exceptions import RemoteServiceError
from petflow.schemas.product import ProductSuggestion

logger = logging.getLogger(__name__)

PRODUCT_CATEGORIES = [
    "Food",
    "Hygiene",
    "Accessories",
    "Medicine",
    "Toys",
    "Beds and Houses",
    "Collars and Leashes",
    "Other",
]

MAX_MESSAGE_LENGTH = 1000

PRODUCT_SYSTEM_PROMPT = (
    "You are a pet shop product specialist. Given a product name, produce "
    "complete catalog information optimized for sale in the Brazilian pet "
    "market. Answer with JSON only, realistic and specific to the product."
)

MESSAGE_SYSTEM_PROMPT = (
    "You write WhatsApp messages for a pet shop. Messages are friendly, short "
    "and persuasive, aimed at bringing back clients who stopped visiting. "
    "Use emojis sparingly."
)

PRODUCT_RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "product_complete_info",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "description": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "category": {"type": "string", "enum": PRODUCT_CATEGORIES},
                "brand": {"type": "string"},
                "suggestedPrice": {"type": "number"},
                "unit": {"type": "string"},
                "targetAnimals": {"type": "string"},
            },
            "required": [
                "description", "tags", "category", "brand",
                "suggestedPrice", "unit", "targetAnimals",
            ],
            "additionalProperties": False,
        },
    },
}


def _product_prompt(product_name: str, category: str | None, brand: str | None) -> str:
    hints = []
    if category:
        hints.append(f"Suggested category: {category}.")
    if brand:
        hints.append(f"Brand: {brand}.")

    return (
        f'Analyze this pet shop product: "{product_name}". {" ".join(hints)}\n\n'
        "Return a single JSON object with:\n"
        "- name: full product name\n"
        "- sku: unique code in UPPERCASE\n"
        f"- category: one of {', '.join(PRODUCT_CATEGORIES)}\n"
        "- brand: product brand\n"
        "- description: persuasive description, up to 200 characters\n"
        "- suggestedPrice: suggested retail price in BRL (number)\n"
        "- costPrice: estimated cost in BRL (number or null)\n"
        "- minStock: suggested minimum stock (integer)\n"
        "- unit: sale unit (un, kg, g, ml, l, pack, box)\n"
        "- tags: up to 5 relevant tags\n"
        "- targetAnimals: target animals (dog, cat, bird, other or a combination)"
    )


async def generate_product_info(
    client: OpenAIClient,
    product_name: str,
    category: str | None = None,
    brand: str | None = None,
) -> ProductSuggestion:
    """Draft catalog fields for a product. Falls back instead of raising."""
    name = sanitize_string(product_name)

    if not client.configured:
        logger.info("AI backend not configured, using fallback product info")
        return fallback_product_info(name, category, brand)

    prompt = _product_prompt(name, category, brand)

    try:
        if client.assistant_configured:
            raw = await client.run_assistant(f"{PRODUCT_SYSTEM_PROMPT}\n\n{prompt}")
        else:
            raw = await client.chat(
                [{"role": "user", "content": prompt}],
                system=PRODUCT_SYSTEM_PROMPT,
                response_format=PRODUCT_RESPONSE_FORMAT,
            )
    except RemoteServiceError as exc:
        logger.warning("Product info generation failed for %r: %s", name, exc.detail)
        return fallback_product_info(name, category, brand)

    parsed = extract_json_object(raw)
    if parsed is None:
        logger.warning("Product info for %r was not JSON, using fallback", name)
        return fallback_product_info(name, category, brand)

    return validate_product_info(parsed, name, category, brand)


def fallback_campaign_message(pet_name: str, discount_percent: int, days_inactive: int) -> str:
    return (
        f"Hi! We miss {pet_name} here 🐾 It has been {days_inactive} days since "
        f"the last visit. Book a bath or grooming this week and get "
        f"{discount_percent}% off!"
    )


async def generate_campaign_message(
    client: OpenAIClient,
    pet_name: str,
    discount_percent: int,
    days_inactive: int,
) -> dict:
    pet_name = sanitize_string(pet_name) or "your pet"
    fallback = {
        "message": fallback_campaign_message(pet_name, discount_percent, days_inactive),
        "ai_generated": False,
    }

    if not client.configured:
        return fallback

    prompt = (
        f'Write a WhatsApp message to win back a client whose pet is called "{pet_name}", '
        f"who has not visited for {days_inactive} days, offering {discount_percent}% "
        "off the next bath or grooming."
    )

    try:
        text = await client.chat([{"role": "user", "content": prompt}], system=MESSAGE_SYSTEM_PROMPT)
    except RemoteServiceError as exc:
        logger.warning("Campaign message generation failed: %s", exc.detail)
        return fallback

    message = sanitize_string(text, MAX_MESSAGE_LENGTH, keep_newlines=True)
    if not message:
        logger.warning("AI returned an empty campaign message, using fallback")
        return fallback

    return {"message": message, "ai_generated": True}
