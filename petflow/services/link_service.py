import re
from urllib.parse import quote

from petflow.core.config import settings


def tracking_url(token: str) -> str:
    base = settings.FRONTEND_URL.rstrip("/")
    return f"{base}/track/{token}"


def whatsapp_url(phone: str | None, message: str | None = None) -> str | None:
    """Build a wa.me link for a phone number. Nothing is sent."""
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return None

    country = settings.WHATSAPP_COUNTRY_CODE
    if country and not digits.startswith(country):
        digits = f"{country}{digits}"

    url = f"https://wa.me/{digits}"
    if message:
        url = f"{url}?text={quote(message)}"
    return url
