from __future__ import annotations

import re
from urllib.parse import quote

WHATSAPP_BASE_URL = "https://wa.me"


def normalize_phone(phone: str) -> str:
    """Reduce a free-text phone number to the digits WhatsApp expects."""
    digits = re.sub(r"\D", "", phone or "")
    if digits.startswith("00"):
        digits = digits[2:]
    return digits


def whatsapp_link(phone: str, message: str | None = None) -> str | None:
    digits = normalize_phone(phone)
    if not digits:
        return None
    if message:
        return f"{WHATSAPP_BASE_URL}/{digits}?text={quote(message)}"
    return f"{WHATSAPP_BASE_URL}/{digits}"
