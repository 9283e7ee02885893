"""Liens WhatsApp (wa.me), aucun appel externe."""
from typing import Optional
from urllib.parse import quote
import re

from app.core.errors import ValidationError

WA_BASE_URL = "https://wa.me"

_NOT_PHONE = re.compile(r"[^\d+]")


def normalize_phone(phone_number: str) -> str:
    """Garde uniquement les chiffres et le +"""
    return _NOT_PHONE.sub("", phone_number or "")


def generate_whatsapp_link(phone_number: str, message: Optional[str] = None) -> str:
    phone = normalize_phone(phone_number)
    digits = phone.lstrip("+")
    if not digits.isdigit():
        raise ValidationError("Invalid phone number")

    link = f"{WA_BASE_URL}/{digits}"
    if message:
        link += f"?text={quote(message)}"
    return link


def agent_link(phone_number: str, listing_title: str) -> str:
    """Lien acheteur -> agent à propos d'une annonce"""
    return generate_whatsapp_link(
        phone_number, f"Hi, I'm interested in your property: {listing_title}"
    )


def buyer_link(phone_number: str, application_id: str) -> str:
    """Lien agent -> acheteur à propos d'une candidature"""
    return generate_whatsapp_link(phone_number, f"Hi, regarding application {application_id}")
