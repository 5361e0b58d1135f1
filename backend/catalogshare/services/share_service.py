# Overview: WhatsApp share links for catalogues.

"""
Sharing bumps the catalogue's share_count (and the merchant's shared stats)
before the link is built. A merchant without a WhatsApp number still gets
the count incremented and then a ShareError.
"""
from __future__ import annotations

from urllib.parse import quote

from ..storage import MemStorage

WHATSAPP_BASE_URL = "https://wa.me"


class ShareError(Exception):
    """Raised when a share link cannot be built."""
    pass


def build_catalogue_url(base_url: str, catalogue_id: int) -> str:
    return f"{base_url.rstrip('/')}/catalogue/{catalogue_id}"


def build_whatsapp_url(number: str, message: str, catalogue_url: str) -> str:
    # encodeURIComponent semantics: only unreserved marks stay literal
    text = quote(f"{message} {catalogue_url}", safe="-_.!~*'()")
    return f"{WHATSAPP_BASE_URL}/{number}?text={text}"


def default_share_message(catalogue_name: str) -> str:
    return f"Check out my {catalogue_name} catalogue!"


def share_catalogue(
    storage: MemStorage,
    catalogue_id: int,
    *,
    base_url: str,
    message: str | None = None,
) -> dict | None:
    """
    Record a share and build the WhatsApp link.

    Returns None if the catalogue does not exist.
    """
    catalogue = storage.increment_catalogue_share_count(catalogue_id)
    if catalogue is None:
        return None

    user = storage.get_user(catalogue.user_id)
    if user is None or not user.whatsapp_number:
        raise ShareError("WhatsApp number not configured")

    catalogue_url = build_catalogue_url(base_url, catalogue.id)
    return {
        "whatsapp_url": build_whatsapp_url(
            user.whatsapp_number,
            message or default_share_message(catalogue.name),
            catalogue_url,
        ),
        "catalogue_url": catalogue_url,
        "share_count": catalogue.share_count,
    }
