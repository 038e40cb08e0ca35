"""
pagegrade/services/validation.py
Input checks that run before any battery. Each failure raises
InputValidationError with a user-facing message.
"""
import ipaddress
import logging
from typing import Optional
from urllib.parse import urlparse

from ..config import Settings, get_settings
from ..utils.exceptions import InputValidationError
from .text_utils import split_words

logger = logging.getLogger(__name__)

# ── SSRF guard ─────────────────────────────────────────────────────────────────
_BLOCKED_NETS = [
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]

_URL_MESSAGES = {
    "default": (
        "Please enter a website URL to analyze.",
        "Please enter a valid URL (e.g., https://example.com)",
    ),
    "static_site": (
        "Please enter your static website URL.",
        "Please enter a valid URL (e.g., https://yoursite.netlify.app)",
    ),
}


def _ssrf_safe(hostname: str) -> bool:
    """Only literal addresses and localhost are judged; names are not resolved."""
    host = hostname.lower().rstrip(".")
    if host == "localhost" or host.endswith(".localhost"):
        return False
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return True
    return not any(ip in n for n in _BLOCKED_NETS)


def validate_url(url: Optional[str], battery: str = "default") -> str:
    """Return the trimmed URL or raise InputValidationError."""
    empty_message, invalid_message = _URL_MESSAGES.get(battery, _URL_MESSAGES["default"])
    url = (url or "").strip()
    if not url:
        raise InputValidationError(empty_message, field="url")

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        parsed, hostname = None, None
    if parsed is None or parsed.scheme not in ("http", "https") or not hostname:
        logger.info("Rejected malformed URL %r", url)
        raise InputValidationError(invalid_message, field="url")

    if not _ssrf_safe(hostname):
        logger.warning("Blocked URL %s (private or loopback host)", url)
        raise InputValidationError("URL blocked by SSRF protection.", field="url")
    return url


def validate_text(text: Optional[str], settings: Optional[Settings] = None) -> str:
    """Content battery input: non-empty and at least `min_text_words` words."""
    settings = settings or get_settings()
    text = (text or "").strip()
    if not text:
        raise InputValidationError("Please enter some content to analyze.", field="text")
    if len(split_words(text)) < settings.min_text_words:
        raise InputValidationError(
            f"Please enter at least {settings.min_text_words} words for meaningful analysis.",
            field="text",
        )
    return text


def validate_humanize_input(text: Optional[str], settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    text = (text or "").strip()
    if not text:
        raise InputValidationError("Please enter some text to humanize.", field="text")
    if len(text) < settings.min_humanize_chars:
        raise InputValidationError(
            f"Please enter at least {settings.min_humanize_chars} characters for meaningful humanization.",
            field="text",
        )
    return text
