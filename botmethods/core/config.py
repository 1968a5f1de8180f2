"""Library configuration — environment variables and derived constants.

Loads ``BOT_TOKEN``, ``BOTMETHODS_API_URL``, ``BOTMETHODS_TIMEOUT`` and
``BOTMETHODS_LOG_LEVEL`` from the environment via ``python-dotenv``.  All
values are resolved at import time so other modules can
``from botmethods.core.config import …`` without repeated lookups.

The token is only a default for :meth:`botmethods.client.BotApiClient.from_env`;
clients always receive their credential explicitly.
"""

# ── stdlib ───────────────────────────────────────────────────────────────────
import logging
import os
from urllib.parse import urlparse

# ── third-party ──────────────────────────────────────────────────────────────
from dotenv import load_dotenv

# ── core ─────────────────────────────────────────────────────────────────────
from botmethods.core.logger import BotMethodsLogger

# ── Environment bootstrap ────────────────────────────────────────────────────
load_dotenv()

DEFAULT_URL_TEMPLATE: str = "https://api.telegram.org/bot<token>/<method>"
DEFAULT_TIMEOUT: float = 10.0


# ── Helper functions ─────────────────────────────────────────────────────────


def is_valid_url_template(template: str | None) -> bool:
    """Return ``True`` if *template* holds exactly one ``<token>`` and one ``<method>``.

    The template must also parse as an absolute http(s) URL once both
    placeholders are filled with dummy values.
    """
    if not template:
        return False
    if template.count("<token>") != 1 or template.count("<method>") != 1:
        return False
    probe = template.replace("<token>", "123456:ABC-DEF").replace("<method>", "getMe")
    parsed = urlparse(probe)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _parse_timeout(raw: str | None) -> float:
    """Parse a positive number of seconds, falling back to the default."""
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


def _parse_log_level(raw: str | None) -> int:
    """Map a level name such as ``"DEBUG"`` to its numeric value."""
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _resolve_url_template(raw: str | None) -> str:
    """Use the configured template when it is well-formed."""
    if raw and is_valid_url_template(raw):
        return raw
    return DEFAULT_URL_TEMPLATE


# ── Public constants ─────────────────────────────────────────────────────────

BOT_TOKEN: str | None = os.environ.get("BOT_TOKEN")
API_URL_TEMPLATE: str = _resolve_url_template(os.environ.get("BOTMETHODS_API_URL"))
REQUEST_TIMEOUT: float = _parse_timeout(os.environ.get("BOTMETHODS_TIMEOUT"))
LOG_LEVEL: int = _parse_log_level(os.environ.get("BOTMETHODS_LOG_LEVEL"))


# ── Startup diagnostics ─────────────────────────────────────────────────────

logger = BotMethodsLogger.get_logger(LOG_LEVEL)

if BOT_TOKEN:
    logger.debug("Config loaded — BOT_TOKEN is set")
else:
    logger.debug("Config loaded — BOT_TOKEN is NOT set")

if os.environ.get("BOTMETHODS_API_URL") and API_URL_TEMPLATE == DEFAULT_URL_TEMPLATE:
    logger.warning(
        "Ignoring malformed BOTMETHODS_API_URL",
        extra={"api_url": os.environ.get("BOTMETHODS_API_URL")},
    )

logger.debug("Request timeout resolved", extra={"timeout": REQUEST_TIMEOUT})
