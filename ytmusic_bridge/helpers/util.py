"""Small shared utilities."""

from __future__ import annotations

import logging
import re
import secrets
import string
from typing import TYPE_CHECKING

from ytmusic_bridge.constants import VERBOSE_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Iterable

MULTIPLIERS = {"K": 1_000, "M": 1_000_000, "B": 1_000_000_000}
NONCE_ALPHABET = string.ascii_letters + string.digits + "-_"


def log_verbose(logger: logging.Logger, message: str, *args: object) -> None:
    """Log a message at VERBOSE level when that level is enabled."""
    if logger.isEnabledFor(VERBOSE_LOG_LEVEL):
        logger.log(VERBOSE_LOG_LEVEL, message, *args)


def parse_count(text: str | None) -> int | None:
    """Parse a human readable count like '1.2M subscribers' or '15 songs'."""
    if not text:
        return None
    match = re.search(r"([\d.,]+)\s*([KMB])?", text.replace("\u00a0", " "))
    if not match:
        return None
    number = match.group(1).replace(",", "")
    try:
        value = float(number)
    except ValueError:
        return None
    if suffix := match.group(2):
        value *= MULTIPLIERS[suffix]
    return int(value)


def parse_duration(text: str | None) -> int | None:
    """Parse 'h:mm:ss' / 'm:ss' into milliseconds."""
    if not text or ":" not in text:
        return None
    seconds = 0
    for part in text.strip().split(":"):
        if not part.isdigit():
            return None
        seconds = seconds * 60 + int(part)
    return seconds * 1000


def parse_long_duration(text: str | None) -> int | None:
    """Parse '1 hour, 5 minutes' / '38 minutes' / '2+ hours' into milliseconds."""
    if not text:
        return None
    seconds = 0
    units = {"hour": 3600, "minute": 60, "second": 1}
    for amount, unit in re.findall(r"(\d+)\+?\s*(hour|minute|second)", text):
        seconds += int(amount) * units[unit]
    return seconds * 1000 if seconds else None


def parse_year(texts: Iterable[str]) -> int | None:
    """Return the first four digit year found in the given texts."""
    for text in texts:
        if re.fullmatch(r"\d{4}", text.strip()):
            return int(text.strip())
    return None


def playback_nonce(length: int = 16) -> str:
    """Return a random client playback nonce."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))
