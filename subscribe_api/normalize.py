"""
Private key normalization.

Service-account keys usually reach us through a single environment value, and
deployment platforms mangle them in a few predictable ways:
- newlines flattened into the two-character sequence backslash-n
- the whole value wrapped in double quotes
- header/footer lines dropped

normalize_private_key() repairs those cases and leaves anything that already
looks like a PEM key alone.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .errors import ConfigurationError
from .rules import PEM_FOOTER, PEM_HEADER

logger = logging.getLogger(__name__)

ESCAPED_NEWLINE = "\\n"


def describe_private_key(key: str) -> Dict[str, Any]:
    """Shape summary of a key, safe to log (never includes key material)."""
    return {
        "has_header": PEM_HEADER in key,
        "has_footer": PEM_FOOTER in key,
        "has_newlines": "\n" in key,
        "length": len(key),
    }


def _strip_wrapping_quotes(key: str) -> str:
    # each side independently, at most one character
    if key.startswith('"'):
        key = key[1:]
    if key.endswith('"'):
        key = key[:-1]
    return key


def normalize_private_key(raw: Optional[str], name: str = "GOOGLE_PRIVATE_KEY") -> str:
    """
    Return `raw` as a PEM string an auth library will accept.

    Rules, in order:
    - Both markers present anywhere: trusted, returned unchanged.
    - One leading and one trailing double quote are stripped.
    - If there is no real newline, every literal backslash-n becomes one.
      A key mixing real newlines and literal sequences keeps the literals.
    - Missing header is prepended, missing footer appended.
    """
    if not raw:
        raise ConfigurationError(f"{name} is not defined")

    if PEM_HEADER in raw and PEM_FOOTER in raw:
        return raw

    key = _strip_wrapping_quotes(raw)

    if "\n" not in key:
        key = key.replace(ESCAPED_NEWLINE, "\n")

    if not key.startswith(PEM_HEADER):
        key = PEM_HEADER + "\n" + key
    if not key.endswith(PEM_FOOTER):
        key = key + "\n" + PEM_FOOTER

    logger.debug("Private key processing: %s", describe_private_key(key))
    return key
