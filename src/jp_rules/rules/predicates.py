"""
Stateless field-validation predicates.

Each rule takes the candidate field value (plus rule parameters) and returns
True when the value is accepted. Only the length rules depend on an encoding:
byte values are decoded with it before logical characters are counted.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from jp_rules.config.settings import DEFAULT_ENCODING
from jp_rules.errors import RuleConfigurationError

Hasher = Callable[[str], str]

# Full-width katakana, the long-vowel mark, and the (combining and spacing) voicing marks
KATAKANA_PATTERN = re.compile(r"[\u30a1-\u30f6\u30fc\u3099-\u309c]*")
# Half-width whitespace and the ideographic (full-width) space
SPACE_ONLY_PATTERN = re.compile(r"[\s\u3000]+")
ALPHA_NUMERIC_PATTERN = re.compile(r"[0-9a-zA-Z]*")


def _as_text(value: Any, encoding: str = DEFAULT_ENCODING) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode(encoding, errors="replace")
    return str(value)


def char_length(value: Any, encoding: str = DEFAULT_ENCODING) -> int:
    """Number of logical characters in ``value`` (not bytes)."""
    return len(_as_text(value, encoding))


def max_length(value: Any, limit: int, encoding: str = DEFAULT_ENCODING) -> bool:
    """Accept when the value has at most ``limit`` characters."""
    return char_length(value, encoding) <= limit


def min_length(value: Any, limit: int, encoding: str = DEFAULT_ENCODING) -> bool:
    """Accept when the value has at least ``limit`` characters."""
    return char_length(value, encoding) >= limit


def fields_equal(
    value: Any,
    other: Any,
    hashed: bool = False,
    hasher: Optional[Hasher] = None,
) -> bool:
    """
    Accept when ``value`` equals ``other`` with the same type (no 1 == True == 1.0).

    With ``hashed`` set, ``other`` is first run through ``hasher``: ``value`` is
    expected to be an already-hashed secret (e.g. a stored password) and
    ``other`` its plain-text confirmation, hashed as text (None as "").
    """
    if hashed:
        if hasher is None:
            raise RuleConfigurationError("fields_equal(hashed=True) requires a hasher")
        other = hasher(_as_text(other))
    return type(value) is type(other) and value == other


def katakana_only(value: Any) -> bool:
    """Accept when every character is full-width katakana. Empty is accepted."""
    return KATAKANA_PATTERN.fullmatch(_as_text(value)) is not None


def not_space_only(value: Any) -> bool:
    """Reject values that are empty or made only of half/full-width spaces."""
    text = _as_text(value)
    return bool(text) and SPACE_ONLY_PATTERN.fullmatch(text) is None


def alpha_numeric_ascii(value: Any) -> bool:
    """Accept when every character is 0-9, a-z or A-Z. Empty is accepted."""
    return ALPHA_NUMERIC_PATTERN.fullmatch(_as_text(value)) is not None
