"""Key normalization helpers shared by storage drivers."""

import re
from typing import Optional

SEPARATOR = "/"

_ALT_SEPARATORS = re.compile(r"[\\:]")
_REPEATED_SEPARATORS = re.compile(r"/{2,}")


def normalize_key(key: Optional[str]) -> str:
    """Return the canonical form of *key*.

    Backslashes and colons are treated as separators, runs of separators are
    collapsed and leading/trailing separators are trimmed. Empty or ``None``
    keys normalize to ``""``.
    """
    if not key:
        return ""
    value = _ALT_SEPARATORS.sub(SEPARATOR, key)
    value = _REPEATED_SEPARATORS.sub(SEPARATOR, value)
    return value.strip(SEPARATOR)


def join_keys(*keys: Optional[str]) -> str:
    """Join key fragments with a single separator and normalize the result."""
    return normalize_key(SEPARATOR.join(k for k in keys if k))


def normalize_base_key(base: Optional[str]) -> str:
    """Normalize a base key used as a namespace boundary (trailing separator)."""
    value = normalize_key(base)
    return f"{value}{SEPARATOR}" if value else ""
