"""Translation between application keys and S3 object keys."""

from typing import Optional

from ..driver.keys import join_keys, normalize_base_key, normalize_key


class ObjectKeyMapper:
    """Places application keys under an optional namespace prefix.

    The resolved prefix always ends with a separator, so stripping it from an
    object key gives back the exact application key that produced it.
    """

    def __init__(self, prefix: Optional[str] = None):
        normalized = normalize_key(prefix)
        self.resolved_prefix = f"{normalized}/" if normalized else ""

    def to_object_key(self, key: Optional[str]) -> str:
        normalized = normalize_key(key)
        if not normalized:
            return self.resolved_prefix
        return join_keys(self.resolved_prefix, normalized)

    def from_object_key(self, object_key: Optional[str]) -> str:
        if not self.resolved_prefix:
            return object_key or ""
        if not object_key:
            return ""
        if object_key.startswith(self.resolved_prefix):
            return object_key[len(self.resolved_prefix) :]
        # Not under this namespace; listing with our prefix should never return it.
        return object_key

    def to_list_prefix(self, base: Optional[str]) -> str:
        """Storage-side prefix filter for every key under *base*."""
        return self.resolved_prefix + normalize_base_key(base)
