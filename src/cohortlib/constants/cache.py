"""Cache key derivation constants."""

from __future__ import annotations

CACHE_KEY_SEPARATOR: str = ":"
CACHE_KEY_HASH: str = "sha256"
