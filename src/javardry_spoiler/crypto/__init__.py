"""Decryption of raw scenario files."""

from __future__ import annotations

from javardry_spoiler.crypto.cipher import decrypt, make_key


__all__ = [
    "decrypt",
    "make_key",
]
