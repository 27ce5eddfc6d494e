"""Javardry scenario spoiler.

Decrypts and decodes scenario files of the Javardry dungeon RPG editor
into typed, immutable records, and renders them as spoiler reports.

Example:
    >>> from pathlib import Path
    >>> from javardry_spoiler import load_ciphertext
    >>> scenario = load_ciphertext(Path("gameData.dat").read_bytes())
    >>> scenario.title
    'Proving Grounds'
"""

from __future__ import annotations


__version__ = "0.1.0"

from javardry_spoiler.core.exceptions import SpoilerError  # noqa: E402
from javardry_spoiler.crypto.cipher import decrypt  # noqa: E402
from javardry_spoiler.decoding.kvs import KeyValueStore, parse_kvs  # noqa: E402
from javardry_spoiler.decoding.loader import (  # noqa: E402
    load_ciphertext,
    load_plaintext,
    open_scenario,
)
from javardry_spoiler.models.scenario import Scenario  # noqa: E402


__all__ = [
    "__version__",
    "KeyValueStore",
    "Scenario",
    "SpoilerError",
    "decrypt",
    "load_ciphertext",
    "load_plaintext",
    "open_scenario",
    "parse_kvs",
]
