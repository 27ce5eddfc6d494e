"""Scenario aggregation: from file contents to a decoded Scenario.

Example:
    >>> from pathlib import Path
    >>> plaintext, scenario = open_scenario(Path("scenario.dat").read_bytes())
    >>> len(scenario.monsters)
    250
"""

from __future__ import annotations

from javardry_spoiler.core.constants import KEY_EDITOR_VERSION, KEY_SCENARIO_ID, KEY_SCENARIO_TITLE
from javardry_spoiler.core.logging import get_logger
from javardry_spoiler.crypto.cipher import decrypt
from javardry_spoiler.decoding.classes import classes_from_kvs
from javardry_spoiler.decoding.items import items_from_kvs
from javardry_spoiler.decoding.kvs import parse_kvs
from javardry_spoiler.decoding.monsters import monsters_from_kvs
from javardry_spoiler.decoding.races import races_from_kvs
from javardry_spoiler.decoding.spells import spell_realms_from_kvs
from javardry_spoiler.decoding.stats import stats_from_kvs
from javardry_spoiler.models.scenario import Scenario


logger = get_logger(__name__)


def load_plaintext(plaintext: str) -> Scenario:
    """Decode a scenario from its decrypted text.

    Args:
        plaintext: Decrypted scenario text.

    Returns:
        The fully decoded scenario.

    Raises:
        GrammarError: If a line is not a ``KEY = "VALUE"`` assignment.
        MissingKeyError: If ``Version``, ``ReadKeyword`` or ``GameTitle`` is absent.
        EntityDecodeError: If any entity fails to decode.
    """
    kvs = parse_kvs(plaintext)

    scenario = Scenario(
        editor_version=kvs.require(KEY_EDITOR_VERSION),
        id=kvs.require(KEY_SCENARIO_ID),
        title=kvs.require(KEY_SCENARIO_TITLE),
        stats=stats_from_kvs(kvs),
        races=races_from_kvs(kvs),
        classes=classes_from_kvs(kvs),
        spell_realms=spell_realms_from_kvs(kvs),
        items=items_from_kvs(kvs),
        monsters=monsters_from_kvs(kvs),
    )

    logger.info(
        "Scenario loaded",
        title=scenario.title,
        stats=len(scenario.stats),
        races=len(scenario.races),
        classes=len(scenario.classes),
        spell_realms=len(scenario.spell_realms),
        items=len(scenario.items),
        monsters=len(scenario.monsters),
        duplicates=len(kvs.duplicates),
    )
    return scenario


def load_ciphertext(ciphertext: bytes) -> Scenario:
    """Decrypt and decode a scenario file.

    Raises:
        CryptoError: If the file cannot be decrypted.
        SpoilerError: Any error raised by ``load_plaintext``.
    """
    return load_plaintext(decrypt(ciphertext))


def open_scenario(data: bytes) -> tuple[str, Scenario]:
    """Decode a scenario file that may or may not be encrypted.

    Data that is valid UTF-8 is treated as already decrypted; anything else
    is decrypted first.

    Args:
        data: Raw file contents.

    Returns:
        Tuple of (plaintext, scenario).

    Raises:
        SpoilerError: If the file cannot be decrypted or decoded.
    """
    try:
        plaintext = data.decode("utf-8")
    except UnicodeDecodeError:
        plaintext = decrypt(data)
    else:
        logger.debug("Input is plaintext, skipping decryption", size=len(data))

    return plaintext, load_plaintext(plaintext)


__all__ = [
    "load_ciphertext",
    "load_plaintext",
    "open_scenario",
]
