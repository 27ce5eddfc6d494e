"""Decoder for spell realms (``SpellKind`` keys).

A realm text is the realm name followed by one part per spell level,
separated by ``<-->``. A level part holds zero or more ``<++>``-separated
spell texts, each with the usual ``<>``-delimited fields:

    Mage<-->Halito<>...<++>Katino<>...<-->Dilto<>...<-->
"""

from __future__ import annotations

from javardry_spoiler.core.constants import (
    FIELD_DELIMITER,
    KEY_LAST_REALM_MONSTER_ONLY,
    KEY_SPELL_LEVEL_COUNT,
    PREFIX_SPELL_REALM,
    SPELL_DELIMITER,
    SPELL_FIELD_COUNT,
    SPELL_LEVEL_DELIMITER,
)
from javardry_spoiler.core.exceptions import BadGlobalKeyError, EntityDecodeError, FieldError
from javardry_spoiler.core.logging import get_logger
from javardry_spoiler.decoding.fields import U32, parse_bool, parse_int, split_fields
from javardry_spoiler.decoding.kvs import ASCII_WHITESPACE, KeyValueStore
from javardry_spoiler.models.entities import Spell, SpellRealm


logger = get_logger(__name__)


def decode_spell(raw: str) -> Spell:
    """Decode one spell text.

    Args:
        raw: ``<>``-delimited spell text.

    Returns:
        The decoded spell.

    Raises:
        FieldError: If the text is malformed.
    """
    f = split_fields(raw, FIELD_DELIMITER, what="spell", expected=SPELL_FIELD_COUNT)
    return Spell(
        name=f[0],
        description=f[2],
        extra_learn=parse_bool(f[5], index=5),
        mp_cost=parse_int(f[6], U32, index=6),
        ignore_silence=parse_bool(f[7], index=7),
    )


def _decode_level(raw: str) -> tuple[Spell, ...]:
    text = raw.strip(ASCII_WHITESPACE)
    if not text:
        return ()
    return tuple(decode_spell(part) for part in text.split(SPELL_DELIMITER))


def decode_spell_realm(
    entity_id: int,
    raw: str,
    *,
    level_count: int,
    monster_only: bool = False,
) -> SpellRealm:
    """Decode one spell realm text.

    Args:
        entity_id: Position in the realm sequence.
        raw: Realm text.
        level_count: Number of spell levels every realm has.
        monster_only: Whether only monsters cast this realm's spells.

    Returns:
        The decoded realm.

    Raises:
        FieldError: If the level count does not match or a spell is malformed.
    """
    parts = split_fields(
        raw, SPELL_LEVEL_DELIMITER, what="spell realm", expected=level_count + 1
    )
    return SpellRealm(
        id=entity_id,
        name=parts[0],
        level_count=level_count,
        spells_by_level=tuple(_decode_level(part) for part in parts[1:]),
        monster_only=monster_only,
    )


def spell_realms_from_kvs(kvs: KeyValueStore) -> tuple[SpellRealm, ...]:
    """Decode the spell realm sequence.

    ``SpellLvNum`` and ``ExclusiveUseOfMonsters`` are only read when at
    least one realm exists. When the latter is true, the last realm of the
    sequence is reserved for monsters.

    Args:
        kvs: Parsed key/value store.

    Returns:
        Decoded realms in id order.

    Raises:
        MissingKeyError: If a realm exists but a global spell key is absent.
        BadGlobalKeyError: If a global spell key is malformed.
        EntityDecodeError: If any realm is malformed.
    """
    texts = list(kvs.iter_seq(PREFIX_SPELL_REALM))
    if not texts:
        logger.debug("Decoded entity sequence", entity="spell realm", count=0)
        return ()

    level_count_raw = kvs.require(KEY_SPELL_LEVEL_COUNT)
    last_monster_only_raw = kvs.require(KEY_LAST_REALM_MONSTER_ONLY)
    try:
        level_count = parse_int(level_count_raw, U32)
    except FieldError as e:
        raise BadGlobalKeyError(KEY_SPELL_LEVEL_COUNT, e) from e
    try:
        last_monster_only = parse_bool(last_monster_only_raw)
    except FieldError as e:
        raise BadGlobalKeyError(KEY_LAST_REALM_MONSTER_ONLY, e) from e

    realms: list[SpellRealm] = []
    last_id = len(texts) - 1
    for entity_id, raw in enumerate(texts):
        try:
            realms.append(
                decode_spell_realm(
                    entity_id,
                    raw,
                    level_count=level_count,
                    monster_only=last_monster_only and entity_id == last_id,
                )
            )
        except FieldError as e:
            raise EntityDecodeError("spell realm", entity_id, e) from e

    logger.debug("Decoded entity sequence", entity="spell realm", count=len(realms))
    return tuple(realms)


__all__ = ["decode_spell", "decode_spell_realm", "spell_realms_from_kvs"]
