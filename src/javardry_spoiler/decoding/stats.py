"""Decoder for character stats (``Abi`` keys)."""

from __future__ import annotations

from javardry_spoiler.core.constants import FIELD_DELIMITER, PREFIX_STAT, STAT_FIELD_COUNT
from javardry_spoiler.decoding.fields import I32, parse_bool, parse_int, split_fields
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.decoding.sequence import decode_sequence
from javardry_spoiler.models.entities import Stat


def decode_stat(entity_id: int, raw: str) -> Stat:
    """Decode one stat text.

    Fields 5 and 6 hold the stat maximum and are not decoded.

    Args:
        entity_id: Position in the stat sequence.
        raw: ``<>``-delimited stat text.

    Returns:
        The decoded stat.

    Raises:
        FieldError: If the text is malformed.
    """
    f = split_fields(raw, FIELD_DELIMITER, what="stat", expected=STAT_FIELD_COUNT)
    return Stat(
        id=entity_id,
        name=f[0],
        name_abbr=f[1],
        sex_bonus=(parse_int(f[2], I32, index=2), parse_int(f[3], I32, index=3)),
        fixed_on_create=parse_bool(f[4], index=4),
        hidden=parse_bool(f[7], index=7),
    )


def stats_from_kvs(kvs: KeyValueStore) -> tuple[Stat, ...]:
    """Decode the stat sequence.

    Raises:
        EntityDecodeError: If any stat fails to decode.
    """
    return decode_sequence(kvs, PREFIX_STAT, "stat", decode_stat)


__all__ = ["decode_stat", "stats_from_kvs"]
