"""Decoder for playable races (``Race`` keys)."""

from __future__ import annotations

from javardry_spoiler.core.constants import FIELD_DELIMITER, PREFIX_RACE, RACE_FIELD_COUNT
from javardry_spoiler.decoding.fields import (
    I32,
    U32,
    parse_digit_flags,
    parse_int,
    parse_int_list,
    split_fields,
)
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.decoding.sequence import decode_sequence
from javardry_spoiler.models.entities import Race
from javardry_spoiler.models.flags import ResistFlag


def decode_race(entity_id: int, raw: str) -> Race:
    """Decode one race text.

    Fields 7 and 8 (level-up modifiers) and 12 (breath attack) are not
    decoded.

    Args:
        entity_id: Position in the race sequence.
        raw: ``<>``-delimited race text.

    Returns:
        The decoded race.

    Raises:
        FieldError: If the text is malformed.
    """
    f = split_fields(raw, FIELD_DELIMITER, what="race", expected=RACE_FIELD_COUNT)
    return Race(
        id=entity_id,
        name=f[0],
        name_abbr=f[1],
        stats=parse_int_list(f[2], U32, index=2),
        lifetime=parse_int(f[3], U32, index=3),
        ac=parse_int(f[4], I32, index=4),
        healing=parse_int(f[5], I32, index=5),
        spell_cancel=parse_int(f[6], I32, index=6),
        resist=parse_digit_flags(f[9], ResistFlag, base=16, what="resist", index=9),
        appear_condition=f[10],
        description=f[11],
        inventory_bonus=parse_int(f[13], I32, index=13),
    )


def races_from_kvs(kvs: KeyValueStore) -> tuple[Race, ...]:
    """Decode the race sequence.

    Raises:
        EntityDecodeError: If any race fails to decode.
    """
    return decode_sequence(kvs, PREFIX_RACE, "race", decode_race)


__all__ = ["decode_race", "races_from_kvs"]
