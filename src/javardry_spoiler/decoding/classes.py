"""Decoder for playable classes (``Class`` keys)."""

from __future__ import annotations

from javardry_spoiler.core.constants import CLASS_FIELD_COUNT, FIELD_DELIMITER, PREFIX_CLASS
from javardry_spoiler.decoding.fields import (
    I32,
    U32,
    parse_bool,
    parse_coded_flag,
    parse_digit_flags,
    parse_int,
    parse_int_list,
    parse_triple,
    split_fields,
)
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.decoding.sequence import decode_sequence
from javardry_spoiler.models.entities import CharacterClass
from javardry_spoiler.models.flags import AlignmentFlag, DebuffFlag, MonsterKindFlag, SexFlag


# Classes can only knock out or behead with bare hands.
CLASS_DEBUFF_CODES: dict[int, DebuffFlag] = {
    0: DebuffFlag(0),
    1: DebuffFlag.KNOCKOUT,
    2: DebuffFlag.CRITICAL,
}


def decode_class(entity_id: int, raw: str) -> CharacterClass:
    """Decode one class text.

    Fields 14 (spell learning) and 19 (generic modifiers) are not decoded.

    Args:
        entity_id: Position in the class sequence.
        raw: ``<>``-delimited class text.

    Returns:
        The decoded class.

    Raises:
        FieldError: If the text is malformed.
    """
    f = split_fields(raw, FIELD_DELIMITER, what="class", expected=CLASS_FIELD_COUNT)
    dispel_level = parse_int(f[12], U32, index=12)
    return CharacterClass(
        id=entity_id,
        name=f[0],
        name_abbr=f[1],
        sexes=parse_digit_flags(f[2], SexFlag, base=10, what="sex", index=2),
        alignments=parse_digit_flags(f[3], AlignmentFlag, base=10, what="alignment", index=3),
        stats=parse_int_list(f[4], U32, index=4),
        ac_expr=f[5],
        hit_expr=f[6],
        attack_count_expr=f[7],
        barehand_damage_expr=parse_triple(f[8], what="barehand damage", index=8),
        attack_debuff=parse_coded_flag(
            f[9], CLASS_DEBUFF_CODES, what="class attack debuff", index=9
        ),
        thief_skill=parse_int(f[10], I32, index=10),
        can_identify=parse_bool(f[11], index=11),
        dispel_level=dispel_level or None,
        dispel_kinds=parse_digit_flags(f[13], MonsterKindFlag, base=16, what="monster kind", index=13),
        hp_expr=f[15],
        xp_expr=f[16],
        description=f[17],
        inventory_bonus=parse_int(f[18], I32, index=18),
        appear_condition=f[20],
    )


def classes_from_kvs(kvs: KeyValueStore) -> tuple[CharacterClass, ...]:
    """Decode the class sequence.

    Raises:
        EntityDecodeError: If any class fails to decode.
    """
    return decode_sequence(kvs, PREFIX_CLASS, "class", decode_class)


__all__ = ["CLASS_DEBUFF_CODES", "classes_from_kvs", "decode_class"]
