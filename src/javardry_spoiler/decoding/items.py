"""Decoder for items (``Item`` keys).

Besides the shared converters, items use three field shapes of their own:

- equip masks: ``"class[0]<+>class[5],race[1]"``, with ``-`` for "nobody"
  and an empty field for no restriction data at all;
- curse masks: ``"02,1"``, alignment digits then sex digits, same sentinels;
- broken-item references: ``"item[12]"`` or ``"-1"``.
"""

from __future__ import annotations

import re

from javardry_spoiler.core.constants import (
    FIELD_DELIMITER,
    ITEM_FIELD_COUNT,
    LIST_DELIMITER,
    MASK_TOKEN_DELIMITER,
    MAX_EQUIP_INDEX,
    NO_ITEM,
    NO_RESTRICTION,
    PREFIX_ITEM,
)
from javardry_spoiler.core.exceptions import BadMaskTokenError, BadReferenceError
from javardry_spoiler.decoding.fields import (
    I32,
    U32,
    U64,
    parse_bool,
    parse_coded_flag,
    parse_digit_flags,
    parse_enum,
    parse_int,
    parse_int_list,
    parse_triple,
    split_fields,
)
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.decoding.sequence import decode_sequence
from javardry_spoiler.models.entities import Item
from javardry_spoiler.models.enums import ItemKind
from javardry_spoiler.models.flags import (
    AlignmentFlag,
    DebuffFlag,
    MonsterKindFlag,
    ResistFlag,
    SexFlag,
)


CLASS_TOKEN_PATTERN = re.compile(r"class\[([0-9]+)\]")
RACE_TOKEN_PATTERN = re.compile(r"race\[([0-9]+)\]")
ITEM_REFERENCE_PATTERN = re.compile(r"item\[([0-9]+)\]")

ITEM_DEBUFF_CODES: dict[int, DebuffFlag] = {
    0: DebuffFlag(0),
    1: DebuffFlag.KNOCKOUT,
    2: DebuffFlag.CRITICAL,
    3: DebuffFlag.SLEEP,
    4: DebuffFlag.PARALYSIS,
    5: DebuffFlag.PETRIFICATION,
}


# =============================================================================
# Item Field Shapes
# =============================================================================


def _parse_positional_mask(raw: str, pattern: re.Pattern[str], *, index: int) -> int:
    if raw == NO_RESTRICTION:
        return 0

    mask = 0
    for token in raw.split(MASK_TOKEN_DELIMITER):
        match = pattern.fullmatch(token)
        if match is None:
            raise BadMaskTokenError(
                f"invalid equip token: {token!r}", token=token, field_index=index, raw=raw
            )
        position = int(match.group(1))
        if position > MAX_EQUIP_INDEX:
            raise BadMaskTokenError(
                f"equip index out of range: {token}", token=token, field_index=index, raw=raw
            )
        mask |= 1 << position
    return mask


def parse_equip_masks(raw: str, *, index: int) -> tuple[int, int]:
    """Parse the class and race equip masks of an item.

    Args:
        raw: Field text such as ``"class[0]<+>class[5],-"``.
        index: Field index.

    Returns:
        ``(class_mask, race_mask)``; bit N is set when class/race N may equip.

    Raises:
        ArityError: If the field does not have exactly two sub-fields.
        BadMaskTokenError: If a token is malformed or names an index above 35.
    """
    if not raw:
        return 0, 0

    classes, races = split_fields(
        raw, LIST_DELIMITER, what="equip mask", expected=2, field_index=index
    )
    return (
        _parse_positional_mask(classes, CLASS_TOKEN_PATTERN, index=index),
        _parse_positional_mask(races, RACE_TOKEN_PATTERN, index=index),
    )


def parse_curse_masks(raw: str, *, index: int) -> tuple[AlignmentFlag, SexFlag]:
    """Parse the alignments and sexes an item curses.

    Args:
        raw: Field text such as ``"02,-"``.
        index: Field index.

    Returns:
        ``(alignments, sexes)``.

    Raises:
        ArityError: If the field does not have exactly two sub-fields.
        NumberError: If a sub-field holds a non-digit.
        UnknownFlagBitError: If a digit names an undefined alignment or sex.
    """
    if not raw:
        return AlignmentFlag(0), SexFlag(0)

    alignments, sexes = split_fields(
        raw, LIST_DELIMITER, what="curse mask", expected=2, field_index=index
    )
    return (
        AlignmentFlag(0)
        if alignments == NO_RESTRICTION
        else parse_digit_flags(alignments, AlignmentFlag, base=10, what="alignment", index=index),
        SexFlag(0)
        if sexes == NO_RESTRICTION
        else parse_digit_flags(sexes, SexFlag, base=10, what="sex", index=index),
    )


def parse_broken_item(raw: str, *, index: int) -> int | None:
    """Parse the item an item turns into when it breaks.

    Args:
        raw: ``"item[N]"`` or ``"-1"``.
        index: Field index.

    Returns:
        The item id, or None if the item never turns into another.

    Raises:
        BadReferenceError: If the text is neither form.
    """
    if raw == NO_ITEM:
        return None

    match = ITEM_REFERENCE_PATTERN.fullmatch(raw)
    if match is None:
        raise BadReferenceError(f"invalid item reference: {raw!r}", field_index=index, raw=raw)
    return parse_int(match.group(1), U32, index=index)


# =============================================================================
# Item Decoder
# =============================================================================


def decode_item(entity_id: int, raw: str) -> Item:
    """Decode one item text.

    Fields 11 (attack kind), 15 (range), 27 (weapon kind), 37 (combat
    message) and 38 (identified state) are not decoded.

    Args:
        entity_id: Position in the item sequence.
        raw: ``<>``-delimited item text.

    Returns:
        The decoded item.

    Raises:
        FieldError: If the text is malformed.
    """
    f = split_fields(raw, FIELD_DELIMITER, what="item", expected=ITEM_FIELD_COUNT)
    equip_classes, equip_races = parse_equip_masks(f[5], index=5)
    curse_alignments, curse_sexes = parse_curse_masks(f[6], index=6)

    return Item(
        id=entity_id,
        name_ident=f[0],
        name_unident=f[1],
        kind=parse_enum(f[2], ItemKind, what="item kind", index=2),
        price=parse_int(f[3], U64, index=3),
        stock=parse_int(f[4], I32, index=4),
        equip_classes=equip_classes,
        equip_races=equip_races,
        curse_alignments=curse_alignments,
        curse_sexes=curse_sexes,
        ident_difficulty=parse_int(f[7], U32, index=7),
        ac=parse_int(f[8], I32, index=8),
        ac_cursed=parse_int(f[9], I32, index=9),
        damage_expr=parse_triple(f[10], what="damage", index=10),
        hit_modifier=parse_int(f[12], I32, index=12),
        attack_count_modifier=parse_int(f[13], I32, index=13),
        attack_debuff=parse_coded_flag(f[14], ITEM_DEBUFF_CODES, what="item attack debuff", index=14),
        slay_kinds=parse_digit_flags(f[16], MonsterKindFlag, base=16, what="monster kind", index=16),
        protect_kinds=parse_digit_flags(f[17], MonsterKindFlag, base=16, what="monster kind", index=17),
        healing=parse_int(f[18], I32, index=18),
        spell_cancel=parse_int(f[19], I32, index=19),
        break_prob_expr=f[20],
        broken_item_id=parse_broken_item(f[21], index=21),
        resist=parse_digit_flags(f[22], ResistFlag, base=16, what="element", index=22),
        description=f[23],
        use_effect=f[24],
        special_power=f[25],
        attack_target_count=parse_int(f[26], U32, index=26),
        usable_only_if_equipable=parse_bool(f[28], index=28),
        effect_only_if_equipped=parse_bool(f[29], index=29),
        disables_class_attack_debuff=parse_bool(f[30], index=30),
        disables_class_ac=parse_bool(f[31], index=31),
        stats_bonus=parse_int_list(f[32], I32, index=32),
        halve_attacks_as_subweapon=parse_bool(f[33], index=33),
        poison_damage=parse_int(f[34], U32, index=34),
        effect_only_if_equipable=parse_bool(f[35], index=35),
        hidden_in_catalog=parse_bool(f[36], index=36),
    )


def items_from_kvs(kvs: KeyValueStore) -> tuple[Item, ...]:
    """Decode the item sequence.

    Raises:
        EntityDecodeError: If any item fails to decode.
    """
    return decode_sequence(kvs, PREFIX_ITEM, "item", decode_item)


__all__ = [
    "ITEM_DEBUFF_CODES",
    "decode_item",
    "items_from_kvs",
    "parse_broken_item",
    "parse_curse_masks",
    "parse_equip_masks",
]
