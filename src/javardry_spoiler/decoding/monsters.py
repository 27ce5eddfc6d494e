"""Decoder for monsters (``Monster`` keys).

Monster texts carry trailing fields added by newer editor versions, so
only a minimum field count is enforced. Resistance and vulnerability
columns use their own bit order and are remapped to the generic layout.
"""

from __future__ import annotations

from javardry_spoiler.core.constants import (
    DEFAULT_FOLLOWER_PROBABILITY,
    FIELD_DELIMITER,
    MONSTER_MIN_FIELD_COUNT,
    PREFIX_MONSTER,
)
from javardry_spoiler.decoding.fields import (
    I32,
    U32,
    parse_bool,
    parse_digit_flags,
    parse_enum,
    parse_int,
    parse_int_list,
    parse_monster_resist,
    split_fields,
)
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.decoding.sequence import decode_sequence
from javardry_spoiler.models.entities import Monster, MonsterFollower
from javardry_spoiler.models.enums import MonsterKind
from javardry_spoiler.models.flags import DebuffFlag


def parse_follower(id_raw: str, probability_raw: str, *, index: int) -> MonsterFollower | None:
    """Parse the follower spawn of a monster.

    Args:
        id_raw: Follower id expression; empty when there is none.
        probability_raw: Spawn chance in percent; empty means 50.
        index: Field index of the probability.

    Returns:
        The follower, or None.

    Raises:
        NumberError: If the probability is not a u32.
    """
    if not id_raw:
        return None

    probability = (
        parse_int(probability_raw, U32, index=index)
        if probability_raw
        else DEFAULT_FOLLOWER_PROBABILITY
    )
    return MonsterFollower(id_expr=id_raw, probability=probability)


def decode_monster(entity_id: int, raw: str) -> Monster:
    """Decode one monster text.

    Args:
        entity_id: Position in the monster sequence.
        raw: ``<>``-delimited monster text.

    Returns:
        The decoded monster.

    Raises:
        FieldError: If the text is malformed.
    """
    f = split_fields(raw, FIELD_DELIMITER, what="monster", at_least=MONSTER_MIN_FIELD_COUNT)
    return Monster(
        id=entity_id,
        name_ident=f[0],
        name_unident=f[1],
        name_plural_ident=f[2],
        name_plural_unident=f[3],
        kind=parse_enum(f[4], MonsterKind, what="monster kind", index=4),
        level_expr=f[5],
        xp_expr=f[6],
        hp_expr=f[7],
        mp_expr=f[8],
        ac_expr=f[9],
        stats=parse_int_list(f[10], U32, index=10),
        damage_expr=f[12],
        attack_count_expr=f[13],
        poison_damage=parse_int(f[14], U32, index=14),
        drain_level=parse_int(f[15], U32, index=15),
        healing=parse_int(f[16], I32, index=16),
        spell_cancel=parse_int(f[17], I32, index=17),
        spell_levels=parse_int_list(f[18], U32, index=18),
        attack_debuff=parse_digit_flags(f[19], DebuffFlag, base=10, what="attack effect", index=19),
        resist=parse_monster_resist(f[22], index=22),
        vulnerable=parse_monster_resist(f[23], index=23),
        can_call=parse_bool(f[24], index=24),
        can_flee=parse_bool(f[25], index=25),
        friendly_prob=parse_int(f[26], U32, index=26),
        group_count_expr=f[27],
        follower=parse_follower(f[29], f[28], index=28),
        invincible=parse_bool(f[39], index=39),
        attacks_twice=parse_bool(f[40], index=40),
        description=f[45],
        hidden_in_catalog=parse_bool(f[48], index=48),
    )


def monsters_from_kvs(kvs: KeyValueStore) -> tuple[Monster, ...]:
    """Decode the monster sequence.

    Raises:
        EntityDecodeError: If any monster fails to decode.
    """
    return decode_sequence(kvs, PREFIX_MONSTER, "monster", decode_monster)


__all__ = ["decode_monster", "monsters_from_kvs", "parse_follower"]
