"""Human-readable rendering of decoded entity fields.

These helpers turn flag sets, masks and expression triples into the short
strings used in spoiler tables. They never fail on dangling references:
an out-of-range id renders as ``?``.
"""

from __future__ import annotations

from collections.abc import Sequence

from javardry_spoiler.models.entities import CharacterClass, DamageTriple, Item, Monster, Race
from javardry_spoiler.models.flags import AlignmentFlag, MaskFlag, SexFlag
from javardry_spoiler.models.scenario import Scenario


UNKNOWN = "?"
NOT_SET = "-"


# =============================================================================
# Field Formatters
# =============================================================================


def flag_labels(flags: MaskFlag, *, short: bool = False, separator: str = ", ") -> str:
    """Render the members of a flag set in definition order.

    Args:
        flags: Flag set to render.
        short: Use each member's one-character abbreviation instead of its label.
        separator: Text placed between members. Ignored when ``short`` is set.

    Returns:
        Rendered members, or an empty string for an empty set.
    """
    if short:
        return "".join(member.short for member in flags.members())
    return separator.join(flags.labels())


def sex_mask_str(sexes: SexFlag) -> str:
    """Render a sex set as letters, e.g. ``"MF"``."""
    return flag_labels(sexes, short=True)


def alignment_mask_str(alignments: AlignmentFlag) -> str:
    """Render an alignment set as letters, e.g. ``"GE"``."""
    return flag_labels(alignments, short=True)


def positional_mask_str(mask: int, abbrs: Sequence[str]) -> str:
    """Render an equip mask against the entities it indexes.

    One character per entity: the first character of its abbreviation
    when its bit is set, ``-`` otherwise.

    Args:
        mask: Bit N set if entity N is included.
        abbrs: Abbreviated names of the indexed entities, in id order.

    Returns:
        The rendered mask.

    Example:
        >>> positional_mask_str(0b101, ["Fig", "Mag", "Pri"])
        'F-P'
    """
    return "".join(
        (abbr[:1] or UNKNOWN) if mask & (1 << position) else NOT_SET
        for position, abbr in enumerate(abbrs)
    )


def dice_str(triple: DamageTriple) -> str:
    """Render a damage triple in dice notation.

    Example:
        >>> dice_str(("2", "6", "1"))
        '2d6+1'
        >>> dice_str(("1", "8", "0"))
        '1d8'
    """
    count, faces, bonus = triple
    text = f"{count}d{faces}"
    if bonus != "0":
        text += f"+{bonus}"
    return text


def strip_markup(text: str) -> str:
    """Remove the editor's ``<br>`` line break tags."""
    return text.replace("<br>", "")


def _signed(value: int) -> str:
    return f"{value:+d}"


# =============================================================================
# Entity Notes
# =============================================================================


def race_notes(race: Race) -> list[str]:
    """Summarize the noteworthy properties of a race."""
    notes: list[str] = []
    if race.healing:
        notes.append(f"Healing: {race.healing}")
    if race.spell_cancel:
        notes.append(f"Spell cancel: {race.spell_cancel}")
    if race.resist:
        notes.append(f"Resist: {flag_labels(race.resist)}")
    if race.appear_condition != "true":
        notes.append(f"Appears if: {race.appear_condition}")
    return notes


def class_notes(character_class: CharacterClass) -> list[str]:
    """Summarize the noteworthy properties of a class."""
    notes: list[str] = []
    if character_class.attack_debuff:
        notes.append(f"Attack effect: {flag_labels(character_class.attack_debuff)}")
    if character_class.appear_condition != "true":
        notes.append(f"Appears if: {character_class.appear_condition}")
    return notes


def item_notes(scenario: Scenario, item: Item) -> list[str]:
    """Summarize the noteworthy properties of an item.

    Stat bonuses are labeled with the scenario's stat abbreviations and the
    broken-item reference is resolved by id.

    Args:
        scenario: Scenario the item belongs to.
        item: Item to describe.

    Returns:
        One short line per property, in a fixed order.
    """
    notes: list[str] = []

    if item.attack_debuff:
        notes.append(f"Attack effect: {flag_labels(item.attack_debuff)}")
    if item.poison_damage:
        notes.append(f"Poison: {item.poison_damage}")
    if item.slay_kinds:
        notes.append(f"Slays: {flag_labels(item.slay_kinds)}")
    if item.attack_target_count >= 2:
        notes.append(f"Targets: {item.attack_target_count}")

    if item.healing:
        notes.append(f"Healing: {item.healing}")
    if item.spell_cancel:
        notes.append(f"Spell cancel: {item.spell_cancel}")
    if item.resist:
        notes.append(f"Resist: {flag_labels(item.resist)}")
    if item.protect_kinds:
        notes.append(f"Protects from: {flag_labels(item.protect_kinds)}")

    bonuses = [
        f"{scenario.stats[i].name_abbr if i < len(scenario.stats) else UNKNOWN}{_signed(bonus)}"
        for i, bonus in enumerate(item.stats_bonus)
        if bonus
    ]
    if bonuses:
        notes.append(f"Stats: {' '.join(bonuses)}")

    if item.use_effect:
        notes.append(f"Use: {item.use_effect}")
    if item.special_power:
        notes.append(f"SP: {item.special_power}")

    usable = bool(item.use_effect or item.special_power)
    if item.broken_item_id is not None and usable and item.break_prob_expr != "0":
        broken_name = scenario.item_name(item.broken_item_id) or UNKNOWN
        notes.append(
            f"Breaks into: {broken_name} ({item.broken_item_id}) ({item.break_prob_expr} %)"
        )

    if item.is_always_cursed:
        notes.append("Cursed: always")
    elif item.is_cursed:
        targets = [
            text
            for text in (alignment_mask_str(item.curse_alignments), sex_mask_str(item.curse_sexes))
            if text
        ]
        notes.append(f"Cursed: {', '.join(targets)}")
    if item.is_cursed and item.ac != item.ac_cursed:
        notes.append(f"Cursed AC: {item.ac_cursed}")

    if item.hidden_in_catalog:
        notes.append("Hidden from catalog")

    return notes


def monster_notes(scenario: Scenario, monster: Monster) -> list[str]:
    """Summarize the noteworthy properties of a monster.

    Args:
        scenario: Scenario the monster belongs to.
        monster: Monster to describe.

    Returns:
        One short line per property, in a fixed order.
    """
    notes: list[str] = []

    if monster.invincible:
        notes.append("Invincible")
    if monster.attack_debuff:
        notes.append(f"Attack effect: {flag_labels(monster.attack_debuff)}")
    if monster.poison_damage:
        notes.append(f"Poison: {monster.poison_damage}")
    if monster.drain_level:
        notes.append(f"Drain: {monster.drain_level}")
    if monster.attacks_twice:
        notes.append("Attacks twice")

    spells = [
        f"{scenario.spell_realms[i].name if i < len(scenario.spell_realms) else UNKNOWN}{level}"
        for i, level in enumerate(monster.spell_levels)
        if level
    ]
    if spells:
        notes.append(f"Spells: {' '.join(spells)}")

    if monster.healing:
        notes.append(f"Healing: {monster.healing}")
    if monster.spell_cancel:
        notes.append(f"Spell cancel: {monster.spell_cancel}")
    if monster.resist:
        notes.append(f"Resist: {flag_labels(monster.resist)}")
    if monster.vulnerable:
        notes.append(f"Weak to: {flag_labels(monster.vulnerable)}")
    if monster.follower is not None:
        notes.append(
            f"Followers: {monster.follower.id_expr} ({monster.follower.probability} %)"
        )

    if monster.can_call:
        notes.append("Calls for help")
    if monster.can_flee:
        notes.append("Flees")
    if monster.hidden_in_catalog:
        notes.append("Hidden from catalog")

    return notes


__all__ = [
    "alignment_mask_str",
    "class_notes",
    "dice_str",
    "flag_labels",
    "item_notes",
    "monster_notes",
    "positional_mask_str",
    "race_notes",
    "sex_mask_str",
    "strip_markup",
]
