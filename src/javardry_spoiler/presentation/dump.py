"""Plain-text spoiler report of a whole scenario.

The report has one section per entity collection, each a column-aligned
table followed by free-form notes. Column widths account for East Asian
wide characters, which most scenario names are written in.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Sequence

from javardry_spoiler.models.scenario import Scenario
from javardry_spoiler.presentation.formatters import (
    alignment_mask_str,
    class_notes,
    dice_str,
    item_notes,
    monster_notes,
    positional_mask_str,
    race_notes,
    sex_mask_str,
    strip_markup,
)


NOTE_INDENT = "    "


# =============================================================================
# Table Layout
# =============================================================================


def display_width(text: str) -> int:
    """Get the number of terminal columns a string occupies."""
    return sum(2 if unicodedata.east_asian_width(char) in "WF" else 1 for char in text)


def _pad(text: str, width: int) -> str:
    return text + " " * (width - display_width(text))


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    """Lay out rows as left-aligned columns under a header rule.

    Args:
        headers: Column titles.
        rows: Cell texts, one sequence per row, as many cells as headers.

    Returns:
        Output lines without trailing newlines.
    """
    widths = [display_width(header) for header in headers]
    for row in rows:
        for column, cell in enumerate(row):
            widths[column] = max(widths[column], display_width(cell))

    def line(cells: Sequence[str]) -> str:
        return "  ".join(_pad(cell, width) for cell, width in zip(cells, widths)).rstrip()

    rule = "  ".join("-" * width for width in widths)
    return [line(headers), rule, *(line(row) for row in rows)]


def _section(title: str) -> list[str]:
    return ["", f"== {title} ==", ""]


def _notes(label: str, notes: Sequence[str]) -> list[str]:
    if not notes:
        return []
    return [f"{label}:", *(f"{NOTE_INDENT}{note}" for note in notes)]


# =============================================================================
# Sections
# =============================================================================


def _render_stats(scenario: Scenario) -> list[str]:
    rows = [
        [
            str(stat.id),
            stat.name,
            stat.name_abbr,
            str(stat.sex_bonus[0]),
            str(stat.sex_bonus[1]),
            "o" if stat.fixed_on_create else "",
            "o" if stat.hidden else "",
        ]
        for stat in scenario.stats
    ]
    return format_table(["ID", "Name", "Abbr", "Male", "Female", "Fixed", "Hidden"], rows)


def _render_races(scenario: Scenario, clean: bool) -> list[str]:
    stat_abbrs = [stat.name_abbr for stat in scenario.stats]
    width = max((len(race.stats) for race in scenario.races), default=0)
    stat_headers = [stat_abbrs[i] if i < len(stat_abbrs) else f"#{i}" for i in range(width)]
    rows = [
        [
            str(race.id),
            race.name,
            race.name_abbr,
            *(str(race.stats[i]) if i < len(race.stats) else "" for i in range(width)),
            str(race.ac),
            str(race.inventory_bonus),
            str(race.lifetime),
        ]
        for race in scenario.races
    ]
    lines = format_table(["ID", "Name", "Abbr", *stat_headers, "AC", "Inven", "Life"], rows)

    for race in scenario.races:
        notes = race_notes(race)
        if race.description:
            notes.append(_text(race.description, clean))
        lines.extend(_notes(race.name, notes))
    return lines


def _render_classes(scenario: Scenario, clean: bool) -> list[str]:
    rows = [
        [
            str(cls.id),
            cls.name,
            cls.name_abbr,
            sex_mask_str(cls.sexes),
            alignment_mask_str(cls.alignments),
            cls.hp_expr,
            cls.ac_expr,
            cls.hit_expr,
            cls.attack_count_expr,
            dice_str(cls.barehand_damage_expr),
            cls.xp_expr,
            f"LV{cls.dispel_level}+" if cls.dispel_level is not None else "",
            str(cls.thief_skill),
            "o" if cls.can_identify else "",
        ]
        for cls in scenario.classes
    ]
    lines = format_table(
        [
            "ID",
            "Name",
            "Abbr",
            "Sex",
            "Align",
            "HP",
            "AC",
            "Hit",
            "Attacks",
            "Barehand",
            "XP",
            "Dispel",
            "Thief",
            "Ident",
        ],
        rows,
    )

    for cls in scenario.classes:
        notes = class_notes(cls)
        if cls.dispel_level is not None and cls.dispel_kinds:
            notes.append(f"Dispels: {', '.join(kind.label for kind in cls.dispel_kinds.kinds())}")
        if cls.description:
            notes.append(_text(cls.description, clean))
        lines.extend(_notes(cls.name, notes))
    return lines


def _render_spells(scenario: Scenario, clean: bool) -> list[str]:
    lines: list[str] = []
    for realm in scenario.spell_realms:
        suffix = " (monsters only)" if realm.monster_only else ""
        lines.append(f"-- {realm.name}{suffix} --")
        for level, spells in enumerate(realm.spells_by_level, start=1):
            if not spells:
                continue
            lines.append(f"LV {level}")
            rows = [
                [
                    spell.name,
                    str(spell.mp_cost),
                    "o" if spell.ignore_silence else "",
                    "o" if spell.extra_learn else "",
                    _text(spell.description, clean),
                ]
                for spell in spells
            ]
            lines.extend(format_table(["Name", "MP", "Ignore silence", "Special", "Description"], rows))
        lines.append("")
    return lines


def _render_items(scenario: Scenario, clean: bool) -> list[str]:
    race_abbrs = [race.name_abbr for race in scenario.races]
    class_abbrs = [cls.name_abbr for cls in scenario.classes]
    rows = [
        [
            str(item.id),
            item.name_ident,
            item.name_unident,
            item.kind.label,
            positional_mask_str(item.equip_races, race_abbrs),
            positional_mask_str(item.equip_classes, class_abbrs),
            str(item.hit_modifier),
            str(item.attack_count_modifier),
            dice_str(item.damage_expr),
            str(item.ac),
            str(item.ident_difficulty),
            str(item.price),
            str(item.stock),
        ]
        for item in scenario.items
    ]
    lines = format_table(
        [
            "ID",
            "Name",
            "Unidentified",
            "Kind",
            "Races",
            "Classes",
            "Hit",
            "Attacks",
            "Dice",
            "AC",
            "Ident",
            "Price",
            "Stock",
        ],
        rows,
    )

    for item in scenario.items:
        notes = item_notes(scenario, item)
        if item.description:
            notes.append(_text(item.description, clean))
        lines.extend(_notes(item.name_ident, notes))
    return lines


def _render_monsters(scenario: Scenario, clean: bool) -> list[str]:
    rows = [
        [
            str(monster.id),
            monster.name_ident,
            monster.name_unident,
            monster.kind.label,
            monster.level_expr,
            monster.hp_expr,
            monster.ac_expr,
            monster.attack_count_expr,
            monster.damage_expr,
            monster.mp_expr,
            monster.group_count_expr,
            str(monster.friendly_prob),
            monster.xp_expr,
        ]
        for monster in scenario.monsters
    ]
    lines = format_table(
        [
            "ID",
            "Name",
            "Unidentified",
            "Kind",
            "LV",
            "HP",
            "AC",
            "Attacks",
            "Damage",
            "MP",
            "Group",
            "Friendly",
            "XP",
        ],
        rows,
    )

    for monster in scenario.monsters:
        notes = monster_notes(scenario, monster)
        if monster.description:
            notes.append(_text(monster.description, clean))
        lines.extend(_notes(monster.name_ident, notes))
    return lines


def _text(text: str, clean: bool) -> str:
    return strip_markup(text) if clean else text


# =============================================================================
# Report
# =============================================================================


def render_scenario(scenario: Scenario, *, clean_markup: bool = True) -> str:
    """Render a complete spoiler report.

    Args:
        scenario: Decoded scenario.
        clean_markup: Remove ``<br>`` tags from descriptions.

    Returns:
        The report, newline-terminated.
    """
    lines = [f"{scenario.title} ({scenario.id})", f"Editor version: {scenario.editor_version}"]

    lines.extend(_section("Stats"))
    lines.extend(_render_stats(scenario))
    lines.extend(_section("Races"))
    lines.extend(_render_races(scenario, clean_markup))
    lines.extend(_section("Classes"))
    lines.extend(_render_classes(scenario, clean_markup))
    lines.extend(_section("Spells"))
    lines.extend(_render_spells(scenario, clean_markup))
    lines.extend(_section("Items"))
    lines.extend(_render_items(scenario, clean_markup))
    lines.extend(_section("Monsters"))
    lines.extend(_render_monsters(scenario, clean_markup))

    return "\n".join(lines) + "\n"


__all__ = [
    "display_width",
    "format_table",
    "render_scenario",
]
