"""Human-readable spoiler rendering of decoded scenarios."""

from __future__ import annotations

from javardry_spoiler.presentation.dump import display_width, format_table, render_scenario
from javardry_spoiler.presentation.formatters import (
    alignment_mask_str,
    class_notes,
    dice_str,
    flag_labels,
    item_notes,
    monster_notes,
    positional_mask_str,
    race_notes,
    sex_mask_str,
    strip_markup,
)


__all__ = [
    # Field formatters
    "flag_labels",
    "sex_mask_str",
    "alignment_mask_str",
    "positional_mask_str",
    "dice_str",
    "strip_markup",
    # Entity notes
    "race_notes",
    "class_notes",
    "item_notes",
    "monster_notes",
    # Report
    "display_width",
    "format_table",
    "render_scenario",
]
