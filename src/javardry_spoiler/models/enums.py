"""Enumerated codes stored in scenario entity fields.

Item and monster kinds are stored as small integer codes; the values of
these enums are the codes as written by the scenario editor.
"""

from __future__ import annotations

from enum import IntEnum


class ItemKind(IntEnum):
    """Equipment slot or usage category of an item."""

    WEAPON = 0
    ARMOR = 1
    SHIELD = 2
    HELMET = 3
    GLOVES = 4
    BOOTS = 5
    TOOL = 6

    @property
    def label(self) -> str:
        """Get the display name of the item kind.

        Returns:
            Human-readable kind name (e.g., 'Weapon').
        """
        return self.name.capitalize()

    @property
    def is_equipment(self) -> bool:
        """Whether items of this kind occupy an equipment slot."""
        return self is not ItemKind.TOOL


class MonsterKind(IntEnum):
    """Taxonomic kind of a monster, used by slay/protect/dispel masks."""

    FIGHTER = 0
    MAGE = 1
    PRIEST = 2
    THIEF = 3
    MIDGET = 4
    GIANT = 5
    MYTH = 6
    DRAGON = 7
    ANIMAL = 8
    WERECREATURE = 9
    UNDEAD = 10
    DEMON = 11
    INSECT = 12
    ENCHANTED = 13
    MYSTERY = 14

    @property
    def label(self) -> str:
        """Get the display name of the monster kind.

        Returns:
            Human-readable kind name (e.g., 'Enchanted Creature').
        """
        labels = {
            MonsterKind.FIGHTER: "Fighter",
            MonsterKind.MAGE: "Mage",
            MonsterKind.PRIEST: "Priest",
            MonsterKind.THIEF: "Thief",
            MonsterKind.MIDGET: "Midget",
            MonsterKind.GIANT: "Giant",
            MonsterKind.MYTH: "Mythical",
            MonsterKind.DRAGON: "Dragon",
            MonsterKind.ANIMAL: "Animal",
            MonsterKind.WERECREATURE: "Werecreature",
            MonsterKind.UNDEAD: "Undead",
            MonsterKind.DEMON: "Demon",
            MonsterKind.INSECT: "Insect",
            MonsterKind.ENCHANTED: "Enchanted Creature",
            MonsterKind.MYSTERY: "Mysterious Creature",
        }
        return labels[self]


__all__ = [
    "ItemKind",
    "MonsterKind",
]
