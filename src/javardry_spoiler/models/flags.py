"""Bit-flag sets decoded from scenario entity fields.

Every flag type is a closed set: ``from_bits`` rejects any bit the type
does not define, so an unexpected value in the file surfaces as an error
instead of a silently dropped bit. Each type carries a name table used
for human-readable rendering.

Example:
    >>> flags = ResistFlag.from_bits(0b1100_0000_0000)
    >>> flags.labels()
    ['Fire', 'Cold']
"""

from __future__ import annotations

from enum import IntFlag
from typing import Self

from javardry_spoiler.core.exceptions import UnknownFlagBitError
from javardry_spoiler.models.enums import MonsterKind


class MaskFlag(IntFlag):
    """Base class for closed flag sets.

    Subclasses define single-bit members and a ``label`` property.
    """

    @classmethod
    def defined_bits(cls) -> int:
        """Get the union of every bit this flag type defines.

        Returns:
            Bitmask of all defined members.
        """
        bits = 0
        for member in cls:
            bits |= member.value
        return bits

    @classmethod
    def from_bits(
        cls,
        bits: int,
        *,
        field_index: int | None = None,
        raw: str | None = None,
    ) -> Self:
        """Build a flag set, rejecting undefined bits.

        Args:
            bits: Raw bit accumulator.
            field_index: Index of the source field, for error context.
            raw: Source field text, for error context.

        Returns:
            The validated flag set.

        Raises:
            UnknownFlagBitError: If ``bits`` sets a bit the type does not define.
        """
        unknown = bits & ~cls.defined_bits()
        if unknown:
            raise UnknownFlagBitError(
                f"unknown {cls.__name__} bit: {unknown:#b}",
                bits=unknown,
                field_index=field_index,
                raw=raw,
            )
        return cls(bits)

    def members(self) -> list[Self]:
        """Get the set members in definition order.

        Returns:
            Single-bit members contained in this set.
        """
        return [member for member in type(self) if member in self]

    def labels(self) -> list[str]:
        """Get display names of the set members in definition order.

        Returns:
            List of member labels.
        """
        return [member.label for member in self.members()]

    @property
    def label(self) -> str:
        """Get the display name of a single member."""
        return self.name or ""

    @property
    def short(self) -> str:
        """Get a one-character abbreviation of a single member."""
        return self.label[:1]


class ResistFlag(MaskFlag):
    """Status and elemental resistances (generic bit layout).

    Bit 9 is unused by the editor.
    """

    SILENCE = 1 << 0
    SLEEP = 1 << 1
    POISON = 1 << 2
    PARALYSIS = 1 << 3
    PETRIFICATION = 1 << 4
    DRAIN = 1 << 5
    KNOCKOUT = 1 << 6
    CRITICAL = 1 << 7
    DEATH = 1 << 8
    FIRE = 1 << 10
    COLD = 1 << 11
    ELECTRIC = 1 << 12
    HOLY = 1 << 13
    GENERIC = 1 << 14

    @property
    def label(self) -> str:
        """Get the display name of the resistance.

        Returns:
            Human-readable name (e.g., 'Petrification').
        """
        labels = {
            ResistFlag.SILENCE: "Silence",
            ResistFlag.SLEEP: "Sleep",
            ResistFlag.POISON: "Poison",
            ResistFlag.PARALYSIS: "Paralysis",
            ResistFlag.PETRIFICATION: "Petrification",
            ResistFlag.DRAIN: "Level Drain",
            ResistFlag.KNOCKOUT: "Knockout",
            ResistFlag.CRITICAL: "Critical Hit",
            ResistFlag.DEATH: "Death",
            ResistFlag.FIRE: "Fire",
            ResistFlag.COLD: "Cold",
            ResistFlag.ELECTRIC: "Electric",
            ResistFlag.HOLY: "Holy",
            ResistFlag.GENERIC: "Non-elemental",
        }
        return labels[self]

    @property
    def short(self) -> str:
        """Get the one-character abbreviation used by the editor.

        Returns:
            Single character abbreviation.
        """
        shorts = {
            ResistFlag.SILENCE: "黙",
            ResistFlag.SLEEP: "眠",
            ResistFlag.POISON: "毒",
            ResistFlag.PARALYSIS: "麻",
            ResistFlag.PETRIFICATION: "石",
            ResistFlag.DRAIN: "吸",
            ResistFlag.KNOCKOUT: "気",
            ResistFlag.CRITICAL: "首",
            ResistFlag.DEATH: "死",
            ResistFlag.FIRE: "火",
            ResistFlag.COLD: "冷",
            ResistFlag.ELECTRIC: "電",
            ResistFlag.HOLY: "聖",
            ResistFlag.GENERIC: "無",
        }
        return shorts[self]


# Monster resist/vulnerability columns, indexed by position in the field.
MONSTER_RESIST_TRANSLATION: tuple[ResistFlag, ...] = (
    ResistFlag.SLEEP,
    ResistFlag.KNOCKOUT,
    ResistFlag.CRITICAL,
    ResistFlag.DEATH,
    ResistFlag.FIRE,
    ResistFlag.COLD,
    ResistFlag.ELECTRIC,
    ResistFlag.HOLY,
    ResistFlag.GENERIC,
    ResistFlag.SILENCE,
    ResistFlag.POISON,
    ResistFlag.PARALYSIS,
    ResistFlag.PETRIFICATION,
)


class DebuffFlag(MaskFlag):
    """Status effects inflicted by a successful attack."""

    SLEEP = 1 << 0
    PARALYSIS = 1 << 1
    PETRIFICATION = 1 << 2
    KNOCKOUT = 1 << 3
    CRITICAL = 1 << 4

    @property
    def label(self) -> str:
        """Get the display name of the debuff.

        Returns:
            Human-readable name (e.g., 'Critical Hit').
        """
        labels = {
            DebuffFlag.SLEEP: "Sleep",
            DebuffFlag.PARALYSIS: "Paralysis",
            DebuffFlag.PETRIFICATION: "Petrification",
            DebuffFlag.KNOCKOUT: "Knockout",
            DebuffFlag.CRITICAL: "Critical Hit",
        }
        return labels[self]

    @property
    def short(self) -> str:
        """Get the one-character abbreviation used by the editor."""
        shorts = {
            DebuffFlag.SLEEP: "眠",
            DebuffFlag.PARALYSIS: "麻",
            DebuffFlag.PETRIFICATION: "石",
            DebuffFlag.KNOCKOUT: "気",
            DebuffFlag.CRITICAL: "首",
        }
        return shorts[self]


class MonsterKindFlag(MaskFlag):
    """Set of monster kinds; bit N is ``MonsterKind(N)``."""

    FIGHTER = 1 << MonsterKind.FIGHTER
    MAGE = 1 << MonsterKind.MAGE
    PRIEST = 1 << MonsterKind.PRIEST
    THIEF = 1 << MonsterKind.THIEF
    MIDGET = 1 << MonsterKind.MIDGET
    GIANT = 1 << MonsterKind.GIANT
    MYTH = 1 << MonsterKind.MYTH
    DRAGON = 1 << MonsterKind.DRAGON
    ANIMAL = 1 << MonsterKind.ANIMAL
    WERECREATURE = 1 << MonsterKind.WERECREATURE
    UNDEAD = 1 << MonsterKind.UNDEAD
    DEMON = 1 << MonsterKind.DEMON
    INSECT = 1 << MonsterKind.INSECT
    ENCHANTED = 1 << MonsterKind.ENCHANTED
    MYSTERY = 1 << MonsterKind.MYSTERY

    @property
    def kind(self) -> MonsterKind:
        """Get the monster kind of a single member."""
        return MonsterKind(self.value.bit_length() - 1)

    def kinds(self) -> list[MonsterKind]:
        """Get the monster kinds in this set in code order.

        Returns:
            List of monster kinds.
        """
        return [member.kind for member in self.members()]

    @property
    def label(self) -> str:
        """Get the display name of a single member."""
        return self.kind.label


class SexFlag(MaskFlag):
    """Character sexes allowed or cursed."""

    MALE = 1 << 0
    FEMALE = 1 << 1

    @property
    def label(self) -> str:
        """Get the display name of the sex."""
        return self.name.capitalize()

    @property
    def short(self) -> str:
        """Get the one-letter abbreviation."""
        return self.name[0]


class AlignmentFlag(MaskFlag):
    """Character alignments allowed or cursed."""

    GOOD = 1 << 0
    NEUTRAL = 1 << 1
    EVIL = 1 << 2

    @property
    def label(self) -> str:
        """Get the display name of the alignment."""
        return self.name.capitalize()

    @property
    def short(self) -> str:
        """Get the one-letter abbreviation."""
        return self.name[0]


__all__ = [
    "AlignmentFlag",
    "DebuffFlag",
    "MONSTER_RESIST_TRANSLATION",
    "MaskFlag",
    "MonsterKindFlag",
    "ResistFlag",
    "SexFlag",
]
