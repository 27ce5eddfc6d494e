"""Pydantic V2 schemas for decoded Javardry scenarios.

All models are frozen: a scenario is produced once and never mutated.

Submodules:
    enums: Enumerated codes (ItemKind, MonsterKind)
    flags: Closed bit-flag sets (ResistFlag, DebuffFlag, MonsterKindFlag, ...)
    entities: Decoded entities (Stat, Race, CharacterClass, Spell, Item, Monster)
    scenario: The Scenario aggregate
"""

from __future__ import annotations

# =============================================================================
# Enumerations and Flags
# =============================================================================
from javardry_spoiler.models.enums import ItemKind, MonsterKind
from javardry_spoiler.models.flags import (
    MONSTER_RESIST_TRANSLATION,
    AlignmentFlag,
    DebuffFlag,
    MaskFlag,
    MonsterKindFlag,
    ResistFlag,
    SexFlag,
)

# =============================================================================
# Entities
# =============================================================================
from javardry_spoiler.models.entities import (
    CharacterClass,
    DamageTriple,
    Entity,
    Item,
    Monster,
    MonsterFollower,
    Race,
    Spell,
    SpellRealm,
    Stat,
)
from javardry_spoiler.models.scenario import Scenario


__all__ = [
    # Enumerations
    "ItemKind",
    "MonsterKind",
    # Flags
    "MaskFlag",
    "ResistFlag",
    "DebuffFlag",
    "MonsterKindFlag",
    "SexFlag",
    "AlignmentFlag",
    "MONSTER_RESIST_TRANSLATION",
    # Entities
    "Entity",
    "DamageTriple",
    "Stat",
    "Race",
    "CharacterClass",
    "Spell",
    "SpellRealm",
    "Item",
    "MonsterFollower",
    "Monster",
    # Aggregate
    "Scenario",
]
