"""Format constants for Javardry scenario files.

This module defines the fixed values of the scenario file format: the
cipher passphrase, the key names read from the key/value store, the field
delimiters, and the field counts of every entity schema.
"""

from __future__ import annotations

# =============================================================================
# Cipher
# =============================================================================

PASSPHRASE = b"MadPoet"
"""Passphrase the scenario editor derives its DES key from."""

BLOCK_SIZE = 8
"""DES block size in bytes."""

# =============================================================================
# Mandatory Scalar Keys
# =============================================================================

KEY_EDITOR_VERSION = "Version"
KEY_SCENARIO_ID = "ReadKeyword"
KEY_SCENARIO_TITLE = "GameTitle"
KEY_SPELL_LEVEL_COUNT = "SpellLvNum"
KEY_LAST_REALM_MONSTER_ONLY = "ExclusiveUseOfMonsters"

# =============================================================================
# Entity Sequence Prefixes
# =============================================================================

PREFIX_STAT = "Abi"
PREFIX_RACE = "Race"
PREFIX_CLASS = "Class"
PREFIX_SPELL_REALM = "SpellKind"
PREFIX_ITEM = "Item"
PREFIX_MONSTER = "Monster"

# =============================================================================
# Delimiters
# =============================================================================

FIELD_DELIMITER = "<>"
"""Separates the top-level fields of every entity text."""

LIST_DELIMITER = ","
"""Separates numbers in list fields and the halves of paired sub-fields."""

MASK_TOKEN_DELIMITER = "<+>"
"""Separates ``class[N]``/``race[N]`` tokens inside an equip mask."""

SPELL_LEVEL_DELIMITER = "<-->"
"""Separates the realm name and each spell level inside a realm text."""

SPELL_DELIMITER = "<++>"
"""Separates spells within one spell level."""

NO_RESTRICTION = "-"
"""Equip/curse sub-field meaning "nobody"."""

NO_ITEM = "-1"
"""Broken-item reference meaning "does not break"."""

# =============================================================================
# Schema Field Counts
# =============================================================================

STAT_FIELD_COUNT = 8
RACE_FIELD_COUNT = 14
CLASS_FIELD_COUNT = 21
SPELL_FIELD_COUNT = 8
ITEM_FIELD_COUNT = 39
MONSTER_MIN_FIELD_COUNT = 49
"""Monsters carry trailing extension fields, so only a minimum is enforced."""

MAX_EQUIP_INDEX = 35
"""Highest class/race index an equip mask token may name."""

DEFAULT_FOLLOWER_PROBABILITY = 50
"""Follower spawn probability when the field is left empty."""
