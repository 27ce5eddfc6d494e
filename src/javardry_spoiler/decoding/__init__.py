"""Decoding of scenario plaintext into typed entities.

Submodules:
    kvs: ``KEY = "VALUE"`` line parsing and numbered key sequences
    fields: Shared field converters (integers, booleans, flag sets)
    stats, races, classes, spells, items, monsters: Per-entity decoders
    loader: Scenario aggregation entry points
"""

from __future__ import annotations

from javardry_spoiler.decoding.classes import classes_from_kvs, decode_class
from javardry_spoiler.decoding.items import decode_item, items_from_kvs
from javardry_spoiler.decoding.kvs import DuplicateKey, KeyValueStore, parse_kvs
from javardry_spoiler.decoding.loader import load_ciphertext, load_plaintext, open_scenario
from javardry_spoiler.decoding.monsters import decode_monster, monsters_from_kvs
from javardry_spoiler.decoding.races import decode_race, races_from_kvs
from javardry_spoiler.decoding.spells import decode_spell, decode_spell_realm, spell_realms_from_kvs
from javardry_spoiler.decoding.stats import decode_stat, stats_from_kvs


__all__ = [
    # Key/value store
    "DuplicateKey",
    "KeyValueStore",
    "parse_kvs",
    # Entity decoders
    "decode_stat",
    "decode_race",
    "decode_class",
    "decode_spell",
    "decode_spell_realm",
    "decode_item",
    "decode_monster",
    "stats_from_kvs",
    "races_from_kvs",
    "classes_from_kvs",
    "spell_realms_from_kvs",
    "items_from_kvs",
    "monsters_from_kvs",
    # Aggregation
    "load_plaintext",
    "load_ciphertext",
    "open_scenario",
]
