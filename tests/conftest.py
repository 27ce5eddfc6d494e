"""Pytest configuration and shared fixtures.

This module provides common fixtures for all tests in the Javardry
scenario spoiler test suite: settings cache handling, builders for raw
entity texts, a reference encryptor and a small complete scenario.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

import pytest
import structlog
from Crypto.Cipher import DES
from Crypto.Util.Padding import pad


if TYPE_CHECKING:
    from collections.abc import Generator

    from javardry_spoiler.models.scenario import Scenario


EntityTextBuilder = Callable[..., str]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from javardry_spoiler.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo logging configured by a test, closing any handlers it opened."""
    from javardry_spoiler.core.logging import close_log_file

    yield
    structlog.reset_defaults()
    close_log_file()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "JAVARDRY_LOG_LEVEL": "debug",
        "JAVARDRY_JSON_LOGS": "true",
        "JAVARDRY_DUMP_FORMAT": "json",
        "JAVARDRY_DUMP_JSON_INDENT": "4",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Entity Text Fixtures
# =============================================================================

STAT_FIELDS = ["Strength", "ST", "1", "0", "false", "18", "18", "false"]

RACE_FIELDS = [
    "Human", "Hum", "8,8,5", "100", "10", "0", "0", "", "", "", "true",
    "Balanced<br>and adaptable", "", "0",
]

CLASS_FIELDS = [
    "Fighter", "Fig", "01", "012", "11,0,0", "10", "LV/3", "1", "1,2,0", "0",
    "0", "false", "0", "", "", "10", "1000", "A warrior", "0", "", "true",
]

SPELL_FIELDS = ["Halito", "", "Fire damage", "", "", "false", "1", "false"]

ITEM_FIELDS = [
    "Long Sword", "Sword", "0", "250", "10", "class[0]<+>class[5],race[1]", "",
    "1", "0", "0", "1,8,0", "0", "0", "0", "0", "0", "", "", "0", "0", "0", "-1",
    "", "A plain sword", "", "", "1", "0", "false", "false", "false", "false",
    "0,0,0", "false", "0", "false", "false", "", "false",
]

MONSTER_FIELDS = [
    "Bubbly Slime", "Slime", "Bubbly Slimes", "Slimes", "14", "1", "55", "1d4",
    "0", "8", "5,5,5", "", "1d2", "1", "0", "0", "0", "0", "0,0", "", "", "",
    "", "", "false", "false", "0", "1d5", "", "", "", "", "", "", "", "", "",
    "", "", "false", "false", "", "", "", "", "A quivering blob", "", "",
    "false",
]


def _builder(defaults: list[str]) -> EntityTextBuilder:
    def build(overrides: Mapping[int, str] | None = None, *, fields: int | None = None) -> str:
        values = list(defaults)
        for index, value in (overrides or {}).items():
            values[index] = value
        if fields is not None:
            values = (values + [""] * fields)[:fields]
        return "<>".join(values)

    return build


@pytest.fixture
def stat_text() -> EntityTextBuilder:
    """Build a stat text; ``overrides`` replaces fields by index."""
    return _builder(STAT_FIELDS)


@pytest.fixture
def race_text() -> EntityTextBuilder:
    """Build a race text; ``fields`` truncates or pads the field list."""
    return _builder(RACE_FIELDS)


@pytest.fixture
def class_text() -> EntityTextBuilder:
    """Build a class text."""
    return _builder(CLASS_FIELDS)


@pytest.fixture
def spell_text() -> EntityTextBuilder:
    """Build a spell text."""
    return _builder(SPELL_FIELDS)


@pytest.fixture
def item_text() -> EntityTextBuilder:
    """Build an item text."""
    return _builder(ITEM_FIELDS)


@pytest.fixture
def monster_text() -> EntityTextBuilder:
    """Build a monster text."""
    return _builder(MONSTER_FIELDS)


# =============================================================================
# Cipher Fixtures
# =============================================================================


@pytest.fixture
def encrypt() -> Callable[[str], bytes]:
    """Encrypt plaintext the way the scenario editor does.

    Returns:
        Function mapping plaintext to DES-ECB/PKCS#7 ciphertext.
    """
    from javardry_spoiler.crypto.cipher import make_key

    def _encrypt(plaintext: str) -> bytes:
        cipher = DES.new(make_key(), DES.MODE_ECB)
        return cipher.encrypt(pad(plaintext.encode("utf-8"), 8, style="pkcs7"))

    return _encrypt


# =============================================================================
# Scenario Fixtures
# =============================================================================


@pytest.fixture
def minimal_plaintext(
    stat_text: EntityTextBuilder,
    race_text: EntityTextBuilder,
    class_text: EntityTextBuilder,
) -> str:
    """Provide a plaintext with the mandatory keys and one stat, race and class."""
    return "\n".join(
        [
            'Version = "3.4.1"',
            'ReadKeyword = "PG01"',
            'GameTitle = "Proving Grounds"',
            f'Abi0 = "{stat_text()}"',
            f'Race0 = "{race_text()}"',
            f'Class0 = "{class_text()}"',
        ]
    )


@pytest.fixture
def scenario_plaintext(
    stat_text: EntityTextBuilder,
    race_text: EntityTextBuilder,
    class_text: EntityTextBuilder,
    spell_text: EntityTextBuilder,
    item_text: EntityTextBuilder,
    monster_text: EntityTextBuilder,
) -> str:
    """Provide a small scenario exercising every entity kind."""
    halito = spell_text()
    katino = spell_text({0: "Katino", 2: "Puts enemies to sleep", 6: "2"})
    breath = spell_text({0: "Fire Breath", 2: "Breathes fire", 6: "0", 7: "true"})
    potion = item_text(
        {
            0: "Potion of Healing",
            1: "Potion",
            2: "6",
            3: "50",
            5: "",
            10: "0,0,0",
            20: "100",
            21: "item[2]",
            23: "Heals a little",
            24: "Heal 1d8",
        }
    )
    cursed = item_text(
        {
            0: "Cursed Ring",
            1: "Ring",
            2: "6",
            5: "-,-",
            6: "012,-",
            8: "0",
            9: "-3",
            22: "ab",
            32: "2,0,-1",
        }
    )
    dragon = monster_text(
        {
            0: "Red Dragon",
            4: "7",
            18: "0,3",
            19: "34",
            22: "4a",
            23: "5",
            24: "true",
            28: "",
            29: "0",
        }
    )
    lines = [
        'Version = "3.4.1"',
        'ReadKeyword = "PG01"',
        'GameTitle = "Proving Grounds"',
        'SpellLvNum = "2"',
        'ExclusiveUseOfMonsters = "true"',
        f'Abi0 = "{stat_text()}"',
        f'Abi1 = "{stat_text({0: "IQ", 1: "IQ", 2: "0", 3: "1"})}"',
        f'Abi2 = "{stat_text({0: "Piety", 1: "PI", 7: "true"})}"',
        f'Race0 = "{race_text()}"',
        f'Race1 = "{race_text({0: "Elf", 1: "Elf", 2: "7,10,10", 9: "1"})}"',
        f'Class0 = "{class_text()}"',
        f'Class1 = "{class_text({0: "Priest", 1: "Pri", 12: "1", 13: "a"})}"',
        f'SpellKind0 = "Mage<-->{halito}<++>{katino}<-->"',
        f'SpellKind1 = "Breath<--> <-->{breath}"',
        f'Item0 = "{item_text()}"',
        f'Item1 = "{potion}"',
        f'Item2 = "{cursed}"',
        f'Monster0 = "{monster_text()}"',
        f'Monster1 = "{dragon}"',
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def scenario(scenario_plaintext: str) -> Scenario:
    """Provide the sample scenario, decoded."""
    from javardry_spoiler.decoding.loader import load_plaintext

    return load_plaintext(scenario_plaintext)
