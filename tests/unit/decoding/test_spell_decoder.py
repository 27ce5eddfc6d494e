"""Tests for the spell realm decoder."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from javardry_spoiler.core.exceptions import (
    ArityError,
    BadBoolError,
    BadGlobalKeyError,
    EntityDecodeError,
    MissingKeyError,
    NumberError,
)
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.decoding.spells import decode_spell, decode_spell_realm, spell_realms_from_kvs


class TestDecodeSpell:
    """Tests for decode_spell."""

    def test_fields(self, spell_text: Callable[..., str]) -> None:
        """Test every decoded spell field."""
        spell = decode_spell(spell_text({5: "true", 6: "12", 7: "true"}))

        assert spell.name == "Halito"
        assert spell.description == "Fire damage"
        assert spell.extra_learn is True
        assert spell.mp_cost == 12
        assert spell.ignore_silence is True

    def test_arity(self, spell_text: Callable[..., str]) -> None:
        """Test a spell with too few fields."""
        with pytest.raises(ArityError):
            decode_spell(spell_text(fields=7))


class TestDecodeSpellRealm:
    """Tests for decode_spell_realm."""

    def test_levels(self, spell_text: Callable[..., str]) -> None:
        """Test spells are grouped by level."""
        katino = spell_text({0: "Katino"})
        realm = decode_spell_realm(
            0, f"Mage<-->{spell_text()}<++>{katino}<--> \t<-->{spell_text({0: 'Dilto'})}", level_count=3
        )

        assert realm.name == "Mage"
        assert realm.level_count == 3
        assert [[s.name for s in level] for level in realm.spells_by_level] == [
            ["Halito", "Katino"],
            [],
            ["Dilto"],
        ]
        assert [spell.name for spell in realm.spells()] == ["Halito", "Katino", "Dilto"]
        assert realm.monster_only is False

    def test_level_count_mismatch(self, spell_text: Callable[..., str]) -> None:
        """Test a realm with fewer levels than declared."""
        with pytest.raises(ArityError) as exc_info:
            decode_spell_realm(0, f"Mage<-->{spell_text()}", level_count=2)

        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2


class TestSpellRealmsFromKvs:
    """Tests for spell_realms_from_kvs."""

    def test_last_realm_monster_only(self, spell_text: Callable[..., str]) -> None:
        """Test only the last realm is reserved for monsters."""
        kvs = KeyValueStore(
            {
                "SpellLvNum": "1",
                "ExclusiveUseOfMonsters": "true",
                "SpellKind0": f"Mage<-->{spell_text()}",
                "SpellKind1": f"Priest<-->{spell_text({0: 'Dios'})}",
                "SpellKind2": "Breath<-->",
            }
        )

        realms = spell_realms_from_kvs(kvs)

        assert [realm.id for realm in realms] == [0, 1, 2]
        assert [realm.monster_only for realm in realms] == [False, False, True]
        assert realms[2].spells_by_level == ((),)

    def test_no_monster_only_realm(self, spell_text: Callable[..., str]) -> None:
        """Test the flag set to false."""
        kvs = KeyValueStore(
            {
                "SpellLvNum": "1",
                "ExclusiveUseOfMonsters": "false",
                "SpellKind0": f"Mage<-->{spell_text()}",
            }
        )

        assert spell_realms_from_kvs(kvs)[0].monster_only is False

    def test_no_realms_needs_no_global_keys(self) -> None:
        """Test an empty sequence does not read the global spell keys."""
        assert spell_realms_from_kvs(KeyValueStore()) == ()

    def test_missing_level_count(self) -> None:
        """Test realms without SpellLvNum."""
        kvs = KeyValueStore({"ExclusiveUseOfMonsters": "false", "SpellKind0": "Mage<-->"})

        with pytest.raises(MissingKeyError) as exc_info:
            spell_realms_from_kvs(kvs)

        assert exc_info.value.key == "SpellLvNum"

    def test_bad_global_flag(self) -> None:
        """Test a malformed ExclusiveUseOfMonsters value."""
        kvs = KeyValueStore(
            {"SpellLvNum": "1", "ExclusiveUseOfMonsters": "1", "SpellKind0": "Mage<-->"}
        )

        with pytest.raises(BadGlobalKeyError) as exc_info:
            spell_realms_from_kvs(kvs)

        assert exc_info.value.key == "ExclusiveUseOfMonsters"
        assert isinstance(exc_info.value.cause, BadBoolError)

    def test_bad_level_count_names_key(self) -> None:
        """Test a malformed SpellLvNum is reported against its key."""
        kvs = KeyValueStore(
            {"SpellLvNum": "x", "ExclusiveUseOfMonsters": "false", "SpellKind0": "Mage<-->"}
        )

        with pytest.raises(BadGlobalKeyError) as exc_info:
            spell_realms_from_kvs(kvs)

        assert exc_info.value.key == "SpellLvNum"
        assert isinstance(exc_info.value.cause, NumberError)
        assert str(exc_info.value).startswith("key SpellLvNum: invalid u32 number: 'x'")

    def test_failure_is_wrapped(self, spell_text: Callable[..., str]) -> None:
        """Test a failing realm reports its id."""
        kvs = KeyValueStore(
            {
                "SpellLvNum": "1",
                "ExclusiveUseOfMonsters": "false",
                "SpellKind0": f"Mage<-->{spell_text()}",
                "SpellKind1": f"Priest<-->{spell_text({6: '-1'})}",
            }
        )

        with pytest.raises(EntityDecodeError) as exc_info:
            spell_realms_from_kvs(kvs)

        assert exc_info.value.entity == "spell realm"
        assert exc_info.value.entity_id == 1
