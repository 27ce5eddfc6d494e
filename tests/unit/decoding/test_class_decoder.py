"""Tests for the class decoder."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from javardry_spoiler.core.exceptions import (
    ArityError,
    EntityDecodeError,
    UnknownEnumError,
    UnknownFlagBitError,
)
from javardry_spoiler.decoding.classes import classes_from_kvs, decode_class
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.models.flags import AlignmentFlag, DebuffFlag, MonsterKindFlag, SexFlag


class TestDecodeClass:
    """Tests for decode_class."""

    def test_fields(self, class_text: Callable[..., str]) -> None:
        """Test every decoded class field."""
        cls = decode_class(2, class_text())

        assert cls.id == 2
        assert cls.name == "Fighter"
        assert cls.name_abbr == "Fig"
        assert cls.sexes == SexFlag.MALE | SexFlag.FEMALE
        assert cls.alignments == AlignmentFlag.GOOD | AlignmentFlag.NEUTRAL | AlignmentFlag.EVIL
        assert cls.stats == (11, 0, 0)
        assert cls.ac_expr == "10"
        assert cls.hit_expr == "LV/3"
        assert cls.attack_count_expr == "1"
        assert cls.barehand_damage_expr == ("1", "2", "0")
        assert cls.attack_debuff == DebuffFlag(0)
        assert cls.thief_skill == 0
        assert cls.can_identify is False
        assert cls.dispel_level is None
        assert cls.dispel_kinds == MonsterKindFlag(0)
        assert cls.hp_expr == "10"
        assert cls.xp_expr == "1000"
        assert cls.description == "A warrior"
        assert cls.inventory_bonus == 0
        assert cls.appear_condition == "true"

    def test_dispel(self, class_text: Callable[..., str]) -> None:
        """Test a class that dispels undead from level 5."""
        cls = decode_class(0, class_text({12: "5", 13: "a"}))

        assert cls.dispel_level == 5
        assert cls.dispel_kinds == MonsterKindFlag.UNDEAD

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("0", DebuffFlag(0)), ("1", DebuffFlag.KNOCKOUT), ("2", DebuffFlag.CRITICAL)],
    )
    def test_attack_debuff_codes(self, class_text: Callable[..., str], code: str, expected: DebuffFlag) -> None:
        """Test the class attack debuff value codes."""
        assert decode_class(0, class_text({9: code})).attack_debuff == expected

    def test_attack_debuff_item_only_code(self, class_text: Callable[..., str]) -> None:
        """Test codes only items may use are rejected for classes."""
        with pytest.raises(UnknownEnumError) as exc_info:
            decode_class(0, class_text({9: "3"}))

        assert exc_info.value.field_index == 9

    def test_invalid_alignment(self, class_text: Callable[..., str]) -> None:
        """Test an alignment digit of 3 or more."""
        with pytest.raises(UnknownFlagBitError):
            decode_class(0, class_text({3: "3"}))

    def test_barehand_damage_arity(self, class_text: Callable[..., str]) -> None:
        """Test a barehand damage field without three parts."""
        with pytest.raises(ArityError) as exc_info:
            decode_class(0, class_text({8: "1,2"}))

        assert exc_info.value.field_index == 8

    def test_sequence_failure_is_wrapped(self, class_text: Callable[..., str]) -> None:
        """Test a failing class aborts the sequence."""
        kvs = KeyValueStore({"Class0": class_text({11: "maybe"})})

        with pytest.raises(EntityDecodeError) as exc_info:
            classes_from_kvs(kvs)

        assert str(exc_info.value).startswith("class 0: ")
