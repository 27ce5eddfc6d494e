"""Tests for the item decoder."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from javardry_spoiler.core.exceptions import (
    ArityError,
    BadMaskTokenError,
    BadReferenceError,
    EntityDecodeError,
    UnknownEnumError,
    UnknownFlagBitError,
)
from javardry_spoiler.decoding.items import (
    decode_item,
    items_from_kvs,
    parse_broken_item,
    parse_curse_masks,
    parse_equip_masks,
)
from javardry_spoiler.decoding.kvs import KeyValueStore
from javardry_spoiler.models.enums import ItemKind
from javardry_spoiler.models.flags import (
    AlignmentFlag,
    DebuffFlag,
    MonsterKindFlag,
    ResistFlag,
    SexFlag,
)


class TestEquipMasks:
    """Tests for parse_equip_masks."""

    def test_class_and_race_tokens(self) -> None:
        """Test tokens set their bits."""
        assert parse_equip_masks("class[0]<+>class[5],race[1]", index=5) == (0b100001, 0b10)

    def test_empty_field(self) -> None:
        """Test an empty field means no masks."""
        assert parse_equip_masks("", index=5) == (0, 0)

    def test_dash_sub_fields(self) -> None:
        """Test '-' sub-fields mean nobody."""
        assert parse_equip_masks("-,race[35]", index=5) == (0, 1 << 35)

    def test_index_too_large(self) -> None:
        """Test class[36] is rejected."""
        with pytest.raises(BadMaskTokenError) as exc_info:
            parse_equip_masks("class[36],-", index=5)

        assert exc_info.value.token == "class[36]"

    @pytest.mark.parametrize("raw", ["race[0],class[0]", "class[],-", "class[1] ,-", "Class[1],-"])
    def test_malformed_token(self, raw: str) -> None:
        """Test tokens of the wrong shape."""
        with pytest.raises(BadMaskTokenError):
            parse_equip_masks(raw, index=5)

    def test_sub_field_count(self) -> None:
        """Test a field without exactly two sub-fields."""
        with pytest.raises(ArityError):
            parse_equip_masks("class[0]", index=5)


class TestCurseMasks:
    """Tests for parse_curse_masks."""

    def test_alignments_and_sexes(self) -> None:
        """Test digits set flags."""
        assert parse_curse_masks("02,1", index=6) == (
            AlignmentFlag.GOOD | AlignmentFlag.EVIL,
            SexFlag.FEMALE,
        )

    def test_sentinels(self) -> None:
        """Test empty field and '-' sub-fields."""
        assert parse_curse_masks("", index=6) == (AlignmentFlag(0), SexFlag(0))
        assert parse_curse_masks("-,0", index=6) == (AlignmentFlag(0), SexFlag.MALE)

    def test_invalid_sex(self) -> None:
        """Test a sex digit of 2."""
        with pytest.raises(UnknownFlagBitError):
            parse_curse_masks("-,2", index=6)


class TestBrokenItem:
    """Tests for parse_broken_item."""

    def test_reference(self) -> None:
        """Test an item reference."""
        assert parse_broken_item("item[12]", index=21) == 12

    def test_none(self) -> None:
        """Test the '-1' sentinel."""
        assert parse_broken_item("-1", index=21) is None

    @pytest.mark.parametrize("raw", ["", "12", "item[-1]", "items[1]"])
    def test_malformed(self, raw: str) -> None:
        """Test malformed references."""
        with pytest.raises(BadReferenceError):
            parse_broken_item(raw, index=21)


class TestDecodeItem:
    """Tests for decode_item."""

    def test_fields(self, item_text: Callable[..., str]) -> None:
        """Test the default item decodes every field."""
        item = decode_item(4, item_text())

        assert item.id == 4
        assert item.name_ident == "Long Sword"
        assert item.name_unident == "Sword"
        assert item.kind is ItemKind.WEAPON
        assert item.price == 250
        assert item.stock == 10
        assert item.equip_classes == 0b100001
        assert item.equip_races == 0b10
        assert item.curse_alignments == AlignmentFlag(0)
        assert item.damage_expr == ("1", "8", "0")
        assert item.attack_debuff == DebuffFlag(0)
        assert item.broken_item_id is None
        assert item.resist == ResistFlag(0)
        assert item.description == "A plain sword"
        assert item.attack_target_count == 1
        assert item.stats_bonus == (0, 0, 0)
        assert item.hidden_in_catalog is False
        assert item.is_cursed is False

    def test_modifiers(self, item_text: Callable[..., str]) -> None:
        """Test signed modifiers, kinds and booleans."""
        item = decode_item(
            0,
            item_text(
                {
                    8: "-2",
                    9: "3",
                    12: "1",
                    13: "-1",
                    16: "ab",
                    17: "7",
                    18: "2",
                    19: "10",
                    22: "2",
                    28: "true",
                    29: "true",
                    30: "true",
                    31: "true",
                    32: "1,-1,0",
                    33: "true",
                    34: "5",
                    35: "true",
                    36: "true",
                }
            ),
        )

        assert item.ac == -2
        assert item.ac_cursed == 3
        assert item.hit_modifier == 1
        assert item.attack_count_modifier == -1
        assert item.slay_kinds == MonsterKindFlag.UNDEAD | MonsterKindFlag.DEMON
        assert item.slay_kinds.kinds()[0].label == "Undead"
        assert item.protect_kinds == MonsterKindFlag.DRAGON
        assert item.healing == 2
        assert item.spell_cancel == 10
        assert item.resist == ResistFlag.POISON
        assert item.usable_only_if_equipable is True
        assert item.effect_only_if_equipped is True
        assert item.disables_class_attack_debuff is True
        assert item.disables_class_ac is True
        assert item.stats_bonus == (1, -1, 0)
        assert item.halve_attacks_as_subweapon is True
        assert item.poison_damage == 5
        assert item.effect_only_if_equipable is True
        assert item.hidden_in_catalog is True

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("0", DebuffFlag(0)),
            ("1", DebuffFlag.KNOCKOUT),
            ("2", DebuffFlag.CRITICAL),
            ("3", DebuffFlag.SLEEP),
            ("4", DebuffFlag.PARALYSIS),
            ("5", DebuffFlag.PETRIFICATION),
        ],
    )
    def test_attack_debuff_codes(
        self, item_text: Callable[..., str], code: str, expected: DebuffFlag
    ) -> None:
        """Test each item attack debuff value code maps to one flag."""
        assert decode_item(0, item_text({14: code})).attack_debuff == expected

    def test_attack_debuff_critical_alone(self, item_text: Callable[..., str]) -> None:
        """Test code 2 decodes to critical and nothing else."""
        debuff = decode_item(0, item_text({14: "2"})).attack_debuff
        assert debuff.members() == [DebuffFlag.CRITICAL]

    def test_unknown_debuff_code(self, item_text: Callable[..., str]) -> None:
        """Test an undefined debuff code."""
        with pytest.raises(UnknownEnumError):
            decode_item(0, item_text({14: "6"}))

    def test_unknown_kind(self, item_text: Callable[..., str]) -> None:
        """Test an undefined item kind."""
        with pytest.raises(UnknownEnumError) as exc_info:
            decode_item(0, item_text({2: "7"}))

        assert exc_info.value.field_index == 2

    def test_curse(self, item_text: Callable[..., str]) -> None:
        """Test curse masks and the derived properties."""
        item = decode_item(0, item_text({6: "-,01"}))

        assert item.curse_sexes == SexFlag.MALE | SexFlag.FEMALE
        assert item.is_cursed is True
        assert item.is_always_cursed is True

    def test_arity(self, item_text: Callable[..., str]) -> None:
        """Test an item with too few fields."""
        with pytest.raises(ArityError) as exc_info:
            decode_item(0, item_text(fields=38))

        assert exc_info.value.expected == 39

    def test_sequence(self, item_text: Callable[..., str]) -> None:
        """Test the sequence stops at a gap and wraps failures."""
        kvs = KeyValueStore({"Item0": item_text(), "Item1": item_text(), "Item3": "garbage"})
        assert len(items_from_kvs(kvs)) == 2

        bad = KeyValueStore({"Item0": item_text({2: "99"})})
        with pytest.raises(EntityDecodeError) as exc_info:
            items_from_kvs(bad)

        assert str(exc_info.value).startswith("item 0: invalid item kind value: 99")
