"""Decoded scenario entities.

Every entity is an immutable Pydantic V2 model. Free-form expression
fields (AC, HP, XP and damage formulas, appearance conditions) are kept
as the opaque strings the editor wrote; evaluating them belongs to a game
rules engine, not to this decoder. Reference-like fields (equip masks,
broken-item ids, spell levels per realm) are stored raw and are not
checked against the other collections.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from javardry_spoiler.models.enums import ItemKind, MonsterKind
from javardry_spoiler.models.flags import (
    AlignmentFlag,
    DebuffFlag,
    MonsterKindFlag,
    ResistFlag,
    SexFlag,
)


# A damage expression triple: (dice count, dice faces, bonus).
DamageTriple = tuple[str, str, str]


class Entity(BaseModel):
    """Base class for all decoded entities."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


# =============================================================================
# Character Building Blocks
# =============================================================================


class Stat(Entity):
    """A character attribute such as strength or piety."""

    id: int = Field(ge=0, description="Position in the stat sequence")
    name: str = Field(description="Display name")
    name_abbr: str = Field(description="Abbreviated name")
    sex_bonus: tuple[int, int] = Field(description="Creation bonus for (male, female)")
    fixed_on_create: bool = Field(description="Bonus points cannot be assigned at creation")
    hidden: bool = Field(description="Not shown to the player")


class Race(Entity):
    """A playable race."""

    id: int = Field(ge=0, description="Position in the race sequence")
    name: str = Field(description="Display name")
    name_abbr: str = Field(description="Abbreviated name")
    stats: tuple[int, ...] = Field(description="Base value per stat, in stat order")
    lifetime: int = Field(ge=0, description="Natural lifespan in years")
    ac: int = Field(description="Armor class modifier")
    healing: int = Field(description="HP regenerated per turn")
    spell_cancel: int = Field(description="Spell cancellation chance")
    resist: ResistFlag = Field(description="Resistances")
    appear_condition: str = Field(description="Expression gating availability")
    description: str = Field(description="Flavor text")
    inventory_bonus: int = Field(description="Extra inventory slots")


class CharacterClass(Entity):
    """A playable class.

    ``dispel_level`` is ``None`` when the class cannot dispel; otherwise the
    class gains dispelling of ``dispel_kinds`` monsters from that level on.
    """

    id: int = Field(ge=0, description="Position in the class sequence")
    name: str = Field(description="Display name")
    name_abbr: str = Field(description="Abbreviated name")
    sexes: SexFlag = Field(description="Sexes allowed to take the class")
    alignments: AlignmentFlag = Field(description="Alignments allowed to take the class")
    stats: tuple[int, ...] = Field(description="Minimum value per stat, in stat order")
    ac_expr: str = Field(description="AC formula")
    hit_expr: str = Field(description="To-hit formula")
    attack_count_expr: str = Field(description="Attacks-per-round formula")
    barehand_damage_expr: DamageTriple = Field(description="Unarmed damage triple")
    attack_debuff: DebuffFlag = Field(description="Effect of unarmed attacks")
    thief_skill: int = Field(description="Thief skill level")
    can_identify: bool = Field(description="Can identify items")
    dispel_level: int | None = Field(default=None, ge=1, description="Level dispelling starts at")
    dispel_kinds: MonsterKindFlag = Field(description="Monster kinds the class can dispel")
    hp_expr: str = Field(description="HP formula")
    xp_expr: str = Field(description="Experience-per-level formula")
    description: str = Field(description="Flavor text")
    inventory_bonus: int = Field(description="Extra inventory slots")
    appear_condition: str = Field(description="Expression gating availability")


# =============================================================================
# Spells
# =============================================================================


class Spell(Entity):
    """A single spell within a realm level."""

    name: str = Field(description="Display name")
    description: str = Field(description="Flavor text")
    mp_cost: int = Field(ge=0, description="MP consumed per cast")
    ignore_silence: bool = Field(description="Castable while silenced")
    extra_learn: bool = Field(description="Not learned through normal level-up")


class SpellRealm(Entity):
    """A school of spells, organized by spell level."""

    id: int = Field(ge=0, description="Position in the realm sequence")
    name: str = Field(description="Display name")
    level_count: int = Field(ge=0, description="Number of spell levels")
    spells_by_level: tuple[tuple[Spell, ...], ...] = Field(
        description="Spells of each level, one tuple per level"
    )
    monster_only: bool = Field(description="Only monsters may cast spells of this realm")

    def spells(self) -> list[Spell]:
        """Get every spell of the realm in level order.

        Returns:
            Flat list of spells.
        """
        return [spell for level in self.spells_by_level for spell in level]


# =============================================================================
# Items
# =============================================================================


class Item(Entity):
    """An equipment piece or usable tool."""

    id: int = Field(ge=0, description="Position in the item sequence")
    name_ident: str = Field(description="Name once identified")
    name_unident: str = Field(description="Name before identification")
    kind: ItemKind = Field(description="Equipment slot or tool")
    price: int = Field(ge=0, description="Shop price")
    stock: int = Field(description="Shop stock")
    equip_classes: int = Field(ge=0, description="Bit N set if class N can equip")
    equip_races: int = Field(ge=0, description="Bit N set if race N can equip")
    curse_alignments: AlignmentFlag = Field(description="Alignments the item curses")
    curse_sexes: SexFlag = Field(description="Sexes the item curses")
    ident_difficulty: int = Field(ge=0, description="Identification difficulty")
    ac: int = Field(description="AC bonus")
    ac_cursed: int = Field(description="AC bonus when cursed")
    damage_expr: DamageTriple = Field(description="Weapon damage triple")
    hit_modifier: int = Field(description="To-hit modifier")
    attack_count_modifier: int = Field(description="Attacks-per-round modifier")
    attack_debuff: DebuffFlag = Field(description="Effect of attacks made with the item")
    healing: int = Field(description="HP regenerated per turn")
    resist: ResistFlag = Field(description="Resistances granted")
    spell_cancel: int = Field(description="Spell cancellation chance")
    slay_kinds: MonsterKindFlag = Field(description="Kinds taking extra damage")
    protect_kinds: MonsterKindFlag = Field(description="Kinds whose attacks are weakened")
    use_effect: str = Field(description="Effect when used, raw text")
    special_power: str = Field(description="Special power, raw text")
    break_prob_expr: str = Field(description="Chance to break after use")
    broken_item_id: int | None = Field(default=None, ge=0, description="Item it breaks into")
    description: str = Field(description="Flavor text")
    attack_target_count: int = Field(ge=0, description="Targets hit per attack")
    usable_only_if_equipable: bool = Field(description="Only usable by characters who can equip it")
    effect_only_if_equipped: bool = Field(description="Passive effects need it equipped")
    disables_class_attack_debuff: bool = Field(description="Suppresses the class attack effect")
    disables_class_ac: bool = Field(description="Suppresses the class AC bonus")
    stats_bonus: tuple[int, ...] = Field(description="Bonus per stat, in stat order")
    halve_attacks_as_subweapon: bool = Field(description="Halves attacks when off-hand")
    poison_damage: int = Field(ge=0, description="Poison damage inflicted")
    effect_only_if_equipable: bool = Field(description="Passive effects need equip rights")
    hidden_in_catalog: bool = Field(description="Omitted from the in-game catalog")

    @property
    def is_cursed(self) -> bool:
        """Whether the item curses anyone."""
        return bool(self.curse_alignments or self.curse_sexes)

    @property
    def is_always_cursed(self) -> bool:
        """Whether the item curses every alignment or both sexes."""
        return (
            self.curse_alignments == AlignmentFlag.defined_bits()
            or self.curse_sexes == SexFlag.defined_bits()
        )


# =============================================================================
# Monsters
# =============================================================================


class MonsterFollower(Entity):
    """Monsters that may join an encounter with the leader."""

    id_expr: str = Field(description="Monster id expression of the followers")
    probability: int = Field(ge=0, description="Spawn chance in percent")


class Monster(Entity):
    """An enemy creature."""

    id: int = Field(ge=0, description="Position in the monster sequence")
    name_ident: str = Field(description="Name once identified")
    name_unident: str = Field(description="Name before identification")
    name_plural_ident: str = Field(description="Plural name once identified")
    name_plural_unident: str = Field(description="Plural name before identification")
    kind: MonsterKind = Field(description="Monster kind")
    level_expr: str = Field(description="Level formula")
    hp_expr: str = Field(description="HP formula")
    mp_expr: str = Field(description="MP formula")
    ac_expr: str = Field(description="AC formula")
    xp_expr: str = Field(description="Experience reward formula")
    group_count_expr: str = Field(description="Group size formula")
    attack_count_expr: str = Field(description="Attacks-per-round formula")
    damage_expr: str = Field(description="Damage formula")
    stats: tuple[int, ...] = Field(description="Value per stat, in stat order")
    attack_debuff: DebuffFlag = Field(description="Effects of its attacks")
    poison_damage: int = Field(ge=0, description="Poison damage inflicted")
    drain_level: int = Field(ge=0, description="Levels drained per hit")
    spell_levels: tuple[int, ...] = Field(description="Castable spell level per realm")
    healing: int = Field(description="HP regenerated per turn")
    resist: ResistFlag = Field(description="Resistances")
    vulnerable: ResistFlag = Field(description="Vulnerabilities")
    spell_cancel: int = Field(description="Spell cancellation chance")
    can_flee: bool = Field(description="May run away")
    can_call: bool = Field(description="May call for help")
    friendly_prob: int = Field(ge=0, description="Chance of a friendly encounter")
    follower: MonsterFollower | None = Field(default=None, description="Optional follower spawn")
    invincible: bool = Field(description="Cannot be killed")
    attacks_twice: bool = Field(description="Acts twice per round")
    description: str = Field(description="Flavor text")
    hidden_in_catalog: bool = Field(description="Omitted from the in-game catalog")


__all__ = [
    "CharacterClass",
    "DamageTriple",
    "Entity",
    "Item",
    "Monster",
    "MonsterFollower",
    "Race",
    "Spell",
    "SpellRealm",
    "Stat",
]
