"""The decoded scenario aggregate."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from javardry_spoiler.models.entities import (
    CharacterClass,
    Item,
    Monster,
    Race,
    SpellRealm,
    Stat,
)


class Scenario(BaseModel):
    """Every entity of one scenario file, decoded in a single pass.

    Entity collections are ordered by id, so ``scenario.items[n].id == n``.

    Example:
        >>> scenario = load_plaintext(text)
        >>> scenario.title
        'Proving Grounds'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    editor_version: str = Field(description="Version of the editor that wrote the file")
    id: str = Field(description="Scenario identifier")
    title: str = Field(description="Scenario title")
    stats: tuple[Stat, ...] = Field(default=(), description="Character stats")
    races: tuple[Race, ...] = Field(default=(), description="Playable races")
    classes: tuple[CharacterClass, ...] = Field(default=(), description="Playable classes")
    spell_realms: tuple[SpellRealm, ...] = Field(default=(), description="Spell realms")
    items: tuple[Item, ...] = Field(default=(), description="Items")
    monsters: tuple[Monster, ...] = Field(default=(), description="Monsters")

    def item_name(self, item_id: int | None) -> str | None:
        """Look up an item's identified name without failing on bad ids.

        Args:
            item_id: Item id, possibly dangling.

        Returns:
            The identified name, or None if the id is None or out of range.
        """
        if item_id is None or not 0 <= item_id < len(self.items):
            return None
        return self.items[item_id].name_ident


__all__ = ["Scenario"]
