"""Rules — the declarative match-and-mutate unit of a story.

A rule fires when the player interacts with something its matcher accepts and
every one of its conditions holds:

    Rule(
        interaction=with_character("Harry"),
        conditions=[current_location_is("Garden")],
        changes=[move_character_to_location("Harry", "Marsh")],
        narrations=["He runs off.", "He is gone."],
    )

Narrations are consumed one per trigger and the last one repeats; the trigger
count lives in the scene registry (see storystate.scenes), never on the rule.
"""

from __future__ import annotations

from typing import Annotated, Literal, assert_never

from pydantic import BaseModel, ConfigDict, Field

from storystate.commands import ChangeCommand
from storystate.world import WorldStore


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Interaction matchers
# ---------------------------------------------------------------------------

class WithAnything(_Frozen):
    kind: Literal["with_anything"] = "with_anything"


class WithAnyItem(_Frozen):
    kind: Literal["with_any_item"] = "with_any_item"


class WithAnyLocation(_Frozen):
    kind: Literal["with_any_location"] = "with_any_location"


class WithAnyCharacter(_Frozen):
    kind: Literal["with_any_character"] = "with_any_character"


class WithSpecific(_Frozen):
    """Matches one identifier. `entity` records what the author meant it to be."""

    kind: Literal["with_specific"] = "with_specific"
    entity: Literal["item", "location", "character"]
    id: str


InteractionMatcher = Annotated[
    WithAnything | WithAnyItem | WithAnyLocation | WithAnyCharacter | WithSpecific,
    Field(discriminator="kind"),
]


def matches_interaction(matcher: InteractionMatcher, interacted_id: str, world: WorldStore) -> bool:
    if isinstance(matcher, WithAnything):
        return True
    elif isinstance(matcher, WithAnyItem):
        return world.is_item(interacted_id)
    elif isinstance(matcher, WithAnyLocation):
        return world.is_location(interacted_id)
    elif isinstance(matcher, WithAnyCharacter):
        return world.is_character(interacted_id)
    elif isinstance(matcher, WithSpecific):
        # Identity only: the id's kind in the world is not re-checked.
        return matcher.id == interacted_id
    else:
        assert_never(matcher)


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------

class ItemIsInInventory(_Frozen):
    kind: Literal["item_is_in_inventory"] = "item_is_in_inventory"
    item: str


class ItemIsNotInInventory(_Frozen):
    kind: Literal["item_is_not_in_inventory"] = "item_is_not_in_inventory"
    item: str


class CharacterIsInLocation(_Frozen):
    kind: Literal["character_is_in_location"] = "character_is_in_location"
    character: str
    location: str


class CharacterIsNotInLocation(_Frozen):
    kind: Literal["character_is_not_in_location"] = "character_is_not_in_location"
    character: str
    location: str


class ItemIsInLocation(_Frozen):
    kind: Literal["item_is_in_location"] = "item_is_in_location"
    item: str
    location: str


class ItemIsNotInLocation(_Frozen):
    kind: Literal["item_is_not_in_location"] = "item_is_not_in_location"
    item: str
    location: str


class CurrentLocationIs(_Frozen):
    kind: Literal["current_location_is"] = "current_location_is"
    location: str


class CurrentLocationIsNot(_Frozen):
    kind: Literal["current_location_is_not"] = "current_location_is_not"
    location: str


Condition = Annotated[
    ItemIsInInventory
    | ItemIsNotInInventory
    | CharacterIsInLocation
    | CharacterIsNotInLocation
    | ItemIsInLocation
    | ItemIsNotInLocation
    | CurrentLocationIs
    | CurrentLocationIsNot,
    Field(discriminator="kind"),
]


def condition_holds(condition: Condition, current_location: str, world: WorldStore) -> bool:
    """Evaluate one condition. The "not" variants are exact negations."""
    if isinstance(condition, ItemIsInInventory):
        return world.item_is_in_inventory(condition.item)
    elif isinstance(condition, ItemIsNotInInventory):
        return not world.item_is_in_inventory(condition.item)
    elif isinstance(condition, CharacterIsInLocation):
        return world.character_is_in_location(condition.character, condition.location)
    elif isinstance(condition, CharacterIsNotInLocation):
        return not world.character_is_in_location(condition.character, condition.location)
    elif isinstance(condition, ItemIsInLocation):
        return world.item_is_in_location(condition.item, condition.location)
    elif isinstance(condition, ItemIsNotInLocation):
        return not world.item_is_in_location(condition.item, condition.location)
    elif isinstance(condition, CurrentLocationIs):
        return current_location == condition.location
    elif isinstance(condition, CurrentLocationIsNot):
        return current_location != condition.location
    else:
        assert_never(condition)


# ---------------------------------------------------------------------------
# Rule
# ---------------------------------------------------------------------------

class Rule(_Frozen):
    interaction: InteractionMatcher
    conditions: tuple[Condition, ...] = ()
    changes: tuple[ChangeCommand, ...] = ()
    narrations: tuple[str, ...] = Field(min_length=1)

    def matches(self, interacted_id: str, current_location: str, world: WorldStore) -> bool:
        return matches_interaction(self.interaction, interacted_id, world) and all(
            condition_holds(c, current_location, world) for c in self.conditions
        )


# ---------------------------------------------------------------------------
# Authoring vocabulary
# ---------------------------------------------------------------------------

def with_anything() -> WithAnything:
    return WithAnything()


def with_any_item() -> WithAnyItem:
    return WithAnyItem()


def with_any_location() -> WithAnyLocation:
    return WithAnyLocation()


def with_any_character() -> WithAnyCharacter:
    return WithAnyCharacter()


def with_item(id: str) -> WithSpecific:
    return WithSpecific(entity="item", id=id)


def with_location(id: str) -> WithSpecific:
    return WithSpecific(entity="location", id=id)


def with_character(id: str) -> WithSpecific:
    return WithSpecific(entity="character", id=id)


def item_is_in_inventory(item: str) -> ItemIsInInventory:
    return ItemIsInInventory(item=item)


def item_is_not_in_inventory(item: str) -> ItemIsNotInInventory:
    return ItemIsNotInInventory(item=item)


def character_is_in_location(character: str, location: str) -> CharacterIsInLocation:
    return CharacterIsInLocation(character=character, location=location)


def character_is_not_in_location(character: str, location: str) -> CharacterIsNotInLocation:
    return CharacterIsNotInLocation(character=character, location=location)


def item_is_in_location(item: str, location: str) -> ItemIsInLocation:
    return ItemIsInLocation(item=item, location=location)


def item_is_not_in_location(item: str, location: str) -> ItemIsNotInLocation:
    return ItemIsNotInLocation(item=item, location=location)


def current_location_is(location: str) -> CurrentLocationIs:
    return CurrentLocationIs(location=location)


def current_location_is_not(location: str) -> CurrentLocationIsNot:
    return CurrentLocationIsNot(location=location)
