"""Change commands — declarative intents attached to rules and setup lists.

Commands are plain tagged values. They are interpreted later:

    move_to, load_scene, end_story   → applied by the story reducer to its own fields
    everything else                  → applied by WorldStore.apply()

The lowercase builder functions at the bottom are the authoring vocabulary.
No validation happens at construction time; a command naming an unknown id
simply does nothing when applied.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Story-level commands
# ---------------------------------------------------------------------------

class MoveTo(_Command):
    kind: Literal["move_to"] = "move_to"
    location: str


class LoadScene(_Command):
    kind: Literal["load_scene"] = "load_scene"
    scene: str


class EndStory(_Command):
    kind: Literal["end_story"] = "end_story"
    ending: str


# ---------------------------------------------------------------------------
# World-level commands
# ---------------------------------------------------------------------------

class AddLocation(_Command):
    kind: Literal["add_location"] = "add_location"
    location: str


class RemoveLocation(_Command):
    kind: Literal["remove_location"] = "remove_location"
    location: str


class MoveItemToInventory(_Command):
    kind: Literal["move_item_to_inventory"] = "move_item_to_inventory"
    item: str


class MoveItemToLocation(_Command):
    kind: Literal["move_item_to_location"] = "move_item_to_location"
    item: str
    location: str


class MoveItemToLocationFixed(_Command):
    kind: Literal["move_item_to_location_fixed"] = "move_item_to_location_fixed"
    item: str
    location: str


class MoveItemOffScreen(_Command):
    kind: Literal["move_item_off_screen"] = "move_item_off_screen"
    item: str


class MoveCharacterToLocation(_Command):
    kind: Literal["move_character_to_location"] = "move_character_to_location"
    character: str
    location: str


class MoveCharacterOffScreen(_Command):
    kind: Literal["move_character_off_screen"] = "move_character_off_screen"
    character: str


StoryCommand = MoveTo | LoadScene | EndStory
WorldCommand = (
    AddLocation
    | RemoveLocation
    | MoveItemToInventory
    | MoveItemToLocation
    | MoveItemToLocationFixed
    | MoveItemOffScreen
    | MoveCharacterToLocation
    | MoveCharacterOffScreen
)
ChangeCommand = Annotated[StoryCommand | WorldCommand, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Authoring vocabulary
# ---------------------------------------------------------------------------

def move_to(location: str) -> MoveTo:
    return MoveTo(location=location)


def load_scene(scene: str) -> LoadScene:
    return LoadScene(scene=scene)


def end_story(ending: str) -> EndStory:
    return EndStory(ending=ending)


def add_location(location: str) -> AddLocation:
    return AddLocation(location=location)


def remove_location(location: str) -> RemoveLocation:
    return RemoveLocation(location=location)


def move_item_to_inventory(item: str) -> MoveItemToInventory:
    return MoveItemToInventory(item=item)


def move_item_to_location(item: str, location: str) -> MoveItemToLocation:
    """Place an item in a location, unfixed (the player may pick it up)."""
    return MoveItemToLocation(item=item, location=location)


def move_item_to_location_fixed(item: str, location: str) -> MoveItemToLocationFixed:
    """Place an item in a location where the player cannot pick it up."""
    return MoveItemToLocationFixed(item=item, location=location)


def move_item_off_screen(item: str) -> MoveItemOffScreen:
    return MoveItemOffScreen(item=item)


def move_character_to_location(character: str, location: str) -> MoveCharacterToLocation:
    return MoveCharacterToLocation(character=character, location=location)


def move_character_off_screen(character: str) -> MoveCharacterOffScreen:
    return MoveCharacterOffScreen(character=character)
