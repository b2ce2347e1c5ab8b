"""World store — placement state for every interactable in the story.

The store maps each identifier to exactly one Interactable. An identifier's
kind never changes after construction; commands only ever replace an object
with an updated copy of the same kind.

Construction folds the manifest left-to-right (items, then locations, then
characters). A duplicate identifier silently overwrites the earlier entry, so
the last declaration wins. This is the only place an overwrite happens.

Queries that return several objects iterate identifiers in ascending order.
That order is visible to hosts and must stay stable.

apply() is pure and total: an unknown identifier or a kind mismatch leaves the
store unchanged. Story-level commands (move_to, load_scene, end_story) belong
to the story reducer and are ignored here.
"""

from __future__ import annotations

import logging
from typing import Any, assert_never

from pydantic import BaseModel, ConfigDict, PrivateAttr

from storystate.commands import (
    AddLocation,
    ChangeCommand,
    EndStory,
    LoadScene,
    MoveCharacterOffScreen,
    MoveCharacterToLocation,
    MoveItemOffScreen,
    MoveItemToInventory,
    MoveItemToLocation,
    MoveItemToLocationFixed,
    MoveTo,
    RemoveLocation,
)
from storystate.models import (
    Attributes,
    Character,
    InInventory,
    InLocation,
    Interactable,
    Item,
    Location,
    Manifest,
    OffScreen,
)

logger = logging.getLogger(__name__)


class WorldStore(BaseModel):
    model_config = ConfigDict(frozen=True)

    # (id, object) pairs in ascending id order
    objects: tuple[tuple[str, Interactable], ...] = ()

    _index: dict[str, Interactable] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._index.update(self.objects)

    @classmethod
    def from_manifest(cls, manifest: Manifest) -> WorldStore:
        objects: dict[str, Interactable] = {}
        for id, attributes in manifest.items:
            objects[id] = Item(attributes=attributes)
        for id, attributes in manifest.locations:
            objects[id] = Location(attributes=attributes)
        for id, attributes in manifest.characters:
            objects[id] = Character(attributes=attributes)
        return cls._from_index(objects)

    @classmethod
    def _from_index(cls, objects: dict[str, Interactable]) -> WorldStore:
        return cls(objects=tuple(sorted(objects.items(), key=lambda pair: pair[0])))

    # ------------------------------------------------------------------
    # Lookups and classification
    # ------------------------------------------------------------------

    def get(self, id: str) -> Interactable | None:
        """A detached copy of the object stored under *id*."""
        obj = self._index.get(id)
        return obj.model_copy(deep=True) if obj is not None else None

    def get_attributes(self, id: str) -> Attributes | None:
        obj = self._index.get(id)
        return dict(obj.attributes) if obj is not None else None

    def is_item(self, id: str) -> bool:
        return isinstance(self._index.get(id), Item)

    def is_location(self, id: str) -> bool:
        return isinstance(self._index.get(id), Location)

    def is_character(self, id: str) -> bool:
        return isinstance(self._index.get(id), Character)

    # ------------------------------------------------------------------
    # Placement queries (ascending id order, attributes are copies)
    # ------------------------------------------------------------------

    def get_items_in_inventory(self) -> list[tuple[str, Attributes]]:
        return [
            (id, dict(obj.attributes))
            for id, obj in self.objects
            if isinstance(obj, Item) and isinstance(obj.placement, InInventory)
        ]

    def get_discovered_locations(self) -> list[tuple[str, Attributes]]:
        return [
            (id, dict(obj.attributes))
            for id, obj in self.objects
            if isinstance(obj, Location) and obj.discovered
        ]

    def get_items_in_location(self, location: str) -> list[tuple[str, Attributes]]:
        return [
            (id, dict(obj.attributes))
            for id, obj in self.objects
            if isinstance(obj, Item) and obj.placement == InLocation(location=location)
        ]

    def get_characters_in_location(self, location: str) -> list[tuple[str, Attributes]]:
        return [
            (id, dict(obj.attributes))
            for id, obj in self.objects
            if isinstance(obj, Character) and obj.placement == InLocation(location=location)
        ]

    def item_is_in_inventory(self, id: str) -> bool:
        obj = self._index.get(id)
        return isinstance(obj, Item) and isinstance(obj.placement, InInventory)

    def item_is_in_location(self, id: str, location: str) -> bool:
        obj = self._index.get(id)
        return isinstance(obj, Item) and obj.placement == InLocation(location=location)

    def character_is_in_location(self, id: str, location: str) -> bool:
        obj = self._index.get(id)
        return isinstance(obj, Character) and obj.placement == InLocation(location=location)

    # ------------------------------------------------------------------
    # Command application
    # ------------------------------------------------------------------

    def _replace(self, id: str, obj: Interactable) -> WorldStore:
        return self._from_index({**self._index, id: obj})

    def _update_item(self, id: str, **changes) -> WorldStore:
        obj = self._index.get(id)
        if not isinstance(obj, Item):
            logger.debug("ignored item command id=%s: not an item", id)
            return self
        return self._replace(id, obj.model_copy(update=changes))

    def _update_location(self, id: str, **changes) -> WorldStore:
        obj = self._index.get(id)
        if not isinstance(obj, Location):
            logger.debug("ignored location command id=%s: not a location", id)
            return self
        return self._replace(id, obj.model_copy(update=changes))

    def _update_character(self, id: str, **changes) -> WorldStore:
        obj = self._index.get(id)
        if not isinstance(obj, Character):
            logger.debug("ignored character command id=%s: not a character", id)
            return self
        return self._replace(id, obj.model_copy(update=changes))

    def apply(self, command: ChangeCommand) -> WorldStore:
        """Return a new store with *command* applied; this store is left untouched."""
        if isinstance(command, AddLocation):
            return self._update_location(command.location, discovered=True)

        elif isinstance(command, RemoveLocation):
            return self._update_location(command.location, discovered=False)

        elif isinstance(command, MoveItemToInventory):
            obj = self._index.get(command.item)
            if isinstance(obj, Item) and obj.fixed:
                logger.debug("ignored move_item_to_inventory id=%s: item is fixed", command.item)
                return self
            return self._update_item(command.item, placement=InInventory(), fixed=False)

        elif isinstance(command, MoveItemToLocation):
            return self._update_item(
                command.item, placement=InLocation(location=command.location), fixed=False,
            )

        elif isinstance(command, MoveItemToLocationFixed):
            return self._update_item(
                command.item, placement=InLocation(location=command.location), fixed=True,
            )

        elif isinstance(command, MoveItemOffScreen):
            return self._update_item(command.item, placement=OffScreen(), fixed=False)

        elif isinstance(command, MoveCharacterToLocation):
            return self._update_character(
                command.character, placement=InLocation(location=command.location),
            )

        elif isinstance(command, MoveCharacterOffScreen):
            return self._update_character(command.character, placement=OffScreen())

        elif isinstance(command, (MoveTo, LoadScene, EndStory)):
            logger.debug("ignored story-level command kind=%s in world store", command.kind)
            return self

        else:
            assert_never(command)
