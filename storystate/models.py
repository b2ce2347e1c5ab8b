"""Core world models.

Every interactable object in a story is one of three kinds: an Item, a
Location or a Character. Each carries its own placement state plus an opaque
bag of author-supplied attributes that the engine threads through to the host
without ever looking inside.

All models are frozen pydantic models. State changes always produce new values
via model_copy(); nothing here is mutated in place.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Attributes = dict[str, Any]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------

class OffScreen(_Frozen):
    kind: Literal["off_screen"] = "off_screen"


class InInventory(_Frozen):
    kind: Literal["in_inventory"] = "in_inventory"


class InLocation(_Frozen):
    kind: Literal["in_location"] = "in_location"
    location: str


ItemPlacement = Annotated[
    OffScreen | InInventory | InLocation, Field(discriminator="kind")
]
CharacterPlacement = Annotated[OffScreen | InLocation, Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Interactables
# ---------------------------------------------------------------------------

class Item(_Frozen):
    """Something the player can pick up, unless it has been fixed in place."""

    kind: Literal["item"] = "item"
    attributes: Attributes = Field(default_factory=dict)
    fixed: bool = False
    placement: ItemPlacement = Field(default_factory=OffScreen)


class Location(_Frozen):
    """A place; shown to the player once discovered."""

    kind: Literal["location"] = "location"
    attributes: Attributes = Field(default_factory=dict)
    discovered: bool = False


class Character(_Frozen):
    kind: Literal["character"] = "character"
    attributes: Attributes = Field(default_factory=dict)
    placement: CharacterPlacement = Field(default_factory=OffScreen)


Interactable = Annotated[Item | Location | Character, Field(discriminator="kind")]


class Manifest(_Frozen):
    """Initial declaration of every interactable, as ordered (id, attributes) pairs."""

    items: tuple[tuple[str, Attributes], ...] = ()
    locations: tuple[tuple[str, Attributes], ...] = ()
    characters: tuple[tuple[str, Attributes], ...] = ()
