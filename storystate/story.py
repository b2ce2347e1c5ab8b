"""Story reducer — the single entry point that advances a story.

Each call to update() takes an immutable Story value and an event and returns
a new Story value. Nothing reachable from the input is mutated, so a host may
keep old values around for undo or time-travel debugging.

Interaction flow for update(Interact(id), story):
  1. Find the matching rule in the current scene (smallest rule id wins).
  2. Matched:
       apply the rule's changes (earliest-declared command wins on conflicts),
       prepend (scene, rule id, attributes, narration) to the story line,
       credit the trigger to the rule in the scene it matched in.
  3. Not matched (default behavior):
       location → move there; item → pick it up; anything else → nothing.
       Prepend (scene, None, attributes, None) to the story line.
  4. Append the id to the interaction history.

Commands are routed here: move_to, load_scene and end_story change the story's
own fields; every other command is handed to WorldStore.apply().
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Annotated, Literal, assert_never

from pydantic import BaseModel, ConfigDict, Field

from storystate.commands import ChangeCommand, EndStory, LoadScene, MoveItemToInventory, MoveTo
from storystate.models import Attributes, Manifest
from storystate.scenes import SceneDeclarations, SceneRegistry, find_matching_rule, get_narration
from storystate.world import WorldStore

logger = logging.getLogger(__name__)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class NarrationEntry(_Frozen):
    """One line of the story line. rule_id and narration are None for default behavior."""

    scene: str
    rule_id: str | None = None
    attributes: Attributes | None = None
    narration: str | None = None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class Interact(_Frozen):
    kind: Literal["interact"] = "interact"
    id: str


class NoOp(_Frozen):
    kind: Literal["no_op"] = "no_op"


Event = Annotated[Interact | NoOp, Field(discriminator="kind")]


def interact(id: str) -> Interact:
    return Interact(id=id)


# ---------------------------------------------------------------------------
# Story state
# ---------------------------------------------------------------------------

class Story(_Frozen):
    world: WorldStore = Field(default_factory=WorldStore)
    scenes: SceneRegistry = Field(default_factory=SceneRegistry)
    current_scene: str = ""
    current_location: str = ""
    history: tuple[str, ...] = ()
    story_line: tuple[NarrationEntry, ...] = ()  # most recent first
    ending: str | None = None

    def get_current_scene(self) -> str:
        return self.current_scene

    def get_current_location(self) -> str:
        return self.current_location

    def get_items_in_current_location(self) -> list[tuple[str, Attributes]]:
        return self.world.get_items_in_location(self.current_location)

    def get_characters_in_current_location(self) -> list[tuple[str, Attributes]]:
        return self.world.get_characters_in_location(self.current_location)

    def get_items_in_inventory(self) -> list[tuple[str, Attributes]]:
        return self.world.get_items_in_inventory()

    def get_discovered_locations(self) -> list[tuple[str, Attributes]]:
        return self.world.get_discovered_locations()

    def get_story_line(self) -> tuple[NarrationEntry, ...]:
        """Entries, most recent first; each carries its own copy of the attributes."""
        return tuple(entry.model_copy(deep=True) for entry in self.story_line)

    def get_history(self) -> tuple[str, ...]:
        return self.history

    def get_ending(self) -> str | None:
        return self.ending


# ---------------------------------------------------------------------------
# Command routing
# ---------------------------------------------------------------------------

def apply_command(command: ChangeCommand, story: Story) -> Story:
    if isinstance(command, MoveTo):
        return story.model_copy(update={"current_location": command.location})
    elif isinstance(command, LoadScene):
        logger.debug("scene switch from=%s to=%s", story.current_scene, command.scene)
        return story.model_copy(update={"current_scene": command.scene})
    elif isinstance(command, EndStory):
        logger.debug("story ended ending=%r", command.ending)
        return story.model_copy(update={"ending": command.ending})
    else:
        return story.model_copy(update={"world": story.world.apply(command)})


def apply_changes(changes: Iterable[ChangeCommand], story: Story) -> Story:
    """Apply a change list so that the earliest-declared command wins.

    Commands run last-to-first; when two commands touch the same field, the
    one declared first is applied last and its effect is what remains.
    """
    for command in reversed(list(changes)):
        story = apply_command(command, story)
    return story


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def init(
    manifest: Manifest,
    scenes: SceneDeclarations,
    setup: Iterable[ChangeCommand] = (),
) -> Story:
    """Build the initial story and run the setup commands through the router."""
    story = Story(
        world=WorldStore.from_manifest(manifest),
        scenes=SceneRegistry.from_declarations(scenes),
    )
    return apply_changes(setup, story)


def _default_changes(id: str, world: WorldStore) -> list[ChangeCommand]:
    if world.is_location(id):
        return [MoveTo(location=id)]
    if world.is_item(id):
        return [MoveItemToInventory(item=id)]
    return []


def _interact(id: str, story: Story) -> Story:
    if story.ending is not None:
        logger.debug("interaction after ending=%r id=%s", story.ending, id)

    scene_id = story.current_scene
    attributes = story.world.get_attributes(id)
    matched = find_matching_rule(
        story.scenes.get_scene(scene_id), id, story.current_location, story.world,
    )

    if matched is not None:
        rule_id, live_rule = matched
        logger.debug("rule matched scene=%s rule=%s id=%s", scene_id, rule_id, id)
        entry = NarrationEntry(
            scene=scene_id, rule_id=rule_id, attributes=attributes,
            narration=get_narration(live_rule),
        )
        story = apply_changes(live_rule.rule.changes, story)
        # Credit the scene the rule matched in, even if its changes switched scenes.
        story = story.model_copy(update={"scenes": story.scenes.consume(scene_id, rule_id)})
    else:
        logger.debug("no rule matched scene=%s id=%s, default behavior", scene_id, id)
        entry = NarrationEntry(scene=scene_id, attributes=attributes)
        story = apply_changes(_default_changes(id, story.world), story)

    return story.model_copy(update={
        "story_line": (entry, *story.story_line),
        "history": (*story.history, id),
    })


def update(event: Event, story: Story) -> Story:
    if isinstance(event, Interact):
        return _interact(event.id, story)
    elif isinstance(event, NoOp):
        return story
    else:
        assert_never(event)
