"""Bundled demo story: a note from Harry and a walk to the marsh."""

from __future__ import annotations

from storystate.commands import (
    add_location,
    end_story,
    load_scene,
    move_character_to_location,
    move_item_to_inventory,
    move_item_to_location,
    move_item_to_location_fixed,
    move_to,
)
from storystate.models import Manifest
from storystate.rules import (
    Rule,
    character_is_in_location,
    current_location_is,
    current_location_is_not,
    item_is_in_inventory,
    with_character,
    with_item,
    with_location,
)
from storystate.story import Story, init

DEMO_MANIFEST = Manifest(
    items=[
        ("NoteFromHarry", {"name": "Note from Harry", "description": "A folded scrap of paper."}),
        ("Umbrella", {"name": "Umbrella", "description": "Black, slightly bent."}),
        ("Well", {"name": "Old well", "description": "Moss-covered stones around a dark hole."}),
    ],
    locations=[
        ("Home", {"name": "Home", "description": "Your small cottage."}),
        ("Garden", {"name": "Garden", "description": "Overgrown, but pleasant."}),
        ("Marsh", {"name": "Marsh", "description": "Reeds, mud and mist."}),
    ],
    characters=[
        ("Harry", {"name": "Harry", "description": "Your neighbour, oddly nervous today."}),
    ],
)


def demo_scenes() -> list[tuple[str, list[tuple[str, Rule]]]]:
    """Scene declarations, built on call so authoring errors surface to the caller."""
    return [
        ("scene1", [
            ("harryGivesNote", Rule(
                interaction=with_character("Harry"),
                conditions=[current_location_is("Garden")],
                changes=[
                    move_character_to_location("Harry", "Marsh"),
                    move_item_to_inventory("NoteFromHarry"),
                ],
                narrations=[
                    "He gives you a note, then runs off.",
                    "I wonder what he wants?",
                ],
            )),
            ("readNote", Rule(
                interaction=with_item("NoteFromHarry"),
                conditions=[item_is_in_inventory("NoteFromHarry")],
                changes=[add_location("Marsh"), load_scene("searchForHarry")],
                narrations=["\"Meet me in the marsh. Bring an umbrella.\""],
            )),
        ]),
        ("searchForHarry", [
            ("findHarry", Rule(
                interaction=with_location("Marsh"),
                conditions=[
                    character_is_in_location("Harry", "Marsh"),
                    item_is_in_inventory("Umbrella"),
                ],
                changes=[move_to("Marsh"), end_story("The End")],
                narrations=["Harry waits under your umbrella and finally tells you everything."],
            )),
            ("tooWet", Rule(
                interaction=with_location("Marsh"),
                conditions=[current_location_is_not("Marsh")],
                changes=[],
                narrations=[
                    "It is pouring. You will need something to keep the rain off.",
                    "Still pouring.",
                ],
            )),
        ]),
    ]


DEMO_SETUP = [
    move_to("Home"),
    load_scene("scene1"),
    add_location("Home"),
    add_location("Garden"),
    move_item_to_location("Umbrella", "Home"),
    move_item_to_location_fixed("Well", "Garden"),
    move_character_to_location("Harry", "Garden"),
]


def new_demo_story() -> Story:
    return init(DEMO_MANIFEST, demo_scenes(), DEMO_SETUP)
