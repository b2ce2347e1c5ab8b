"""Tests for storystate.world — construction, queries and command application."""

from storystate.commands import (
    add_location,
    end_story,
    load_scene,
    move_character_off_screen,
    move_character_to_location,
    move_item_off_screen,
    move_item_to_inventory,
    move_item_to_location,
    move_item_to_location_fixed,
    move_to,
    remove_location,
)
from storystate.models import InInventory, InLocation, Item, Location, Manifest, OffScreen
from storystate.world import WorldStore


# ── Construction ────────────────────────────────────────────


def test_defaults_from_manifest(world):
    assert world.get("Umbrella") == Item(attributes={"name": "Umbrella"})
    assert world.get("Home") == Location(attributes={"name": "Home"})
    assert world.get("Harry").placement == OffScreen()


def test_duplicate_id_within_list_last_wins():
    world = WorldStore.from_manifest(Manifest(items=[("Key", {"v": 1}), ("Key", {"v": 2})]))
    assert world.get_attributes("Key") == {"v": 2}


def test_duplicate_id_across_lists_last_kind_wins():
    """Items, then locations, then characters: the character declaration survives."""
    world = WorldStore.from_manifest(Manifest(
        items=[("Ghost", {"from": "items"})],
        locations=[("Ghost", {"from": "locations"})],
        characters=[("Ghost", {"from": "characters"})],
    ))
    assert world.is_character("Ghost")
    assert not world.is_item("Ghost")
    assert not world.is_location("Ghost")
    assert world.get_attributes("Ghost") == {"from": "characters"}


def test_empty_manifest():
    world = WorldStore.from_manifest(Manifest())
    assert world.objects == ()
    assert world.get_items_in_inventory() == []


# ── Lookups ─────────────────────────────────────────────────


def test_get_attributes_unknown_is_none(world):
    assert world.get_attributes("Nope") is None
    assert world.get("Nope") is None


def test_classification(world):
    assert world.is_item("Key")
    assert world.is_location("Garden")
    assert world.is_character("Harry")
    assert not world.is_item("Garden")
    assert not world.is_location("Nope")
    assert not world.is_character("Key")


# ── Locations ───────────────────────────────────────────────


def test_add_and_remove_known_location(world):
    world = world.apply(add_location("Garden"))
    assert world.get_discovered_locations() == [("Garden", {"name": "Garden"})]
    world = world.apply(remove_location("Garden"))
    assert world.get_discovered_locations() == []


def test_add_location_ignores_wrong_kind_and_unknown(world):
    assert world.apply(add_location("Key")) == world
    assert world.apply(add_location("Atlantis")) == world
    assert world.apply(remove_location("Harry")) == world


def test_discovered_locations_sorted(world):
    world = world.apply(add_location("Home")).apply(add_location("Garden"))
    assert [id for id, _ in world.get_discovered_locations()] == ["Garden", "Home"]


# ── Items ───────────────────────────────────────────────────


def test_move_item_to_inventory(world):
    world = world.apply(move_item_to_inventory("Key"))
    assert world.item_is_in_inventory("Key")
    assert world.get("Key").placement == InInventory()
    assert world.get("Key").fixed is False


def test_fixed_item_cannot_be_picked_up(world):
    world = world.apply(move_item_to_location_fixed("Anchor", "Garden"))
    after = world.apply(move_item_to_inventory("Anchor"))
    assert after == world
    assert after.get("Anchor").fixed is True
    assert after.item_is_in_location("Anchor", "Garden")
    assert not after.item_is_in_inventory("Anchor")


def test_move_item_to_location_unfixes(world):
    world = world.apply(move_item_to_location_fixed("Anchor", "Garden"))
    world = world.apply(move_item_to_location("Anchor", "Home"))
    assert world.get("Anchor").fixed is False
    world = world.apply(move_item_to_inventory("Anchor"))
    assert world.item_is_in_inventory("Anchor")


def test_move_item_off_screen_unfixes(world):
    world = world.apply(move_item_to_location_fixed("Anchor", "Garden"))
    world = world.apply(move_item_off_screen("Anchor"))
    assert world.get("Anchor") == Item(attributes={"name": "Anchor"})


def test_item_placement_is_exclusive(world):
    world = world.apply(move_item_to_inventory("Key"))
    world = world.apply(move_item_to_location("Key", "Garden"))
    assert not world.item_is_in_inventory("Key")
    assert world.item_is_in_location("Key", "Garden")
    assert not world.item_is_in_location("Key", "Home")
    world = world.apply(move_item_off_screen("Key"))
    assert not world.item_is_in_location("Key", "Garden")
    assert world.get_items_in_inventory() == []


def test_item_commands_ignore_non_items(world):
    assert world.apply(move_item_to_inventory("Harry")) == world
    assert world.apply(move_item_to_location("Garden", "Home")) == world
    assert world.apply(move_item_to_location_fixed("Nope", "Home")) == world
    assert world.apply(move_item_off_screen("Home")) == world


def test_items_in_inventory_sorted(world):
    for id in ("Umbrella", "Key", "Anchor"):
        world = world.apply(move_item_to_inventory(id))
    assert [id for id, _ in world.get_items_in_inventory()] == ["Anchor", "Key", "Umbrella"]


def test_items_in_location(world):
    world = world.apply(move_item_to_location("Umbrella", "Home"))
    world = world.apply(move_item_to_location_fixed("Anchor", "Home"))
    world = world.apply(move_item_to_location("Key", "Garden"))
    assert world.get_items_in_location("Home") == [
        ("Anchor", {"name": "Anchor"}),
        ("Umbrella", {"name": "Umbrella"}),
    ]
    assert world.get_items_in_location("Nowhere") == []


# ── Characters ──────────────────────────────────────────────


def test_move_character(world):
    world = world.apply(move_character_to_location("Harry", "Garden"))
    assert world.character_is_in_location("Harry", "Garden")
    assert world.get_characters_in_location("Garden") == [("Harry", {"name": "Harry"})]
    world = world.apply(move_character_to_location("Harry", "Home"))
    assert not world.character_is_in_location("Harry", "Garden")
    world = world.apply(move_character_off_screen("Harry"))
    assert world.get("Harry").placement == OffScreen()
    assert world.get_characters_in_location("Home") == []


def test_character_commands_ignore_non_characters(world):
    assert world.apply(move_character_to_location("Key", "Home")) == world
    assert world.apply(move_character_off_screen("Nope")) == world


def test_character_queries_on_items(world):
    world = world.apply(move_item_to_location("Key", "Home"))
    assert not world.character_is_in_location("Key", "Home")
    assert world.get_characters_in_location("Home") == []


# ── Story-level commands and copy-on-write ──────────────────


def test_story_level_commands_ignored(world):
    assert world.apply(move_to("Garden")) == world
    assert world.apply(load_scene("other")) == world
    assert world.apply(end_story("The End")) == world


def test_apply_leaves_original_untouched(world):
    before = world.model_copy(deep=True)
    after = world.apply(move_item_to_inventory("Key")).apply(add_location("Home"))
    assert world == before
    assert world.get("Key").placement == OffScreen()
    assert after.get("Key").placement == InInventory()
    assert after.objects is not world.objects


def test_in_location_equality():
    assert InLocation(location="Home") == InLocation(location="Home")
    assert InLocation(location="Home") != InLocation(location="Garden")


def test_get_returns_detached_copy(world):
    world.get("Key").attributes["name"] = "Changed"
    assert world.get_attributes("Key") == {"name": "Key"}
    assert world.get("Key") == Item(attributes={"name": "Key"})
