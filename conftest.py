import pytest

from storystate.demo import new_demo_story
from storystate.models import Manifest
from storystate.story import Story
from storystate.world import WorldStore


@pytest.fixture
def manifest() -> Manifest:
    """Small world used across the world/rule tests."""
    return Manifest(
        items=[
            ("Umbrella", {"name": "Umbrella"}),
            ("Key", {"name": "Key"}),
            ("Anchor", {"name": "Anchor"}),
        ],
        locations=[
            ("Home", {"name": "Home"}),
            ("Garden", {"name": "Garden"}),
        ],
        characters=[
            ("Harry", {"name": "Harry"}),
        ],
    )


@pytest.fixture
def world(manifest: Manifest) -> WorldStore:
    return WorldStore.from_manifest(manifest)


@pytest.fixture
def demo_story() -> Story:
    """Fresh demo story: player at Home, scene1 active, Harry in the Garden."""
    return new_demo_story()
