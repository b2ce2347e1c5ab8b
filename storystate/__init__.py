"""storystate — a narrative state engine.

Given a manifest of world objects, scenes of rules and an interaction event,
the engine produces the next story state and the narration to show. The host
application owns rendering and input; the engine owns state and rules only.

    story = init(manifest, scenes, setup=[move_to("Garden")])
    story = update(interact("Harry"), story)
    story.get_story_line()[0].narration

Every Story value is immutable. update() always returns a new value and never
raises for unknown ids or unmatched interactions.
"""

# Re-export the public surface so `import storystate` is all a host needs.

from .commands import (  # noqa: F401
    ChangeCommand,
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

from .models import (  # noqa: F401
    Attributes,
    Character,
    Interactable,
    Item,
    Location,
    Manifest,
)

from .rules import (  # noqa: F401
    Condition,
    InteractionMatcher,
    Rule,
    character_is_in_location,
    character_is_not_in_location,
    current_location_is,
    current_location_is_not,
    item_is_in_inventory,
    item_is_in_location,
    item_is_not_in_inventory,
    item_is_not_in_location,
    with_any_character,
    with_any_item,
    with_any_location,
    with_anything,
    with_character,
    with_item,
    with_location,
)

from .scenes import (  # noqa: F401
    LiveRule,
    SceneRegistry,
    find_matching_rule,
    get_narration,
)

from .story import (  # noqa: F401
    Event,
    Interact,
    NarrationEntry,
    NoOp,
    Story,
    init,
    interact,
    update,
)

from .world import WorldStore  # noqa: F401
