"""Terminal demo host.

Plays a Story in the terminal. Rendering and input are host concerns, so this
module owns both: it reads one identifier per line, dispatches an Interact
event, and prints the returned state. Undo is done host-side by keeping the
previous Story values around; the engine never mutates them.

Commands at the prompt:
    <id>      interact with an item, location or character
    look      describe the current location again
    undo      go back one interaction
    quit      leave
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from dotenv import load_dotenv
from pydantic import ValidationError

from storystate.config import get_config
from storystate.demo import new_demo_story
from storystate.models import Attributes
from storystate.story import Story, interact, update

logger = logging.getLogger(__name__)


def _name(id: str, attributes: Attributes) -> str:
    return str(attributes.get("name", id))


def _listing(pairs: list[tuple[str, Attributes]]) -> str:
    if not pairs:
        return "nothing"
    return ", ".join(f"{_name(id, attrs)} [{id}]" for id, attrs in pairs)


def render(story: Story, out: TextIO) -> None:
    """Print the player's view of the current state."""
    location = story.get_current_location()
    attrs = story.world.get_attributes(location) or {}
    title = _name(location, attrs) if location else "Nowhere"
    print(f"\n== {title} ==", file=out)
    if attrs.get("description"):
        print(attrs["description"], file=out)
    print(f"You see: {_listing(story.get_items_in_current_location())}", file=out)
    print(f"People here: {_listing(story.get_characters_in_current_location())}", file=out)
    print(f"Inventory: {_listing(story.get_items_in_inventory())}", file=out)
    print(f"Known places: {_listing(story.get_discovered_locations())}", file=out)


def render_latest(story: Story, out: TextIO) -> None:
    """Print the newest story line entry (narration, or the object's description)."""
    if not story.get_story_line():
        return
    entry = story.get_story_line()[0]
    if entry.narration is not None:
        print(entry.narration, file=out)
    elif entry.attributes and entry.attributes.get("description"):
        print(entry.attributes["description"], file=out)


def _prompted(lines: Iterable[str], out: TextIO, prompt: str) -> Iterator[str]:
    it = iter(lines)
    while True:
        out.write(prompt)
        out.flush()
        try:
            line = next(it)
        except StopIteration:
            return
        yield line


def play(
    story: Story,
    lines: Iterable[str],
    out: TextIO,
    *,
    prompt: str = "> ",
    stop_at_ending: bool = True,
) -> Story:
    """Run the read/dispatch/render loop and return the last Story value."""
    past: list[Story] = []
    render(story, out)
    for raw in _prompted(lines, out, prompt):
        command = raw.strip()
        if not command:
            continue

        if command == "quit":
            break
        elif command == "look":
            render(story, out)
            continue
        elif command == "undo":
            if past:
                story = past.pop()
                render(story, out)
            else:
                print("Nothing to undo.", file=out)
            continue

        past.append(story)
        story = update(interact(command), story)
        render_latest(story, out)
        render(story, out)

        if story.get_ending() is not None:
            print(f"\n*** {story.get_ending()} ***", file=out)
            if stop_at_ending:
                break
    return story


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Play the bundled storystate demo story")
    parser.add_argument("--env-file", type=Path, default=None,
                        help="Load settings from this .env file (default: ./.env)")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (overrides STORYSTATE_LOG_LEVEL)")
    parser.add_argument("--keep-playing", action="store_true",
                        help="Keep accepting interactions after the story ends")
    args = parser.parse_args(argv)

    load_dotenv(args.env_file or Path(".env"))
    config = get_config()
    level_name = (args.log_level or config["log_level"]).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        print(f"Unknown log level: {level_name}", file=sys.stderr)
        return 2
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        story = new_demo_story()
    except ValidationError as e:
        print(f"Invalid story content:\n{e}", file=sys.stderr)
        return 1
    logger.info("demo story loaded scene=%s location=%s",
                story.get_current_scene(), story.get_current_location())
    play(
        story,
        sys.stdin,
        sys.stdout,
        prompt=config["prompt"],
        stop_at_ending=config["stop_at_ending"] and not args.keep_playing,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
