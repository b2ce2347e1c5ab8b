"""Scene registry and rule matching.

A scene is a named set of rules that is active at one time. The registry maps
scene id → rule id → LiveRule, where a LiveRule pairs an immutable Rule
declaration with the number of times it has fired.

Matching tie-break: when several rules in the active scene match the same
interaction, the rule with the lexicographically smallest id wins, regardless
of declaration order. Existing story content depends on this.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from storystate.rules import Rule
from storystate.world import WorldStore

logger = logging.getLogger(__name__)

SceneDeclarations = Mapping[str, Iterable[tuple[str, Rule]]] | Iterable[
    tuple[str, Iterable[tuple[str, Rule]]]
]


class LiveRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: Rule
    times_triggered: int = 0


def get_narration(live_rule: LiveRule) -> str:
    """Narrations are used one per trigger, in order; the last one repeats."""
    narrations = live_rule.rule.narrations
    return narrations[min(live_rule.times_triggered, len(narrations) - 1)]


def find_matching_rule(
    rules: Mapping[str, LiveRule],
    interacted_id: str,
    current_location: str,
    world: WorldStore,
) -> tuple[str, LiveRule] | None:
    """Return (rule_id, live_rule) for the smallest matching rule id, or None."""
    for rule_id in sorted(rules):
        live_rule = rules[rule_id]
        if live_rule.rule.matches(interacted_id, current_location, world):
            return rule_id, live_rule
    return None


class SceneRegistry(BaseModel):
    model_config = ConfigDict(frozen=True)

    # (scene id, ((rule id, live rule), ...)) pairs
    scenes: tuple[tuple[str, tuple[tuple[str, LiveRule], ...]], ...] = ()

    _index: dict[str, dict[str, LiveRule]] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._index.update((scene_id, dict(rules)) for scene_id, rules in self.scenes)

    @classmethod
    def from_declarations(cls, declarations: SceneDeclarations) -> SceneRegistry:
        """Build a registry with every counter at zero.

        Duplicate scene ids or rule ids are folded left-to-right, so the last
        declaration wins.
        """
        pairs = declarations.items() if isinstance(declarations, Mapping) else declarations
        scenes: dict[str, dict[str, LiveRule]] = {}
        for scene_id, rules in pairs:
            scenes[scene_id] = {rule_id: LiveRule(rule=rule) for rule_id, rule in rules}
        return cls._from_index(scenes)

    @classmethod
    def _from_index(cls, scenes: dict[str, dict[str, LiveRule]]) -> SceneRegistry:
        return cls(scenes=tuple((scene_id, tuple(rules.items())) for scene_id, rules in scenes.items()))

    def get_scene(self, scene_id: str) -> dict[str, LiveRule]:
        """Rules of a scene, as a fresh dict; an unknown scene has none."""
        return dict(self._index.get(scene_id, {}))

    def get_live_rule(self, scene_id: str, rule_id: str) -> LiveRule | None:
        return self._index.get(scene_id, {}).get(rule_id)

    def consume(self, scene_id: str, rule_id: str) -> SceneRegistry:
        """Credit one trigger to a rule. Every other live rule is left as is."""
        live_rule = self.get_live_rule(scene_id, rule_id)
        if live_rule is None:
            logger.debug("consume ignored scene=%s rule=%s: unknown rule", scene_id, rule_id)
            return self
        bumped = live_rule.model_copy(update={"times_triggered": live_rule.times_triggered + 1})
        scene = {**self._index[scene_id], rule_id: bumped}
        return self._from_index({**self._index, scene_id: scene})
