from __future__ import annotations

"""Deterministic recipe and ingredient selection.

Purpose: When an item has several recipes, or a recipe slot accepts several
items, pick one by a static preference ranking (common planks, logs, stone and
dyes first). Selection never looks at what the player currently holds.

"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .catalog import Recipe, Slot
from .data_files import load_preferences


logger = logging.getLogger("craftplan.selector")


NEUTRAL_SCORE = 100

PREFERRED_INGREDIENTS: Dict[str, List[str]] = {
    "planks": [
        "oak_planks",
        "birch_planks",
        "spruce_planks",
        "jungle_planks",
        "acacia_planks",
        "dark_oak_planks",
        "mangrove_planks",
        "cherry_planks",
        "bamboo_planks",
        "crimson_planks",
        "warped_planks",
    ],
    "logs": [
        "oak_log",
        "birch_log",
        "spruce_log",
        "jungle_log",
        "acacia_log",
        "dark_oak_log",
        "mangrove_log",
        "cherry_log",
        "crimson_stem",
        "warped_stem",
    ],
    # regular stone before deepslate/blackstone
    "stone": [
        "cobblestone",
        "stone",
        "cobbled_deepslate",
        "deepslate",
        "blackstone",
        "polished_blackstone",
    ],
    "dyes": [
        "white_dye",
        "black_dye",
        "red_dye",
        "blue_dye",
        "yellow_dye",
        "green_dye",
    ],
}


@dataclass(frozen=True)
class Preferences:
    categories: Mapping[str, Tuple[str, ...]]
    neutral_score: int = NEUTRAL_SCORE
    _scores: Dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        longest = max((len(v) for v in self.categories.values()), default=0)
        if self.neutral_score < longest:
            # unlisted items must always rank below every listed one
            object.__setattr__(self, "neutral_score", longest)
        for names in self.categories.values():
            for idx, name in enumerate(names):
                # first category that lists the item wins
                self._scores.setdefault(name, idx)

    @classmethod
    def from_categories(cls, categories: Mapping[str, Sequence[str]], neutral_score: int = NEUTRAL_SCORE) -> "Preferences":
        return cls({k: tuple(v) for k, v in categories.items()}, neutral_score)

    def score(self, name: str) -> int:
        return self._scores.get(name, self.neutral_score)


DEFAULT_PREFERENCES = Preferences.from_categories(PREFERRED_INGREDIENTS)


def load_default_preferences() -> Preferences:
    """Preferences from settings/preferences.json, falling back to the built-in lists when absent."""
    try:
        return Preferences.from_categories(load_preferences())
    except FileNotFoundError:
        return DEFAULT_PREFERENCES


def preference_score(name: str, prefs: Preferences = DEFAULT_PREFERENCES) -> int:
    return prefs.score(name)


def resolve_slot(slot: Slot, prefs: Preferences = DEFAULT_PREFERENCES) -> str:
    """Pick the lowest-scoring alternative for a slot; ties keep catalog order."""
    best = slot.options[0]
    best_score = prefs.score(best)
    for name in slot.options[1:]:
        s = prefs.score(name)
        if s < best_score:
            best, best_score = name, s
    return best


def recipe_ingredients(recipe: Recipe, prefs: Preferences = DEFAULT_PREFERENCES) -> List[Tuple[str, int]]:
    """Aggregate resolved slots into (name, count) pairs in first-occurrence order."""
    totals: Dict[str, int] = {}
    for slot in recipe.slots:
        name = resolve_slot(slot, prefs)
        totals[name] = totals.get(name, 0) + slot.count
    return list(totals.items())


def recipe_score(recipe: Recipe, prefs: Preferences = DEFAULT_PREFERENCES) -> int:
    return sum(prefs.score(resolve_slot(slot, prefs)) * slot.count for slot in recipe.slots)


def select_recipe(candidates: Sequence[Recipe], prefs: Preferences = DEFAULT_PREFERENCES) -> Optional[Recipe]:
    """Return the candidate with the lowest total preference score (first wins ties)."""
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]
    best = candidates[0]
    best_score = recipe_score(best, prefs)
    for recipe in candidates[1:]:
        s = recipe_score(recipe, prefs)
        if s < best_score:
            best, best_score = recipe, s
    if best is not candidates[0]:
        logger.debug(
            "selected alternate recipe with ingredients %s (score %s)",
            ", ".join(n for n, _ in recipe_ingredients(best, prefs)),
            best_score,
        )
    return best
