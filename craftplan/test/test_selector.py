from __future__ import annotations

import unittest

from craftplan.catalog import Recipe, Slot
from craftplan.selector import (
    DEFAULT_PREFERENCES,
    NEUTRAL_SCORE,
    Preferences,
    preference_score,
    recipe_ingredients,
    recipe_score,
    resolve_slot,
    select_recipe,
)


class TestSelector(unittest.TestCase):
    def test_scores_follow_list_position(self) -> None:
        self.assertEqual(preference_score("oak_planks"), 0)
        self.assertEqual(preference_score("birch_planks"), 1)
        self.assertEqual(preference_score("cobbled_deepslate"), 2)
        self.assertEqual(preference_score("iron_ingot"), NEUTRAL_SCORE)

    def test_neutral_score_never_below_listed(self) -> None:
        prefs = Preferences.from_categories({"x": ["a", "b", "c", "d"]}, neutral_score=2)
        self.assertEqual(prefs.score("zzz"), 4)
        self.assertLess(prefs.score("d"), prefs.score("zzz"))

    def test_first_category_listing_wins(self) -> None:
        prefs = Preferences.from_categories({"one": ["a", "shared"], "two": ["shared"]})
        self.assertEqual(prefs.score("shared"), 1)

    def test_resolve_slot_prefers_listed_option(self) -> None:
        slot = Slot(("cobbled_deepslate", "cobblestone"))
        self.assertEqual(resolve_slot(slot), "cobblestone")

    def test_resolve_slot_ties_keep_catalog_order(self) -> None:
        self.assertEqual(resolve_slot(Slot(("glass", "sand"))), "glass")

    def test_recipe_ingredients_aggregates_in_first_occurrence_order(self) -> None:
        recipe = Recipe(slots=(
            Slot(("stick",)),
            Slot(("birch_planks", "oak_planks")),
            Slot(("stick",)),
            Slot(("oak_planks",), 2),
        ))
        self.assertEqual(recipe_ingredients(recipe), [("stick", 2), ("oak_planks", 3)])

    def test_recipe_score_weights_counts(self) -> None:
        recipe = Recipe(slots=(Slot(("birch_planks",), 3),))
        self.assertEqual(recipe_score(recipe), 3)

    def test_select_recipe_lowest_score(self) -> None:
        birch = Recipe(slots=(Slot(("birch_planks",)), Slot(("birch_planks",))), output_count=4)
        oak = Recipe(slots=(Slot(("oak_planks",)), Slot(("oak_planks",))), output_count=4)
        self.assertIs(select_recipe([birch, oak]), oak)

    def test_select_recipe_tie_keeps_first(self) -> None:
        first = Recipe(slots=(Slot(("glass",)),))
        second = Recipe(slots=(Slot(("sand",)),))
        self.assertIs(select_recipe([first, second]), first)

    def test_select_recipe_empty(self) -> None:
        self.assertIsNone(select_recipe([]))

    def test_custom_preferences_change_choice(self) -> None:
        prefs = Preferences.from_categories({"planks": ["birch_planks", "oak_planks"]})
        slot = Slot(("oak_planks", "birch_planks"))
        self.assertEqual(resolve_slot(slot, prefs), "birch_planks")
        self.assertEqual(resolve_slot(slot, DEFAULT_PREFERENCES), "oak_planks")


if __name__ == "__main__":
    unittest.main()
