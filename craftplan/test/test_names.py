from __future__ import annotations

import unittest

from craftplan.catalog import Catalog
from craftplan.names import (
    find_closest_name,
    levenshtein_distance,
    normalize_item_name,
    suggestions,
    validate_and_correct_name,
)


def small_catalog() -> Catalog:
    return Catalog(
        items=["stick", "iron_pickaxe", "diamond_pickaxe", "oak_planks", "torch"],
        blocks=["stone", "oak_log", "torch"],
        recipes={},
    )


class TestNames(unittest.TestCase):
    def test_normalize(self) -> None:
        self.assertEqual(normalize_item_name("  Iron Pickaxe "), "iron_pickaxe")
        self.assertEqual(normalize_item_name("minecraft:stick"), "stick")
        self.assertEqual(normalize_item_name("iron pick", {"iron_pick": "minecraft:iron_pickaxe"}), "iron_pickaxe")

    def test_levenshtein(self) -> None:
        self.assertEqual(levenshtein_distance("kitten", "sitting"), 3)
        self.assertEqual(levenshtein_distance("", "abc"), 3)
        self.assertEqual(levenshtein_distance("torch", "torch"), 0)

    def test_exact_match(self) -> None:
        match = validate_and_correct_name("stone", small_catalog())
        self.assertTrue(match.valid)
        self.assertEqual(match.corrected, "stone")

    def test_typo_corrected(self) -> None:
        match = validate_and_correct_name("stik", small_catalog())
        self.assertTrue(match.valid)
        self.assertEqual(match.corrected, "stick")
        self.assertEqual(match.original, "stik")

    def test_containment_match(self) -> None:
        self.assertEqual(find_closest_name("pickaxe", small_catalog()), "iron_pickaxe")

    def test_no_match(self) -> None:
        match = validate_and_correct_name("zzzzzzzzzzzz", small_catalog())
        self.assertFalse(match.valid)
        self.assertIsNone(match.corrected)
        self.assertFalse(validate_and_correct_name("", small_catalog()).valid)

    def test_suggestions_nearest_first(self) -> None:
        self.assertEqual(suggestions("torh", small_catalog())[0], "torch")
        self.assertEqual(suggestions("", small_catalog()), [])
        self.assertLessEqual(len(suggestions("o", small_catalog(), limit=2)), 2)


if __name__ == "__main__":
    unittest.main()
