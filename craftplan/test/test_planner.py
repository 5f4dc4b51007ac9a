from __future__ import annotations

import unittest

from craftplan.actions import Collect, Craft, Smelt, to_step
from craftplan.catalog import load_catalog
from craftplan.planner import describe_recipe, plan_craft


class TestPlanner(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.catalog = load_catalog()

    def test_iron_pickaxe_merged_order(self) -> None:
        result = plan_craft("iron_pickaxe", 1, self.catalog, {})
        self.assertTrue(result.feasible)
        self.assertEqual(
            list(result.actions),  # type: ignore[union-attr]
            [
                Collect("iron_ore", 3),
                Collect("coal_ore", 1),
                Collect("oak_log", 1),
                Smelt("raw_iron", "iron_ingot", 3),
                Craft("oak_planks", 2),
                Craft("stick", 2),
                Craft("iron_pickaxe", 1),
            ],
        )

    def test_smelting_preferred_over_block_recipe(self) -> None:
        result = plan_craft("iron_ingot", 16, self.catalog)
        self.assertEqual(
            list(result.actions),  # type: ignore[union-attr]
            [Collect("iron_ore", 16), Collect("coal_ore", 2), Smelt("raw_iron", "iron_ingot", 16)],
        )

    def test_inventory_shortens_plan(self) -> None:
        result = plan_craft("iron_pickaxe", 1, self.catalog, {"iron_ingot": 3, "stick": 2})
        self.assertEqual(list(result.actions), [Craft("iron_pickaxe", 1)])  # type: ignore[union-attr]

    def test_already_held_is_empty_plan(self) -> None:
        result = plan_craft("torch", 4, self.catalog, {"torch": 10})
        self.assertTrue(result.feasible)
        self.assertEqual(result.actions, ())  # type: ignore[union-attr]

    def test_stone_alternatives_prefer_cobblestone(self) -> None:
        result = plan_craft("stone_pickaxe", 1, self.catalog, {"stick": 2})
        self.assertEqual(
            list(result.actions),  # type: ignore[union-attr]
            [Collect("stone", 3), Craft("stone_pickaxe", 1)],
        )

    def test_unknown_item_is_infeasible(self) -> None:
        result = plan_craft("netherite_pickaxe", 1, self.catalog)
        self.assertFalse(result.feasible)
        self.assertEqual(result.kind, "unknown_item")  # type: ignore[union-attr]

    def test_steps_render_for_the_wire(self) -> None:
        result = plan_craft("iron_ingot", 1, self.catalog, {"coal": 1})
        steps = [to_step(a) for a in result.actions]  # type: ignore[union-attr]
        self.assertEqual(
            steps,
            [
                {"op": "collect", "target": "iron_ore", "count": 1},
                {"op": "smelt", "input": "raw_iron", "output": "iron_ingot", "count": 1},
            ],
        )

    def test_describe_recipe(self) -> None:
        info = describe_recipe("torch", self.catalog)
        self.assertTrue(info["valid"])
        self.assertEqual(info["ingredients"], [{"name": "coal", "count": 1}, {"name": "stick", "count": 1}])
        self.assertEqual(info["output_count"], 4)
        self.assertFalse(info["requires_table"])

        pick = describe_recipe("iron_pickaxe", self.catalog)
        self.assertTrue(pick["requires_table"])

    def test_describe_recipe_rejections(self) -> None:
        self.assertFalse(describe_recipe("", self.catalog)["valid"])
        self.assertIn("Unknown item", describe_recipe("dragon_egg", self.catalog)["message"])
        raw = describe_recipe("raw_iron", self.catalog)
        self.assertFalse(raw["valid"])
        self.assertIn("cannot be crafted", raw["message"])


if __name__ == "__main__":
    unittest.main()
