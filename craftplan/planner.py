from __future__ import annotations

"""Deterministic planner: expand craft/smelt goals into a merged step list.

Purpose: Given an item name, a desired total and an inventory snapshot, run the
recursive resolver and merge its output into the ordered, deduplicated plan the
executor consumes. Also answers "how is this item made?" lookups.

"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .catalog import Catalog
from .merger import merge_actions
from .resolver import DEFAULT_MAX_DEPTH, Feasible, Resolution, resolve
from .selector import DEFAULT_PREFERENCES, Preferences, recipe_ingredients, select_recipe


logger = logging.getLogger("craftplan.planner")


def plan_craft(
    item_id: str,
    count: int,
    catalog: Catalog,
    inventory_counts: Optional[Mapping[str, int]] = None,
    *,
    prefs: Preferences = DEFAULT_PREFERENCES,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Resolution:
    """Resolve `item_id` up to `count` held and merge the result.

    - Collects come first, then smelts, then crafts in dependency order
    - Craft counts are final totals; the executor re-derives repeat counts
    - An infeasible result carries no actions at all
    """
    holdings = MappingProxyType({k: int(v) for k, v in (inventory_counts or {}).items()})
    result = resolve(item_id, int(count), catalog, holdings, {}, frozenset(), prefs=prefs, max_depth=max_depth)
    if not result.feasible:
        logger.info("cannot plan %s x%s: %s", item_id, count, result.reason)  # type: ignore[union-attr]
        return result
    merged = Feasible(tuple(merge_actions(result.actions)))  # type: ignore[union-attr]
    logger.info("planned %s x%s in %d steps", item_id, count, len(merged.actions))
    return merged


def describe_recipe(item_name: str, catalog: Catalog, prefs: Preferences = DEFAULT_PREFERENCES) -> Dict[str, Any]:
    """Validate that an item can be crafted and report its selected recipe.

    Returns {valid, message} plus {ingredients, output_count, requires_table}
    when a recipe exists.
    """
    if not item_name:
        return {"valid": False, "message": "Invalid item name"}
    if not catalog.item_exists(item_name):
        return {"valid": False, "message": f'Unknown item "{item_name}" - not found in catalog'}
    recipe = select_recipe(catalog.recipes_for(item_name), prefs)
    if recipe is None:
        return {
            "valid": False,
            "message": f'"{item_name}" cannot be crafted - it must be found or obtained another way',
        }
    return {
        "valid": True,
        "message": f'Recipe found for "{item_name}"',
        "ingredients": [{"name": n, "count": c} for n, c in recipe_ingredients(recipe, prefs)],
        "output_count": recipe.output_count,
        "requires_table": recipe.requires_table,
    }
