from __future__ import annotations

"""Recursive crafting dependency resolver.

Purpose: Expand an (item, target count) request against a read-only catalog
and a holdings snapshot into the raw, possibly duplicated list of primitive
actions (collect/smelt/craft) that produces it. The merger turns that list into
the final plan.

How:
- `target_count` is always the cumulative desired holding, never an increment.
- `pending` holds what earlier steps on the current path have promised to
  produce. Each recursive call gets its own copy; siblings never see each
  other's promises. A call records its own output in the mapping it received.
- `guard` is the frozenset of items being expanded on the active path only.
- Failures are returned as `Infeasible` values and abort the whole resolution;
  nothing here raises for a domain failure.

"""

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, FrozenSet, List, Mapping, MutableMapping, Optional, Tuple, Union

from .actions import Action, Collect, Craft, Smelt
from .catalog import Catalog, SmeltSource
from .schemas import FailureKind
from .selector import DEFAULT_PREFERENCES, Preferences, recipe_ingredients, select_recipe


logger = logging.getLogger("craftplan.resolver")


DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class Feasible:
    actions: Tuple[Action, ...] = ()
    feasible: ClassVar[bool] = True


@dataclass(frozen=True)
class Infeasible:
    kind: FailureKind
    reason: str
    feasible: ClassVar[bool] = False


Resolution = Union[Feasible, Infeasible]


def _log(depth: int, msg: str, *args: object) -> None:
    logger.log(logging.INFO if depth == 0 else logging.DEBUG, msg, *args)


def resolve(
    item: str,
    target_count: int,
    catalog: Catalog,
    holdings: Optional[Mapping[str, int]] = None,
    pending: Optional[MutableMapping[str, int]] = None,
    guard: FrozenSet[str] = frozenset(),
    *,
    prefs: Preferences = DEFAULT_PREFERENCES,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Resolution:
    """Resolve `item` up to a total holding of `target_count`.

    `holdings` is never modified. `pending` is updated in place with whatever
    this call promises to produce, so the caller can observe it.
    """
    if holdings is None:
        holdings = MappingProxyType({})
    if pending is None:
        pending = {}
    if depth > max_depth:
        return Infeasible("depth_exceeded", f"Recipe chain for {item} exceeds maximum depth {max_depth}")

    effective_have = int(holdings.get(item, 0)) + int(pending.get(item, 0))
    if effective_have >= target_count:
        return Feasible()
    needed = target_count - effective_have

    if not catalog.item_exists(item):
        if catalog.block_exists(item):
            return Feasible((Collect(catalog.collectible_block(item), needed),))
        return Infeasible("unknown_item", f"Unknown item: {item}")

    source = catalog.smelt_source(item)
    if source is not None:
        return _resolve_smelt(item, needed, source, catalog, holdings, pending, guard, prefs, depth, max_depth)

    if not catalog.has_recipe(item):
        target = catalog.collectible_block(item)
        _log(depth, "%s is a raw material -> collect %s", item, target)
        return Feasible((Collect(target, needed),))

    if item in guard:
        return Infeasible("circular", f"Circular dependency detected for {item}")
    path = guard | {item}

    recipe = select_recipe(catalog.recipes_for(item), prefs)
    ingredients = recipe_ingredients(recipe, prefs)  # type: ignore[arg-type]
    if ingredients:
        _log(depth, "%s requires: %s", item, ", ".join(f"{c} {n}" for n, c in ingredients))
    else:
        logger.warning("no ingredients parsed from recipe for %s", item)

    output_per_craft = recipe.output_count or 1  # type: ignore[union-attr]
    craft_times = math.ceil(needed / output_per_craft)

    actions: List[Action] = []
    for name, per_craft in ingredients:
        sub = resolve(
            name,
            per_craft * craft_times,
            catalog,
            holdings,
            dict(pending),
            path,
            prefs=prefs,
            depth=depth + 1,
            max_depth=max_depth,
        )
        if not sub.feasible:
            return sub
        actions.extend(sub.actions)

    actions.append(Craft(item, target_count))
    pending[item] = int(pending.get(item, 0)) + craft_times * output_per_craft
    return Feasible(tuple(actions))


def _resolve_smelt(
    item: str,
    needed: int,
    source: SmeltSource,
    catalog: Catalog,
    holdings: Mapping[str, int],
    pending: MutableMapping[str, int],
    guard: FrozenSet[str],
    prefs: Preferences,
    depth: int,
    max_depth: int,
) -> Resolution:
    _log(depth, "%s is obtained via smelting %s", item, source.input)
    if item in guard:
        return Infeasible("circular", f"Circular dependency detected for {item}")

    input_result = resolve(
        source.input,
        needed,
        catalog,
        holdings,
        dict(pending),
        guard | {item},
        prefs=prefs,
        depth=depth + 1,
        max_depth=max_depth,
    )
    if not input_result.feasible:
        return input_result
    actions: List[Action] = list(input_result.actions)

    # one throughput for every fuel; efficiency differences are not modelled
    fuel_needed = math.ceil(needed / source.items_per_fuel)
    fuel_have = catalog.fuel_stock(holdings)
    if fuel_have < fuel_needed:
        actions.append(Collect(catalog.default_fuel_source, fuel_needed - fuel_have))

    actions.append(Smelt(source.input, item, needed))
    pending[item] = int(pending.get(item, 0)) + needed
    return Feasible(tuple(actions))

