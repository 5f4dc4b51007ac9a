from __future__ import annotations

"""Runtime data file loaders (JSON).

Purpose: Centralize loading of the external JSON tables that describe the item
catalog, block sources, smelting/fuel rules, ingredient preferences and name
aliases, keeping code free of hardcoded tables.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional


SETTINGS_DIR = Path("settings")

_CACHE: Dict[str, Any] = {}


def _load_required(path: Path) -> Any:
    key = str(path.resolve())
    if key in _CACHE:
        return _CACHE[key]
    if not path.exists():
        raise FileNotFoundError(f"required data file missing: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise RuntimeError(f"failed to parse {path}: {e}") from e
    _CACHE[key] = data
    return data


def clear_cache() -> None:
    _CACHE.clear()


def load_catalog_data(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the minecraft-data style document {items, blocks, recipes}.

    File: settings/catalog.json. Recipes are keyed by the result item id (as a
    string) and hold a list of shaped (`inShape`) or shapeless (`ingredients`)
    entries with a `result` object.
    """
    data = _load_required(path or SETTINGS_DIR / "catalog.json")
    if not isinstance(data, dict):
        raise ValueError("catalog.json must be an object")
    items = data.get("items")
    blocks = data.get("blocks", [])
    recipes = data.get("recipes", {})
    if not isinstance(items, list) or not all(isinstance(i, dict) and "id" in i and "name" in i for i in items):
        raise ValueError("catalog.json 'items' must be an array of {id, name}")
    if not isinstance(blocks, list) or not all(isinstance(b, dict) and "name" in b for b in blocks):
        raise ValueError("catalog.json 'blocks' must be an array of {name}")
    if not isinstance(recipes, dict) or not all(isinstance(v, list) for v in recipes.values()):
        raise ValueError("catalog.json 'recipes' must be an object of {item_id: [recipes...]}")
    return {"items": items, "blocks": blocks, "recipes": recipes}


def load_block_sources(path: Optional[Path] = None) -> Dict[str, str]:
    """Return mapping of item name -> block to mine when they differ (e.g., cobblestone -> stone)."""
    data = _load_required(path or SETTINGS_DIR / "block_sources.json")
    if not isinstance(data, dict):
        raise ValueError("block_sources.json must be an object of {item: block}")
    out: Dict[str, str] = {}
    for k, v in data.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ValueError("block_sources contains non-string key/value")
        out[k] = v
    return out


def load_smelting(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return {sources: {output: {input, items_per_fuel}}, fuels: [...], default_fuel_source}.

    File: settings/smelting.json. `fuels` is the list of item names counted as
    fuel stock (plain strings or {name} objects); `default_fuel_source` is the
    block collected when fuel stock runs short. Every source uses its own
    `items_per_fuel` whichever fuel burns.
    """
    data = _load_required(path or SETTINGS_DIR / "smelting.json")
    if not isinstance(data, dict) or not isinstance(data.get("sources"), dict):
        raise ValueError("smelting.json must contain top-level 'sources' object")
    sources: Dict[str, Dict[str, Any]] = {}
    for output, entry in data["sources"].items():
        if not isinstance(output, str) or not isinstance(entry, dict) or not isinstance(entry.get("input"), str):
            raise ValueError(f"invalid smelting source for '{output}'")
        per_fuel = entry.get("items_per_fuel", 8)
        if isinstance(per_fuel, bool) or not isinstance(per_fuel, int) or per_fuel <= 0:
            raise ValueError(f"invalid smelting source for '{output}': items_per_fuel must be a positive integer")
        sources[output] = {"input": entry["input"], "items_per_fuel": per_fuel}
    fuels_in = data.get("fuels", [])
    if not isinstance(fuels_in, list):
        raise ValueError("smelting.json 'fuels' must be an array")
    fuels: List[str] = []
    for fuel in fuels_in:
        name = fuel.get("name") if isinstance(fuel, dict) else fuel
        if not isinstance(name, str) or not name:
            raise ValueError("smelting.json contains invalid fuel entry")
        fuels.append(name)
    default_fuel_source = data.get("default_fuel_source", "coal_ore")
    if not isinstance(default_fuel_source, str) or not default_fuel_source:
        raise ValueError("smelting.json 'default_fuel_source' must be a non-empty string")
    return {"sources": sources, "fuels": fuels, "default_fuel_source": default_fuel_source}


def load_preferences(path: Optional[Path] = None) -> Dict[str, List[str]]:
    """Return mapping of category -> ordered item names (index 0 = most preferred)."""
    data = _load_required(path or SETTINGS_DIR / "preferences.json")
    if not isinstance(data, dict):
        raise ValueError("preferences.json must be an object of {category: [items...]}")
    out: Dict[str, List[str]] = {}
    for k, v in data.items():
        if not isinstance(k, str) or not isinstance(v, list) or not all(isinstance(x, str) for x in v):
            raise ValueError("preferences contains invalid entry")
        out[k] = list(v)
    return out


def load_aliases(path: Optional[Path] = None) -> Dict[str, str]:
    """Return mapping of alias -> canonical item name (e.g., iron_pick -> iron_pickaxe)."""
    data = _load_required(path or SETTINGS_DIR / "aliases.json")
    if not isinstance(data, dict):
        raise ValueError("aliases.json must be an object of {alias: canonical_name}")
    out: Dict[str, str] = {}
    for k, v in data.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ValueError("aliases.json contains invalid entry")
        out[k.strip().lower()] = v.strip()
    return out
