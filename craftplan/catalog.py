from __future__ import annotations

"""Read-only item/recipe catalog consulted by the resolver.

Purpose: Answer the lookups the resolver needs (does an item exist, which
recipes produce it, is a name a mineable block, which block drops it, how is it
smelted, how much fuel is on hand) from a minecraft-data style document plus
the block-source and smelting tables.

Engineering notes: Parse recipes once at construction into immutable `Recipe`
values. Ingredient ids that are not in the catalog are skipped rather than
failing the recipe; a slot left with no usable option is dropped.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .data_files import load_block_sources, load_catalog_data, load_smelting


DEFAULT_ITEMS_PER_FUEL = 8
DEFAULT_FUEL_SOURCE = "coal_ore"


@dataclass(frozen=True)
class Slot:
    options: Tuple[str, ...]  # acceptable alternatives, catalog order
    count: int = 1


@dataclass(frozen=True)
class Recipe:
    slots: Tuple[Slot, ...]
    output_count: int = 1
    requires_table: bool = False
    shaped: bool = False


@dataclass(frozen=True)
class SmeltSource:
    input: str
    items_per_fuel: int = DEFAULT_ITEMS_PER_FUEL  # one throughput for every fuel

    def __post_init__(self) -> None:
        if not isinstance(self.items_per_fuel, int) or self.items_per_fuel <= 0:
            raise ValueError(f"items_per_fuel must be a positive integer, got {self.items_per_fuel!r}")


class Catalog:
    def __init__(
        self,
        items: Iterable[str],
        blocks: Iterable[str],
        recipes: Mapping[str, Sequence[Recipe]],
        *,
        block_sources: Optional[Mapping[str, str]] = None,
        smelting: Optional[Mapping[str, SmeltSource]] = None,
        fuels: Iterable[str] = (),
        default_fuel_source: str = DEFAULT_FUEL_SOURCE,
    ) -> None:
        self._items = frozenset(items)
        self._blocks = frozenset(blocks)
        self._recipes: Dict[str, Tuple[Recipe, ...]] = {k: tuple(v) for k, v in recipes.items() if v}
        self._block_sources: Dict[str, str] = dict(block_sources or {})
        self._smelting: Dict[str, SmeltSource] = dict(smelting or {})
        self._fuels: Tuple[str, ...] = tuple(fuels)
        self._default_fuel_source = default_fuel_source

    @classmethod
    def from_data(
        cls,
        data: Mapping[str, Any],
        *,
        block_sources: Optional[Mapping[str, str]] = None,
        smelting: Optional[Mapping[str, Any]] = None,
    ) -> "Catalog":
        """Build a catalog from the minecraft-data shape {items, blocks, recipes}.

        `smelting` uses the settings/smelting.json shape
        {sources: {output: {input, items_per_fuel}}, fuels: [...], default_fuel_source}.
        """
        names_by_id: Dict[int, str] = {}
        for item in data.get("items", []):
            names_by_id[int(item["id"])] = str(item["name"])
        item_names = set(names_by_id.values())
        blocks = [str(b["name"]) for b in data.get("blocks", [])]

        recipes: Dict[str, List[Recipe]] = {}
        for key, entries in (data.get("recipes") or {}).items():
            target = _key_to_name(key, names_by_id)
            if target is None:
                continue
            for entry in entries:
                recipe = _parse_recipe(entry, names_by_id, item_names)
                if recipe is not None:
                    recipes.setdefault(target, []).append(recipe)

        smelt = smelting or {}
        sources = {
            out: SmeltSource(input=str(src["input"]), items_per_fuel=int(src.get("items_per_fuel", DEFAULT_ITEMS_PER_FUEL)))
            for out, src in (smelt.get("sources") or {}).items()
        }
        fuels = [str(f["name"]) if isinstance(f, dict) else str(f) for f in smelt.get("fuels", [])]
        return cls(
            item_names,
            blocks,
            recipes,
            block_sources=block_sources,
            smelting=sources,
            fuels=fuels,
            default_fuel_source=str(smelt.get("default_fuel_source", DEFAULT_FUEL_SOURCE)),
        )

    def item_exists(self, name: str) -> bool:
        return name in self._items

    def block_exists(self, name: str) -> bool:
        return name in self._blocks

    def has_recipe(self, name: str) -> bool:
        return bool(self._recipes.get(name))

    def recipes_for(self, name: str) -> List[Recipe]:
        return list(self._recipes.get(name, ()))

    def collectible_block(self, name: str) -> str:
        """Block to mine for an item: the override table first, else the name itself."""
        return self._block_sources.get(name, name)

    def smelt_source(self, name: str) -> Optional[SmeltSource]:
        return self._smelting.get(name)

    @property
    def default_fuel_source(self) -> str:
        return self._default_fuel_source

    def fuel_stock(self, holdings: Mapping[str, int]) -> int:
        """Total units held across every recognized fuel item."""
        return sum(int(holdings.get(name, 0)) for name in self._fuels)

    def names(self) -> List[str]:
        """All block and item names, blocks first (stable, sorted within each group)."""
        blocks = sorted(self._blocks)
        return blocks + sorted(self._items - self._blocks)


def _key_to_name(key: Any, names_by_id: Mapping[int, str]) -> Optional[str]:
    text = str(key)
    if text.lstrip("-").isdigit():
        return names_by_id.get(int(text))
    return text if text in names_by_id.values() else None


def _cell_name(cell: Any, names_by_id: Mapping[int, str], item_names: Iterable[str]) -> Optional[str]:
    if isinstance(cell, bool) or cell is None:
        return None
    if isinstance(cell, str):
        return cell if cell in item_names else None
    if isinstance(cell, int):
        item_id = cell
    elif isinstance(cell, dict) and isinstance(cell.get("id"), int):
        item_id = cell["id"]
    else:
        return None
    if item_id < 0:
        return None
    return names_by_id.get(item_id)


def _parse_slot(cell: Any, names_by_id: Mapping[int, str], item_names: Iterable[str]) -> Optional[Slot]:
    if isinstance(cell, list):
        options: List[str] = []
        for alt in cell:
            name = _cell_name(alt, names_by_id, item_names)
            if name is not None and name not in options:
                options.append(name)
        return Slot(tuple(options)) if options else None
    name = _cell_name(cell, names_by_id, item_names)
    if name is None:
        return None
    count = cell.get("count", 1) if isinstance(cell, dict) else 1
    return Slot((name,), max(1, int(count or 1)))


def _parse_recipe(entry: Any, names_by_id: Mapping[int, str], item_names: Iterable[str]) -> Optional[Recipe]:
    if not isinstance(entry, dict):
        return None
    slots: List[Slot] = []
    shaped = isinstance(entry.get("inShape"), list)
    requires_table = False
    if shaped:
        rows = [r for r in entry["inShape"] if isinstance(r, list)]
        if rows:
            requires_table = len(rows) > 2 or max(len(r) for r in rows) > 2
        for row in rows:
            for cell in row:
                slot = _parse_slot(cell, names_by_id, item_names)
                if slot is not None:
                    slots.append(slot)
    elif isinstance(entry.get("ingredients"), list):
        cells = entry["ingredients"]
        requires_table = len(cells) > 4
        for cell in cells:
            slot = _parse_slot(cell, names_by_id, item_names)
            if slot is not None:
                slots.append(slot)
    else:
        return None
    result = entry.get("result")
    output_count = 1
    if isinstance(result, dict) and isinstance(result.get("count"), int) and result["count"] > 0:
        output_count = result["count"]
    return Recipe(slots=tuple(slots), output_count=output_count, requires_table=requires_table, shaped=shaped)


def load_catalog() -> Catalog:
    """Build the catalog from settings/catalog.json, block_sources.json and smelting.json."""
    return Catalog.from_data(
        load_catalog_data(),
        block_sources=load_block_sources(),
        smelting=load_smelting(),
    )
