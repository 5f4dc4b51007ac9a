from __future__ import annotations

"""Item/block name normalization and correction.

Purpose: Turn loosely written item names ("Iron Pickaxe", "minecraft:stick",
"iron pick") into catalog names, correcting small typos, and offer
suggestions when no match is close enough.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional

from .catalog import Catalog


NAMESPACE = "minecraft:"


@dataclass(frozen=True)
class NameMatch:
    valid: bool
    corrected: Optional[str]
    original: str


def normalize_item_name(text: str, aliases: Optional[Mapping[str, str]] = None) -> str:
    base = text.strip().lower().replace(" ", "_")
    if base.startswith(NAMESPACE):
        base = base[len(NAMESPACE):]
    base = (aliases or {}).get(base, base)
    if base.startswith(NAMESPACE):
        base = base[len(NAMESPACE):]
    return base


def levenshtein_distance(a: str, b: str) -> int:
    if len(a) < len(b):
        a, b = b, a
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        cur = [i]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                cur.append(prev[j - 1])
            else:
                cur.append(min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + 1))
        prev = cur
    return prev[-1]


def find_closest_name(name: str, catalog: Catalog, max_distance: int = 3) -> Optional[str]:
    normalized = name.strip().lower()
    all_names = catalog.names()
    if normalized in all_names:
        return normalized

    # containment match, only when the lengths are close
    for candidate in all_names:
        if normalized in candidate and abs(len(candidate) - len(normalized)) <= 5:
            return candidate

    best: Optional[str] = None
    best_distance = max_distance + 1
    for candidate in all_names:
        d = levenshtein_distance(normalized, candidate)
        if d < best_distance:
            best, best_distance = candidate, d
    return best


def validate_and_correct_name(name: str, catalog: Catalog) -> NameMatch:
    if not name:
        return NameMatch(valid=False, corrected=None, original=name)
    normalized = name.strip().lower()
    if catalog.block_exists(normalized) or catalog.item_exists(normalized):
        return NameMatch(valid=True, corrected=normalized, original=name)
    corrected = find_closest_name(normalized, catalog)
    if corrected:
        return NameMatch(valid=True, corrected=corrected, original=name)
    return NameMatch(valid=False, corrected=None, original=name)


def suggestions(name: str, catalog: Catalog, limit: int = 3) -> List[str]:
    """Closest catalog names within edit distance 5, nearest first."""
    if not name:
        return []
    normalized = name.strip().lower()
    scored = [(levenshtein_distance(normalized, c), c) for c in catalog.names()]
    close = sorted((s for s in scored if s[0] <= 5), key=lambda s: s[0])
    return [c for _, c in close[:limit]]
