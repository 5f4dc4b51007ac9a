from __future__ import annotations

"""Collapse a raw resolver action list into the final plan.

Recursion can reach the same intermediate (e.g. planks) from several branches,
so the raw list may repeat targets. Order of the merged plan:

1. collects, summed per target
2. smelts, summed per (input, output), first-occurrence order
3. crafts, one per target in first-occurrence order, carrying the last written
   count (a craft count is a final total, so later writes supersede)
4. anything else, unchanged
"""

from typing import Dict, List, Sequence, Tuple

from .actions import Action, Collect, Craft, Smelt


def merge_actions(actions: Sequence[Action]) -> List[Action]:
    collects: Dict[str, int] = {}
    smelts: Dict[Tuple[str, str], int] = {}
    crafts: Dict[str, int] = {}
    others: List[Action] = []

    for action in actions:
        if isinstance(action, Collect):
            collects[action.target] = collects.get(action.target, 0) + action.count
        elif isinstance(action, Smelt):
            key = (action.input, action.output)
            smelts[key] = smelts.get(key, 0) + action.count
        elif isinstance(action, Craft):
            # dict keeps the first insertion position; assignment keeps the last count
            crafts[action.target] = action.count
        else:
            others.append(action)

    merged: List[Action] = [Collect(t, c) for t, c in collects.items()]
    merged.extend(Smelt(i, o, c) for (i, o), c in smelts.items())
    merged.extend(Craft(t, c) for t, c in crafts.items())
    merged.extend(others)
    return merged
