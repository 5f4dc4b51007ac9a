from __future__ import annotations

"""Plan actions produced by the resolver.

Purpose: Model each primitive plan step as its own frozen dataclass so every
variant carries exactly the fields it needs. `Collect`, `Smelt` and `Craft`
are produced by the resolver; `Place`, `Move`, `Follow` and `Stop` exist only
for the executor and pass through the merger untouched.

Note: `Craft.count` is the desired final holding of the target, not the number
of crafts; the executor re-derives the repeat count from live inventory.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .schemas import PlanStep


def _require_positive(kind: str, count: int) -> None:
    if not isinstance(count, int) or count <= 0:
        raise ValueError(f"{kind} count must be a positive integer, got {count!r}")


@dataclass(frozen=True)
class Collect:
    target: str
    count: int

    def __post_init__(self) -> None:
        _require_positive("collect", self.count)


@dataclass(frozen=True)
class Smelt:
    input: str
    output: str
    count: int

    def __post_init__(self) -> None:
        _require_positive("smelt", self.count)


@dataclass(frozen=True)
class Craft:
    target: str
    count: int  # desired final total, not an increment

    def __post_init__(self) -> None:
        _require_positive("craft", self.count)


@dataclass(frozen=True)
class Place:
    target: str


@dataclass(frozen=True)
class Move:
    block: str
    radius: int = 3


@dataclass(frozen=True)
class Follow:
    player: str


@dataclass(frozen=True)
class Stop:
    reason: Optional[str] = None


Action = Union[Collect, Smelt, Craft, Place, Move, Follow, Stop]


def to_step(action: Action) -> PlanStep:
    """Render an action as the minified wire step sent to the executor."""
    if isinstance(action, Collect):
        return {"op": "collect", "target": action.target, "count": action.count}
    if isinstance(action, Smelt):
        return {"op": "smelt", "input": action.input, "output": action.output, "count": action.count}
    if isinstance(action, Craft):
        return {"op": "craft", "target": action.target, "count": action.count}
    if isinstance(action, Place):
        return {"op": "place", "target": action.target}
    if isinstance(action, Move):
        return {"op": "move", "target": action.block, "radius": action.radius}
    if isinstance(action, Follow):
        return {"op": "follow", "target": action.player}
    if isinstance(action, Stop):
        return {"op": "stop"}
    raise TypeError(f"unsupported action: {action!r}")
