from __future__ import annotations

"""Typed schema definitions for plan service messages.

Purpose: Provide precise TypedDicts for the executor <-> planner message
contracts to aid static checks and keep the protocol explicit.

"""

from typing import Any, Dict, List, Literal, Optional, TypedDict, Union


MessageType = Literal[
    "handshake",
    "handshake_ack",
    "plan_request",
    "plan",
    "plan_failed",
    "recipe_request",
    "recipe_info",
    "progress_update",
    "cancel",
    "ping",
    "pong",
]

FailureKind = Literal["unknown_item", "circular", "depth_exceeded"]


class Handshake(TypedDict, total=False):
    type: Literal["handshake"]
    player_uuid: str
    password: str
    client_version: Optional[str]


class InventorySlot(TypedDict, total=False):
    name: str
    id: str
    count: int


class PlanRequest(TypedDict, total=False):
    type: Literal["plan_request"]
    request_id: str
    item: str
    count: int
    inventory: Union[Dict[str, int], List[InventorySlot]]


class PlanStep(TypedDict, total=False):
    op: str
    target: str
    input: str
    output: str
    count: int
    radius: int


class Plan(TypedDict):
    type: Literal["plan"]
    plan_id: str
    request_id: str
    item: str
    count: int
    steps: List[PlanStep]


class PlanFailed(TypedDict):
    type: Literal["plan_failed"]
    request_id: str
    item: str
    kind: FailureKind
    reason: str
    suggestions: List[str]


class RecipeRequest(TypedDict):
    type: Literal["recipe_request"]
    request_id: str
    item: str


class IngredientInfo(TypedDict):
    name: str
    count: int


class RecipeInfo(TypedDict, total=False):
    type: Literal["recipe_info"]
    request_id: str
    item: str
    valid: bool
    message: str
    requires_table: bool
    output_count: int
    ingredients: List[IngredientInfo]


class ProgressUpdate(TypedDict, total=False):
    type: Literal["progress_update"]
    plan_id: str
    step: int
    status: Literal["ok", "fail", "skipped", "cancelled"]
    note: Optional[str]


class Cancel(TypedDict):
    type: Literal["cancel"]
    request_id: str


JsonObject = Dict[str, Any]
