from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .errors import InfeasibleError, InputValidationError
from .models import Box, Pallet


@dataclass(frozen=True)
class LevelLimits:
    by_height: int
    by_weight: Optional[int] = None

    @property
    def levels(self) -> int:
        if self.by_height <= 0:
            return 0
        if self.by_weight is None:
            return self.by_height
        return max(min(self.by_height, self.by_weight), 0)

    @property
    def limiting_constraint(self) -> str:
        if self.by_height <= 0:
            return "height"
        if self.by_weight is not None and self.by_weight < self.by_height:
            return "weight"
        return "height"


@dataclass(frozen=True)
class QuantityPlan:
    target_boxes: int
    levels: int
    full_levels: int
    last_level_boxes: int
    quantity_requested: Optional[int]
    quantity_shortfall: int


def compute_level_limits(pallet: Pallet, box: Box, boxes_per_level: int) -> LevelLimits:
    if boxes_per_level <= 0:
        return LevelLimits(by_height=0)

    height_allowance = pallet.max_height - pallet.height
    by_height = math.floor(height_allowance / box.height)
    if by_height <= 0 or not pallet.max_weight:
        return LevelLimits(by_height=by_height)

    weight_allowance = pallet.max_weight - pallet.weight
    if weight_allowance < 0:
        return LevelLimits(by_height=by_height, by_weight=0)
    level_weight = boxes_per_level * box.weight
    if level_weight <= 0:
        # weightless boxes never hit the weight limit
        return LevelLimits(by_height=by_height)
    return LevelLimits(
        by_height=by_height, by_weight=math.floor(weight_allowance / level_weight)
    )


def calculate_levels(pallet: Pallet, box: Box, boxes_per_level: int) -> int:
    return compute_level_limits(pallet, box, boxes_per_level).levels


def require_levels(pallet: Pallet, box: Box, boxes_per_level: int) -> int:
    limits = compute_level_limits(pallet, box, boxes_per_level)
    if limits.levels > 0:
        return limits.levels
    if limits.limiting_constraint == "weight":
        raise InfeasibleError(
            "No stack levels can be placed on the pallet within the maximum weight "
            f"({pallet.max_weight:g} kg including the {pallet.weight:g} kg pallet)."
        )
    raise InfeasibleError(
        "No stack levels can be placed on the pallet within the maximum height "
        f"({pallet.max_height:g} cm including the {pallet.height:g} cm pallet)."
    )


def plan_quantity(
    boxes_per_level: int, levels: int, quantity: Optional[int] = None
) -> QuantityPlan:
    """Clamp the placed box count to ``quantity`` and re-derive the levels."""
    target_boxes = boxes_per_level * levels
    quantity_requested: Optional[int] = None
    if quantity is not None:
        if quantity <= 0:
            raise InputValidationError("Quantity must be greater than zero.")
        quantity_requested = int(quantity)
        target_boxes = min(target_boxes, quantity_requested)

    if target_boxes <= 0 or boxes_per_level <= 0:
        raise InfeasibleError("No boxes fit on the pallet with the provided dimensions.")

    full_levels = target_boxes // boxes_per_level
    remainder = target_boxes - full_levels * boxes_per_level
    return QuantityPlan(
        target_boxes=target_boxes,
        levels=full_levels + 1 if remainder else full_levels,
        full_levels=full_levels,
        last_level_boxes=remainder if remainder else boxes_per_level,
        quantity_requested=quantity_requested,
        quantity_shortfall=(
            max(0, quantity_requested - target_boxes)
            if quantity_requested is not None
            else 0
        ),
    )
