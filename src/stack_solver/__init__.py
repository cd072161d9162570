"""Pallet tiling and stacking engine."""

from .engine import combine, solve, solve_box
from .errors import CombinationError, InfeasibleError, InputValidationError, StackingError
from .models import Box, Pallet, Placement, StackedPlacement
from .orientation import OrientationConfig, calculate_orientation, choose_orientation
from .solutions import BatchResult, BatchSummary, Segment, Solution, SolutionMetrics
from .stacking import calculate_levels, plan_quantity
from .transformations import rotate_footprint

__all__ = [
    "Box",
    "Pallet",
    "Placement",
    "StackedPlacement",
    "OrientationConfig",
    "calculate_orientation",
    "choose_orientation",
    "calculate_levels",
    "plan_quantity",
    "rotate_footprint",
    "Solution",
    "SolutionMetrics",
    "Segment",
    "BatchResult",
    "BatchSummary",
    "solve",
    "solve_box",
    "combine",
    "StackingError",
    "InputValidationError",
    "InfeasibleError",
    "CombinationError",
]
