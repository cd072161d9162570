from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Union

from .combiner import combine_solutions
from .models import Box, Pallet
from .orientation import choose_orientation
from .solutions import BatchResult, Solution, build_solutions_summary, format_solution
from .validation import normalise_box, normalise_boxes, normalise_pallet, validate_dimensions

logger = logging.getLogger(__name__)


def solve_box(pallet: Pallet, box: Box) -> Solution:
    """Solve one validated box type on a validated pallet."""
    validate_dimensions(pallet, box)
    config, orientation = choose_orientation(pallet, box)
    logger.debug(
        "%s: %s, %d lengthwise + %d widthwise columns, %d boxes per level",
        box.display_name,
        orientation,
        config.nrb,
        config.extra_columns,
        config.boxes_per_level,
    )
    solution = format_solution(config, pallet, box, orientation)
    logger.debug(
        "%s: %d boxes on %d levels, shortfall %d",
        box.display_name,
        solution.metrics.total_boxes,
        solution.metrics.levels,
        solution.metrics.quantity_shortfall,
    )
    return solution


def _is_box_sequence(boxes: Any) -> bool:
    return isinstance(boxes, Sequence) and not isinstance(boxes, (str, bytes, Mapping))


def solve(pallet: Any, boxes: Any) -> Union[Solution, BatchResult]:
    """Solve one box type (returns a ``Solution``) or many (``BatchResult``).

    ``pallet`` and each box may be model instances or camelCase mappings.
    Results keep the input order and carry each box's ``source_index``.
    """
    base = normalise_pallet(pallet)
    if not _is_box_sequence(boxes):
        return solve_box(base, normalise_box(boxes))

    results = tuple(solve_box(base, box) for box in normalise_boxes(boxes))
    return BatchResult(
        mode="multi" if len(results) > 1 else "single",
        pallet=base,
        results=results,
        summary=build_solutions_summary(results, base),
    )


def combine(solutions: Sequence[Any], pallet_override: Any = None) -> Solution:
    """Merge at least two solved box types into one stacked solution."""
    return combine_solutions(solutions, pallet_override)
