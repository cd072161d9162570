"""Merge single-box-type solutions into one segmented stack."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .errors import CombinationError
from .layout import Bounds, build_stack
from .models import LENGTH_FIRST, WIDTH_FIRST, Pallet, Placement, StackedPlacement
from .settings import footprint_tolerance, segment_palette
from .solutions import Segment, Solution, SolutionMeta, SolutionMetrics
from .transformations import rotate_footprint, rotation_direction
from .validation import normalise_pallet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Reconciled:
    solution: Solution
    layout: Tuple[Placement, ...]
    bounds: Bounds


def _coerce_solution(entry: Any, index: int) -> Optional[Solution]:
    if isinstance(entry, Solution):
        solution = entry
    elif isinstance(entry, Mapping):
        try:
            solution = Solution.from_dict(entry)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping solution %d: %s", index, exc)
            return None
    else:
        logger.warning("Skipping solution %d: unsupported type %s", index, type(entry).__name__)
        return None
    if not solution.layout or solution.box.height <= 0:
        logger.warning("Skipping solution %d: empty layout", index)
        return None
    return solution


def _sort_key(solution: Solution) -> Tuple[float, float]:
    return (-solution.box.weight, -solution.metrics.area_occupied)


def _check_footprints(solutions: Sequence[Solution], base: Pallet) -> None:
    tolerance = footprint_tolerance()
    for solution in solutions:
        if (
            abs(solution.pallet.length - base.length) > tolerance
            or abs(solution.pallet.width - base.width) > tolerance
        ):
            raise CombinationError(
                "All solutions must share the same pallet footprint "
                f"({base.length:g}×{base.width:g} cm); "
                f"{solution.meta.display_name} uses "
                f"{solution.pallet.length:g}×{solution.pallet.width:g} cm."
            )


def reconcile_layout(
    solution: Solution, target_orientation: str, target_footprint: Tuple[float, float]
) -> _Reconciled:
    """Express a solution's level in the target pallet orientation."""
    try:
        direction = rotation_direction(solution.orientation, target_orientation)
    except ValueError as exc:
        raise CombinationError(f"Cannot reconcile orientations: {exc}.") from exc

    if direction is None:
        bounds = Bounds(
            solution.metrics.cargo_length,
            solution.metrics.cargo_width,
            sum(placement.area for placement in solution.layout),
        )
        return _Reconciled(solution, solution.layout, bounds)

    layout, bounds = rotate_footprint(solution.layout, direction, target_footprint)
    logger.debug(
        "Rotated %s %s to %s", solution.meta.display_name, direction, target_orientation
    )
    return _Reconciled(solution, tuple(layout), bounds)


def _combined_warnings(pallet: Pallet, total_height: float, total_weight: float) -> List[str]:
    warnings: List[str] = []
    if total_height > pallet.max_height:
        warnings.append(
            f"Combined stack height {total_height:g} cm exceeds the pallet "
            f"maximum of {pallet.max_height:g} cm."
        )
    if pallet.max_weight and total_weight > pallet.max_weight:
        warnings.append(
            f"Combined weight {total_weight:g} kg exceeds the pallet "
            f"maximum of {pallet.max_weight:g} kg."
        )
    return warnings


def combine_solutions(
    solutions: Sequence[Any], pallet_override: Any = None
) -> Solution:
    """Stack several solved box types on one pallet, heaviest first.

    Inputs that are not structurally solutions are skipped; at least two
    must remain.  Layouts solved along the other pallet axis are rotated
    into the heaviest type's orientation.  Segments with no boxes are
    dropped.
    """
    valid = [
        solution
        for solution in (
            _coerce_solution(entry, index) for index, entry in enumerate(solutions or ())
        )
        if solution is not None
    ]
    if len(valid) < 2:
        raise CombinationError("At least two valid solutions are required to combine.")

    ordered = sorted(valid, key=_sort_key)
    base = (
        normalise_pallet(pallet_override)
        if pallet_override is not None
        else ordered[0].pallet.base()
    )
    _check_footprints(ordered, base)

    target_orientation = ordered[0].orientation
    if target_orientation not in (LENGTH_FIRST, WIDTH_FIRST):
        raise CombinationError(
            f"Cannot reconcile orientations: unknown orientation {target_orientation!r}."
        )
    target_pallet = base.oriented(target_orientation)
    target_footprint = (target_pallet.oriented_length, target_pallet.oriented_width)

    palette = segment_palette()
    segments: List[Segment] = []
    layout: List[Placement] = []
    layout3d: List[StackedPlacement] = []
    current_height = base.height
    level_cursor = 0
    full_levels = 0
    last_level_boxes = 0
    boxes_per_level = 0

    for item in (reconcile_layout(s, target_orientation, target_footprint) for s in ordered):
        solution = item.solution
        metrics = solution.metrics
        if metrics.total_boxes <= 0 or not item.layout or metrics.levels <= 0:
            logger.warning("Dropping %s: no boxes to stack", solution.meta.display_name)
            continue

        segment_index = len(segments)
        stack = build_stack(
            item.layout,
            metrics.levels,
            solution.box.height,
            current_height,
            metrics.total_boxes,
            level_offset=level_cursor,
            segment_index=segment_index,
        )
        if not stack:
            logger.warning("Dropping %s: no boxes to stack", solution.meta.display_name)
            continue

        end_height = current_height + metrics.levels * solution.box.height
        segments.append(
            Segment(
                label=solution.meta.display_name,
                total_boxes=len(stack),
                load_weight=len(stack) * solution.box.weight,
                quantity_requested=metrics.quantity_requested,
                quantity_shortfall=metrics.quantity_shortfall,
                box_length=solution.box.length,
                box_width=solution.box.width,
                box_height=solution.box.height,
                box_weight=solution.box.weight,
                start_height=current_height,
                end_height=end_height,
                levels=metrics.levels,
                cargo_length=item.bounds.length,
                cargo_width=item.bounds.width,
                area_occupied=item.bounds.area,
                source_index=solution.meta.source_index,
                color=palette[segment_index % len(palette)],
            )
        )
        layout.extend(
            Placement(p.x, p.y, p.length, p.width, p.orientation, segment_index)
            for p in item.layout
        )
        layout3d.extend(stack)
        logger.debug(
            "Segment %d (%s): %d boxes from %g to %g cm",
            segment_index,
            solution.meta.display_name,
            len(stack),
            current_height,
            end_height,
        )
        current_height = end_height
        level_cursor += metrics.levels
        full_levels += metrics.full_levels
        last_level_boxes = metrics.last_level_boxes
        boxes_per_level = max(boxes_per_level, metrics.boxes_per_level)

    if not segments:
        raise CombinationError("None of the solutions contributes any boxes to the stack.")

    cargo_length = max(segment.cargo_length for segment in segments)
    cargo_width = max(segment.cargo_width for segment in segments)
    area_occupied = max(segment.area_occupied for segment in segments)
    area_total = target_footprint[0] * target_footprint[1]
    total_boxes = sum(segment.total_boxes for segment in segments)
    load_weight = sum(segment.load_weight for segment in segments)
    total_weight = load_weight + base.weight

    quantity_requested: Optional[int] = None
    quantity_shortfall = 0
    if any(segment.quantity_requested is not None for segment in segments):
        # segments without a requested quantity asked for what they hold
        quantity_requested = sum(
            segment.quantity_requested
            if segment.quantity_requested is not None
            else segment.total_boxes
            for segment in segments
        )
        quantity_shortfall = sum(segment.quantity_shortfall for segment in segments)

    metrics = SolutionMetrics(
        boxes_per_level=boxes_per_level,
        levels=level_cursor,
        full_levels=full_levels,
        last_level_boxes=last_level_boxes,
        cargo_length=cargo_length,
        cargo_width=cargo_width,
        offset_x=(target_footprint[0] - cargo_length) / 2,
        offset_y=(target_footprint[1] - cargo_width) / 2,
        total_height=current_height,
        area_total=area_total,
        area_occupied=area_occupied,
        efficiency=0.0 if area_total == 0 else area_occupied / area_total * 100,
        unused_area=max(area_total - area_occupied, 0.0),
        load_weight=load_weight,
        total_weight=total_weight,
        total_boxes=total_boxes,
        quantity_requested=quantity_requested,
        quantity_shortfall=quantity_shortfall,
    )

    warnings = _combined_warnings(base, current_height, total_weight)
    for message in warnings:
        logger.warning(message)

    heaviest = ordered[0]
    return Solution(
        pallet=target_pallet,
        box=heaviest.box,
        orientation=target_orientation,
        metrics=metrics,
        arrangement=heaviest.arrangement,
        layout=tuple(layout),
        layout3d=tuple(layout3d),
        meta=SolutionMeta(
            display_name=" + ".join(segment.label for segment in segments),
            source_index=heaviest.meta.source_index,
            combined=True,
            segments=tuple(segments),
            warnings=tuple(warnings),
        ),
    )
