from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import LENGTHWISE, WIDTHWISE, Box, Placement, StackedPlacement
from .orientation import OrientationConfig

Layout = List[Placement]


@dataclass(frozen=True)
class Bounds:
    """Bounding rectangle of a level and the area its boxes cover."""

    length: float
    width: float
    area: float


def build_layout(
    config: OrientationConfig, box: Box, limit: Optional[int] = None
) -> Layout:
    """Expand a column mix into placements, lengthwise block first."""
    layout: Layout = []
    remaining = math.inf if limit is None else limit

    if config.boxes_orientation1 > 0 and config.max_boxes_width2 > 0:
        for i in range(config.nrb):
            for j in range(config.max_boxes_width2):
                if remaining <= 0:
                    return layout
                layout.append(
                    Placement(i * box.length, j * box.width, box.length, box.width, LENGTHWISE)
                )
                remaining -= 1

    if config.boxes_orientation2 > 0 and config.max_boxes_width1 > 0:
        start_x = config.nrb * box.length
        for i in range(config.extra_columns):
            for j in range(config.max_boxes_width1):
                if remaining <= 0:
                    return layout
                layout.append(
                    Placement(
                        start_x + i * box.width, j * box.length, box.width, box.length, WIDTHWISE
                    )
                )
                remaining -= 1

    return layout


def measure_layout(layout: Sequence[Placement]) -> Bounds:
    if not layout:
        return Bounds(0.0, 0.0, 0.0)
    min_x = min(p.x for p in layout)
    min_y = min(p.y for p in layout)
    max_x = max(p.x + p.length for p in layout)
    max_y = max(p.y + p.width for p in layout)
    return Bounds(max_x - min_x, max_y - min_y, sum(p.area for p in layout))


def offset_layout(layout: Iterable[Placement], offset_x: float, offset_y: float) -> Layout:
    return [placement.shifted(offset_x, offset_y) for placement in layout]


def centering_offsets(
    footprint_length: float, footprint_width: float, bounds: Bounds
) -> Tuple[float, float]:
    return (
        (footprint_length - bounds.length) / 2,
        (footprint_width - bounds.width) / 2,
    )


def center_layout(
    layout: Sequence[Placement], footprint_length: float, footprint_width: float
) -> Tuple[Layout, Bounds, float, float]:
    """Center a level on the footprint.

    Returns the shifted layout, its bounds and the symmetric margins
    ``(offset_x, offset_y)`` left around it.
    """
    if not layout:
        return [], Bounds(0.0, 0.0, 0.0), footprint_length / 2, footprint_width / 2
    bounds = measure_layout(layout)
    offset_x, offset_y = centering_offsets(footprint_length, footprint_width, bounds)
    min_x = min(p.x for p in layout)
    min_y = min(p.y for p in layout)
    centered = offset_layout(layout, offset_x - min_x, offset_y - min_y)
    return centered, bounds, offset_x, offset_y


def build_stack(
    layout: Sequence[Placement],
    levels: int,
    box_height: float,
    base_height: float,
    total_boxes: int,
    *,
    level_offset: int = 0,
    segment_index: Optional[int] = None,
) -> List[StackedPlacement]:
    """Repeat ``layout`` for each level until ``total_boxes`` are placed."""
    stack: List[StackedPlacement] = []
    remaining = total_boxes
    for level in range(levels):
        z = base_height + level * box_height
        for placement in layout:
            if remaining <= 0:
                return stack
            stack.append(
                placement.extrude(z, box_height, level_offset + level, segment_index)
            )
            remaining -= 1
    return stack
