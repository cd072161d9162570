from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

import numpy as np

from .layout import Bounds, centering_offsets
from .models import LENGTH_FIRST, WIDTH_FIRST, Placement, swap_orientation_tag

CLOCKWISE = "clockwise"
COUNTER_CLOCKWISE = "counter-clockwise"

# Quarter turns about the origin, applied to column vectors (x, y).
_ROTATIONS = {
    CLOCKWISE: np.array([[0.0, 1.0], [-1.0, 0.0]]),
    COUNTER_CLOCKWISE: np.array([[0.0, -1.0], [1.0, 0.0]]),
}


def rotation_direction(source: str, target: str) -> str | None:
    """Return the quarter turn taking ``source`` pallet orientation to ``target``.

    ``None`` means the layout already matches.  Unknown orientation pairs
    raise ``ValueError``.
    """
    if source == target and source in (LENGTH_FIRST, WIDTH_FIRST):
        return None
    if source == LENGTH_FIRST and target == WIDTH_FIRST:
        return CLOCKWISE
    if source == WIDTH_FIRST and target == LENGTH_FIRST:
        return COUNTER_CLOCKWISE
    raise ValueError(f"cannot reconcile orientations {source!r} and {target!r}")


def _corners(placements: Sequence[Placement]) -> np.ndarray:
    xy = np.array([(p.x, p.y) for p in placements], dtype=float)
    size = np.array([(p.length, p.width) for p in placements], dtype=float)
    return np.stack(
        [
            xy,
            xy + size * (1.0, 0.0),
            xy + size * (0.0, 1.0),
            xy + size,
        ],
        axis=1,
    )


def rotate_footprint(
    placements: Sequence[Placement],
    direction: str,
    target_footprint: Tuple[float, float],
) -> Tuple[List[Placement], Bounds]:
    """Turn a level a quarter turn and center it on ``target_footprint``.

    Every placement swaps its length/width and its lengthwise/widthwise tag.
    The returned bounds are measured from the rotated corners.
    """
    if direction not in _ROTATIONS:
        raise ValueError(f"unknown rotation direction {direction!r}")
    if not placements:
        return [], Bounds(0.0, 0.0, 0.0)

    rotated = _corners(placements) @ _ROTATIONS[direction].T
    mins = rotated.min(axis=1)
    low = rotated.reshape(-1, 2).min(axis=0)
    high = rotated.reshape(-1, 2).max(axis=0)
    length, width = (high - low).tolist()
    area = float(sum(p.area for p in placements))
    bounds = Bounds(length, width, area)

    offset_x, offset_y = centering_offsets(target_footprint[0], target_footprint[1], bounds)
    result: List[Placement] = []
    for placement, (min_x, min_y) in zip(placements, (mins - low).tolist()):
        result.append(
            replace(
                placement,
                x=min_x + offset_x,
                y=min_y + offset_y,
                length=placement.width,
                width=placement.length,
                orientation=swap_orientation_tag(placement.orientation),
            )
        )
    return result, bounds
