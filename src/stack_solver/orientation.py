"""Two-placement column tiling of one box type on a pallet footprint."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .models import LENGTH_FIRST, WIDTH_FIRST, Box, Pallet


@dataclass(frozen=True)
class OrientationConfig:
    """Best column mix for one pallet footprint.

    ``nrb`` columns hold lengthwise boxes (``box_length`` along the pallet
    axis, ``max_boxes_width2`` per column); the remaining ``extra_columns``
    hold widthwise boxes (``max_boxes_width1`` per column).
    """

    cargo_area: float
    boxes_orientation1: int
    boxes_orientation2: int
    nrb: int
    extra_columns: int
    max_boxes_length: int
    max_boxes_width1: int
    max_boxes_width2: int
    pallet_len: float
    pallet_width: float
    box_length: float
    box_width: float

    @property
    def boxes_per_level(self) -> int:
        return self.boxes_orientation1 + self.boxes_orientation2


def calculate_orientation(
    pallet_len: float, pallet_width: float, box_length: float, box_width: float
) -> OrientationConfig:
    max_boxes_length = math.floor(pallet_len / box_length)
    max_boxes_width1 = math.floor(pallet_width / box_length)
    max_boxes_width2 = math.floor(pallet_width / box_width)
    box_area = box_length * box_width

    best: OrientationConfig | None = None
    for nrb in range(max_boxes_length, -1, -1):
        diff = pallet_len - nrb * box_length
        extra_columns = math.floor(diff / box_width)
        count_orientation1 = nrb * max_boxes_width2
        count_orientation2 = extra_columns * max_boxes_width1
        cargo_area = box_area * (count_orientation1 + count_orientation2)
        # strict comparison keeps the largest nrb on ties
        if best is None or cargo_area > best.cargo_area:
            best = OrientationConfig(
                cargo_area=cargo_area,
                boxes_orientation1=count_orientation1,
                boxes_orientation2=count_orientation2,
                nrb=nrb,
                extra_columns=extra_columns,
                max_boxes_length=max_boxes_length,
                max_boxes_width1=max_boxes_width1,
                max_boxes_width2=max_boxes_width2,
                pallet_len=pallet_len,
                pallet_width=pallet_width,
                box_length=box_length,
                box_width=box_width,
            )

    if best is None or best.boxes_per_level == 0:
        return OrientationConfig(
            cargo_area=0.0,
            boxes_orientation1=0,
            boxes_orientation2=0,
            nrb=0,
            extra_columns=0,
            max_boxes_length=max_boxes_length,
            max_boxes_width1=max_boxes_width1,
            max_boxes_width2=max_boxes_width2,
            pallet_len=pallet_len,
            pallet_width=pallet_width,
            box_length=box_length,
            box_width=box_width,
        )
    return best


def choose_orientation(pallet: Pallet, box: Box) -> Tuple[OrientationConfig, str]:
    """Run the optimizer along both pallet axes, length-first wins ties."""
    length_first = calculate_orientation(pallet.length, pallet.width, box.length, box.width)
    width_first = calculate_orientation(pallet.width, pallet.length, box.length, box.width)
    if length_first.cargo_area >= width_first.cargo_area:
        return length_first, LENGTH_FIRST
    return width_first, WIDTH_FIRST
