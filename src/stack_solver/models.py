from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .units import CM, KG, format_dimension

LENGTHWISE = "lengthwise"
WIDTHWISE = "widthwise"

LENGTH_FIRST = "length-first"
WIDTH_FIRST = "width-first"


def swap_orientation_tag(tag: str) -> str:
    return WIDTHWISE if tag == LENGTHWISE else LENGTHWISE


@dataclass(frozen=True)
class Pallet:
    """Pallet base footprint, tare and limits (cm / kg)."""

    length: CM
    width: CM
    height: CM
    max_height: CM
    weight: KG = 0.0
    max_weight: KG = 0.0
    oriented_length: Optional[CM] = None
    oriented_width: Optional[CM] = None

    def footprint(self, orientation: str) -> tuple[CM, CM]:
        if orientation == LENGTH_FIRST:
            return self.length, self.width
        if orientation == WIDTH_FIRST:
            return self.width, self.length
        raise ValueError(f"unknown pallet orientation {orientation!r}")

    def oriented(self, orientation: str) -> "Pallet":
        length, width = self.footprint(orientation)
        return replace(self, oriented_length=length, oriented_width=width)

    def base(self) -> "Pallet":
        return replace(self, oriented_length=None, oriented_width=None)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "maxHeight": self.max_height,
            "weight": self.weight,
            "maxWeight": self.max_weight,
        }
        if self.oriented_length is not None:
            data["orientedLength"] = self.oriented_length
            data["orientedWidth"] = self.oriented_width
        return data


@dataclass(frozen=True)
class Box:
    length: CM
    width: CM
    height: CM
    weight: KG = 0.0
    label: str = ""
    quantity: Optional[int] = None
    source_index: int = 0

    @property
    def display_name(self) -> str:
        if self.label:
            return self.label
        return (
            f"{format_dimension(self.length)}×{format_dimension(self.width)}"
            f"×{format_dimension(self.height)} cm"
        )

    @property
    def footprint_area(self) -> float:
        return self.length * self.width

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "weight": self.weight,
            "label": self.label,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class Placement:
    """One box footprint on a level, ``(x, y)`` is the top-left corner."""

    x: CM
    y: CM
    length: CM
    width: CM
    orientation: str
    segment_index: Optional[int] = None

    @property
    def area(self) -> float:
        return self.length * self.width

    def shifted(self, dx: float, dy: float) -> "Placement":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def extrude(
        self, z: CM, height: CM, level: int, segment_index: Optional[int] = None
    ) -> "StackedPlacement":
        if segment_index is None:
            segment_index = self.segment_index
        return StackedPlacement(
            x=self.x,
            y=self.y,
            length=self.length,
            width=self.width,
            orientation=self.orientation,
            z=z,
            height=height,
            level=level,
            segment_index=segment_index,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "x": self.x,
            "y": self.y,
            "length": self.length,
            "width": self.width,
            "orientation": self.orientation,
        }
        if self.segment_index is not None:
            data["segmentIndex"] = self.segment_index
        return data


@dataclass(frozen=True)
class StackedPlacement:
    x: CM
    y: CM
    length: CM
    width: CM
    orientation: str
    z: CM
    height: CM
    level: int
    segment_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "x": self.x,
            "y": self.y,
            "length": self.length,
            "width": self.width,
            "orientation": self.orientation,
            "level": self.level,
            "z": self.z,
            "height": self.height,
        }
        if self.segment_index is not None:
            data["segmentIndex"] = self.segment_index
        return data
