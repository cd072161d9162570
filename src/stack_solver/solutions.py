from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Sequence, Tuple

from .errors import InfeasibleError
from .layout import build_layout, build_stack, center_layout
from .models import (
    LENGTH_FIRST,
    WIDTH_FIRST,
    Box,
    Pallet,
    Placement,
    StackedPlacement,
)
from .orientation import OrientationConfig
from .stacking import plan_quantity, require_levels

BatchMode = Literal["single", "multi"]

ERROR_NO_BOXES_FIT = "No boxes fit on the pallet with the provided dimensions."


@dataclass(frozen=True)
class SolutionMetrics:
    boxes_per_level: int
    levels: int
    full_levels: int
    last_level_boxes: int
    cargo_length: float
    cargo_width: float
    offset_x: float
    offset_y: float
    total_height: float
    area_total: float
    area_occupied: float
    efficiency: float
    unused_area: float
    load_weight: float
    total_weight: float
    total_boxes: int
    quantity_requested: Optional[int]
    quantity_shortfall: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boxesPerLevel": self.boxes_per_level,
            "levels": self.levels,
            "fullLevels": self.full_levels,
            "lastLevelBoxes": self.last_level_boxes,
            "cargoLength": self.cargo_length,
            "cargoWidth": self.cargo_width,
            "offsetX": self.offset_x,
            "offsetY": self.offset_y,
            "totalHeight": self.total_height,
            "areaTotal": self.area_total,
            "areaOccupied": self.area_occupied,
            "efficiency": self.efficiency,
            "unusedArea": self.unused_area,
            "loadWeight": self.load_weight,
            "totalWeight": self.total_weight,
            "totalBoxes": self.total_boxes,
            "quantityRequested": self.quantity_requested,
            "quantityShortfall": self.quantity_shortfall,
        }


@dataclass(frozen=True)
class Arrangement:
    orientation1_columns: int
    orientation1_per_column: int
    orientation2_columns: int
    orientation2_per_column: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orientation1Columns": self.orientation1_columns,
            "orientation1PerColumn": self.orientation1_per_column,
            "orientation2Columns": self.orientation2_columns,
            "orientation2PerColumn": self.orientation2_per_column,
        }


@dataclass(frozen=True)
class Segment:
    """One box type's vertical slice of a combined stack."""

    label: str
    total_boxes: int
    load_weight: float
    quantity_requested: Optional[int]
    quantity_shortfall: int
    box_length: float
    box_width: float
    box_height: float
    box_weight: float
    start_height: float
    end_height: float
    levels: int
    cargo_length: float
    cargo_width: float
    area_occupied: float
    source_index: int
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "totalBoxes": self.total_boxes,
            "loadWeight": self.load_weight,
            "quantityRequested": self.quantity_requested,
            "quantityShortfall": self.quantity_shortfall,
            "box": {
                "length": self.box_length,
                "width": self.box_width,
                "height": self.box_height,
                "weight": self.box_weight,
            },
            "startHeight": self.start_height,
            "endHeight": self.end_height,
            "levels": self.levels,
            "cargoLength": self.cargo_length,
            "cargoWidth": self.cargo_width,
            "areaOccupied": self.area_occupied,
            "sourceIndex": self.source_index,
            "color": self.color,
        }


@dataclass(frozen=True)
class SolutionMeta:
    display_name: str
    source_index: int
    combined: bool = False
    segments: Tuple[Segment, ...] = ()
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "displayName": self.display_name,
            "sourceIndex": self.source_index,
        }
        if self.combined:
            data["combined"] = True
            data["segments"] = [segment.to_dict() for segment in self.segments]
            data["warnings"] = list(self.warnings)
        return data


@dataclass(frozen=True)
class Solution:
    pallet: Pallet
    box: Box
    orientation: str
    metrics: SolutionMetrics
    arrangement: Arrangement
    layout: Tuple[Placement, ...]
    layout3d: Tuple[StackedPlacement, ...]
    meta: SolutionMeta

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pallet": self.pallet.to_dict(),
            "box": self.box.to_dict(),
            "orientation": self.orientation,
            "metrics": self.metrics.to_dict(),
            "arrangement": self.arrangement.to_dict(),
            "layout": [placement.to_dict() for placement in self.layout],
            "layout3d": [placement.to_dict() for placement in self.layout3d],
            "meta": self.meta.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Solution":
        """Rebuild a solution from ``to_dict`` output.

        Raises ``AttributeError``, ``KeyError``, ``TypeError`` or
        ``ValueError`` when the payload is not structurally a solution.
        """
        pallet = data["pallet"]
        box = data["box"]
        metrics = data["metrics"]
        arrangement = data.get("arrangement") or {}
        meta = data.get("meta") or {}
        orientation = data["orientation"]
        if not isinstance(orientation, str):
            raise TypeError("orientation must be a string")

        source_index = int(meta.get("sourceIndex", box.get("sourceIndex", 0)) or 0)
        quantity = box.get("quantity")
        parsed_box = Box(
            length=float(box["length"]),
            width=float(box["width"]),
            height=float(box["height"]),
            weight=float(box["weight"]),
            label=str(box.get("label") or ""),
            quantity=int(quantity) if quantity is not None else None,
            source_index=source_index,
        )
        parsed_pallet = Pallet(
            length=float(pallet["length"]),
            width=float(pallet["width"]),
            height=float(pallet["height"]),
            max_height=float(pallet["maxHeight"]),
            weight=float(pallet.get("weight", 0.0)),
            max_weight=float(pallet.get("maxWeight", 0.0) or 0.0),
        )
        if orientation in (LENGTH_FIRST, WIDTH_FIRST):
            parsed_pallet = parsed_pallet.oriented(orientation)

        requested = metrics.get("quantityRequested")
        parsed_metrics = SolutionMetrics(
            boxes_per_level=int(metrics["boxesPerLevel"]),
            levels=int(metrics["levels"]),
            full_levels=int(metrics.get("fullLevels", metrics["levels"])),
            last_level_boxes=int(metrics.get("lastLevelBoxes", metrics["boxesPerLevel"])),
            cargo_length=float(metrics["cargoLength"]),
            cargo_width=float(metrics["cargoWidth"]),
            offset_x=float(metrics.get("offsetX", 0.0)),
            offset_y=float(metrics.get("offsetY", 0.0)),
            total_height=float(metrics["totalHeight"]),
            area_total=float(metrics["areaTotal"]),
            area_occupied=float(metrics["areaOccupied"]),
            efficiency=float(metrics["efficiency"]),
            unused_area=float(metrics["unusedArea"]),
            load_weight=float(metrics["loadWeight"]),
            total_weight=float(metrics["totalWeight"]),
            total_boxes=int(metrics["totalBoxes"]),
            quantity_requested=int(requested) if requested is not None else None,
            quantity_shortfall=int(metrics.get("quantityShortfall") or 0),
        )
        parsed_arrangement = Arrangement(
            orientation1_columns=int(arrangement.get("orientation1Columns", 0)),
            orientation1_per_column=int(arrangement.get("orientation1PerColumn", 0)),
            orientation2_columns=int(arrangement.get("orientation2Columns", 0)),
            orientation2_per_column=int(arrangement.get("orientation2PerColumn", 0)),
        )
        layout = tuple(
            Placement(
                x=float(item["x"]),
                y=float(item["y"]),
                length=float(item["length"]),
                width=float(item["width"]),
                orientation=str(item["orientation"]),
            )
            for item in data["layout"]
        )
        layout3d = tuple(
            StackedPlacement(
                x=float(item["x"]),
                y=float(item["y"]),
                length=float(item["length"]),
                width=float(item["width"]),
                orientation=str(item["orientation"]),
                z=float(item["z"]),
                height=float(item["height"]),
                level=int(item["level"]),
            )
            for item in data.get("layout3d") or ()
        )
        return cls(
            pallet=parsed_pallet,
            box=parsed_box,
            orientation=orientation,
            metrics=parsed_metrics,
            arrangement=parsed_arrangement,
            layout=layout,
            layout3d=layout3d,
            meta=SolutionMeta(
                display_name=str(meta.get("displayName") or parsed_box.display_name),
                source_index=source_index,
            ),
        )


@dataclass(frozen=True)
class BatchSummary:
    total_boxes: int
    total_layouts: int
    total_load_weight: float
    total_weight: float
    max_height: float
    unplaced_boxes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalBoxes": self.total_boxes,
            "totalLayouts": self.total_layouts,
            "totalLoadWeight": self.total_load_weight,
            "totalWeight": self.total_weight,
            "maxHeight": self.max_height,
            "unplacedBoxes": self.unplaced_boxes,
        }


@dataclass(frozen=True)
class BatchResult:
    mode: BatchMode
    pallet: Pallet
    results: Tuple[Solution, ...]
    summary: BatchSummary = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "pallet": self.pallet.to_dict(),
            "results": [solution.to_dict() for solution in self.results],
            "summary": self.summary.to_dict(),
        }


def format_solution(
    config: OrientationConfig, pallet: Pallet, box: Box, orientation: str
) -> Solution:
    """Turn an optimizer result into a full solution for ``box``."""
    boxes_per_level = config.boxes_per_level
    if boxes_per_level == 0:
        raise InfeasibleError(ERROR_NO_BOXES_FIT)

    max_levels = require_levels(pallet, box, boxes_per_level)
    plan = plan_quantity(boxes_per_level, max_levels, box.quantity)

    base_layout = build_layout(config, box, min(boxes_per_level, plan.target_boxes))
    if not base_layout:
        raise InfeasibleError(ERROR_NO_BOXES_FIT)

    oriented = pallet.oriented(orientation)
    footprint_length, footprint_width = oriented.oriented_length, oriented.oriented_width
    layout, bounds, offset_x, offset_y = center_layout(
        base_layout, footprint_length, footprint_width
    )

    area_total = footprint_length * footprint_width
    load_weight = plan.target_boxes * box.weight
    metrics = SolutionMetrics(
        boxes_per_level=boxes_per_level,
        levels=plan.levels,
        full_levels=plan.full_levels,
        last_level_boxes=plan.last_level_boxes,
        cargo_length=bounds.length,
        cargo_width=bounds.width,
        offset_x=offset_x,
        offset_y=offset_y,
        total_height=pallet.height + plan.levels * box.height,
        area_total=area_total,
        area_occupied=bounds.area,
        efficiency=0.0 if area_total == 0 else bounds.area / area_total * 100,
        unused_area=max(area_total - bounds.area, 0.0),
        load_weight=load_weight,
        total_weight=load_weight + pallet.weight,
        total_boxes=plan.target_boxes,
        quantity_requested=plan.quantity_requested,
        quantity_shortfall=plan.quantity_shortfall,
    )
    stack = build_stack(layout, plan.levels, box.height, pallet.height, plan.target_boxes)

    return Solution(
        pallet=oriented,
        box=Box(
            length=box.length,
            width=box.width,
            height=box.height,
            weight=box.weight,
            label=box.label,
            quantity=plan.quantity_requested,
            source_index=box.source_index,
        ),
        orientation=orientation,
        metrics=metrics,
        arrangement=Arrangement(
            orientation1_columns=config.nrb,
            orientation1_per_column=config.max_boxes_width2,
            orientation2_columns=config.extra_columns,
            orientation2_per_column=config.max_boxes_width1,
        ),
        layout=tuple(layout),
        layout3d=tuple(stack),
        meta=SolutionMeta(display_name=box.display_name, source_index=box.source_index),
    )


def build_solutions_summary(results: Sequence[Solution], pallet: Pallet) -> BatchSummary:
    total_load_weight = sum(solution.metrics.load_weight for solution in results)
    return BatchSummary(
        total_boxes=sum(solution.metrics.total_boxes for solution in results),
        total_layouts=len(results),
        total_load_weight=total_load_weight,
        total_weight=total_load_weight + pallet.weight,
        max_height=max(
            [pallet.height] + [solution.metrics.total_height for solution in results]
        ),
        unplaced_boxes=sum(solution.metrics.quantity_shortfall for solution in results),
    )
