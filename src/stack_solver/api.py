"""Dict-in / dict-out entry points for HTTP handlers and the CLI."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from .engine import combine, solve
from .errors import InputValidationError
from .solutions import build_solutions_summary


def solve_stacking(payload: Mapping[str, Any]) -> Dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise InputValidationError("Request payload must be an object.")
    pallet = payload.get("pallet")

    if isinstance(payload.get("boxes"), list):
        return solve(pallet, payload["boxes"]).to_dict()

    box = payload.get("box") or payload
    solution = solve(pallet, box)
    data = solution.to_dict()
    data.update(
        {
            "mode": "single",
            "results": [solution.to_dict()],
            "summary": build_solutions_summary([solution], solution.pallet).to_dict(),
        }
    )
    return data


def solve_stacking_direct(pallet: Any, box_or_boxes: Any) -> Dict[str, Any]:
    if isinstance(box_or_boxes, list):
        return solve_stacking({"pallet": pallet, "boxes": box_or_boxes})
    return solve_stacking({"pallet": pallet, "box": box_or_boxes})


def combine_stacking(payload: Mapping[str, Any]) -> Dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise InputValidationError("Request payload must be an object.")
    solutions = payload.get("solutions")
    if not isinstance(solutions, list):
        raise InputValidationError('Request is missing the "solutions" list.')
    return combine(solutions, payload.get("pallet")).to_dict()
