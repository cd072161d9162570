from __future__ import annotations

import math
from dataclasses import fields, is_dataclass
from typing import Any, Dict, Mapping, Sequence

from .errors import InputValidationError
from .models import Box, Pallet
from .units import parse_float

REQUIRED_PALLET_FIELDS = ("length", "width", "height", "maxHeight", "weight", "maxWeight")
REQUIRED_BOX_FIELDS = ("length", "width", "height", "weight")

ERROR_NO_BOXES = "At least one box type is required."
ERROR_HEIGHT_EXCEEDED = "Cargo exceeds allowed height for the pallet."
ERROR_FOOTPRINT_TOO_LARGE = "Box footprint is larger than the pallet."


def describe_box(index: int, label: str = "") -> str:
    return f'Box "{label}"' if label else f"Box type {index + 1}"


def to_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or value is None:
        raise InputValidationError(f'Field "{field_name}" must be a valid number.')
    try:
        number = parse_float(value) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as exc:
        raise InputValidationError(
            f'Field "{field_name}" must be a valid number.'
        ) from exc
    if not math.isfinite(number):
        raise InputValidationError(f'Field "{field_name}" must be a valid number.')
    return number


def normalise_section(
    section: Any, required: Sequence[str], section_name: str
) -> Dict[str, float]:
    if not isinstance(section, Mapping):
        raise InputValidationError(f"{section_name} details are required.")
    result: Dict[str, float] = {}
    for name in required:
        if name not in section:
            raise InputValidationError(f'{section_name} is missing the "{name}" field.')
        value = to_number(section[name], f"{section_name}.{name}")
        if value < 0:
            raise InputValidationError(
                f"{section_name}.{name} must be zero or a positive number."
            )
        result[name] = value
    return result


def _as_mapping(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        if hasattr(value, "to_dict"):
            return value.to_dict()
        return {f.name: getattr(value, f.name) for f in fields(value)}
    return value


def normalise_pallet(section: Any) -> Pallet:
    values = normalise_section(_as_mapping(section), REQUIRED_PALLET_FIELDS, "pallet")
    return Pallet(
        length=values["length"],
        width=values["width"],
        height=values["height"],
        max_height=values["maxHeight"],
        weight=values["weight"],
        max_weight=values["maxWeight"],
    )


def _normalise_label(raw: Any) -> str:
    if isinstance(raw, str):
        return raw.strip()
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    return ""


def _normalise_quantity(raw: Any, index: int, label: str) -> int | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    owner = describe_box(index, label)
    value = to_number(raw, f"{owner} quantity")
    if value < 0:
        raise InputValidationError(f"{owner} quantity cannot be negative.")
    quantity = math.floor(value)
    if quantity <= 0:
        raise InputValidationError(f"{owner} quantity must be greater than zero.")
    return quantity


def normalise_box(entry: Any, index: int | None = None) -> Box:
    if index is None:
        index = entry.source_index if isinstance(entry, Box) else 0
    entry = _as_mapping(entry)
    if not isinstance(entry, Mapping):
        raise InputValidationError(f"{describe_box(index)} is not a valid object.")
    values = normalise_section(entry, REQUIRED_BOX_FIELDS, f"boxes[{index}]")
    label = _normalise_label(entry.get("label"))
    return Box(
        length=values["length"],
        width=values["width"],
        height=values["height"],
        weight=values["weight"],
        label=label,
        quantity=_normalise_quantity(entry.get("quantity"), index, label),
        source_index=index,
    )


def normalise_boxes(entries: Sequence[Any]) -> list[Box]:
    if not entries:
        raise InputValidationError(ERROR_NO_BOXES)
    return [normalise_box(entry, index) for index, entry in enumerate(entries)]


def validate_dimensions(pallet: Pallet, box: Box) -> None:
    """Reject zero dimensions and boxes that can never fit the pallet."""
    for value, label in (
        (pallet.length, "Pallet length"),
        (pallet.width, "Pallet width"),
        (pallet.height, "Pallet height"),
        (pallet.max_height, "Pallet maxHeight"),
    ):
        if value <= 0:
            raise InputValidationError(f"{label} must be greater than zero.")

    for value, label in (
        (box.length, "Box length"),
        (box.width, "Box width"),
        (box.height, "Box height"),
    ):
        if value <= 0:
            raise InputValidationError(f"{label} must be greater than zero.")

    if box.height + pallet.height > pallet.max_height:
        raise InputValidationError(ERROR_HEIGHT_EXCEEDED)

    if max(box.length, box.width) > max(pallet.length, pallet.width):
        raise InputValidationError(ERROR_FOOTPRINT_TOO_LARGE)
