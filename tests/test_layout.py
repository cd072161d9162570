import pytest

from stack_solver.layout import build_layout, build_stack, center_layout, measure_layout
from stack_solver.models import LENGTHWISE, WIDTHWISE, Box, Placement
from stack_solver.orientation import calculate_orientation


def test_build_layout_places_lengthwise_block_first():
    box = Box(50, 30, 25, 5)
    layout = build_layout(calculate_orientation(80, 120, 50, 30), box)

    assert [p.orientation for p in layout] == [LENGTHWISE] * 4 + [WIDTHWISE] * 2
    assert layout[0] == Placement(0, 0, 50, 30, LENGTHWISE)
    assert layout[3] == Placement(0, 90, 50, 30, LENGTHWISE)
    assert layout[4] == Placement(50, 0, 30, 50, WIDTHWISE)
    assert layout[5] == Placement(50, 50, 30, 50, WIDTHWISE)


def test_build_layout_respects_limit():
    box = Box(40, 30, 20, 10)
    layout = build_layout(calculate_orientation(120, 80, 40, 30), box, limit=3)

    assert len(layout) == 3
    assert [(p.x, p.y) for p in layout] == [(0, 0), (0, 40), (30, 0)]


def test_measure_layout_reports_bounds_and_area():
    layout = [Placement(0, 0, 40, 30, LENGTHWISE), Placement(40, 0, 30, 40, WIDTHWISE)]
    bounds = measure_layout(layout)

    assert bounds.length == 70
    assert bounds.width == 40
    assert bounds.area == 2400


def test_center_layout_uses_symmetric_offsets():
    layout = [Placement(0, 0, 40, 30, LENGTHWISE), Placement(40, 0, 40, 30, LENGTHWISE)]
    centered, bounds, offset_x, offset_y = center_layout(layout, 120, 80)

    assert offset_x == pytest.approx(20)
    assert offset_y == pytest.approx(25)
    assert centered[0].x == pytest.approx(20)
    assert centered[0].y == pytest.approx(25)
    assert bounds.length == 80


def test_build_stack_truncates_last_level():
    layout = [Placement(0, 0, 40, 30, LENGTHWISE), Placement(40, 0, 40, 30, LENGTHWISE)]
    stack = build_stack(layout, 3, 20, 15, 5)

    assert len(stack) == 5
    assert [p.level for p in stack] == [0, 0, 1, 1, 2]
    assert [p.z for p in stack] == [15, 15, 35, 35, 55]
    assert all(p.height == 20 for p in stack)
    assert all(p.segment_index is None for p in stack)


def test_build_stack_continues_level_numbering_for_segments():
    layout = [Placement(0, 0, 40, 30, LENGTHWISE)]
    stack = build_stack(layout, 2, 10, 55, 2, level_offset=4, segment_index=1)

    assert [p.level for p in stack] == [4, 5]
    assert [p.z for p in stack] == [55, 65]
    assert {p.segment_index for p in stack} == {1}
