import pytest

from stack_solver.layout import build_layout
from stack_solver.models import LENGTH_FIRST, LENGTHWISE, WIDTH_FIRST, WIDTHWISE, Box, Placement
from stack_solver.orientation import calculate_orientation
from stack_solver.transformations import (
    CLOCKWISE,
    COUNTER_CLOCKWISE,
    rotate_footprint,
    rotation_direction,
)


def _width_first_layout():
    return build_layout(calculate_orientation(80, 120, 50, 30), Box(50, 30, 25, 5))


def _key(placement):
    return (
        round(placement.x, 6),
        round(placement.y, 6),
        placement.length,
        placement.width,
        placement.orientation,
    )


def test_rotation_direction():
    assert rotation_direction(LENGTH_FIRST, WIDTH_FIRST) == CLOCKWISE
    assert rotation_direction(WIDTH_FIRST, LENGTH_FIRST) == COUNTER_CLOCKWISE
    assert rotation_direction(LENGTH_FIRST, LENGTH_FIRST) is None
    with pytest.raises(ValueError):
        rotation_direction("diagonal", LENGTH_FIRST)


def test_counter_clockwise_rotation_swaps_axes_and_tags():
    layout = _width_first_layout()
    rotated, bounds = rotate_footprint(layout, COUNTER_CLOCKWISE, (120, 80))

    assert bounds.length == pytest.approx(120)
    assert bounds.width == pytest.approx(80)
    assert bounds.area == pytest.approx(9000)
    assert rotated[0] == Placement(90.0, 0.0, 30, 50, WIDTHWISE)
    for before, after in zip(layout, rotated):
        assert after.length == before.width
        assert after.width == before.length
        assert after.orientation != before.orientation


def test_rotated_layout_is_centered_on_target():
    layout = [Placement(0, 0, 40, 30, LENGTHWISE)]
    rotated, bounds = rotate_footprint(layout, CLOCKWISE, (100, 100))

    assert (bounds.length, bounds.width) == (30, 40)
    assert rotated[0].x == pytest.approx(35)
    assert rotated[0].y == pytest.approx(30)
    assert rotated[0].orientation == WIDTHWISE


@pytest.mark.parametrize(
    "first, second", [(COUNTER_CLOCKWISE, CLOCKWISE), (CLOCKWISE, COUNTER_CLOCKWISE)]
)
def test_round_trip_restores_layout(first, second):
    layout = _width_first_layout()
    there, _ = rotate_footprint(layout, first, (120, 80))
    back, bounds = rotate_footprint(there, second, (80, 120))

    assert sorted(map(_key, back)) == sorted(map(_key, layout))
    assert bounds.area == pytest.approx(sum(p.area for p in layout))


def test_empty_layout_rotates_to_empty():
    rotated, bounds = rotate_footprint([], CLOCKWISE, (120, 80))

    assert rotated == []
    assert bounds.area == 0
