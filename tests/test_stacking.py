import pytest

from stack_solver.errors import InfeasibleError
from stack_solver.models import Box, Pallet
from stack_solver.stacking import (
    calculate_levels,
    compute_level_limits,
    plan_quantity,
    require_levels,
)


def _pallet(**overrides):
    values = dict(length=120, width=80, height=15, max_height=200, weight=25, max_weight=1000)
    values.update(overrides)
    return Pallet(**values)


def test_levels_limited_by_height():
    assert calculate_levels(_pallet(), Box(40, 30, 20, 10), 8) == 9


def test_levels_limited_by_weight():
    limits = compute_level_limits(_pallet(max_weight=400), Box(40, 30, 20, 10), 8)

    assert limits.by_height == 9
    assert limits.by_weight == 4
    assert limits.levels == 4
    assert limits.limiting_constraint == "weight"


def test_zero_max_weight_means_unlimited():
    limits = compute_level_limits(_pallet(max_weight=0), Box(40, 30, 20, 500), 8)

    assert limits.by_weight is None
    assert limits.levels == 9


def test_pallet_heavier_than_limit_allows_no_levels():
    assert calculate_levels(_pallet(weight=30, max_weight=20), Box(40, 30, 20, 1), 8) == 0


def test_no_boxes_per_level_means_no_levels():
    assert calculate_levels(_pallet(), Box(40, 30, 20, 10), 0) == 0


def test_levels_never_decrease_with_more_height():
    box = Box(40, 30, 20, 10)
    previous = 0
    for max_height in range(35, 400, 5):
        levels = calculate_levels(_pallet(max_height=max_height), box, 8)
        assert levels >= previous
        previous = levels


def test_levels_never_increase_with_heavier_boxes():
    previous = None
    for weight in range(1, 60):
        levels = calculate_levels(_pallet(), Box(40, 30, 20, weight), 8)
        if previous is not None:
            assert levels <= previous
        previous = levels


def test_require_levels_names_weight_limit():
    with pytest.raises(InfeasibleError, match="maximum weight"):
        require_levels(_pallet(max_weight=30), Box(40, 30, 20, 10), 8)


def test_require_levels_names_height_limit():
    with pytest.raises(InfeasibleError, match="maximum height"):
        require_levels(_pallet(max_height=30), Box(40, 30, 20, 10), 8)


def test_plan_without_quantity_fills_every_level():
    plan = plan_quantity(8, 9)

    assert plan.target_boxes == 72
    assert plan.levels == 9
    assert plan.full_levels == 9
    assert plan.last_level_boxes == 8
    assert plan.quantity_requested is None
    assert plan.quantity_shortfall == 0


def test_plan_with_quantity_leaves_partial_last_level():
    plan = plan_quantity(8, 9, 50)

    assert plan.target_boxes == 50
    assert plan.levels == 7
    assert plan.full_levels == 6
    assert plan.last_level_boxes == 2
    assert plan.quantity_shortfall == 0


def test_plan_reports_shortfall_instead_of_failing():
    plan = plan_quantity(8, 9, 100)

    assert plan.target_boxes == 72
    assert plan.quantity_requested == 100
    assert plan.quantity_shortfall == 28
    assert plan.target_boxes + plan.quantity_shortfall == plan.quantity_requested


def test_plan_rejects_non_positive_quantity():
    with pytest.raises(ValueError):
        plan_quantity(8, 9, 0)
