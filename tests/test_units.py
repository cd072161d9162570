import pytest

from stack_solver.errors import InputValidationError
from stack_solver.units import format_dimension
from stack_solver.validation import normalise_pallet, to_number

PALLET = {"length": 120, "width": 80, "height": 15, "maxHeight": 200, "weight": 25, "maxWeight": 0}


def test_decimal_comma_in_pallet_field():
    pallet = normalise_pallet({**PALLET, "height": "14,5"})

    assert pallet.height == 14.5


def test_padded_numeric_text_is_accepted():
    assert to_number(" 80 ", "pallet.width") == 80.0


@pytest.mark.parametrize("raw", [" ", "", "nan", "inf", "12cm"])
def test_unusable_text_names_the_field(raw):
    with pytest.raises(InputValidationError, match=r'Field "pallet\.length" must be a valid number'):
        to_number(raw, "pallet.length")


def test_format_dimension_drops_integral_fraction():
    assert format_dimension(40.0) == "40"
    assert format_dimension(40.5) == "40.5"
