"""Exceptions raised by the stacking engine."""


class StackingError(ValueError):
    """Base class for every fatal stacking condition."""


class InputValidationError(StackingError):
    """A pallet or box field is missing, non-numeric or out of range."""


class InfeasibleError(StackingError):
    """No box or level fits under the footprint, height or weight limits."""


class CombinationError(StackingError):
    """Solved layouts could not be merged into one stack."""
