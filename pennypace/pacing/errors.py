"""Engine errors."""


class InvalidInputError(ValueError):
    """Raised for input the engine refuses to compute on.

    Negative or non-finite amounts, non-datetime dates, unknown period kinds
    and half-configured split budgets. Degenerate but valid input (zero
    budgets, no remaining days) never raises.
    """
