"""Exceptions raised by the interpolation core."""


class InvalidInputError(ValueError):
    """Grid parameters or sample data violate a precondition."""

    pass


class SingularSystemError(RuntimeError):
    """A pivot fell below the elimination tolerance.

    Attributes
    ----------
    row : int
        Row index of the offending pivot.
    pivot : float
        Value of the pivot at the time it was checked.
    """

    def __init__(self, row: int, pivot: float, tol: float):
        self.row = row
        self.pivot = pivot
        self.tol = tol
        super().__init__(
            f"Pivot A[{row}, {row}] = {pivot:.3e} is below tolerance "
            f"{tol:.1e}; the system is singular or ill-conditioned"
        )
