"""Writer for the per-``p`` convergence tables.

One file ``daubechies_<p>_scaling_convergence.csv`` per scaling function. The
first line is the header returned by
:func:`~daubkit.interpolators.catalog.csv_columns`; each further line holds a
refinement level followed by the sup errors of the candidates, in header
order. Fields are separated by ``", "`` and errors are printed in fixed
notation with ``digits10 + 3`` decimals of the working type. A candidate that
could not be built leaves its field empty.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np

__all__ = ["ConvergenceReport", "format_value", "report_filename"]

SEPARATOR = ", "


def report_filename(p: int) -> str:
    """Returns the name of the convergence table for ``p`` vanishing moments."""
    return f"daubechies_{p}_scaling_convergence.csv"


def format_value(value: float | None, digits: int) -> str:
    """Formats an error in fixed notation with ``digits`` decimals.

    ``None`` (a skipped candidate) gives an empty string; non-finite values
    print as ``inf`` or ``nan``.
    """
    if value is None:
        return ""
    return np.format_float_positional(
        np.float64(value), precision=digits, unique=False, trim="k"
    )


class ConvergenceReport:
    """Convergence table of one scaling function, written row by row.

    Use as a context manager; the header is written on entry.

    Example:
        >>> import tempfile
        >>> from daubkit.experiment.csv_report import ConvergenceReport
        >>> with tempfile.TemporaryDirectory() as d:
        ...     with ConvergenceReport(f"{d}/t.csv", ["r", "linear"], digits=3) as rep:
        ...         rep.write_row(2, [0.5])
        ...     print(open(f"{d}/t.csv").read(), end="")
        r, linear
        2, 0.500
    """

    def __init__(self, path: str | Path, columns: Sequence[str], digits: int) -> None:
        self.path = Path(path)
        self.columns = list(columns)
        self.digits = digits
        self._fh = None

    def __enter__(self) -> ConvergenceReport:
        self._fh = open(self.path, "w", encoding="ascii", newline="")
        self._fh.write(SEPARATOR.join(self.columns) + "\n")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def write_row(self, refinement: int, values: Sequence[float | None]) -> None:
        """Appends the errors measured at ``refinement``.

        Raises:
            ValueError: If the number of values does not match the header.
            RuntimeError: If the report is not open.
        """
        if self._fh is None:
            raise RuntimeError("ConvergenceReport is not open.")
        if len(values) != len(self.columns) - 1:
            raise ValueError(
                f"expected {len(self.columns) - 1} values; got {len(values)}."
            )
        fields = [str(refinement)] + [format_value(v, self.digits) for v in values]
        self._fh.write(SEPARATOR.join(fields) + "\n")
        self._fh.flush()

    def close(self) -> None:
        """Closes the underlying file; safe to call twice."""
        if self._fh is not None:
            self._fh.close()
            self._fh = None
