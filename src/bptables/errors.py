import typing


__all__ = ["BPTablesError", "ValidationError", "ExtrapolationError"]


class BPTablesError(Exception):
    """Base class for all bptables-related errors."""

    pass


class ValidationError(BPTablesError, ValueError):
    """Raised when table data or lookup options fail validation checks."""

    pass


class ExtrapolationError(BPTablesError, ValueError):
    """
    Raised when a 1-D lookup falls outside the table's breakpoint range
    and the extrapolation policy is `Extrapolation.ERROR`.
    """

    def __init__(
        self,
        query: typing.Any,
        lower: typing.Any,
        upper: typing.Any,
    ) -> None:
        self.query = query
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"Breakpoint {query!r} is outside the table range [{lower!r}, {upper!r}] "
            "and extrapolation is disabled"
        )
