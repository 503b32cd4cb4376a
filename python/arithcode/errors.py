"""Exceptions raised by the arithmetic coder."""


class ArithCodeError(Exception):
    """Base class for arithmetic coder errors."""


class InvalidArgument(ArithCodeError, ValueError):
    """Raised when a caller supplies a malformed precision, decimal literal or table."""


class DegenerateInput(ArithCodeError):
    """Raised when the input is well-formed but cannot be coded.

    Covers empty messages and tables, probabilities that round to zero,
    and decode values that fall outside every interval.
    """
