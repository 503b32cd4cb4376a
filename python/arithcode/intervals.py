from decimal import Decimal

from arithcode.abc import IntervalMapType, ProbabilityTableType, SymbolType
from arithcode.fixed import add


def build_intervals(table: ProbabilityTableType) -> IntervalMapType:
    """Lay the probabilities end to end from 0, in table order."""
    intervals: IntervalMapType = {}
    L = Decimal(0)
    for s, p in table.items():
        U = add(L, p)
        intervals[s] = (L, U)
        L = U
    return intervals


def find_interval(intervals: IntervalMapType, value: Decimal) -> SymbolType | None:
    # Half-open [L, U): a value on a boundary belongs to the interval starting there
    for s, (L, U) in intervals.items():
        if L <= value < U:
            return s
    return None
