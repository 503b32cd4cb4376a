"""Probability tables: derivation from a message, validation and text form.

A table maps each symbol to its probability. Intervals are laid out in
the table's iteration order, so that order travels with the table:
tables derived from a message are in ascending code-point order, and
tables supplied by a caller keep the order they were given in.

The text form has one ``symbol=probability`` line per symbol::

    A=0.6667
    [space]=0.3333

The space symbol is written as a token because blank lines are skipped.
"""
from collections import Counter
from decimal import Decimal
from typing import Iterable, Mapping

from arithcode.abc import ProbabilityTableType, TablePairsType
from arithcode.config import SPACE_TOKEN
from arithcode.errors import DegenerateInput, InvalidArgument
from arithcode.fixed import EXACT, divide, plain, scale_of, to_decimal


def prepare_probability_table(message: str, precision: int) -> ProbabilityTableType:
    M = len(message)
    F = Counter(message)
    table: ProbabilityTableType = {}
    for s in sorted(F):
        p = divide(F[s], M, precision)
        if p == 0:
            raise DegenerateInput(
                f"Probability of {s!r} ({F[s]}/{M}) rounds to zero at precision {precision}"
            )
        table[s] = p
    return table


def normalize_table(
    table: Mapping[str, Decimal | int | str], precision: int | None = None
) -> ProbabilityTableType:
    """Validate a caller-supplied table, keeping its order.

    Raises DegenerateInput for an empty table and InvalidArgument for a
    bad symbol or probability. When `precision` is given, probabilities
    must not carry more fractional digits than it.
    """
    if len(table) == 0:
        raise DegenerateInput("Probability table is empty")

    out: ProbabilityTableType = {}
    for s in table:
        if not isinstance(s, str) or len(s) != 1:
            raise InvalidArgument(f"Symbol must be a single character, got {s!r}")
        p = to_decimal(table[s], what=f"probability for {s!r}")
        if not (0 < p <= 1):
            raise InvalidArgument(f"Probability for {s!r} must be in (0, 1], got {p}")
        if precision is not None and scale_of(p.normalize(EXACT)) > precision:
            raise InvalidArgument(
                f"Probability for {s!r} has more than {precision} fractional digits: {p}"
            )
        out[s] = p
    return out


def table_pairs(table: ProbabilityTableType) -> TablePairsType:
    return [(s, plain(p)) for s, p in table.items()]


def table_from_pairs(pairs: Iterable[tuple[str, str]]) -> ProbabilityTableType:
    raw: dict[str, str] = {}
    for s, p in pairs:
        if s in raw:
            raise InvalidArgument(f"Duplicate symbol in probability table: {s!r}")
        raw[s] = p
    return normalize_table(raw)


def render_table(table: ProbabilityTableType, space_token: str = SPACE_TOKEN) -> str:
    lines = []
    for s, p in table.items():
        if s == " ":
            key = space_token
        elif s.isspace():
            raise InvalidArgument(f"Symbol {s!r} cannot be written in table text")
        else:
            key = s
        lines.append(f"{key}={plain(p)}")
    return "\n".join(lines)


def parse_table(text: str, space_token: str = SPACE_TOKEN) -> ProbabilityTableType:
    raw: dict[str, Decimal] = {}
    for line in text.splitlines():
        line = line.strip()
        if line == "":
            continue

        # Split at the last '=' so that '=' itself can be a symbol
        left, sep, right = line.rpartition("=")
        if sep == "" or right.strip() == "":
            raise InvalidArgument(f"Invalid probability line format: {line!r}")

        left = left.strip()
        if left == space_token:
            s = " "
        elif len(left) == 1:
            s = left
        else:
            raise InvalidArgument(f"Expected single char or {space_token}: {left!r}")

        if s in raw:
            raise InvalidArgument(f"Duplicate symbol in probability table: {left!r}")
        raw[s] = to_decimal(right, what=f"probability for {left!r}")

    return normalize_table(raw)
