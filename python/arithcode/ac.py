from decimal import Decimal
from typing import Any, Iterator, Mapping, NamedTuple

import tqdm  # noqa

from arithcode.abc import Compressor, IntervalMapType, ProbabilityTableType, SymbolType
from arithcode.config import Config
from arithcode.errors import DegenerateInput, InvalidArgument
from arithcode.fixed import EXACT, add, check_precision, divide, mul, plain, scale_of, sub, to_decimal
from arithcode.intervals import build_intervals, find_interval
from arithcode.table import normalize_table, prepare_probability_table, table_from_pairs, table_pairs


class DecodeStep(NamedTuple):
    symbol: SymbolType
    value: Decimal  # value that was classified, in the local [0, 1) space
    lower: Decimal  # accumulated range after this symbol
    upper: Decimal


def narrow(L: Decimal, U: Decimal, lo: Decimal, hi: Decimal) -> tuple[Decimal, Decimal]:
    R = sub(U, L)
    # Exact products keep every digit; dropping trailing zeros keeps them short
    return add(L, mul(R, lo)).normalize(EXACT), add(L, mul(R, hi)).normalize(EXACT)


def print_model(table: ProbabilityTableType, intervals: IntervalMapType) -> None:
    print("Alphabet:", list(table))
    print("PMF:", [plain(p) for p in table.values()])
    print("Intervals:", {s: (plain(L), plain(U)) for s, (L, U) in intervals.items()})


def encode(
    message: str, precision: int, *, verbose: bool = False, progress: bool = False
) -> tuple[Decimal, ProbabilityTableType]:
    """Encode `message` as a single decimal in [0, 1).

    Returns the midpoint of the final range rounded half-up to `precision`
    fractional digits, and the probability table derived from the message.
    Decoding needs both plus a precision of at least `precision`.
    """
    check_precision(precision)
    if not isinstance(message, str):
        raise InvalidArgument(f"Message must be a str, got {type(message).__name__}")
    if len(message) == 0:
        raise DegenerateInput("Cannot encode an empty message")

    table = prepare_probability_table(message, precision)
    intervals = build_intervals(table)

    if verbose:
        print("Message length:", len(message))
        print_model(table, intervals)

    L = Decimal(0)
    U = Decimal(1)
    for s in tqdm.tqdm(message, desc="Encoding", disable=not progress):
        lo, hi = intervals[s]
        L, U = narrow(L, U, lo, hi)

    value = divide(add(L, U), 2, precision)
    if verbose:
        print(f"Final range: [{plain(L)}, {plain(U)})")
        print("Encoded value:", plain(value))
    return value, table


def iter_decode(
    value: Decimal, intervals: IntervalMapType, precision: int, max_iterations: int
) -> Iterator[DecodeStep]:
    L = Decimal(0)
    U = Decimal(1)
    for step in range(max_iterations):
        s = find_interval(intervals, value)
        if s is None:
            raise DegenerateInput(
                f"Decoding failed at step {step}: value {plain(value)} lies in no interval "
                "(precision too low or table does not match the encoder's)"
            )
        lo, hi = intervals[s]
        L, U = narrow(L, U, lo, hi)
        yield DecodeStep(s, value, L, U)

        # Rescale into the matched interval's local coordinates
        value = divide(sub(value, lo), sub(hi, lo), precision)


def decode(
    value: Decimal | int | str,
    table: Mapping[str, Decimal | int | str],
    stop_sequence: str | None = "",
    precision: int | None = None,
    *,
    config: Config | None = None,
    max_iterations: int | None = None,
    verbose: bool = False,
    progress: bool = False,
) -> str:
    """Decode `value` back into symbols of `table`.

    Decoding stops after `max_iterations` symbols (default from `config`)
    or as soon as the output ends with a non-empty `stop_sequence`. If
    `precision` is omitted it is the scale of `value` plus the configured
    auto-precision buffer.
    """
    if config is None:
        config = Config()
    x = to_decimal(value)
    if precision is None:
        precision = scale_of(x) + config.auto_precision_buffer
    check_precision(precision)
    if max_iterations is None:
        max_iterations = config.max_decode_iterations
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations < 0:
        raise InvalidArgument(f"max_iterations must be a non-negative integer, got {max_iterations!r}")
    stop = stop_sequence or ""

    table = normalize_table(table, precision)
    intervals = build_intervals(table)

    if verbose:
        print(f"Decoding {plain(x)} at precision {precision}, at most {max_iterations} symbols")
        print_model(table, intervals)

    output = ""
    with tqdm.tqdm(total=max_iterations, desc="Decoding", disable=not progress) as pbar:
        for step in iter_decode(x, intervals, precision, max_iterations):
            output += step.symbol
            pbar.update(1)
            if stop != "" and output.endswith(stop):
                break

    if verbose:
        print("Decoded symbols:", len(output))
    return output


class AC(Compressor):
    """Decimal arithmetic coder behind the Compressor interface.

    The message length is stored in the metadata so that decode stops
    exactly at the end of the message.
    """

    def __init__(
        self,
        precision: int | None = None,
        config: Config | None = None,
        verbose: bool = False,
        progress: bool = False,
    ) -> None:
        self.config = config if config is not None else Config()
        self.precision = check_precision(
            precision if precision is not None else self.config.default_precision
        )
        self.verbose = verbose
        self.progress = progress
        self.A: list[SymbolType] = []

    def encode(self, message: str) -> dict[str, Any]:
        if len(message) == 0:
            self.A = []
            return {"data": "", "meta": {"length": 0}}

        value, table = encode(message, self.precision, verbose=self.verbose, progress=self.progress)
        self.A = list(table)

        meta = {
            "algorithm": "ac",
            "precision": self.precision,
            "length": len(message),
            "table": table_pairs(table),
        }
        return {"data": plain(value), "meta": meta}

    def decode(self, encoded: dict[str, Any]) -> str:
        meta = encoded["meta"]

        length: int = meta["length"]
        if length == 0:
            return ""

        if meta.get("algorithm") != "ac":
            raise InvalidArgument(f"Not an 'ac' encoding: algorithm={meta.get('algorithm')!r}")

        table = table_from_pairs(meta["table"])
        self.A = list(table)
        precision = int(meta["precision"]) + self.config.auto_precision_buffer
        return decode(
            encoded["data"],
            table,
            "",
            precision,
            config=self.config,
            max_iterations=length,
            verbose=self.verbose,
            progress=self.progress,
        )
