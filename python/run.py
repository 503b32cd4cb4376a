import fire  # noqa

from arithcode.abc import Compressor
from arithcode.ac import AC, decode as ac_decode, encode as ac_encode, iter_decode
from arithcode.config import Config
from arithcode.errors import InvalidArgument
from arithcode.fixed import check_precision, plain, scale_of, to_decimal
from arithcode.intervals import build_intervals
from arithcode.table import normalize_table, parse_table, render_table

Algorithms = {"ac": AC}


def _text(x, what: str) -> str:
    # fire parses literal-looking arguments (0.5, 0x10, [1,2], 'x'); str() of those is not what was typed
    if not isinstance(x, str):
        raise InvalidArgument(f"Quote the {what} so it is passed as text, e.g. '\"{x}\"'")
    return str(x)


def encode(message: str, precision: int | None = None, verbose: bool = False) -> None:
    config = Config.from_env()
    if precision is None:
        precision = config.default_precision
    value, table = ac_encode(_text(message, "message"), precision, verbose=verbose)
    print(plain(value))
    print(render_table(table, config.space_token))


def decode(
    value: str,
    table: str,
    stop: str = "",
    precision: int | None = None,
    verbose: bool = False,
) -> None:
    config = Config.from_env()
    probs = parse_table(_text(table, "table"), config.space_token)
    print(ac_decode(_text(value, "value"), probs, _text(stop, "stop sequence"), precision, config=config, verbose=verbose))


def trace(value: str, table: str, precision: int | None = None, max_iterations: int | None = None) -> None:
    config = Config.from_env()
    x = to_decimal(_text(value, "value"))
    if precision is None:
        precision = scale_of(x) + config.auto_precision_buffer
    check_precision(precision)
    if max_iterations is None:
        max_iterations = config.max_decode_iterations

    intervals = build_intervals(normalize_table(parse_table(_text(table, "table"), config.space_token), precision))
    for i, step in enumerate(iter_decode(x, intervals, precision, max_iterations)):
        print(f"{i}: {step.symbol!r} value={plain(step.value)} range=[{plain(step.lower)}, {plain(step.upper)})")


def roundtrip(
    message: str | None = None,
    in_file: str | None = None,
    algo: str = "ac",
    precision: int | None = None,
    verbose: bool = False,
) -> None:
    if (message is None) == (in_file is None):
        raise ValueError("Give exactly one of a message or --in_file")
    if in_file is not None:
        with open(in_file, "r", encoding="utf-8") as f:
            data = f.read()
    else:
        data = _text(message, "message")

    if algo not in Algorithms:
        raise ValueError(f"Unknown algorithm: {algo}")

    algo_cls = Algorithms.get(algo)
    assert algo_cls is not None

    comp: Compressor = algo_cls(precision=precision, config=Config.from_env(), verbose=verbose, progress=True)

    encoded = comp.encode(data)
    decoded: str = comp.decode(encoded)

    print("\nDecoding process:")

    if data == decoded:
        print("Data successfully encoded and decoded!")
        print("Alphabet size:", len(comp.A))
        print("Data length: ", len(data), "symbols")
        print(f"Encoded value: {len(encoded['data'])} characters")
    else:
        print("Error: decoded data does not match original!")
        print(f"Original data: {len(data)} {data[:20]!r}...")
        print(f"Decoded data:  {len(decoded)} {decoded[:20]!r}...")
        raise RuntimeError(
            f"Decoded data does not match original! {data!r} != {decoded!r}"
        )


def main() -> None:
    fire.Fire({"encode": encode, "decode": decode, "trace": trace, "roundtrip": roundtrip})


if __name__ == "__main__":
    main()
