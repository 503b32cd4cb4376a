import math
import random
from collections import Counter
from typing import Any

import pytest  # noqa

from arithcode.abc import Compressor
from arithcode.ac import AC, decode, encode
from arithcode.config import Config


_comp_algos = [
    AC,
]
# (message, precision) pairs; precision leaves a few digits of headroom
# over the information content of each message
_data = [
    ("", 4),
    ("a", 4),
    ("AAB", 4),
    ("hello world", 20),
    ("hello, rans! hello, rans! hello, rans!", 50),
    ("a" * 1000, 4),
    ("abcde" * 50, 200),
    ("héllo wörld ✓ 日本", 40),
    ("Tab\tand\nnewline", 30),
]


@pytest.mark.parametrize("algorithm_class", _comp_algos)
@pytest.mark.parametrize("data,precision", _data)
def test_main(algorithm_class: type[Compressor], data: str, precision: int):
    assert type(data) is str
    encoded: dict[str, Any] = algorithm_class(precision=precision).encode(data)

    assert type(encoded) is dict
    assert "data" in encoded, "has 'data' key"
    assert type(encoded["data"]) is str, "data is str"
    assert "meta" in encoded, "has 'meta' key"

    decoded: str = algorithm_class().decode(encoded)
    assert type(decoded) is str
    assert data == decoded


@pytest.mark.parametrize("data,precision", [d for d in _data if d[0] != ""])
def test_roundtrip_functions(data: str, precision: int):
    buffer = Config().auto_precision_buffer
    value, table = encode(data, precision)
    assert decode(value, table, "", precision + buffer, max_iterations=len(data)) == data


def test_roundtrip_with_stop_sequence():
    message = "hello world!"
    value, table = encode(message, 20)
    # '!' only occurs at the end, so it ends decoding without a length
    assert decode(value, table, "!", 30) == message


def test_roundtrip_auto_precision():
    value, table = encode("AAB", 4)
    assert decode(str(value), table, max_iterations=3) == "AAB"


def test_deterministic():
    message = "the quick brown fox"
    assert encode(message, 30) == encode(message, 30)

    value, table = encode(message, 30)
    first = decode(value, table, "", 40, max_iterations=len(message))
    second = decode(value, table, "", 40, max_iterations=len(message))
    assert first == second == message


def test_meta():
    encoded = AC(precision=4).encode("AAB")
    assert encoded["data"] == "0.3704"
    assert encoded["meta"] == {
        "algorithm": "ac",
        "precision": 4,
        "length": 3,
        "table": [("A", "0.6667"), ("B", "0.3333")],
    }


def test_empty_message_meta():
    ac = AC()
    assert ac.encode("") == {"data": "", "meta": {"length": 0}}
    assert ac.decode({"data": "", "meta": {"length": 0}}) == ""


def _information_digits(message: str) -> float:
    n = len(message)
    return sum(c * math.log10(n / c) for c in Counter(message).values())


def test_random_roundtrip():
    rng = random.Random(9319)
    alphabet = "ab c\nAé✓=0"
    buffer = Config().auto_precision_buffer
    for _ in range(100):
        k = rng.randint(1, len(alphabet))
        symbols = rng.sample(alphabet, k)
        message = "".join(rng.choice(symbols) for _ in range(rng.randint(1, 40)))
        precision = math.ceil(_information_digits(message)) + 6

        value, table = encode(message, precision)
        decoded = decode(value, table, "", precision + buffer, max_iterations=len(message))
        assert decoded == message, (message, precision, value)
