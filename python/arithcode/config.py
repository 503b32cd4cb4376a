import os
from dataclasses import dataclass
from typing import Mapping

from arithcode.errors import InvalidArgument


ENV_PREFIX = "ARITHCODE_"

MAX_DECODE_ITERATIONS = 1000
AUTO_PRECISION_BUFFER = 10
SPACE_TOKEN = "[space]"
DEFAULT_PRECISION = 20


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidArgument(f"{ENV_PREFIX + name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise InvalidArgument(f"{ENV_PREFIX + name} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class Config:
    """Process-wide settings read by the decoder and the text table format.

    max_decode_iterations: upper bound on decoded symbols when no stop
        sequence ends decoding first.
    auto_precision_buffer: digits added to the encoded value's own scale
        when decode is called without an explicit precision.
    space_token: how the space symbol is written in table text.
    default_precision: encode precision used when the caller gives none.
    """

    max_decode_iterations: int = MAX_DECODE_ITERATIONS
    auto_precision_buffer: int = AUTO_PRECISION_BUFFER
    space_token: str = SPACE_TOKEN
    default_precision: int = DEFAULT_PRECISION

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Config":
        if env is None:
            env = os.environ
        default_precision = _env_int(env, "DEFAULT_PRECISION", DEFAULT_PRECISION)
        if default_precision < 1:
            raise InvalidArgument(f"{ENV_PREFIX}DEFAULT_PRECISION must be at least 1, got {default_precision}")
        space_token = env.get(ENV_PREFIX + "SPACE_TOKEN", SPACE_TOKEN)
        if len(space_token) < 2:
            # A one-character token would collide with a literal symbol
            raise InvalidArgument(f"{ENV_PREFIX}SPACE_TOKEN must be at least two characters, got {space_token!r}")
        return cls(
            max_decode_iterations=_env_int(env, "MAX_DECODE_ITERATIONS", MAX_DECODE_ITERATIONS),
            auto_precision_buffer=_env_int(env, "AUTO_PRECISION_BUFFER", AUTO_PRECISION_BUFFER),
            space_token=space_token,
            default_precision=default_precision,
        )
