from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, TypeAlias


# A symbol is a single code point
SymbolType: TypeAlias = str
# Probability table; its iteration order fixes the interval layout
ProbabilityTableType: TypeAlias = dict[SymbolType, Decimal]
# Half-open interval [lower, upper) for each symbol
IntervalMapType: TypeAlias = dict[SymbolType, tuple[Decimal, Decimal]]
# Interchange form of a probability table
TablePairsType: TypeAlias = list[tuple[SymbolType, str]]


class Compressor(ABC):
    @abstractmethod
    def encode(self, message: str) -> dict[str, Any]:
        pass

    @abstractmethod
    def decode(self, encoded: dict[str, Any]) -> str:
        pass
