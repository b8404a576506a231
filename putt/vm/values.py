"""
Runtime values for Putt.

One closed union: numbers (which also carry booleans as 1/0), text, lists
built by Range, and operation references that only ever live on the tape.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from .opcodes import Opcode, OpcodeTable


def format_number(value: float) -> str:
    """
    Render a float the way Putt prints it.

    Shortest round-trip digits in plain positional notation: 6 not 6.0,
    0.0000001 not 1e-07, and -0 keeps its sign. NaN and inf are spelled out.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    digits = Decimal(repr(value))
    if value.is_integer():
        digits = digits.to_integral_value()
    return format(digits, "f")


class PuttValue:
    """Base class for all Putt values."""

    type_name = "Value"

    def render(self) -> str:
        raise NotImplementedError

    def structurally_equals(self, other: 'PuttValue') -> bool:
        """Check if two values are equal the way the Equal operation sees them."""
        return self == other


@dataclass(frozen=True)
class PuttNumber(PuttValue):
    """The only numeric type."""
    value: float

    type_name = "Number"

    def render(self) -> str:
        return format_number(self.value)

    def structurally_equals(self, other: PuttValue) -> bool:
        # NaN never equals itself, even when both sides share one float object
        return isinstance(other, PuttNumber) and self.value == other.value

    @classmethod
    def from_bool(cls, flag: bool) -> 'PuttNumber':
        return cls(1.0 if flag else 0.0)


@dataclass(frozen=True)
class PuttText(PuttValue):
    """A string."""
    value: str

    type_name = "Text"

    def render(self) -> str:
        return self.value


@dataclass(frozen=True)
class PuttList(PuttValue):
    """A list of values, produced by Range."""
    items: Tuple[PuttValue, ...] = ()

    type_name = "List"

    def render(self) -> str:
        return " ".join(item.render() for item in self.items)

    def structurally_equals(self, other: PuttValue) -> bool:
        if not isinstance(other, PuttList) or len(self.items) != len(other.items):
            return False
        return all(a.structurally_equals(b) for a, b in zip(self.items, other.items))


@dataclass(frozen=True)
class PuttOperation(PuttValue):
    """Reference to a built-in operation."""
    opcode: Opcode

    type_name = "Operation"

    @property
    def info(self):
        return OpcodeTable.get(self.opcode)

    def render(self) -> str:
        return self.info.symbol

    def __repr__(self):
        return f"PuttOperation({self.info.name})"


TRUE = PuttNumber(1.0)
FALSE = PuttNumber(0.0)
