"""
Putt operation codes.

Defines every built-in operation, its source token and the stack depth it
needs before it can run.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, List, Optional


class Opcode(Enum):
    """Built-in operations."""
    # Operators
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    EQUAL = auto()
    POWER = auto()
    ROOT = auto()
    MODULUS = auto()
    FACTORIAL = auto()
    NEGATE = auto()
    ABS = auto()
    RANGE = auto()
    SUM = auto()
    AVG = auto()

    # Stack operators
    LEN = auto()
    SWAP = auto()
    DUPE = auto()
    DROP = auto()
    CLEAR = auto()
    JMP = auto()

    # Keywords
    NOT = auto()
    PRINT = auto()
    PRINT_LINE = auto()
    COMPRESS = auto()
    DECOMPRESS = auto()


@dataclass(frozen=True)
class OpcodeInfo:
    """Static description of an operation."""
    opcode: Opcode
    name: str
    symbol: str
    arity: int  # Stack depth the engine checks before dispatch
    is_output: bool = False  # Writes to the output stream

    def __repr__(self):
        return f"OpcodeInfo({self.name}, {self.symbol!r}, {self.arity})"


class OpcodeTable:
    """Putt operation table."""

    OPCODES: Dict[Opcode, OpcodeInfo] = {
        # Single-character operators
        Opcode.ADD: OpcodeInfo(Opcode.ADD, 'Add', '+', 2),
        Opcode.SUBTRACT: OpcodeInfo(Opcode.SUBTRACT, 'Subtract', '-', 2),
        Opcode.MULTIPLY: OpcodeInfo(Opcode.MULTIPLY, 'Multiply', '*', 2),
        Opcode.DIVIDE: OpcodeInfo(Opcode.DIVIDE, 'Divide', '/', 2),
        Opcode.EQUAL: OpcodeInfo(Opcode.EQUAL, 'Equal', '=', 2),
        Opcode.FACTORIAL: OpcodeInfo(Opcode.FACTORIAL, 'Factorial', '!', 1),
        Opcode.POWER: OpcodeInfo(Opcode.POWER, 'Power', '^', 2),
        Opcode.MODULUS: OpcodeInfo(Opcode.MODULUS, 'Modulus', '%', 2),
        Opcode.ROOT: OpcodeInfo(Opcode.ROOT, 'Root', 'R', 1),

        # Keywords
        Opcode.NOT: OpcodeInfo(Opcode.NOT, 'Not', 'n', 1),
        Opcode.PRINT_LINE: OpcodeInfo(Opcode.PRINT_LINE, 'PrintLine', ',', 1, is_output=True),
        Opcode.PRINT: OpcodeInfo(Opcode.PRINT, 'Print', '.', 1, is_output=True),
        Opcode.COMPRESS: OpcodeInfo(Opcode.COMPRESS, 'Compress', 'cmp', 1),
        Opcode.DECOMPRESS: OpcodeInfo(Opcode.DECOMPRESS, 'Decompress', 'dmp', 1),

        # Named operations
        Opcode.NEGATE: OpcodeInfo(Opcode.NEGATE, 'Negate', 'Neg', 1),
        Opcode.ABS: OpcodeInfo(Opcode.ABS, 'Abs', 'Abs', 1),
        Opcode.RANGE: OpcodeInfo(Opcode.RANGE, 'Range', 'Range', 2),
        Opcode.SUM: OpcodeInfo(Opcode.SUM, 'Sum', 'Sum', 1),
        Opcode.AVG: OpcodeInfo(Opcode.AVG, 'Avg', 'Avg', 1),
        Opcode.LEN: OpcodeInfo(Opcode.LEN, 'Len', 'Len', 0),
        Opcode.SWAP: OpcodeInfo(Opcode.SWAP, 'Swap', 'Swap', 2),
        Opcode.DUPE: OpcodeInfo(Opcode.DUPE, 'Dupe', 'Dupe', 1),
        Opcode.DROP: OpcodeInfo(Opcode.DROP, 'Drop', 'Drop', 1),
        Opcode.CLEAR: OpcodeInfo(Opcode.CLEAR, 'Clear', 'Clear', 0),
        Opcode.JMP: OpcodeInfo(Opcode.JMP, 'Jmp', 'Jmp', 1),
    }

    # Longest symbols first so that 'Range' wins over 'R'
    _BY_SYMBOL: List[OpcodeInfo] = sorted(
        OPCODES.values(), key=lambda info: len(info.symbol), reverse=True
    )

    @classmethod
    def get(cls, opcode: Opcode) -> OpcodeInfo:
        """Get the description of an opcode."""
        return cls.OPCODES[opcode]

    @classmethod
    def match(cls, source: str, pos: int = 0) -> Optional[OpcodeInfo]:
        """Find the operation whose symbol starts at source[pos], if any."""
        for info in cls._BY_SYMBOL:
            if source.startswith(info.symbol, pos):
                return info
        return None
