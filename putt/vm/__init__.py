"""Putt stack machine: values, operation table and the execution engine."""

from .opcodes import Opcode, OpcodeInfo, OpcodeTable
from .values import PuttValue, PuttNumber, PuttText, PuttList, PuttOperation
from .stack import ValueStack
from .engine import Engine

__all__ = [
    'Opcode', 'OpcodeInfo', 'OpcodeTable',
    'PuttValue', 'PuttNumber', 'PuttText', 'PuttList', 'PuttOperation',
    'ValueStack',
    'Engine'
]
