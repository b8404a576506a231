"""
Putt - a tiny stack-oriented, reverse-Polish scripting language.

This package provides the lexer that turns source text into a flat tape of
values and operation codes, and the engine that runs that tape against a
single value stack.
"""

__version__ = "0.1.0"

from .config import PuttConfig
from .errors import (
    PuttError, ParseError, ExecutionError, TypeMismatch, StackUnderflow,
    InvalidJumpTarget, DecodeError, StepLimitExceeded, RunCancelled,
)
from .lexer import Lexer, tokenize
from .vm import Engine, PuttValue, PuttNumber, PuttText, PuttList, PuttOperation
from .interpreter import run_source

__all__ = [
    'PuttConfig',
    'PuttError', 'ParseError', 'ExecutionError', 'TypeMismatch', 'StackUnderflow',
    'InvalidJumpTarget', 'DecodeError', 'StepLimitExceeded', 'RunCancelled',
    'Lexer', 'tokenize',
    'Engine', 'PuttValue', 'PuttNumber', 'PuttText', 'PuttList', 'PuttOperation',
    'run_source',
]
