"""
Putt error taxonomy.

Every error raised by the lexer or the engine derives from PuttError, so a
host can report and continue (REPL) or exit (file runs) with one handler.
"""

from typing import Optional


class PuttError(Exception):
    """Base class for all Putt errors."""
    pass


class ParseError(PuttError):
    """Source text could not be tokenized."""

    def __init__(self, reason: str, position: int, line: int = 1, column: int = 1,
                 filename: str = "<input>"):
        self.reason = reason
        self.position = position
        self.line = line
        self.column = column
        self.filename = filename
        super().__init__(f"{filename}:{line}:{column}: {reason}")


class ExecutionError(PuttError):
    """A run failed while dispatching an operation."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)


class TypeMismatch(ExecutionError):
    """An operation received operands of the wrong type."""

    def __init__(self, operation: str, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"{operation}: expected {expected}, found {found}", operation)


class StackUnderflow(ExecutionError):
    """An operation needed more items than the stack holds."""

    def __init__(self, operation: str, needed: int, available: int):
        self.needed = needed
        self.available = available
        super().__init__(
            f"{operation}: needs {needed} item(s), stack has {available}", operation
        )


class InvalidJumpTarget(ExecutionError):
    """Jmp tried to move the program counter off the tape."""

    def __init__(self, target: float, tape_length: int):
        self.target = target
        self.tape_length = tape_length
        super().__init__(
            f"Jmp: target {target:g} outside tape of length {tape_length}", "Jmp"
        )


class DecodeError(ExecutionError):
    """The compression codec rejected its input."""

    def __init__(self, operation: str, detail: str = ""):
        self.detail = detail
        message = f"{operation}: cannot decode compressed text"
        if detail:
            message += f" ({detail})"
        super().__init__(message, operation)


class StepLimitExceeded(ExecutionError):
    """The run dispatched more tokens than the configured limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"step limit of {limit} exceeded")


class RunCancelled(ExecutionError):
    """The run was cancelled between two dispatch steps."""

    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"run cancelled at pc {pc}")
