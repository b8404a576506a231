"""
Putt execution engine.

Runs a fully tokenized tape with a program counter: fetch tape[pc], dispatch
operations to their builtins, push everything else, advance pc unless the
operation jumped.
"""

from typing import Iterable, List, Optional

from ..config import PuttConfig
from ..errors import RunCancelled, StepLimitExceeded
from .builtins import BUILTINS
from .opcodes import Opcode
from .stack import ValueStack
from .values import PuttOperation, PuttValue


class Engine:
    """Stack machine for one Putt program."""

    def __init__(self, config: Optional[PuttConfig] = None):
        self.config = config or PuttConfig()
        self.tape: List[PuttValue] = []
        self.pc = 0
        self.stack = ValueStack()
        self.steps = 0
        self.last_op: Optional[Opcode] = None  # Last dispatched operation
        self.last_token: Optional[PuttValue] = None
        self._cancelled = False

    def load(self, values: Iterable[PuttValue]):
        """Append tokens to the tape."""
        values = list(values)
        self.tape.extend(values)
        self.config.log(f"Loaded {len(values)} token(s), tape length {len(self.tape)}")

    def cancel(self):
        """Ask a running engine to stop before its next dispatch step."""
        self._cancelled = True

    def peek_top(self) -> Optional[PuttValue]:
        """Return the program result: the top of the stack, if any."""
        return self.stack.top()

    def step(self):
        """Dispatch the token at pc and move pc to the next token."""
        token = self.tape[self.pc]
        self.steps += 1
        self.last_token = token

        if isinstance(token, PuttOperation):
            info = token.info
            self.last_op = token.opcode
            self.stack.require(info.name, info.arity)
            new_pc = BUILTINS[token.opcode](self, info)
            self.pc = self.pc + 1 if new_pc is None else new_pc
        else:
            self.stack.push(token)
            self.pc += 1

        if self.config.verbose:
            self.config.log(f"pc={self.pc} after {token!r}; Stack Dump: {self.stack.dump()}")

    def run(self):
        """
        Execute until pc runs off the end of the tape.

        Raises:
            ExecutionError: the first failing operation aborts the run. Stack,
                tape and pc are left as they were when the error was raised.
        """
        self._cancelled = False
        limit = self.config.max_steps

        while self.pc < len(self.tape):
            if self._cancelled:
                raise RunCancelled(self.pc)
            if limit is not None and self.steps >= limit:
                raise StepLimitExceeded(limit)
            self.step()

        self.config.log(f"Run finished after {self.steps} step(s)")
