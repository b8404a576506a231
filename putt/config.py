"""Runtime configuration shared by the lexer, the engine and the interpreter."""

import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO


@dataclass
class PuttConfig:
    """Explicit settings for one lexer/engine pair."""
    verbose: bool = False
    max_steps: Optional[int] = None  # None means unbounded
    output: Optional[TextIO] = None  # Print/PrintLine and results
    log_stream: Optional[TextIO] = None
    line_open: bool = field(default=False, init=False, repr=False)  # Output ends mid-line

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[putt] {message}", file=self.log_stream or sys.stderr)

    def write(self, text: str):
        """Write program output."""
        stream = self.output or sys.stdout
        stream.write(text)
        stream.flush()
        if text:
            self.line_open = not text.endswith("\n")
