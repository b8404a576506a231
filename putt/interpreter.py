"""
Main Putt interpreter.

Coordinates lexing and execution, and hosts the file runner, the REPL and the
command-line entry point.
"""

import sys
from typing import Optional, TextIO

from . import __version__
from .config import PuttConfig
from .errors import PuttError
from .lexer import tokenize
from .vm import Engine, PuttOperation

PROMPT = ">> "


def run_source(source: str, filename: str = "<input>",
               config: Optional[PuttConfig] = None) -> Engine:
    """Tokenize and run `source` on a fresh engine and return the engine."""
    config = config or PuttConfig()
    engine = Engine(config)
    engine.load(tokenize(source, filename, config))
    engine.run()
    return engine


def result_text(engine: Engine) -> Optional[str]:
    """
    Text the host prints after a run.

    Returns None when the last dispatched token was an output operation,
    '[]' for an empty stack, otherwise the rendering of the top value.
    """
    last = engine.last_token
    if isinstance(last, PuttOperation) and last.info.is_output:
        return None
    top = engine.peek_top()
    if top is None:
        return "[]"
    return top.render()


class PuttInterpreter:
    """Runs Putt programs from files, strings or an interactive prompt."""

    def __init__(self, verbose: bool = False, max_steps: Optional[int] = None,
                 output: Optional[TextIO] = None, errors: Optional[TextIO] = None):
        self.verbose = verbose
        self.config = PuttConfig(verbose=verbose, max_steps=max_steps,
                                 output=output, log_stream=errors)
        self.errors = errors

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        self.config.log(message)

    def report(self, error: Exception):
        """Print an error the way users see it."""
        print(f"{type(error).__name__}: {error}", file=self.errors or sys.stderr)
        if self.verbose:
            import traceback
            traceback.print_exc(file=self.errors or sys.stderr)

    def run_string(self, source: str, filename: str = "<input>") -> Engine:
        """Run source text and print its result. Errors propagate."""
        engine = run_source(source, filename, self.config)
        text = result_text(engine)
        if text is not None:
            self.config.write(text + "\n")
        return engine

    def run_file(self, input_path: str) -> bool:
        """
        Run a Putt source file.

        Args:
            input_path: Path to the program

        Returns:
            True if the program ran to completion, False otherwise
        """
        try:
            self.log(f"Reading {input_path}...")
            with open(input_path, 'r', encoding='utf-8') as f:
                source = f.read()

            engine = self.run_string(source, str(input_path))
            self.log(f"Run successful: {engine.steps} step(s)")
            return True

        except FileNotFoundError:
            print(f"Error: File not found: {input_path}", file=self.errors or sys.stderr)
            return False
        except OSError as e:
            print(f"Error: {e}", file=self.errors or sys.stderr)
            return False
        except PuttError as e:
            self.report(e)
            return False

    def prompt(self):
        """Write the REPL prompt at the start of a fresh line."""
        if self.config.line_open:
            self.config.write("\n")
        self.config.write(PROMPT)
        self.config.line_open = False

    def repl(self, stdin: Optional[TextIO] = None) -> int:
        """Read-eval-print loop; one fresh engine per line. Returns an exit status."""
        stdin = stdin or sys.stdin
        self.config.write(f"PUTT REPL v{__version__}\n")
        self.prompt()

        for line in stdin:
            line = line.rstrip('\n')
            if line.strip():
                try:
                    self.run_string(line, "<stdin>")
                except PuttError as e:
                    self.report(e)
            self.prompt()

        self.config.write("\n")
        return 0


def main(argv=None):
    """Command-line interface for the interpreter."""
    import argparse

    parser = argparse.ArgumentParser(
        prog='putt',
        description='Putt - a tiny stack-oriented RPN scripting language'
    )
    parser.add_argument('file', nargs='?', help='Program to run (omit for a REPL)')
    parser.add_argument('--verbose', action='store_true',
                        help='Trace lexing and every dispatch step on stderr')
    parser.add_argument('--max-steps', type=int, default=None, metavar='N',
                        help='Abort a run after N dispatch steps')

    args = parser.parse_args(argv)

    interpreter = PuttInterpreter(verbose=args.verbose, max_steps=args.max_steps)

    if args.file is None:
        status = interpreter.repl()
    else:
        status = 0 if interpreter.run_file(args.file) else 1

    sys.exit(status)


if __name__ == '__main__':
    main()
