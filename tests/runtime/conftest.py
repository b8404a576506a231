"""
Test infrastructure for Putt engine tests.

This module provides:
- evaluate(): run source on a fresh engine and return the engine
- eval_and_assert(): run source and check the top of the stack
- eval_and_catch(): run source and expect an exception
- stack_of(): the whole stack as rendered strings
"""

import io
import sys
from pathlib import Path
from typing import List, Optional, Type

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from putt.config import PuttConfig
from putt.lexer import tokenize
from putt.vm import Engine, PuttValue

# Runaway programs in tests stop here
DEFAULT_STEP_LIMIT = 10_000


def make_engine(source: str, max_steps: Optional[int] = DEFAULT_STEP_LIMIT,
                output: Optional[io.StringIO] = None) -> Engine:
    """Build an engine with `source` loaded but not yet run."""
    config = PuttConfig(max_steps=max_steps, output=output or io.StringIO())
    engine = Engine(config)
    engine.load(tokenize(source, config=config))
    return engine


def evaluate(source: str, **kwargs) -> Engine:
    """Run source and return the finished engine."""
    engine = make_engine(source, **kwargs)
    engine.run()
    return engine


def eval_and_assert(source: str, expected: PuttValue):
    """Run source and check the value left on top of the stack."""
    engine = evaluate(source)
    assert engine.peek_top() == expected, \
        f"{source!r}: expected {expected!r}, got {engine.peek_top()!r}"


def eval_and_catch(source: str, exc_type: Type[Exception], **kwargs):
    """Run source, expect `exc_type`, return (engine, error) for inspection."""
    engine = make_engine(source, **kwargs)
    with pytest.raises(exc_type) as info:
        engine.run()
    return engine, info.value


def stack_of(engine: Engine) -> List[str]:
    return [value.render() for value in engine.stack]


def output_of(engine: Engine) -> str:
    return engine.config.output.getvalue()
