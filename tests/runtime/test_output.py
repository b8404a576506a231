"""Tests for Print (.) and PrintLine (,)."""

import io

from .conftest import evaluate, eval_and_catch, output_of, stack_of
from putt.errors import StackUnderflow
from putt.vm.opcodes import Opcode


class TestOutput:

    def test_print_line(self):
        engine = evaluate('"Hello",')
        assert output_of(engine) == "Hello\n"
        assert stack_of(engine) == []

    def test_print_separates_with_space(self):
        engine = evaluate("1 . 2 .")
        assert output_of(engine) == "1 2 "

    def test_print_renders_numbers_and_lists(self):
        engine = evaluate("2 2/ , 1 3 Range , 0.25 ,")
        assert output_of(engine) == "1\n1 2 3\n0.25\n"

    def test_print_is_last_op(self):
        assert evaluate("1,").last_op == Opcode.PRINT_LINE
        assert evaluate("1.").last_op == Opcode.PRINT

    def test_print_on_empty_stack(self):
        engine, error = eval_and_catch(",", StackUnderflow)
        assert error.operation == "PrintLine"
        assert output_of(engine) == ""

    def test_output_stream_is_configurable(self):
        sink = io.StringIO()
        evaluate('"to sink",', output=sink)
        assert sink.getvalue() == "to sink\n"


class TestNumberRendering:

    def test_small_values_are_positional(self):
        assert stack_of(evaluate("1 10000000/")) == ["0.0000001"]

    def test_negative_zero_keeps_its_sign(self):
        assert stack_of(evaluate("0 Neg")) == ["-0"]
        assert stack_of(evaluate("0")) == ["0"]

    def test_large_values_are_positional(self):
        assert stack_of(evaluate("10 16^")) == ["10000000000000000"]
        assert stack_of(evaluate("10 16^ 0.5+")) == ["10000000000000000"]
        assert stack_of(evaluate("1 3/")) == ["0.3333333333333333"]
