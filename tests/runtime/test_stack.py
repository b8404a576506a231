"""
Tests for Putt stack operations.

Covers Len, Swap, Dupe, Drop, Clear, Range, Sum and Avg.
"""

import math

from .conftest import evaluate, eval_and_assert, eval_and_catch, stack_of
from putt.errors import ExecutionError, StackUnderflow, TypeMismatch
from putt.vm.builtins import MAX_RANGE
from putt.vm.values import PuttList, PuttNumber


class TestStackShuffling:

    def test_len(self):
        engine = evaluate("1 2 3 Len")
        assert stack_of(engine) == ["1", "2", "3", "3"]
        eval_and_assert("Len", PuttNumber(0.0))

    def test_swap(self):
        assert stack_of(evaluate("1 2 Swap")) == ["2", "1"]

    def test_dupe(self):
        assert stack_of(evaluate("7 Dupe")) == ["7", "7"]

    def test_drop(self):
        assert stack_of(evaluate("1 2 Drop")) == ["1"]

    def test_clear(self):
        assert stack_of(evaluate("1 2 3 Clear")) == []
        assert stack_of(evaluate("Clear")) == []

    def test_clear_then_continue(self):
        eval_and_assert('"junk" Clear 4 5+', PuttNumber(9.0))


class TestRange:

    def test_inclusive_range(self):
        engine = evaluate("1 5 Range")
        assert engine.peek_top() == PuttList(tuple(PuttNumber(float(i)) for i in range(1, 6)))
        assert engine.peek_top().render() == "1 2 3 4 5"

    def test_empty_when_reversed(self):
        assert evaluate("3 1 Range").peek_top() == PuttList(())

    def test_negative_bounds(self):
        assert evaluate("-2 1 Range").peek_top().render() == "-2 -1 0 1"

    def test_bounds_are_truncated(self):
        assert evaluate("1 2.7 Range").peek_top().render() == "1 2"

    def test_requires_numbers(self):
        engine, error = eval_and_catch('1 "5" Range', TypeMismatch)
        assert error.operation == "Range"
        assert stack_of(engine) == ["1", "5"]

    def test_rejects_infinite_bound(self):
        engine, _ = eval_and_catch("1 1 0/ Range", TypeMismatch)
        assert stack_of(engine) == ["1", "inf"]

    def test_size_is_bounded(self):
        engine, error = eval_and_catch("0 10 9^ Range", ExecutionError)
        assert error.operation == "Range"
        assert "exceeds the limit of 1000000" in str(error)
        assert stack_of(engine) == ["0", "1000000000"]

    def test_largest_allowed_range(self):
        engine = evaluate("1 1000000 Range")
        assert len(engine.peek_top().items) == MAX_RANGE

    def test_list_is_not_a_number(self):
        engine, error = eval_and_catch("1 3 Range 1+", TypeMismatch)
        assert error.found == "List and Number"
        assert stack_of(engine) == ["1 2 3", "1"]


class TestSumAvg:

    def test_sum(self):
        eval_and_assert("1 2 3 3 Sum", PuttNumber(6.0))

    def test_sum_leaves_deeper_items(self):
        assert stack_of(evaluate("1 2 3 2 Sum")) == ["1", "5"]

    def test_non_numbers_count_as_zero(self):
        eval_and_assert('"a" 2 2 Sum', PuttNumber(2.0))

    def test_count_larger_than_stack(self):
        assert stack_of(evaluate("5 10 Sum")) == ["5"]

    def test_zero_count(self):
        assert stack_of(evaluate("4 0 Sum")) == ["4", "0"]

    def test_count_must_be_number(self):
        engine, _ = eval_and_catch('1 "x" Sum', TypeMismatch)
        assert stack_of(engine) == ["1", "x"]

    def test_empty_stack(self):
        eval_and_catch("Sum", StackUnderflow)
        eval_and_catch("Avg", StackUnderflow)

    def test_avg(self):
        eval_and_assert("2 4 2 Avg", PuttNumber(3.0))
        eval_and_assert("1 2 3 4 4 Avg", PuttNumber(2.5))

    def test_avg_of_nothing_is_nan(self):
        assert math.isnan(evaluate("0 Avg").peek_top().value)
        assert stack_of(evaluate("5 0 Avg")) == ["5", "NaN"]
