"""
The engine's value stack.

Operand fetches check depth and types by peeking before anything is popped,
so a failing operation never loses stack contents.
"""

from typing import List, Optional, Sequence, Tuple, Type

from ..errors import StackUnderflow, TypeMismatch
from .values import PuttValue


class ValueStack:
    """LIFO stack of Putt values, top at the end."""

    def __init__(self, items: Optional[Sequence[PuttValue]] = None):
        self.items: List[PuttValue] = list(items) if items else []

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __repr__(self):
        return f"ValueStack({self.items!r})"

    def push(self, value: PuttValue):
        self.items.append(value)

    def push_all(self, values: Sequence[PuttValue]):
        self.items.extend(values)

    def top(self) -> Optional[PuttValue]:
        """Return the top value without removing it, or None if empty."""
        return self.items[-1] if self.items else None

    def require(self, operation: str, count: int):
        """Raise StackUnderflow unless at least `count` items are present."""
        if len(self.items) < count:
            raise StackUnderflow(operation, count, len(self.items))

    def peek(self, operation: str, depth: int = 0) -> PuttValue:
        """Return the item `depth` places below the top."""
        self.require(operation, depth + 1)
        return self.items[-1 - depth]

    def pop(self, operation: str) -> PuttValue:
        self.require(operation, 1)
        return self.items.pop()

    def pop_many(self, operation: str, count: int) -> List[PuttValue]:
        """Pop `count` items, returned in push order (deepest first)."""
        self.require(operation, count)
        if count == 0:
            return []
        popped = self.items[-count:]
        del self.items[-count:]
        return popped

    def pop_typed(self, operation: str, *types: Type[PuttValue]) -> Tuple[PuttValue, ...]:
        """
        Pop one operand per entry in `types`, checking every type first.

        Operands are returned in push order, so for a binary operation
        `a, b = stack.pop_typed(op, PuttNumber, PuttNumber)` gives `a op b`.
        Nothing is removed when the depth or a type is wrong.
        """
        count = len(types)
        self.require(operation, count)
        operands = self.items[len(self.items) - count:]
        for expected, value in zip(types, operands):
            if not isinstance(value, expected):
                raise TypeMismatch(operation, expected.type_name, value.type_name)
        return tuple(self.pop_many(operation, count))

    def clear(self):
        self.items.clear()

    def dump(self) -> str:
        """Readable rendering for trace logs."""
        return "[" + ", ".join(repr(item) for item in self.items) + "]"
