"""
Behaviour of every built-in operation.

Each builtin receives the running engine and its own OpcodeInfo. It returns
None to let the engine advance the program counter, or the new pc for a jump.
Arithmetic follows IEEE-754: overflow gives inf and domain errors give NaN
rather than raising.
"""

import math
from typing import Callable, Dict, Optional

from .. import codec
from ..errors import DecodeError, ExecutionError, InvalidJumpTarget, TypeMismatch
from .opcodes import Opcode, OpcodeInfo
from .values import PuttList, PuttNumber, PuttText, TRUE, FALSE

# Factorials past this overflow a double
MAX_FACTORIAL = 170

# Largest list Range will build
MAX_RANGE = 1_000_000

Builtin = Callable[['Engine', OpcodeInfo], Optional[int]]

BUILTINS: Dict[Opcode, Builtin] = {}


def builtin(opcode: Opcode):
    """Register the decorated function as the behaviour of `opcode`."""
    def register(func):
        if opcode in BUILTINS:
            raise KeyError(f"builtin already registered for {opcode.name}")
        BUILTINS[opcode] = func
        return func
    return register


def truncate(value: float) -> int:
    """Truncate toward zero; NaN becomes 0 and infinities raise OverflowError."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        raise OverflowError("cannot truncate an infinite value")
    return math.trunc(value)


# Float helpers with IEEE results instead of Python exceptions

def ieee_divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def ieee_power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        # Only odd integral exponents keep a negative base's sign
        if a < 0 and float(b).is_integer() and int(b) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        if a == 0.0 and b < 0:
            return math.inf
        return math.nan


def ieee_fmod(a: float, b: float) -> float:
    if b == 0.0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    return math.fmod(a, b)


def ieee_sqrt(a: float) -> float:
    if a < 0:
        return math.nan
    return math.sqrt(a)


def factorial(value: float) -> float:
    """Factorial of the truncated value; bounded, so it never recurses or runs long."""
    if math.isnan(value):
        return 1.0
    if math.isinf(value):
        return math.inf if value > 0 else 1.0
    n = math.trunc(value)
    if n > MAX_FACTORIAL:
        return math.inf
    if n < 2:
        return 1.0
    return float(math.factorial(n))


def _binary_numbers(engine, info: OpcodeInfo):
    a, b = engine.stack.pop_typed(info.name, PuttNumber, PuttNumber)
    return a.value, b.value


def _check_pair(engine, info: OpcodeInfo, allow_text: bool):
    """Peek the two operands and raise TypeMismatch unless they are compatible."""
    engine.stack.require(info.name, 2)
    b = engine.stack.peek(info.name, 0)
    a = engine.stack.peek(info.name, 1)
    if isinstance(a, PuttNumber) and isinstance(b, PuttNumber):
        return
    if allow_text and isinstance(a, PuttText) and isinstance(b, PuttText):
        return
    expected = "Number and Number or Text and Text" if allow_text else "Number and Number"
    raise TypeMismatch(info.name, expected, f"{a.type_name} and {b.type_name}")


# Operators

@builtin(Opcode.ADD)
def op_add(engine, info):
    _check_pair(engine, info, allow_text=True)
    a, b = engine.stack.pop_many(info.name, 2)
    if isinstance(a, PuttText):
        engine.stack.push(PuttText(a.value + b.value))
    else:
        engine.stack.push(PuttNumber(a.value + b.value))


@builtin(Opcode.SUBTRACT)
def op_subtract(engine, info):
    # Text subtraction concatenates, same as Add
    _check_pair(engine, info, allow_text=True)
    a, b = engine.stack.pop_many(info.name, 2)
    if isinstance(a, PuttText):
        engine.stack.push(PuttText(a.value + b.value))
    else:
        engine.stack.push(PuttNumber(a.value - b.value))


@builtin(Opcode.MULTIPLY)
def op_multiply(engine, info):
    a, b = _binary_numbers(engine, info)
    engine.stack.push(PuttNumber(a * b))


@builtin(Opcode.DIVIDE)
def op_divide(engine, info):
    a, b = _binary_numbers(engine, info)
    engine.stack.push(PuttNumber(ieee_divide(a, b)))


@builtin(Opcode.EQUAL)
def op_equal(engine, info):
    a, b = engine.stack.pop_many(info.name, 2)
    engine.stack.push(TRUE if a.structurally_equals(b) else FALSE)


@builtin(Opcode.POWER)
def op_power(engine, info):
    a, b = _binary_numbers(engine, info)
    engine.stack.push(PuttNumber(ieee_power(a, b)))


@builtin(Opcode.ROOT)
def op_root(engine, info):
    a, = engine.stack.pop_typed(info.name, PuttNumber)
    engine.stack.push(PuttNumber(ieee_sqrt(a.value)))


@builtin(Opcode.MODULUS)
def op_modulus(engine, info):
    a, b = _binary_numbers(engine, info)
    engine.stack.push(PuttNumber(ieee_fmod(a, b)))


@builtin(Opcode.FACTORIAL)
def op_factorial(engine, info):
    a, = engine.stack.pop_typed(info.name, PuttNumber)
    engine.stack.push(PuttNumber(factorial(a.value)))


@builtin(Opcode.NEGATE)
def op_negate(engine, info):
    a, = engine.stack.pop_typed(info.name, PuttNumber)
    engine.stack.push(PuttNumber(-a.value))


@builtin(Opcode.ABS)
def op_abs(engine, info):
    a, = engine.stack.pop_typed(info.name, PuttNumber)
    engine.stack.push(PuttNumber(abs(a.value)))


@builtin(Opcode.RANGE)
def op_range(engine, info):
    engine.stack.require(info.name, 2)
    for depth in (0, 1):
        bound = engine.stack.peek(info.name, depth)
        if not isinstance(bound, PuttNumber):
            raise TypeMismatch(info.name, "Number", bound.type_name)
        if math.isinf(bound.value):
            raise TypeMismatch(info.name, "finite Number", bound.render())
    start = truncate(engine.stack.peek(info.name, 1).value)
    stop = truncate(engine.stack.peek(info.name, 0).value)
    if stop - start + 1 > MAX_RANGE:
        raise ExecutionError(
            f"{info.name}: {stop - start + 1} items exceeds the limit of {MAX_RANGE}", info.name
        )
    engine.stack.pop_many(info.name, 2)
    engine.stack.push(PuttList(tuple(PuttNumber(float(i)) for i in range(start, stop + 1))))


def _total(engine, info) -> tuple:
    """Pop the count and up to that many values; return (total, count)."""
    count, = engine.stack.pop_typed(info.name, PuttNumber)
    if math.isnan(count.value) or count.value < 1:
        n = 0
    elif math.isinf(count.value):
        n = len(engine.stack)
    else:
        n = math.trunc(count.value)
    total = 0.0
    taken = 0
    while taken < n and len(engine.stack):
        value = engine.stack.pop(info.name)
        # Non-numeric values count as zero
        if isinstance(value, PuttNumber):
            total += value.value
        taken += 1
    return total, count.value


@builtin(Opcode.SUM)
def op_sum(engine, info):
    total, _ = _total(engine, info)
    engine.stack.push(PuttNumber(total))


@builtin(Opcode.AVG)
def op_avg(engine, info):
    total, count = _total(engine, info)
    engine.stack.push(PuttNumber(ieee_divide(total, count)))


# Stack operators

@builtin(Opcode.LEN)
def op_len(engine, info):
    engine.stack.push(PuttNumber(float(len(engine.stack))))


@builtin(Opcode.SWAP)
def op_swap(engine, info):
    a, b = engine.stack.pop_many(info.name, 2)
    engine.stack.push_all([b, a])


@builtin(Opcode.DUPE)
def op_dupe(engine, info):
    engine.stack.push(engine.stack.peek(info.name))


@builtin(Opcode.DROP)
def op_drop(engine, info):
    engine.stack.pop(info.name)


@builtin(Opcode.CLEAR)
def op_clear(engine, info):
    engine.stack.clear()


@builtin(Opcode.JMP)
def op_jmp(engine, info):
    target, = engine.stack.pop_typed(info.name, PuttNumber)
    tape_length = len(engine.tape)
    if math.isnan(target.value) or not -1 < target.value < tape_length:
        engine.stack.push(target)
        raise InvalidJumpTarget(target.value, tape_length)
    return math.trunc(target.value)


# Keywords

@builtin(Opcode.NOT)
def op_not(engine, info):
    a, = engine.stack.pop_typed(info.name, PuttNumber)
    if math.isinf(a.value):
        engine.stack.push(TRUE)
        return
    engine.stack.push(FALSE if truncate(a.value) == 1 else TRUE)


@builtin(Opcode.PRINT)
def op_print(engine, info):
    value = engine.stack.pop(info.name)
    engine.config.write(value.render() + " ")


@builtin(Opcode.PRINT_LINE)
def op_print_line(engine, info):
    value = engine.stack.pop(info.name)
    engine.config.write(value.render() + "\n")


@builtin(Opcode.COMPRESS)
def op_compress(engine, info):
    text, = engine.stack.pop_typed(info.name, PuttText)
    engine.stack.push(PuttText(codec.compress_text(text.value)))


@builtin(Opcode.DECOMPRESS)
def op_decompress(engine, info):
    text, = engine.stack.pop_typed(info.name, PuttText)
    try:
        decoded = codec.decompress_text(text.value, info.name)
    except DecodeError:
        engine.stack.push(text)
        raise
    engine.stack.push(PuttText(decoded))
