"""Type definitions and value operators for minilang.

This module defines the static type markers used by the semantic checker
and the runtime values produced by the evaluator. Runtime integers and
strings are plain Python ``int`` and ``str`` objects; the two internal
markers are represented by :class:`ErrorVal` and :class:`EmptyVal`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TypeSpec:
    """Represents the static type of an AST node.

    A type is described by its `kind`, one of 'Integer', 'Str', 'Error'
    or 'Empty'. 'Error' is the checker's ill-typed marker and 'Empty'
    is the type of statements that produce no value.
    """
    kind: str

    def __repr__(self) -> str:
        return self.kind

    # Convenience constructors
    @staticmethod
    def integer() -> 'TypeSpec':
        return TypeSpec('Integer')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('Str')

    @staticmethod
    def error() -> 'TypeSpec':
        return TypeSpec('Error')

    @staticmethod
    def empty() -> 'TypeSpec':
        return TypeSpec('Empty')


@dataclass(frozen=True)
class ErrorVal:
    """Result of a failed operation.

    The message is empty for plain type mismatches and carries a
    description (e.g. ``DIVIDE BY ZERO``) when the failure should be
    reported to the user.
    """
    message: str = ''

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


@dataclass(frozen=True)
class EmptyVal:
    """Marker for "statement executed, no value"."""

    def __repr__(self) -> str:
        return 'Empty'


DIVIDE_BY_ZERO = 'DIVIDE BY ZERO'


def is_int(value: Any) -> bool:
    # bool is a subclass of int but never a minilang value
    return isinstance(value, int) and not isinstance(value, bool)


def is_str(value: Any) -> bool:
    return isinstance(value, str)


def type_of(value: Any) -> TypeSpec:
    """Return the TypeSpec describing a runtime value."""
    if is_int(value):
        return TypeSpec.integer()
    if is_str(value):
        return TypeSpec.string()
    if isinstance(value, ErrorVal):
        return TypeSpec.error()
    if isinstance(value, EmptyVal):
        return TypeSpec.empty()
    raise TypeError(f"not a minilang value: {value!r}")


def default_value(spec: TypeSpec) -> Any:
    """Value bound to a freshly declared variable."""
    if spec.kind == 'Integer':
        return 0
    if spec.kind == 'Str':
        return ''
    raise TypeError(f"no default value for {spec}")


def to_string(value: Any) -> str:
    """Convert a value to the text written by print/println."""
    if is_int(value):
        return str(value)
    if is_str(value):
        return value
    # Error and Empty have no textual form
    return ''


def add(a: Any, b: Any) -> Any:
    if is_int(a) and is_int(b):
        return a + b
    if is_str(a) and is_str(b):
        return a + b
    return ErrorVal()


def subtract(a: Any, b: Any) -> Any:
    if is_int(a) and is_int(b):
        return a - b
    return ErrorVal()


def repeat(text: str, count: int) -> str:
    if count <= 0:
        return ''
    return text * count


def multiply(a: Any, b: Any) -> Any:
    if is_int(a) and is_int(b):
        return a * b
    if is_int(a) and is_str(b):
        return repeat(b, a)
    if is_str(a) and is_int(b):
        return repeat(a, b)
    return ErrorVal()


def divide(a: Any, b: Any) -> Any:
    """Integer division, or removal of the first occurrence of a substring.

    Integer division truncates toward zero. Removing a substring that does
    not occur leaves the left operand unchanged.
    """
    if is_int(a) and is_int(b):
        if b == 0:
            return ErrorVal(DIVIDE_BY_ZERO)
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient
    if is_str(a) and is_str(b):
        pos = a.find(b)
        if pos < 0:
            return a
        return a[:pos] + a[pos + len(b):]
    return ErrorVal()
