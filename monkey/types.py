"""Runtime values for the Monkey language.

This module defines the value classes produced by the evaluator together
with the helpers the interpreter needs to work with them: the boolean and
null singletons, signed 64-bit integer wrapping, type names used in error
messages, and the `inspect` rendering shown by the REPL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .ast import BlockStatement, Identifier
    from .environment import Environment


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class IntegerVal:
    value: int

    def __repr__(self) -> str:
        return f"Integer({self.value})"


class BooleanVal:
    """Boolean value.

    Only the two module level instances `TRUE` and `FALSE` exist; use
    `native_bool_to_boolean` rather than constructing new ones so results
    can be compared with `is`.
    """
    __slots__ = ('value',)

    def __init__(self, value: bool):
        self.value = value

    def __repr__(self) -> str:
        return 'true' if self.value else 'false'


class NullVal:
    """Marker object for the Monkey `null` value."""
    __slots__ = ()

    def __repr__(self) -> str:
        return 'null'


TRUE = BooleanVal(True)
FALSE = BooleanVal(False)
NULL = NullVal()


@dataclass(frozen=True)
class StringVal:
    value: str

    def __repr__(self) -> str:
        return f"String({self.value!r})"


@dataclass
class ArrayVal:
    """Represents a Monkey array value: an ordered list of values."""
    elements: List[Any]

    def __repr__(self) -> str:
        return f"Array({self.elements!r})"


class FunctionVal:
    """Represents a user-defined Monkey function.

    The body is shared with the AST and `env` is the environment that was
    active where the function literal was evaluated. It is held by
    reference, so later definitions in that scope are visible to the body.
    """
    def __init__(self, parameters: List['Identifier'], body: 'BlockStatement', env: 'Environment'):
        self.parameters = parameters
        self.body = body
        self.env = env

    def __repr__(self) -> str:
        names = ', '.join(p.name for p in self.parameters)
        return f"<function fn({names})>"


@dataclass
class ErrorVal:
    """Represents a Monkey error value.

    `kind` names the error category (for example 'TypeMismatch' or
    'IdentifierNotFound'); `message` is the text shown to the user.
    """
    kind: str
    message: str

    def __repr__(self) -> str:
        return f"Error(kind={self.kind!r}, message={self.message!r})"


def native_bool_to_boolean(value: bool) -> BooleanVal:
    return TRUE if value else FALSE


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python integer into the signed 64-bit range."""
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return (value - INT64_MIN) % (2 ** 64) + INT64_MIN


def truncated_divmod(a: int, b: int):
    """Integer division truncating toward zero, as C does.

    Returns (quotient, remainder) where the remainder carries the sign of
    the dividend. The caller must reject b == 0.
    """
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - b * q


def type_name(value: Any) -> str:
    """Return the Monkey type name of a runtime value."""
    from .builtin_function import BuiltinFunction
    if isinstance(value, IntegerVal):
        return 'INTEGER'
    if isinstance(value, BooleanVal):
        return 'BOOLEAN'
    if isinstance(value, NullVal):
        return 'NULL'
    if isinstance(value, StringVal):
        return 'STRING'
    if isinstance(value, ArrayVal):
        return 'ARRAY'
    if isinstance(value, FunctionVal):
        return 'FUNCTION'
    if isinstance(value, BuiltinFunction):
        return 'BUILTIN'
    if isinstance(value, ErrorVal):
        return 'ERROR'
    return type(value).__name__


def inspect(value: Any) -> str:
    """Render a Monkey value the way the REPL prints it."""
    from .builtin_function import BuiltinFunction
    if isinstance(value, IntegerVal):
        return str(value.value)
    if isinstance(value, BooleanVal):
        return 'true' if value.value else 'false'
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, StringVal):
        return value.value
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(inspect(item) for item in value.elements) + ']'
    if isinstance(value, FunctionVal):
        params = ', '.join(str(p) for p in value.parameters)
        return f"fn({params}) {{\n{value.body}\n}}"
    if isinstance(value, BuiltinFunction):
        return 'builtin function'
    if isinstance(value, ErrorVal):
        return f"ERROR: {value.message}"
    return str(value)
