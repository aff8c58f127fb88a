"""Built-in functions available to every Monkey program.

`BUILTINS` is ordered: a builtin's position in the list is the index the
symbol table assigns it, so new entries must only ever be appended.
"""

from typing import Any, Dict, List, Optional

from .builtin_function import BuiltinFunction
from .errors import MonkeyError
from .types import (
    ErrorVal, IntegerVal, StringVal, ArrayVal, NULL, inspect, type_name,
)


def check_arity(args: List[Any], want: int):
    if len(args) != want:
        raise MonkeyError(ErrorVal('BuiltinArity', f'wrong number of arguments. got={len(args)}, want={want}'))


def expect_array(name: str, value: Any) -> ArrayVal:
    if not isinstance(value, ArrayVal):
        raise MonkeyError(ErrorVal('BuiltinArgumentType', f'argument to `{name}` must be ARRAY, got {type_name(value)}'))
    return value


def builtin_len(args: List[Any]) -> Any:
    check_arity(args, 1)
    arg = args[0]
    if isinstance(arg, StringVal):
        # strings are byte sequences
        return IntegerVal(len(arg.value.encode('utf-8')))
    if isinstance(arg, ArrayVal):
        return IntegerVal(len(arg.elements))
    raise MonkeyError(ErrorVal('BuiltinArgumentType', f'argument to len not supported, got {type_name(arg)}'))


def builtin_puts(args: List[Any]) -> Any:
    for arg in args:
        print(inspect(arg))
    return NULL


def builtin_first(args: List[Any]) -> Any:
    check_arity(args, 1)
    arr = expect_array('first', args[0])
    return arr.elements[0] if arr.elements else NULL


def builtin_last(args: List[Any]) -> Any:
    check_arity(args, 1)
    arr = expect_array('last', args[0])
    return arr.elements[-1] if arr.elements else NULL


def builtin_rest(args: List[Any]) -> Any:
    check_arity(args, 1)
    arr = expect_array('rest', args[0])
    if not arr.elements:
        return NULL
    return ArrayVal(list(arr.elements[1:]))


def builtin_push(args: List[Any]) -> Any:
    check_arity(args, 2)
    arr = expect_array('push', args[0])
    # arrays are never mutated in place
    return ArrayVal(arr.elements + [args[1]])


BUILTINS: List[BuiltinFunction] = [
    BuiltinFunction('len', builtin_len),
    BuiltinFunction('puts', builtin_puts),
    BuiltinFunction('first', builtin_first),
    BuiltinFunction('last', builtin_last),
    BuiltinFunction('rest', builtin_rest),
    BuiltinFunction('push', builtin_push),
]

BUILTINS_BY_NAME: Dict[str, BuiltinFunction] = {b.name: b for b in BUILTINS}


def lookup_builtin(name: str) -> Optional[BuiltinFunction]:
    return BUILTINS_BY_NAME.get(name)
