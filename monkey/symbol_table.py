"""Compile-time scope resolution for Monkey.

A `SymbolTable` maps names to `Symbol`s, each of which records the scope
a name lives in and the slot index a code generator should use for it.
There is one table per lexical scope: the outermost table for globals and
builtins, and one enclosed table per function body.

Resolving a name that lives in an enclosing function (a local, a free
variable of that function, or the function itself) captures it: the outer
symbol is appended to `free_symbols` and a FREE symbol whose index is its
position in that list is registered locally. Globals and builtins are
reachable from any depth and are returned unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


GLOBAL_SCOPE = 'GLOBAL'
LOCAL_SCOPE = 'LOCAL'
FREE_SCOPE = 'FREE'
BUILTIN_SCOPE = 'BUILTIN'
FUNCTION_SCOPE = 'FUNCTION'


@dataclass(frozen=True)
class Symbol:
    name: str
    scope: str
    index: int


class SymbolTable:
    def __init__(self, outer: Optional['SymbolTable'] = None):
        self.outer = outer
        self.store: Dict[str, Symbol] = {}
        self.num_definitions = 0
        self.free_symbols: List[Symbol] = []

    def enclosed(self) -> 'SymbolTable':
        return SymbolTable(outer=self)

    def define(self, name: str) -> Symbol:
        scope = GLOBAL_SCOPE if self.outer is None else LOCAL_SCOPE
        symbol = Symbol(name, scope, self.num_definitions)
        self.store[name] = symbol
        self.num_definitions += 1
        return symbol

    def define_function_self(self, name: str) -> Symbol:
        # Does not take a slot: the running closure is addressed directly
        symbol = Symbol(name, FUNCTION_SCOPE, 0)
        self.store[name] = symbol
        return symbol

    def define_builtin(self, index: int, name: str) -> Symbol:
        symbol = Symbol(name, BUILTIN_SCOPE, index)
        self.store[name] = symbol
        return symbol

    def define_free(self, original: Symbol) -> Symbol:
        self.free_symbols.append(original)
        symbol = Symbol(original.name, FREE_SCOPE, len(self.free_symbols) - 1)
        self.store[original.name] = symbol
        return symbol

    def resolve(self, name: str) -> Optional[Symbol]:
        """Return the symbol for `name`, or None if no scope binds it."""
        symbol = self.store.get(name)
        if symbol is not None or self.outer is None:
            return symbol
        symbol = self.outer.resolve(name)
        if symbol is None:
            return None
        if symbol.scope in (GLOBAL_SCOPE, BUILTIN_SCOPE):
            return symbol
        return self.define_free(symbol)
