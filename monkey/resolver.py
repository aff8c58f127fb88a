"""Static scope resolution over a parsed Monkey program.

The resolver walks the AST the way a code generator would, driving a
`SymbolTable` per lexical scope, and records what it learns in a
`Resolution`:

* the `Symbol` every `Identifier` occurrence resolves to,
* for every function literal, the ordered outer symbols its closure must
  capture (its free symbols) and the number of local slots it needs,
* the number of global slots the program needs.

Builtins are registered in the outermost table before anything else, in
`BUILTINS` order. A `let` name is defined before its value is walked. A
function literal bound directly by `let` defines its own name with
`define_function_self` so a recursive reference neither walks the
enclosing chain nor becomes a capture.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, BooleanLiteral, StringLiteral,
    ArrayLiteral, FunctionLiteral, PrefixExpression, InfixExpression,
    IfExpression, CallExpression, IndexExpression,
)
from .builtins import BUILTINS
from .errors import ResolutionError
from .symbol_table import Symbol, SymbolTable


@dataclass
class Resolution:
    identifiers: Dict[Identifier, Symbol] = field(default_factory=dict)
    free_symbols: Dict[FunctionLiteral, List[Symbol]] = field(default_factory=dict)
    num_locals: Dict[FunctionLiteral, int] = field(default_factory=dict)
    num_globals: int = 0

    def symbol_for(self, node: Identifier) -> Symbol:
        return self.identifiers[node]

    def listing(self) -> List[str]:
        """Describe each resolution as a line of text, in source order."""
        lines: List[str] = []
        for ident, symbol in self.identifiers.items():
            lines.append(f"{ident.name}: {symbol.scope} {symbol.index}")
        for fn, free in self.free_symbols.items():
            captured = ', '.join(f"{s.name}={s.scope} {s.index}" for s in free) or '-'
            lines.append(f"fn{'<' + fn.name + '>' if fn.name else ''}: locals={self.num_locals[fn]} free=[{captured}]")
        lines.append(f"globals={self.num_globals}")
        return lines


class Resolver:
    def __init__(self, symbol_table: Optional[SymbolTable] = None):
        if symbol_table is None:
            symbol_table = SymbolTable()
            for i, builtin in enumerate(BUILTINS):
                symbol_table.define_builtin(i, builtin.name)
        self.symbol_table = symbol_table
        self.resolution = Resolution()

    def resolve_program(self, program: Program) -> Resolution:
        for stmt in program.statements:
            self.visit(stmt)
        self.resolution.num_globals = self.symbol_table.num_definitions
        return self.resolution

    def enter_scope(self):
        self.symbol_table = self.symbol_table.enclosed()

    def leave_scope(self) -> SymbolTable:
        table = self.symbol_table
        self.symbol_table = table.outer
        return table

    def visit(self, node: Node):
        if isinstance(node, LetStatement):
            symbol = self.symbol_table.define(node.name.name)
            self.resolution.identifiers[node.name] = symbol
            self.visit(node.value)
        elif isinstance(node, ReturnStatement):
            self.visit(node.value)
        elif isinstance(node, ExpressionStatement):
            self.visit(node.expression)
        elif isinstance(node, BlockStatement):
            for stmt in node.statements:
                self.visit(stmt)
        elif isinstance(node, Identifier):
            symbol = self.symbol_table.resolve(node.name)
            if symbol is None:
                raise ResolutionError(node.name)
            self.resolution.identifiers[node] = symbol
        elif isinstance(node, FunctionLiteral):
            self.visit_function(node)
        elif isinstance(node, PrefixExpression):
            self.visit(node.right)
        elif isinstance(node, InfixExpression):
            self.visit(node.left)
            self.visit(node.right)
        elif isinstance(node, IfExpression):
            self.visit(node.condition)
            self.visit(node.consequence)
            if node.alternative is not None:
                self.visit(node.alternative)
        elif isinstance(node, CallExpression):
            self.visit(node.function)
            for arg in node.arguments:
                self.visit(arg)
        elif isinstance(node, IndexExpression):
            self.visit(node.left)
            self.visit(node.index)
        elif isinstance(node, ArrayLiteral):
            for element in node.elements:
                self.visit(element)
        elif isinstance(node, (IntegerLiteral, BooleanLiteral, StringLiteral)):
            pass
        else:
            raise TypeError(f"cannot resolve {type(node).__name__}")

    def visit_function(self, node: FunctionLiteral):
        self.enter_scope()
        if node.name:
            self.symbol_table.define_function_self(node.name)
        for param in node.parameters:
            self.resolution.identifiers[param] = self.symbol_table.define(param.name)
        self.visit(node.body)
        table = self.leave_scope()
        self.resolution.free_symbols[node] = list(table.free_symbols)
        self.resolution.num_locals[node] = table.num_definitions


def resolve_program(program: Program) -> Resolution:
    return Resolver().resolve_program(program)
