"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The AST classes defined in this module represent the syntactic structure
of parsed Monkey programs. They are consumed by the interpreter and by the
resolver. Each node renders back to a canonical source form through
`__str__`, with every prefix, infix and index expression fully
parenthesised, which makes operator precedence visible in tests.

Nodes compare by identity so they can key the resolver's lookup tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(eq=False)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(eq=False)
class Program(Node):
    statements: List[Node]

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.statements)


@dataclass(eq=False)
class Identifier(Node):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class LetStatement(Node):
    name: Identifier
    value: Node

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass(eq=False)
class ReturnStatement(Node):
    value: Node

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass(eq=False)
class ExpressionStatement(Node):
    expression: Node

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(eq=False)
class BlockStatement(Node):
    statements: List[Node]

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.statements)


@dataclass(eq=False)
class IntegerLiteral(Node):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(eq=False)
class BooleanLiteral(Node):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(eq=False)
class StringLiteral(Node):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class ArrayLiteral(Node):
    elements: List[Node]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass(eq=False)
class FunctionLiteral(Node):
    parameters: List[Identifier]
    body: BlockStatement
    name: Optional[str] = None  # set when bound directly by a let statement

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        label = f"<{self.name}>" if self.name else ''
        return f"fn{label}({params}) {self.body}"


@dataclass(eq=False)
class PrefixExpression(Node):
    operator: str
    right: Node

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(eq=False)
class InfixExpression(Node):
    left: Node
    operator: str
    right: Node

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(eq=False)
class IfExpression(Node):
    condition: Node
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass(eq=False)
class CallExpression(Node):
    function: Node
    arguments: List[Node] = field(default_factory=list)

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(eq=False)
class IndexExpression(Node):
    left: Node
    index: Node

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"
