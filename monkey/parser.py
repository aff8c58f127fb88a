"""Parser for the Monkey language.

The source text is fed into a Lark LALR parser configured with the
grammar below, and the resulting parse tree is transformed into the AST
defined in `monkey.ast` by `ASTTransformer`.

Semicolons after statements are optional. Where a statement could either
end or continue (an expression followed by `(`, `[` or `-`), the parser
continues the expression, so `a\n(b)` is a call.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source text.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Identifier, IntegerLiteral, BooleanLiteral, StringLiteral, ArrayLiteral,
    FunctionLiteral, PrefixExpression, InfixExpression, IfExpression,
    CallExpression, IndexExpression,
)
from .errors import ParseError
from .types import INT64_MAX


MONKEY_GRAMMAR = r"""
    ?start: program
    program: statement*

    // Statements
    ?statement: let_stmt
              | return_stmt
              | expr_stmt

    let_stmt: "let" IDENT "=" expression ";"?
    return_stmt: "return" expression ";"?
    expr_stmt: expression ";"?

    block: "{" statement* "}"

    // Expressions with precedence
    ?expression: equality
    ?equality: comparison ((EQ | NOT_EQ) comparison)*
    ?comparison: sum ((LT | GT) sum)*
    ?sum: product ((PLUS | MINUS) product)*
    ?product: prefix ((STAR | SLASH | PERCENT) prefix)*
    ?prefix: (BANG | MINUS) prefix -> prefix_expr
           | postfix
    ?postfix: primary
            | postfix "(" _expr_list? ")" -> call
            | postfix "[" expression "]" -> index
    ?primary: INT
            | STRING
            | IDENT
            | "true" -> true_lit
            | "false" -> false_lit
            | "(" expression ")"
            | array_lit
            | fn_lit
            | if_expr

    array_lit: "[" _expr_list? "]"
    fn_lit: "fn" "(" _param_list? ")" block
    if_expr: "if" "(" expression ")" block ("else" block)?

    _expr_list: expression ("," expression)*
    _param_list: IDENT ("," IDENT)*

    // Tokens
    EQ: "=="
    NOT_EQ: "!="
    LT: "<"
    GT: ">"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    BANG: "!"

    INT: /[0-9]+/
    STRING: /"[^"]*"/
    IDENT: /[a-zA-Z_][a-zA-Z0-9_]*/

    %import common.WS
    %ignore WS
"""


MONKEY_PARSER = Lark(
    MONKEY_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=False,
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    # Terminals
    def INT(self, token):
        value = int(token.value)
        if value > INT64_MAX:
            raise ParseError([f"could not parse {token.value} as integer"])
        return IntegerLiteral(value)

    def STRING(self, token):
        return StringLiteral(token.value[1:-1])

    def IDENT(self, token):
        return Identifier(str(token))

    # Statements
    def program(self, items):
        return Program(statements=list(items))

    def let_stmt(self, items):
        name, value = items
        if isinstance(value, FunctionLiteral):
            # lets the function refer to itself by name
            value.name = name.name
        return LetStatement(name=name, value=value)

    def return_stmt(self, items):
        return ReturnStatement(items[0])

    def expr_stmt(self, items):
        return ExpressionStatement(items[0])

    def block(self, items):
        return BlockStatement(statements=list(items))

    # Expressions
    def fold_infix(self, items):
        # items pattern: expr (op expr)*, folded left-associatively
        left = items[0]
        i = 1
        while i < len(items):
            left = InfixExpression(left=left, operator=str(items[i]), right=items[i + 1])
            i += 2
        return left

    def equality(self, items):
        return self.fold_infix(items)

    def comparison(self, items):
        return self.fold_infix(items)

    def sum(self, items):
        return self.fold_infix(items)

    def product(self, items):
        return self.fold_infix(items)

    def prefix_expr(self, items):
        op, operand = items
        return PrefixExpression(operator=str(op), right=operand)

    def call(self, items):
        return CallExpression(function=items[0], arguments=list(items[1:]))

    def index(self, items):
        left, index = items
        return IndexExpression(left=left, index=index)

    def true_lit(self, items):
        return BooleanLiteral(True)

    def false_lit(self, items):
        return BooleanLiteral(False)

    def array_lit(self, items):
        return ArrayLiteral(list(items))

    def fn_lit(self, items):
        *params, body = items
        return FunctionLiteral(parameters=params, body=body)

    def if_expr(self, items):
        condition = items[0]
        consequence = items[1]
        alternative = items[2] if len(items) > 2 else None
        return IfExpression(condition, consequence, alternative)


def describe_parse_error(source: str, e: UnexpectedInput) -> str:
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return 'unexpected end of input'
        return f"unexpected token {e.token.value!r} at line {e.line}, column {e.column}"
    if isinstance(e, UnexpectedCharacters):
        return f"no token matches {source[e.pos_in_stream]!r} at line {e.line}, column {e.column}"
    return str(e).strip().splitlines()[0]


def parse_program(source: str) -> Program:
    """Parse Monkey source code into an AST Program.

    Syntax errors are reported as a `ParseError` whose `errors` attribute
    lists human readable messages.
    """
    try:
        tree = MONKEY_PARSER.parse(source)
    except UnexpectedInput as e:
        raise ParseError([describe_parse_error(source, e)]) from e
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise
