"""Tree-walking interpreter for the Monkey language.

`Interpreter.evaluate` takes any AST node (a whole program, a statement
or an expression) and an `Environment`, and returns a runtime value from
`monkey.types`. Language errors are never raised to the caller: they come
back as `ErrorVal` results that the caller must check for.

Inside the interpreter an error travels as a `MonkeyError` exception and
a `return` statement as a `ReturnSignal`. A `ReturnSignal` is caught at
the boundary of the function call that produced it (or at the program
level for a top-level return), so a return nested inside several blocks
leaves the whole function. A `MonkeyError` is caught only by `evaluate`,
which stops evaluation at the first error.

Each Monkey call costs several Python frames, so creating an interpreter
raises the Python recursion limit to `RECURSION_LIMIT`. Recursion that
still runs past it comes back from `evaluate` as a `StackOverflow` error.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, BooleanLiteral, StringLiteral,
    ArrayLiteral, FunctionLiteral, PrefixExpression, InfixExpression,
    IfExpression, CallExpression, IndexExpression,
)
from .builtin_function import BuiltinFunction
from .builtins import lookup_builtin
from .environment import Environment
from .errors import MonkeyError, ReturnSignal
from .parser import parse_program
from .types import (
    IntegerVal, BooleanVal, StringVal, ArrayVal, FunctionVal, ErrorVal,
    TRUE, FALSE, NULL, native_bool_to_boolean, wrap_int64, truncated_divmod,
    type_name, inspect,
)

RECURSION_LIMIT = 20000


class Interpreter:
    """Core interpreter that evaluates Monkey AST nodes."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def evaluate(self, node: Node, env: Optional[Environment] = None) -> Any:
        """Evaluate a node, returning an `ErrorVal` instead of raising."""
        if env is None:
            env = self.global_env
        try:
            if isinstance(node, Program):
                result = self.eval_program(node, env)
            else:
                result = self.eval_node(node, env)
        except MonkeyError as ex:
            if self.debug_level >= 1:
                self.debug(f"error: {ex.err.message}")
            return ex.err
        except RecursionError:
            err = ErrorVal('StackOverflow', 'stack overflow')
            if self.debug_level >= 1:
                self.debug(f"error: {err.message}")
            return err
        except ReturnSignal as signal:
            # a bare return statement evaluated outside any program or function
            result = signal.value
        if self.debug_level >= 1:
            self.debug(f"result: {inspect(result)}")
        return result

    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        return self.evaluate(program, env)

    def eval_program(self, program: Program, env: Environment) -> Any:
        try:
            return self.eval_statements(program.statements, env)
        except ReturnSignal as signal:
            return signal.value

    def eval_statements(self, statements: List[Node], env: Environment) -> Any:
        # A raised ReturnSignal or MonkeyError skips the remaining statements
        result = NULL
        for stmt in statements:
            result = self.eval_node(stmt, env)
        return result

    def eval_node(self, node: Node, env: Environment) -> Any:
        # Statements
        if isinstance(node, ExpressionStatement):
            return self.eval_node(node.expression, env)
        if isinstance(node, LetStatement):
            value = self.eval_node(node.value, env)
            env.define(node.name.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.name} = {inspect(value)}")
            return NULL
        if isinstance(node, ReturnStatement):
            raise ReturnSignal(self.eval_node(node.value, env))
        if isinstance(node, BlockStatement):
            return self.eval_statements(node.statements, env)
        if isinstance(node, Program):
            return self.eval_program(node, env)

        # Literals
        if isinstance(node, IntegerLiteral):
            return IntegerVal(wrap_int64(node.value))
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, StringLiteral):
            return StringVal(node.value)
        if isinstance(node, ArrayLiteral):
            return ArrayVal(self.eval_expressions(node.elements, env))
        if isinstance(node, FunctionLiteral):
            return FunctionVal(node.parameters, node.body, env)

        # Expressions
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            right = self.eval_node(node.right, env)
            return self.eval_prefix(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.eval_node(node.left, env)
            right = self.eval_node(node.right, env)
            return self.eval_infix(node.operator, left, right)
        if isinstance(node, IfExpression):
            cond = self.eval_node(node.condition, env)
            truthy = self.is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {inspect(cond)} -> {truthy}")
            if truthy:
                return self.eval_node(node.consequence, env)
            if node.alternative is not None:
                return self.eval_node(node.alternative, env)
            return NULL
        if isinstance(node, CallExpression):
            func = self.eval_node(node.function, env)
            args = self.eval_expressions(node.arguments, env)
            return self.call_function(func, args)
        if isinstance(node, IndexExpression):
            left = self.eval_node(node.left, env)
            index = self.eval_node(node.index, env)
            return self.eval_index(left, index)
        raise TypeError(f"cannot evaluate {type(node).__name__}")

    def eval_expressions(self, nodes: List[Node], env: Environment) -> List[Any]:
        # left to right; the first error stops the rest
        return [self.eval_node(n, env) for n in nodes]

    def eval_identifier(self, node: Identifier, env: Environment) -> Any:
        value = env.resolve(node.name)
        if value is None:
            value = lookup_builtin(node.name)
        if value is None:
            raise MonkeyError(ErrorVal('IdentifierNotFound', f'identifier not found: {node.name}'))
        if self.debug_level >= 3:
            self.debug(f"resolve {node.name} -> {inspect(value)}")
        return value

    def eval_prefix(self, op: str, right: Any) -> Any:
        if op == '!':
            return FALSE if self.is_truthy(right) else TRUE
        if op == '-' and isinstance(right, IntegerVal):
            return IntegerVal(wrap_int64(-right.value))
        raise MonkeyError(ErrorVal('UnknownOperator', f'unknown operator: {op}{type_name(right)}'))

    def eval_infix(self, op: str, left: Any, right: Any) -> Any:
        if isinstance(left, IntegerVal) and isinstance(right, IntegerVal):
            return self.eval_integer_infix(op, left.value, right.value)
        if isinstance(left, StringVal) and isinstance(right, StringVal) and op == '+':
            return StringVal(left.value + right.value)
        if isinstance(left, BooleanVal) and isinstance(right, BooleanVal):
            # booleans are singletons, so identity is equality
            if op == '==':
                return native_bool_to_boolean(left is right)
            if op == '!=':
                return native_bool_to_boolean(left is not right)
        if type_name(left) != type_name(right):
            raise MonkeyError(ErrorVal('TypeMismatch', f'type mismatch: {type_name(left)} {op} {type_name(right)}'))
        raise MonkeyError(ErrorVal('UnknownOperator', f'unknown operator: {type_name(left)} {op} {type_name(right)}'))

    def eval_integer_infix(self, op: str, a: int, b: int) -> Any:
        if op == '+':
            return IntegerVal(wrap_int64(a + b))
        if op == '-':
            return IntegerVal(wrap_int64(a - b))
        if op == '*':
            return IntegerVal(wrap_int64(a * b))
        if op in ('/', '%'):
            if b == 0:
                raise MonkeyError(ErrorVal('DivisionByZero', 'division by zero'))
            quotient, remainder = truncated_divmod(a, b)
            return IntegerVal(wrap_int64(quotient if op == '/' else remainder))
        if op == '<':
            return native_bool_to_boolean(a < b)
        if op == '>':
            return native_bool_to_boolean(a > b)
        if op == '==':
            return native_bool_to_boolean(a == b)
        if op == '!=':
            return native_bool_to_boolean(a != b)
        raise MonkeyError(ErrorVal('UnknownOperator', f'unknown operator: INTEGER {op} INTEGER'))

    def eval_index(self, left: Any, index: Any) -> Any:
        if isinstance(left, ArrayVal) and isinstance(index, IntegerVal):
            i = index.value
            if i < 0 or i >= len(left.elements):
                return NULL
            return left.elements[i]
        raise MonkeyError(ErrorVal('IndexNotSupported', f'index operator not supported: {type_name(left)}'))

    def call_function(self, func: Any, args: List[Any]) -> Any:
        if isinstance(func, BuiltinFunction):
            if self.debug_level >= 2:
                self.debug(f"call builtin {func.name} with {len(args)} argument(s)")
            return func.fn(args)
        if isinstance(func, FunctionVal):
            if len(args) != len(func.parameters):
                raise MonkeyError(ErrorVal(
                    'FunctionArity',
                    f'wrong number of arguments. got={len(args)}, want={len(func.parameters)}'))
            if self.debug_level >= 2:
                self.debug(f"call {inspect(func).splitlines()[0]} with {len(args)} argument(s)")
            # New environment for the call; the closure's env is its parent
            call_env = func.env.enclosed()
            for param, arg in zip(func.parameters, args):
                call_env.define(param.name, arg)
            try:
                return self.eval_node(func.body, call_env)
            except ReturnSignal as r:
                return r.value
        raise MonkeyError(ErrorVal('NotAFunction', f'not a function: {type_name(func)}'))

    def is_truthy(self, value: Any) -> bool:
        # Only the false and null singletons are falsy
        return value is not FALSE and value is not NULL


def evaluate(node: Node, env: Environment) -> Any:
    """Evaluate `node` in `env` with a default interpreter."""
    return Interpreter().evaluate(node, env)


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> Any:
    """Convenience function to parse and run a Monkey program from source string."""
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program, env)
    finally:
        interpreter.close()
