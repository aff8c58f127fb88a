from typing import Any, List, Optional
from monkey.types import ErrorVal


class MonkeyError(Exception):
    """Exception type used to propagate Monkey runtime errors.

    It never leaves the evaluator: `Interpreter.evaluate` turns it back
    into the `ErrorVal` it carries.
    """
    def __init__(self, err: ErrorVal):
        super().__init__(f"MonkeyError: {err.kind}: {err.message}")
        self.err = err


class ReturnSignal(Exception):
    """Internal exception to handle return statements in functions."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value


class ParseError(Exception):
    """Raised when source text cannot be parsed."""
    def __init__(self, errors: List[str]):
        super().__init__('; '.join(errors))
        self.errors = errors


class ResolutionError(Exception):
    """Raised by the resolver when a name has no binding in any scope."""
    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__(message or f"undefined variable {name}")
        self.name = name
