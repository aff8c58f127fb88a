# Monkey language package
# This package provides a tree-walking interpreter and a scope resolver for the Monkey language.
from .environment import Environment
from .interpreter import evaluate, run_program, Interpreter
from .parser import parse_program
from .symbol_table import Symbol, SymbolTable

__all__ = [
    'Environment',
    'evaluate',
    'run_program',
    'Interpreter',
    'parse_program',
    'Symbol',
    'SymbolTable',
]
