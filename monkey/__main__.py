"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv]                 start the REPL
    python -m monkey [-v...] <program_file>        run a program
    python -m monkey --resolve <program_file>      print scope resolutions

Options:
  -v            Increase debug verbosity (can be repeated)
  --resolve     Parse the given file and list the symbol every identifier
                resolves to, with the free symbols of each function

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. In the REPL, bindings persist from one
input to the next; type `quit` to leave and end a line with `\\` to
continue it on the next one.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .environment import Environment
from .errors import ParseError, ResolutionError
from .interpreter import Interpreter
from .parser import parse_program
from .resolver import resolve_program
from .types import ErrorVal, NULL, inspect

PROMPT = '>> '
CONTINUATION_PROMPT = '    '
MONKEY_FACE = r'''            __,__
   .--.  .-"     "-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-"""""""-./, -' /
   ''-' /_   ^ ^   _\ '-''
       |  \._   _./  |
       \   \ '~' /   /
        '._ '-=-' _.'
           '-----'
'''


def print_parse_errors(err: ParseError, out: Optional[TextIO] = None):
    if out is None:
        out = sys.stdout
    print(MONKEY_FACE, file=out)
    print('Woops! We ran into some monkey business here!', file=out)
    print(' Parser errors:', file=out)
    for message in err.errors:
        print(f"\t{message}", file=out)


def read_source(path: str) -> str:
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def repl(interpreter: Interpreter, stdin: Optional[TextIO] = None) -> None:
    if stdin is None:
        stdin = sys.stdin
    env = Environment()
    print(MONKEY_FACE)
    print('Welcome to the monkey programming language')
    print(PROMPT, end='', flush=True)
    lines: List[str] = []
    for line in stdin:
        line = line.rstrip('\n')
        if line == 'quit':
            break
        if line.endswith('\\'):
            lines.append(line[:-1])
            print(CONTINUATION_PROMPT, end='', flush=True)
            continue
        lines.append(line)
        source = '\n'.join(lines)
        lines = []
        try:
            program = parse_program(source)
        except ParseError as e:
            print_parse_errors(e)
        else:
            print(inspect(interpreter.evaluate(program, env)))
        print(PROMPT, end='', flush=True)
    print()


def run_file(path: str, interpreter: Interpreter) -> None:
    try:
        program = parse_program(read_source(path))
    except ParseError as e:
        print_parse_errors(e, out=sys.stderr)
        sys.exit(1)
    result = interpreter.evaluate(program, Environment())
    if isinstance(result, ErrorVal):
        print(f"Runtime error: {result.message}", file=sys.stderr)
        sys.exit(1)
    if result is not NULL:
        print(inspect(result))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--resolve', metavar='MONKEY_FILE', help='list scope resolutions for the given file')
    parser.add_argument('program', nargs='?', help='Monkey program file to execute; omit for a REPL')
    args = parser.parse_args(argv)

    # Resolution listing mode
    if args.resolve:
        try:
            program = parse_program(read_source(args.resolve))
            resolution = resolve_program(program)
        except ParseError as e:
            print_parse_errors(e, out=sys.stderr)
            sys.exit(1)
        except ResolutionError as e:
            print(f"Resolution error: {e}", file=sys.stderr)
            sys.exit(1)
        for line in resolution.listing():
            print(line)
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        if args.program:
            run_file(args.program, interpreter)
        else:
            repl(interpreter)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
