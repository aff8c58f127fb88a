import pytest

from monkey.builtins import BUILTINS
from monkey.errors import ResolutionError
from monkey.parser import parse_program
from monkey.resolver import Resolver, resolve_program
from monkey.symbol_table import (
    Symbol, GLOBAL_SCOPE, LOCAL_SCOPE, FREE_SCOPE, BUILTIN_SCOPE, FUNCTION_SCOPE,
)


def identifiers(resolution):
    return [(ident.name, symbol) for ident, symbol in resolution.identifiers.items()]


def test_globals_and_builtins():
    resolution = resolve_program(parse_program('let a = 1; let b = len(a); puts(b)'))
    assert identifiers(resolution) == [
        ('a', Symbol('a', GLOBAL_SCOPE, 0)),
        ('b', Symbol('b', GLOBAL_SCOPE, 1)),
        ('len', Symbol('len', BUILTIN_SCOPE, 0)),
        ('a', Symbol('a', GLOBAL_SCOPE, 0)),
        ('puts', Symbol('puts', BUILTIN_SCOPE, 1)),
        ('b', Symbol('b', GLOBAL_SCOPE, 1)),
    ]
    assert resolution.num_globals == 2


def test_builtins_follow_registry_order():
    resolver = Resolver()
    for i, builtin in enumerate(BUILTINS):
        assert resolver.symbol_table.resolve(builtin.name) == Symbol(builtin.name, BUILTIN_SCOPE, i)


def test_closure_captures_enclosing_locals():
    program = parse_program('fn(a) { fn(b) { fn(c) { a + b + c } } }')
    resolution = resolve_program(program)
    outer = program.statements[0].expression
    middle = outer.body.statements[0].expression
    inner = middle.body.statements[0].expression

    assert resolution.free_symbols[outer] == []
    assert resolution.free_symbols[middle] == [Symbol('a', LOCAL_SCOPE, 0)]
    assert resolution.free_symbols[inner] == [
        Symbol('a', FREE_SCOPE, 0),
        Symbol('b', LOCAL_SCOPE, 0),
    ]
    assert resolution.num_locals[outer] == 1
    assert resolution.num_locals[inner] == 1


def test_recursive_function_refers_to_itself_without_capture():
    program = parse_program('let countdown = fn(x) { countdown(x - 1); };')
    resolution = resolve_program(program)
    fn = program.statements[0].value
    call = fn.body.statements[0].expression
    assert resolution.symbol_for(call.function) == Symbol('countdown', FUNCTION_SCOPE, 0)
    assert resolution.free_symbols[fn] == []


def test_nested_recursive_function_is_captured_from_the_local_slot():
    program = parse_program(
        'let wrapper = fn() {'
        '  let countdown = fn(x) { countdown(x - 1); };'
        '  countdown(1);'
        '};'
    )
    resolution = resolve_program(program)
    wrapper = program.statements[0].value
    countdown = wrapper.body.statements[0].value
    assert resolution.free_symbols[countdown] == []
    assert resolution.num_locals[wrapper] == 1
    assert resolution.symbol_for(wrapper.body.statements[0].name) == Symbol('countdown', LOCAL_SCOPE, 0)


def test_undefined_variable():
    with pytest.raises(ResolutionError) as excinfo:
        resolve_program(parse_program('fn() { missing }'))
    assert str(excinfo.value) == 'undefined variable missing'
    assert excinfo.value.name == 'missing'


def test_listing():
    resolution = resolve_program(parse_program('let a = 1; let f = fn(x) { fn() { x + a } };'))
    lines = resolution.listing()
    assert 'a: GLOBAL 0' in lines
    assert 'x: FREE 0' in lines
    assert 'fn: locals=0 free=[x=LOCAL 0]' in lines
    assert 'fn<f>: locals=1 free=[-]' in lines
    assert lines[-1] == 'globals=2'
