import io

import pytest

from monkey.__main__ import main, repl
from monkey.interpreter import Interpreter


def write_program(tmp_path, source):
    path = tmp_path / 'program.monkey'
    path.write_text(source, encoding='utf-8')
    return str(path)


def test_run_file_prints_final_value(tmp_path, capsys):
    main([write_program(tmp_path, 'let a = 20; a * 2 + 2')])
    assert capsys.readouterr().out == '42\n'


def test_run_file_does_not_print_null(tmp_path, capsys):
    main([write_program(tmp_path, 'let a = 1;')])
    assert capsys.readouterr().out == ''


def test_run_file_reports_errors_on_stderr(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([write_program(tmp_path, 'foobar')])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'identifier not found: foobar' in captured.err


def test_run_file_reports_stack_overflow(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([write_program(tmp_path, 'let f = fn(n) { f(n + 1) }; f(0)')])
    assert excinfo.value.code == 1
    assert 'Runtime error: stack overflow' in capsys.readouterr().err


def test_repl_prints_null_results(capsys):
    repl(Interpreter(), stdin=io.StringIO('puts("hi")\nif (false) { 1 }\n'))
    out = capsys.readouterr().out
    assert '>> hi\nnull\n>> null\n>> ' in out


def test_run_file_reports_parse_errors(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([write_program(tmp_path, 'let = 1')])
    assert 'Parser errors:' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([str(tmp_path / 'nope.monkey')])
    assert 'not found' in capsys.readouterr().err


def test_resolve_listing(tmp_path, capsys):
    main(['--resolve', write_program(tmp_path, 'let a = 1; fn(b) { a + b }')])
    out = capsys.readouterr().out.splitlines()
    assert 'a: GLOBAL 0' in out
    assert 'b: LOCAL 0' in out
    assert out[-1] == 'globals=1'


def test_resolve_listing_reports_undefined_names(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main(['--resolve', write_program(tmp_path, 'nope')])
    assert 'undefined variable nope' in capsys.readouterr().err


def test_repl_keeps_bindings_between_lines(capsys):
    stdin = io.StringIO('let a = 5;\na * 2\nlet f = fn(x) {\\\n x + a }\nf(1)\nfoo\nlet = 1\nquit\nnot evaluated\n')
    repl(Interpreter(), stdin=stdin)
    out = capsys.readouterr().out
    assert 'Welcome to the monkey programming language' in out
    assert '>> null\n>> 10\n' in out
    assert '6\n' in out
    assert 'ERROR: identifier not found: foo' in out
    assert 'monkey business' in out
    assert 'not evaluated' not in out
