from pathlib import Path
from monkey.interpreter import run_program
from monkey.types import NULL

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_recursive_fibonacci(capsys):
    source = (EXAMPLES / 'program_2.monkey').read_text(encoding='utf-8')
    result = run_program(source)
    out = capsys.readouterr().out.strip()
    assert out == '610'
    # puts is the last statement
    assert result is NULL
