from pathlib import Path
from monkey.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_closures_outlive_their_call(capsys):
    source = (EXAMPLES / 'program_4.monkey').read_text(encoding='utf-8')
    run_program(source)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['5', '13', 'Hello, world!']
