from pathlib import Path
from monkey.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_map_and_reduce(capsys):
    source = (EXAMPLES / 'program_3.monkey').read_text(encoding='utf-8')
    run_program(source)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['[2, 4, 6, 8]', '20']
