from pathlib import Path

from minilang.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_arithmetic(capsys):
    source = (EXAMPLES / 'program_5.mini').read_text(encoding='utf-8')
    run_program(source)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['14', '20', '5', '3', '-3', 'a=14']
