from pathlib import Path

from iam.interpreter import Interpreter
from iam.lexer import tokenize

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_7_exit_inside_loop(capsys):
    with open(EXAMPLES / 'program_7.iam', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens = tokenize(source)
    interp = Interpreter()
    interp.run(tokens)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['0', 'tick']
