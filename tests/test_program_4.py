from pathlib import Path

from iam.interpreter import Interpreter
from iam.lexer import tokenize

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_counted_loop(capsys):
    with open(EXAMPLES / 'program_4.iam', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens = tokenize(source)
    interp = Interpreter()
    interp.run(tokens)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['0', '1', '2', '3', '4', 'done']
