from pathlib import Path

from iam.interpreter import Interpreter
from iam.lexer import tokenize

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_legacy_keywords(capsys):
    with open(EXAMPLES / 'program_8.iam', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens = tokenize(source)
    interp = Interpreter()
    interp.run(tokens)
    out = capsys.readouterr().out.strip().split('\n')
    # IF and while are recognized but never executed
    assert out == ['7', 'after if', 'still running']
