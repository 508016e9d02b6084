from pathlib import Path

from iam.interpreter import Interpreter
from iam.lexer import tokenize

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10_recovers_from_bad_references(capsys):
    with open(EXAMPLES / 'program_10.iam', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens = tokenize(source)
    interp = Interpreter()
    interp.run(tokens)
    captured = capsys.readouterr()
    assert captured.out.strip().split('\n') == ['0', '0', '[0, 0]', '0', 'ok']
    assert len(interp.diagnostics) == 4
    assert captured.err.count('Warning: ') == 4
    assert 'line 2: index 9 out of bounds' in interp.diagnostics[0]
