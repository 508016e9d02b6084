import builtins
from pathlib import Path

from iam.interpreter import Interpreter
from iam.lexer import tokenize

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_repeat(monkeypatch, capsys):
    """Test program 6: user-driven repetition.

    The program reads a count and uses it as the loop bound. We simulate
    user input and check that the body runs that many times.
    """
    monkeypatch.setattr(builtins, 'input', lambda prompt='': '3')
    with open(EXAMPLES / 'program_6.iam', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens = tokenize(source)
    interp = Interpreter()
    interp.run(tokens)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['echo', '0', 'echo', '1', 'echo', '2']


def test_program_6_text_count_skips_loop(monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'many')
    with open(EXAMPLES / 'program_6.iam', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter()
    env = interp.run(tokenize(source))
    assert capsys.readouterr().out == ''
    assert repr(env.get('times')) == "Text('many')"
