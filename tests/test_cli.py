import io
import json

import pytest

from iam.__main__ import BANNER, main


def test_runs_program_file_with_banner(tmp_path, capsys):
    program = tmp_path / 'count.iam'
    program.write_text('for i 0 3\nprint i\nend\n', encoding='utf-8')
    main([str(program)])
    assert capsys.readouterr().out.splitlines() == [BANNER, '0', '1', '2']


def test_quiet_suppresses_banner(tmp_path, capsys):
    program = tmp_path / 'hello.iam'
    program.write_text('print "hi"\n', encoding='utf-8')
    main(['-q', str(program)])
    assert capsys.readouterr().out == 'hi\n'


def test_reads_program_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('set x 3\nprint x\ninput y\nprint y\n'))
    main(['--quiet'])
    # stdin is exhausted by the program text, so input binds empty text
    assert capsys.readouterr().out == '3\n\n'


def test_missing_program_file_exits_with_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / 'nope.iam')])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert 'Error:' in captured.err
    assert BANNER not in captured.out


def test_emit_tokens_then_execute(tmp_path, capsys):
    program = tmp_path / 'prog.iam'
    program.write_text('array a 2\nset a[0] 4\nprint a\n', encoding='utf-8')
    main(['--emit-tokens', str(program)])
    out_path = tmp_path / 'prog.iam.tokens.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert data['type'] == 'TokenStream'
    main(['-q', '--tokens', str(out_path)])
    assert capsys.readouterr().out == '[4, 0]\n'


def test_invalid_token_file_exits_with_error(tmp_path, capsys):
    bad = tmp_path / 'bad.json'
    bad.write_text('{not json', encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main(['--tokens', str(bad)])
    assert exc.value.code == 1
    assert 'invalid JSON' in capsys.readouterr().err


def test_exit_statement_is_a_clean_stop(tmp_path, capsys):
    program = tmp_path / 'stop.iam'
    program.write_text('print 1\nEXIT\nprint 2\n', encoding='utf-8')
    main(['-q', str(program)])
    assert capsys.readouterr().out == '1\n'
