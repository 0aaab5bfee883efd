import io
import json

import pytest

from minilang.__main__ import main


def write_program(tmp_path, source, name='prog.mini'):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return str(path)


def test_runs_file(tmp_path, capsys):
    path = write_program(tmp_path, 'int x; set x 5; println x;')
    main([path])
    assert capsys.readouterr().out == '5\n'


def test_reads_stdin_without_prefix(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('int x;\nprintln 1/0;\n'))
    main([])
    assert capsys.readouterr().out == '2:DIVIDE BY ZERO\n'


def test_diagnostics_are_prefixed_with_filename(tmp_path, capsys):
    path = write_program(tmp_path, 'set y 1;')
    main([path])
    assert capsys.readouterr().out == f'{path}:1:variable y is used before being declared\n'


def test_too_many_files(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(['a.mini', 'b.mini'])
    assert exc.value.code == 1
    assert capsys.readouterr().out == 'TOO MANY FILES\n'


def test_missing_file(tmp_path, capsys):
    missing = str(tmp_path / 'missing.mini')
    with pytest.raises(SystemExit) as exc:
        main([missing])
    assert exc.value.code == 1
    assert capsys.readouterr().out == f'{missing} FILE NOT FOUND\n'


def test_syntax_error_exit_status(tmp_path, capsys):
    path = write_program(tmp_path, 'int x\nprintln x;')
    with pytest.raises(SystemExit) as exc:
        main([path])
    assert exc.value.code == 1
    assert capsys.readouterr().out == f'{path}:2:Syntax error semicolon required\n'


def test_semantic_errors_do_not_fail(tmp_path, capsys):
    path = write_program(tmp_path, 'int x; int x;')
    main([path])
    assert capsys.readouterr().out.endswith('variable x was already declared\n')


def test_token_dump(tmp_path, capsys):
    path = write_program(tmp_path, 'set x 3a;\nprint "s";')
    main(['--tokens', path])
    assert capsys.readouterr().out.split('\n') == [
        'T_SET', 'T_ID(x)', 'T_ERROR(3a)', 'T_SC', 'T_PRINT', 'T_SCONST("s")', 'T_SC', '',
    ]


def test_emit_and_run_ast(tmp_path, capsys):
    path = write_program(tmp_path, 'string s;\nset s "ab" * 2;\nprintln s;')
    main(['--emit-ast', path])
    out_path = capsys.readouterr().out.strip()
    assert out_path.endswith('prog.mini.ast.json')
    with open(out_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    assert data['type'] == 'StatementList'
    main(['--ast', out_path])
    assert capsys.readouterr().out == 'abab\n'


def test_emit_ast_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('println 1;'))
    main(['--emit-ast'])
    data = json.loads(capsys.readouterr().out)
    assert data['statements'][0]['type'] == 'PrintCommand'


def test_verbose_writes_debug_file(tmp_path, capsys):
    path = write_program(tmp_path, 'int x; set x 2;')
    debug_file = tmp_path / 'trace.txt'
    main(['-vv', '--debug-file', str(debug_file), path])
    assert 'set x: Integer = 2' in debug_file.read_text(encoding='utf-8')


@pytest.mark.parametrize('content', [
    '{"type": "StatementList"}',
    '{"type": "Loop", "line": 1}',
    '{"type": "StatementList", "statements": [null]}',
    '{"type": "IntegerConstant", "line": 1, "value": "ten"}',
    '[1, 2]',
    'not json',
])
def test_malformed_ast_file(tmp_path, capsys, content):
    path = write_program(tmp_path, content, name='bad.ast.json')
    with pytest.raises(SystemExit) as exc:
        main(['--ast', path])
    assert exc.value.code == 1
    assert capsys.readouterr().out.startswith(f'{path} INVALID AST: ')
