import json

from minilang.ast import Division, PrintCommand, statements
from minilang.ast_json import ast_to_obj, ast_from_obj
from minilang.parser import parse_program


def test_statement_list_is_flattened():
    tree = parse_program('int x;\nset x 8 / 2;\nprintln x;').tree
    obj = ast_to_obj(tree)
    assert obj['type'] == 'StatementList'
    assert [s['type'] for s in obj['statements']] == [
        'VariableDeclaration', 'VariableAssignment', 'PrintCommand',
    ]
    assert obj['statements'][0]['type_spec'] == {'kind': 'Integer'}
    assert obj['statements'][1]['expr'] == {
        'type': 'Division',
        'line': 2,
        'left': {'type': 'IntegerConstant', 'line': 2, 'value': 8},
        'right': {'type': 'IntegerConstant', 'line': 2, 'value': 2},
    }


def test_json_round_trip_preserves_tree():
    tree = parse_program('string s;\nset s ("a" + "b") * 2 - 1;\nprint s / "b";\nprintln 3;').tree
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(tree))))
    assert restored == tree
    stmts = list(statements(restored))
    assert isinstance(stmts[2], PrintCommand) and not stmts[2].newline
    assert isinstance(stmts[2].expr, Division)


def test_empty_tree():
    assert ast_to_obj(None) is None
    assert ast_from_obj(None) is None
