"""JSON serialization/deserialization for minilang ASTs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Statement lists are written as a
flat ``statements`` array rather than as nested pairs.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Node,
    StatementList,
    Addition,
    Subtraction,
    Multiplication,
    Division,
    IntegerConstant,
    StringConstant,
    Identifier,
    VariableDeclaration,
    VariableAssignment,
    PrintCommand,
    statements,
)
from .types import TypeSpec


BINARY_TYPES = {
    'Addition': Addition,
    'Subtraction': Subtraction,
    'Multiplication': Multiplication,
    'Division': Division,
}


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    return {"kind": t.kind}


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    return TypeSpec(o["kind"])


def ast_to_obj(node: Optional[Node]) -> Any:
    if node is None:
        return None
    if isinstance(node, StatementList):
        return {
            "type": "StatementList",
            "line": node.line,
            "statements": [ast_to_obj(s) for s in statements(node)],
        }
    if isinstance(node, (Addition, Subtraction, Multiplication, Division)):
        return {
            "type": type(node).__name__,
            "line": node.line,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IntegerConstant):
        return {"type": "IntegerConstant", "line": node.line, "value": node.value}
    if isinstance(node, StringConstant):
        return {"type": "StringConstant", "line": node.line, "value": node.value}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "line": node.line, "name": node.name}
    if isinstance(node, VariableDeclaration):
        return {
            "type": "VariableDeclaration",
            "line": node.line,
            "type_spec": typespec_to_obj(node.type_spec),
            "identifier": ast_to_obj(node.identifier),
        }
    if isinstance(node, VariableAssignment):
        return {
            "type": "VariableAssignment",
            "line": node.line,
            "identifier": ast_to_obj(node.identifier),
            "expr": ast_to_obj(node.expr),
        }
    if isinstance(node, PrintCommand):
        return {
            "type": "PrintCommand",
            "line": node.line,
            "expr": ast_to_obj(node.expr),
            "newline": node.newline,
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Optional[Node]:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    line = obj.get("line", 0)
    if t == "StatementList":
        tree: Optional[StatementList] = None
        for stmt in reversed([ast_from_obj(s) for s in obj["statements"]]):
            if stmt is None:
                raise TypeError("Missing statement in StatementList")
            tree = StatementList(stmt.line, stmt, tree)
        return tree
    if t in BINARY_TYPES:
        return BINARY_TYPES[t](line, ast_from_obj(obj["left"]), ast_from_obj(obj["right"]))
    if t == "IntegerConstant":
        return IntegerConstant(line, int(obj["value"]))
    if t == "StringConstant":
        return StringConstant(line, obj["value"])
    if t == "Identifier":
        return Identifier(line, obj["name"])
    if t == "VariableDeclaration":
        return VariableDeclaration(
            line,
            typespec_from_obj(obj["type_spec"]),
            ast_from_obj(obj["identifier"]),
        )
    if t == "VariableAssignment":
        return VariableAssignment(line, ast_from_obj(obj["identifier"]), ast_from_obj(obj["expr"]))
    if t == "PrintCommand":
        return PrintCommand(line, ast_from_obj(obj["expr"]), bool(obj.get("newline", False)))

    raise ValueError(f"Unknown AST node type: {t}")
