"""Semantic checks for minilang programs.

The checker walks the tree once, in source order, and enforces:

* a variable may be declared only once,
* a variable must be declared before it is used,
* an assignment's expression must have the variable's declared type,
* every arithmetic node must be well typed.

Each node kind decides which children it visits and in what order.
Errors are reported as they are found and the walk always runs to the
end, so one pass reports every semantic error in the program.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import (
    Node, StatementList, IntegerConstant, StringConstant, Identifier,
    VariableDeclaration, VariableAssignment, PrintCommand, BinaryNode,
    BINARY_NODES, binary_type, fold_expression, leaf_type,
)
from .environment import Environment
from .errors import ErrorReporter
from .types import TypeSpec


class SemanticChecker:
    def __init__(self, env: Environment, reporter: Optional[ErrorReporter] = None):
        self.env = env
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.errors: List[Tuple[int, str]] = []

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def is_error_free(self) -> bool:
        return not self.errors

    def error(self, line: int, message: str):
        self.errors.append((line, message))
        self.reporter.error(line, message)

    def check(self, tree: Optional[StatementList]) -> bool:
        """Check a whole program; True if no semantic error was found."""
        if tree is not None:
            self.visit(tree)
        return self.is_error_free()

    def visit(self, node: Node):
        if isinstance(node, StatementList):
            # walk the list iteratively; statements are checked in order
            current: Optional[StatementList] = node
            while current is not None:
                self.visit(current.first)
                current = current.rest
        elif isinstance(node, VariableDeclaration):
            self.visit_declaration(node)
        elif isinstance(node, VariableAssignment):
            self.visit_assignment(node)
        elif isinstance(node, PrintCommand):
            self.check_expression(node.expr)
        elif isinstance(node, (Identifier, IntegerConstant, StringConstant) + BINARY_NODES):
            self.check_expression(node)
        else:
            raise TypeError(f"visit: unexpected node type {type(node).__name__}")

    def visit_declaration(self, node: VariableDeclaration):
        name = node.identifier.name
        if not self.env.declare_type(name, node.type_spec):
            self.error(node.line, f"variable {name} was already declared")

    def visit_assignment(self, node: VariableAssignment):
        self.visit_identifier(node.identifier)
        expr_type = self.check_expression(node.expr)
        name = node.identifier.name
        if self.env.is_declared(name) and expr_type != self.env.type_of(name):
            self.error(node.expr.line, "type error")

    def check_expression(self, node: Node) -> TypeSpec:
        """Check an expression and return its static type.

        Every node's type is computed once, from its operands' types.
        """
        return fold_expression(node, self.visit_leaf, self.visit_operation)

    def visit_identifier(self, node: Identifier) -> TypeSpec:
        if not self.env.is_declared(node.name):
            self.error(node.line, f"variable {node.name} is used before being declared")
        return self.env.type_of(node.name)

    def visit_leaf(self, node: Node) -> TypeSpec:
        if isinstance(node, Identifier):
            return self.visit_identifier(node)
        return leaf_type(node, self.env)

    def visit_operation(self, node: BinaryNode, left: TypeSpec, right: TypeSpec) -> TypeSpec:
        result = binary_type(node, left, right)
        if result.kind == 'Error':
            self.error(node.line, "type error")
        return result
