"""Evaluator for minilang.

This module evaluates checked programs and wires the whole toolchain
together: `run_program` lexes and parses source text, runs the semantic
checker, and evaluates the tree only when the check found no errors.
Program output goes to `out` (standard output by default) and
diagnostics go through an :class:`~minilang.errors.ErrorReporter`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Optional, TextIO

from .ast import (
    Node, StatementList, Addition, Subtraction, Multiplication, Division,
    IntegerConstant, StringConstant, Identifier, VariableDeclaration,
    VariableAssignment, PrintCommand, BINARY_NODES, fold_expression,
)
from .checker import SemanticChecker
from .environment import Environment
from .errors import ErrorReporter
from .parser import parse_program
from .types import (
    ErrorVal, EmptyVal, add, subtract, multiply, divide, to_string, type_of,
)


OPERATORS = {
    Addition: add,
    Subtraction: subtract,
    Multiplication: multiply,
    Division: divide,
}

EXPRESSION_NODES = (IntegerConstant, StringConstant, Identifier) + BINARY_NODES


class Interpreter:
    """Evaluates a minilang tree against an environment."""
    def __init__(self, env: Optional[Environment] = None,
                 reporter: Optional[ErrorReporter] = None,
                 out: Optional[TextIO] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.env = env if env is not None else Environment()
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.out = out
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp: Optional[TextIO] = None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp is None:
                self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def write(self, text: str):
        out = self.out if self.out is not None else sys.stdout
        out.write(text)

    # Public API
    def run(self, tree: Optional[StatementList]) -> Any:
        if tree is None:
            return EmptyVal()
        return self.evaluate(tree)

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, StatementList):
            current: Optional[StatementList] = node
            while current is not None:
                result = self.evaluate(current.first)
                if not isinstance(result, EmptyVal):
                    if self.debug_level >= 1:
                        self.debug(f"line {current.first.line}: statement failed, stopping")
                    return ErrorVal()
                current = current.rest
            return EmptyVal()
        if isinstance(node, EXPRESSION_NODES):
            return fold_expression(node, self.evaluate_leaf, self.apply_operator)
        if isinstance(node, VariableDeclaration):
            self.env.declare(node.identifier.name, node.type_spec)
            if self.debug_level >= 2:
                self.debug(f"declare {node.identifier.name}: {node.type_spec!r} = {self.env.get(node.identifier.name)!r}")
            return EmptyVal()
        if isinstance(node, VariableAssignment):
            value = self.evaluate(node.expr)
            if isinstance(value, ErrorVal):
                return ErrorVal()
            self.env.set(node.identifier.name, value)
            if self.debug_level >= 2:
                self.debug(f"set {node.identifier.name}: {type_of(value)!r} = {value!r}")
            return EmptyVal()
        if isinstance(node, PrintCommand):
            value = self.evaluate(node.expr)
            if isinstance(value, ErrorVal):
                return ErrorVal()
            self.write(to_string(value))
            if node.newline:
                self.write('\n')
            return EmptyVal()
        raise TypeError(f"evaluate: unexpected node type {type(node).__name__}")

    def evaluate_leaf(self, node: Node) -> Any:
        if isinstance(node, Identifier):
            return self.env.get(node.name)
        return node.value

    def apply_operator(self, node: Node, left: Any, right: Any) -> Any:
        operator = OPERATORS[type(node)]
        value = operator(left, right)
        if isinstance(node, Division) and isinstance(value, ErrorVal) and value.message:
            self.reporter.error(node.line, value.message)
        return self.trace(node, value)

    def trace(self, node: Node, value: Any) -> Any:
        if self.debug_level >= 3:
            self.debug(f"line {node.line}: {type(node).__name__} -> {value!r}")
        return value


@dataclass
class RunResult:
    """Outcome of running a program through the whole pipeline."""
    tree: Optional[StatementList] = None
    parse_errors: bool = False
    check_ok: bool = False
    evaluated: bool = False
    value: Any = None
    env: Environment = field(default_factory=Environment)

    @property
    def ok(self) -> bool:
        return not self.parse_errors and self.check_ok


def check_and_run(tree: Optional[StatementList], env: Optional[Environment] = None,
                  reporter: Optional[ErrorReporter] = None, out: Optional[TextIO] = None,
                  debug_level: int = 0, debug_file: str = 'debug.txt') -> RunResult:
    """Semantically check a parsed tree and evaluate it if the check passes."""
    env = env if env is not None else Environment()
    reporter = reporter if reporter is not None else ErrorReporter()
    result = RunResult(tree=tree, env=env)
    interpreter = Interpreter(env, reporter, out=out, debug_level=debug_level, debug_file=debug_file)
    try:
        checker = SemanticChecker(env, reporter)
        result.check_ok = checker.check(tree)
        interpreter.debug(f"semantic check: {len(checker.errors)} error(s)")
        if result.check_ok:
            result.value = interpreter.run(tree)
            result.evaluated = True
            interpreter.debug(f"evaluation finished: {result.value!r}")
    finally:
        interpreter.close()
    return result


def run_program(source: str, filename: Optional[str] = None,
                reporter: Optional[ErrorReporter] = None, out: Optional[TextIO] = None,
                debug_level: int = 0, debug_file: str = 'debug.txt') -> RunResult:
    """Parse, check and evaluate a minilang program from a source string."""
    if reporter is None:
        reporter = ErrorReporter(filename)
    parsed = parse_program(source, reporter)
    if parsed.has_errors:
        return RunResult(parse_errors=True)
    return check_and_run(parsed.tree, reporter=reporter, out=out,
                         debug_level=debug_level, debug_file=debug_file)


def run_file(file_path: str, out: Optional[TextIO] = None, debug_level: int = 0) -> RunResult:
    """Run a minilang file; diagnostics are prefixed with its name."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, filename=file_path, out=out, debug_level=debug_level)
