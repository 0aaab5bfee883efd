"""Abstract Syntax Tree (AST) definitions for minilang.

The tree is a closed set of eleven node kinds. Every node records the
source line it came from and exclusively owns its children. Static typing
lives here as well, since the type of an expression follows directly
from its shape; evaluation and checking are done by dispatching on the
node kind in :mod:`minilang.interpreter` and :mod:`minilang.checker`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

from .environment import Environment
from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    line: int


@dataclass
class StatementList(Node):
    first: Node
    rest: Optional['StatementList'] = None


@dataclass
class Addition(Node):
    left: Node
    right: Node


@dataclass
class Subtraction(Node):
    left: Node
    right: Node


@dataclass
class Multiplication(Node):
    left: Node
    right: Node


@dataclass
class Division(Node):
    left: Node
    right: Node


@dataclass
class IntegerConstant(Node):
    value: int


@dataclass
class StringConstant(Node):
    value: str  # without the surrounding quotes


@dataclass
class Identifier(Node):
    name: str


@dataclass
class VariableDeclaration(Node):
    type_spec: TypeSpec
    identifier: Identifier


@dataclass
class VariableAssignment(Node):
    identifier: Identifier
    expr: Node


@dataclass
class PrintCommand(Node):
    expr: Node
    newline: bool = False  # println


BinaryNode = Union[Addition, Subtraction, Multiplication, Division]
BINARY_NODES = (Addition, Subtraction, Multiplication, Division)


EXPRESSION_LEAVES = (IntegerConstant, StringConstant, Identifier)


def fold_expression(node: Node, leaf: Callable[[Node], Any],
                    combine: Callable[[Node, Any, Any], Any]) -> Any:
    """Post-order fold over an expression tree using an explicit stack.

    `leaf` is called for constants and identifiers, left to right.
    `combine` is called for each binary node once both of its operands
    are done, with their results. Chains such as ``1 + 1 + ... + 1`` nest
    one level per operator, so the walk must not recurse.
    """
    stack: List[Tuple[Node, bool]] = [(node, False)]
    results: List[Any] = []
    while stack:
        current, operands_done = stack.pop()
        if isinstance(current, BINARY_NODES):
            if operands_done:
                right = results.pop()
                left = results.pop()
                results.append(combine(current, left, right))
            else:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
        elif isinstance(current, EXPRESSION_LEAVES):
            results.append(leaf(current))
        else:
            raise TypeError(f"not an expression node: {type(current).__name__}")
    return results.pop()


def leaf_type(node: Node, env: Environment) -> TypeSpec:
    if isinstance(node, IntegerConstant):
        return TypeSpec.integer()
    if isinstance(node, StringConstant):
        return TypeSpec.string()
    return env.type_of(node.name)


def binary_type(node: Node, left: TypeSpec, right: TypeSpec) -> TypeSpec:
    """Type of a binary node given the types of its operands."""
    integer = TypeSpec.integer()
    string = TypeSpec.string()
    if isinstance(node, (Addition, Division)):
        if left == right:
            return left
        return TypeSpec.error()
    if isinstance(node, Subtraction):
        if left == integer and right == integer:
            return integer
        return TypeSpec.error()
    if isinstance(node, Multiplication):
        if left == integer:
            return right
        if left == string and right == integer:
            return string
        return TypeSpec.error()
    raise TypeError(f"binary_type: unexpected node type {type(node).__name__}")


def static_type(node: Node, env: Environment) -> TypeSpec:
    """Compute the static type of a node from the types of its children.

    Identifiers are looked up in the environment's type table; unknown
    names are ill-typed. Statements other than declarations have the
    Empty type.
    """
    if isinstance(node, VariableDeclaration):
        return node.type_spec
    if isinstance(node, (StatementList, VariableAssignment, PrintCommand)):
        return TypeSpec.empty()
    return fold_expression(node, lambda n: leaf_type(n, env), binary_type)


def statements(tree: Optional[StatementList]) -> Iterator[Node]:
    """Iterate over the statements of a statement list."""
    while tree is not None:
        yield tree.first
        tree = tree.rest
