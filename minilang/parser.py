"""Parser for minilang.

A recursive-descent parser with one method per grammar rule::

    Prog      ::= StmtList
    StmtList  ::= Stmt ';' StmtList | <empty>
    Stmt      ::= Decl | Set | Print
    Decl      ::= ('int' | 'string') Identifier
    Set       ::= 'set' Identifier Expr
    Print     ::= ('print' | 'println') Expr
    Expr      ::= Term (('+' | '-') Term)*
    Term      ::= Primary (('*' | '/') Primary)*
    Primary   ::= IntConst | StrConst | Identifier | '(' Expr ')'

Binary operators fold to the left as the loops in `parse_expr` and
`parse_term` run, so ``a - b - c`` is ``(a - b) - c``.

Parsing stops at the first syntax error: the failing rule raises
:class:`ParseError` and `parse_program` reports it once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .ast import (
    Node, StatementList, Addition, Subtraction, Multiplication, Division,
    IntegerConstant, StringConstant, Identifier, VariableDeclaration,
    VariableAssignment, PrintCommand,
)
from .errors import ErrorReporter, ParseError
from .lexer import Lexer, Token, TokenStream
from .types import TypeSpec


DECLARATION_TYPES = {
    'INT': TypeSpec.integer(),
    'STRING': TypeSpec.string(),
}


class Parser:
    def __init__(self, stream: TokenStream):
        self.stream = stream

    def consume(self, expected: str, message: str) -> Token:
        token = self.stream.advance()
        if token.type != expected:
            raise ParseError(token.line, message)
        return token

    def parse_identifier(self) -> Identifier:
        token = self.consume('ID', 'identifier expected')
        return Identifier(token.line, token.value)

    def parse_prog(self) -> Optional[StatementList]:
        return self.parse_stmt_list()

    def parse_stmt_list(self) -> Optional[StatementList]:
        # iterate rather than recurse so long programs do not hit the
        # recursion limit; the resulting list is still right-nested
        stmts = []
        while True:
            stmt = self.parse_stmt()
            if stmt is None:
                break
            self.consume('SC', 'semicolon required')
            stmts.append(stmt)
        tree: Optional[StatementList] = None
        for stmt in reversed(stmts):
            tree = StatementList(stmt.line, stmt, tree)
        return tree

    def parse_stmt(self) -> Optional[Node]:
        token = self.stream.peek()
        if token.type in DECLARATION_TYPES:
            return self.parse_decl()
        if token.type == 'SET':
            return self.parse_set()
        if token.type in ('PRINT', 'PRINTLN'):
            return self.parse_print()
        if token.type == 'DONE':
            return None
        raise ParseError(token.line, 'statement expected')

    def parse_decl(self) -> VariableDeclaration:
        keyword = self.stream.advance()
        identifier = self.parse_identifier()
        return VariableDeclaration(keyword.line, DECLARATION_TYPES[keyword.type], identifier)

    def parse_set(self) -> VariableAssignment:
        keyword = self.stream.advance()
        identifier = self.parse_identifier()
        expr = self.parse_expr()
        return VariableAssignment(keyword.line, identifier, expr)

    def parse_print(self) -> PrintCommand:
        keyword = self.stream.advance()
        expr = self.parse_expr()
        return PrintCommand(keyword.line, expr, newline=keyword.type == 'PRINTLN')

    def parse_expr(self) -> Node:
        node = self.parse_term()
        while True:
            op = self.stream.advance()
            if op.type == 'PLUS':
                node = Addition(op.line, node, self.parse_term())
            elif op.type == 'MINUS':
                node = Subtraction(op.line, node, self.parse_term())
            else:
                self.stream.push_back(op)
                return node

    def parse_term(self) -> Node:
        node = self.parse_primary()
        while True:
            op = self.stream.advance()
            if op.type == 'STAR':
                node = Multiplication(op.line, node, self.parse_primary())
            elif op.type == 'SLASH':
                node = Division(op.line, node, self.parse_primary())
            else:
                self.stream.push_back(op)
                return node

    def parse_primary(self) -> Node:
        token = self.stream.advance()
        if token.type == 'ICONST':
            return IntegerConstant(token.line, int(token.value))
        if token.type == 'SCONST':
            return StringConstant(token.line, token.value[1:-1])
        if token.type == 'ID':
            return Identifier(token.line, token.value)
        if token.type == 'LPAREN':
            expr = self.parse_expr()
            self.consume('RPAREN', 'right paren expected')
            return expr
        raise ParseError(token.line, 'primary expected')


@dataclass
class ParseResult:
    """Outcome of parsing a whole program."""
    tree: Optional[StatementList] = None
    has_errors: bool = False


def parse_program(source: str, reporter: Optional[ErrorReporter] = None) -> ParseResult:
    """Parse minilang source code into a statement list.

    A syntax error is reported through `reporter` as
    ``Syntax error <message>`` and yields a result with no tree and
    `has_errors` set. An empty program yields no tree and no error.
    """
    if reporter is None:
        reporter = ErrorReporter()
    parser = Parser(TokenStream(Lexer(source)))
    try:
        tree = parser.parse_prog()
    except ParseError as e:
        reporter.error(e.line, f"Syntax error {e.message}")
        return ParseResult(None, True)
    return ParseResult(tree, False)
