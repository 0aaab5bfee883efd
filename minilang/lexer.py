"""Tokenizer for minilang.

The scanner is a small deterministic automaton. Its states are expressed
as prioritised Lark terminals and run through Lark's basic lexer:

* identifiers and keywords (``NAME``),
* integer constants, where a digit run running straight into a letter
  ends in a malformed token at that letter (``BAD_NUMBER``), so ``3a`` is
  never a number followed by an identifier,
* string constants, where a newline before the closing quote yields a
  malformed token (``BAD_STRING``); a string still open at end of input
  is dropped and the stream simply ends,
* ``/`` which is either the division operator or the start of a line
  comment,
* single character operators, and a catch-all for anything else.

Whitespace and comments are skipped, but Lark still counts the newlines
they contain, so token line numbers always refer to the source line on
which the token starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from lark import Lark
from lark.lexer import Token as LarkToken


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        text = f"T_{self.type}"
        if self.type in LEXEME_KINDS:
            text += f"({self.value})"
        return text


KEYWORDS = {
    'int': 'INT',
    'string': 'STRING',
    'set': 'SET',
    'print': 'PRINT',
    'println': 'PRINTLN',
}

# kinds whose rendering includes the lexeme
LEXEME_KINDS = frozenset(['ID', 'ICONST', 'SCONST', 'ERROR'])

TOKEN_KINDS = {
    'INTEGER': 'ICONST',
    'STRING': 'SCONST',
    'PLUS': 'PLUS',
    'MINUS': 'MINUS',
    'STAR': 'STAR',
    'SLASH': 'SLASH',
    'LPAR': 'LPAREN',
    'RPAR': 'RPAREN',
    'SEMICOLON': 'SC',
    'BAD_NUMBER': 'ERROR',
    'BAD_STRING': 'ERROR',
    'UNKNOWN': 'ERROR',
}


LEXER_GRAMMAR = r"""
    start: lexeme*
    ?lexeme: NAME | INTEGER | BAD_NUMBER | STRING | BAD_STRING
           | PLUS | MINUS | STAR | SLASH | LPAR | RPAR | SEMICOLON
           | UNKNOWN

    COMMENT.4: /\/\/[^\n]*(\n|\Z)/
    BAD_NUMBER.3: /[0-9]+[A-Za-z]/
    STRING.3: /"[^"\n]*"/
    BAD_STRING.2: /"[^"\n]*\n/
    OPEN_STRING.2: /"[^"\n]*\Z/
    INTEGER.2: /[0-9]+/
    NAME.2: /[A-Za-z][A-Za-z0-9]*/

    PLUS.1: "+"
    MINUS.1: "-"
    STAR.1: "*"
    SLASH.1: "/"
    LPAR.1: "("
    RPAR.1: ")"
    SEMICOLON.1: ";"

    WS: /[ \t\n\r\f\v]+/
    UNKNOWN.-1: /./s

    %ignore WS
    %ignore COMMENT
    %ignore OPEN_STRING
"""


LEXER = Lark(
    LEXER_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


def convert_token(tok: LarkToken) -> Token:
    """Turn a Lark token into a minilang Token."""
    if tok.type == 'NAME':
        kind = KEYWORDS.get(tok.value, 'ID')
    else:
        kind = TOKEN_KINDS[tok.type]
    return Token(kind, str(tok.value), tok.line, tok.column)


class Lexer:
    """Produces tokens one at a time from a source string."""

    def __init__(self, source: str):
        self.source = source
        self._tokens: Iterator[LarkToken] = LEXER.lex(source)
        self._done: Optional[Token] = None

    def end_line(self) -> int:
        return self.source.count('\n') + 1

    def next_token(self) -> Token:
        """Return the next token; DONE is returned for ever after input ends."""
        if self._done is not None:
            return self._done
        tok = next(self._tokens, None)
        if tok is not None:
            return convert_token(tok)
        self._done = Token('DONE', '', self.end_line())
        return self._done


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with DONE."""
    lexer = Lexer(source)
    tokens: List[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == 'DONE':
            return tokens


class TokenStream:
    """Cursor over a Lexer with exactly one token of lookahead."""

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self._pushed: Optional[Token] = None

    def advance(self) -> Token:
        if self._pushed is not None:
            tok, self._pushed = self._pushed, None
            return tok
        return self.lexer.next_token()

    def push_back(self, tok: Token):
        if self._pushed is not None:
            raise RuntimeError('only one token can be pushed back')
        self._pushed = tok

    def peek(self) -> Token:
        tok = self.advance()
        self.push_back(tok)
        return tok
