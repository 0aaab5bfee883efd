import pytest

from minilang.lexer import Lexer, Token, TokenStream, tokenize


def kinds(source):
    return [t.type for t in tokenize(source)]


def test_keywords_and_identifiers():
    assert kinds('int string set print println x1 printlnx') == [
        'INT', 'STRING', 'SET', 'PRINT', 'PRINTLN', 'ID', 'ID', 'DONE',
    ]


def test_operators_and_punctuation():
    assert kinds('+ - * / ( ) ;') == [
        'PLUS', 'MINUS', 'STAR', 'SLASH', 'LPAREN', 'RPAREN', 'SC', 'DONE',
    ]


def test_integer_and_string_constants():
    tokens = tokenize('42 "hi there"')
    assert (tokens[0].type, tokens[0].value) == ('ICONST', '42')
    assert (tokens[1].type, tokens[1].value) == ('SCONST', '"hi there"')


def test_digits_followed_by_letters_are_one_error_token():
    tokens = tokenize('3a')
    assert [(t.type, t.value) for t in tokens] == [('ERROR', '3a'), ('DONE', '')]


def test_malformed_number_ends_at_first_letter():
    tokens = tokenize('12ab3 x')
    assert [(t.type, t.value) for t in tokens] == [
        ('ERROR', '12a'), ('ID', 'b3'), ('ID', 'x'), ('DONE', ''),
    ]


def test_unterminated_string_at_newline():
    tokens = tokenize('"abc\nx')
    assert (tokens[0].type, tokens[0].value, tokens[0].line) == ('ERROR', '"abc\n', 1)
    assert (tokens[1].type, tokens[1].value, tokens[1].line) == ('ID', 'x', 2)


def test_unterminated_string_at_end_of_input_ends_the_stream():
    tokens = tokenize('print "abc')
    assert [t.type for t in tokens] == ['PRINT', 'DONE']
    assert kinds('"') == ['DONE']
    assert kinds('x\n"open') == ['ID', 'DONE']


def test_unknown_character_is_an_error_token():
    tokens = tokenize('x @ y')
    assert [(t.type, t.value) for t in tokens[:3]] == [('ID', 'x'), ('ERROR', '@'), ('ID', 'y')]


def test_comments_are_skipped_and_lines_counted():
    tokens = tokenize('a // comment ; int\nb / c')
    assert [(t.type, t.line) for t in tokens] == [
        ('ID', 1), ('ID', 2), ('SLASH', 2), ('ID', 2), ('DONE', 2),
    ]


def test_comment_at_end_of_input():
    assert kinds('x // trailing') == ['ID', 'DONE']


def test_line_numbers():
    tokens = tokenize('int x;\n\n  set x 1;\n')
    assert [t.line for t in tokens if t.type == 'SET'] == [3]
    assert tokens[-1].type == 'DONE'
    assert tokens[-1].line == 4


def test_token_rendering_keeps_lexeme():
    assert str(Token('ID', 'abc', 1)) == 'T_ID(abc)'
    assert str(Token('ICONST', '17', 1)) == 'T_ICONST(17)'
    assert str(Token('SCONST', '"s"', 1)) == 'T_SCONST("s")'
    assert str(Token('ERROR', '3a', 1)) == 'T_ERROR(3a)'
    assert str(Token('SC', ';', 1)) == 'T_SC'
    for tok in tokenize('abc 12 "x y" 9z'):
        if tok.type != 'DONE':
            assert str(tok) == f'T_{tok.type}({tok.value})'


def test_lexer_keeps_returning_done():
    lexer = Lexer('x')
    assert lexer.next_token().type == 'ID'
    assert lexer.next_token().type == 'DONE'
    assert lexer.next_token().type == 'DONE'


def test_token_stream_peek_and_push_back():
    stream = TokenStream(Lexer('set x'))
    assert stream.peek().type == 'SET'
    first = stream.advance()
    assert first.type == 'SET'
    second = stream.advance()
    stream.push_back(second)
    with pytest.raises(RuntimeError):
        stream.push_back(first)
    assert stream.advance() is second
    assert stream.advance().type == 'DONE'
