"""Lexer for the IAM language.

Source text is tokenized one line at a time:

1. **Line filtering**: a blank line, or a line whose first character is
   `#`, contributes nothing but its end-of-line token. Comments are
   dropped entirely.

2. **Scanning**: every other line is fed to a Lark lexer built from a
   small terminal grammar. Quoted strings keep their spaces and close
   silently at the end of the line when the closing quote is missing,
   `[` and `]` always stand alone, and whitespace separates words.

3. **Classification**: each word is assigned a token kind (number,
   keyword, loop keyword, operator or identifier).

Each line ends with exactly one `EOL` token, so the stream carries as
many `EOL` tokens as the source has lines. The lexer never fails;
anything it cannot classify becomes an identifier.
"""

from __future__ import annotations

from dataclasses import dataclass
import io
from typing import List

from lark import Lark


# Token kinds
NUMBER = 'NUMBER'
IDENTIFIER = 'IDENTIFIER'
KEYWORD = 'KEYWORD'
ARRAY_DECL = 'ARRAY_DECL'
LOOP_KEYWORD = 'LOOP_KEYWORD'
OPERATOR = 'OPERATOR'
SPECIAL_CHAR = 'SPECIAL_CHAR'
STRING = 'STRING'
EOL = 'EOL'

TOKEN_KINDS = (
    NUMBER, IDENTIFIER, KEYWORD, ARRAY_DECL, LOOP_KEYWORD,
    OPERATOR, SPECIAL_CHAR, STRING, EOL,
)

STATEMENT_KEYWORDS = {'print', 'set', 'input', 'if'}
ARRAY_KEYWORDS = {'array'}
LOOP_KEYWORDS = {'for', 'end', 'while', 'in'}
OPERATORS = {'+', '-', '*', '/', '==', '!=', '<', '>', '<=', '>='}
# Uppercase spellings accepted from older IAM programs
LEGACY_KEYWORDS = {'LET', 'PRINT', 'EXIT', 'IF'}

DIGITS = '0123456789'


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int = 0

    def is_(self, kind: str, text: str) -> bool:
        return self.kind == kind and self.text == text

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r})"


IAM_LINE_GRAMMAR = r"""
    start: item*
    ?item: STRING | LSQB | RSQB | WORD

    // An unterminated string runs to the end of the line
    STRING: /"[^"]*"?/
    LSQB: "["
    RSQB: "]"
    WORD: /[^\s\[\]"]+/

    WS: /\s+/
    %ignore WS
"""

_line_lexer = Lark(IAM_LINE_GRAMMAR, parser='lalr', lexer='basic')


def classify_word(word: str) -> str:
    """Return the token kind for a bare (unquoted) word."""
    if word[0] in DIGITS or (word[0] == '-' and len(word) > 1 and word[1] in DIGITS):
        return NUMBER
    if word in STATEMENT_KEYWORDS or word in LEGACY_KEYWORDS:
        return KEYWORD
    if word in ARRAY_KEYWORDS:
        return ARRAY_DECL
    if word in LOOP_KEYWORDS:
        return LOOP_KEYWORD
    if word in OPERATORS:
        return OPERATOR
    return IDENTIFIER


def is_blank_or_comment(line: str) -> bool:
    return line.strip() == '' or line[0] == '#'


def tokenize_line(line: str, lineno: int = 0) -> List[Token]:
    """Tokenize the content of one source line (without its EOL token)."""
    tokens: List[Token] = []
    if is_blank_or_comment(line):
        return tokens
    for lexeme in _line_lexer.lex(line):
        if lexeme.type == 'STRING':
            text = lexeme.value[1:]
            if text.endswith('"'):
                text = text[:-1]
            tokens.append(Token(STRING, text, lineno))
        elif lexeme.type in ('LSQB', 'RSQB'):
            tokens.append(Token(SPECIAL_CHAR, lexeme.value, lineno))
        else:
            tokens.append(Token(classify_word(lexeme.value), lexeme.value, lineno))
    return tokens


def tokenize(source: str) -> List[Token]:
    """Convert IAM source code into a flat list of tokens.

    Only newline, carriage return and CRLF end a line; other control
    characters such as form feed stay part of the line they appear on.
    Line numbers start at 1 and are attached to every token so that
    diagnostics can point back at the source.
    """
    tokens: List[Token] = []
    for lineno, line in enumerate(io.StringIO(source, newline=None), start=1):
        line = line.rstrip('\n')
        tokens.extend(tokenize_line(line, lineno))
        tokens.append(Token(EOL, '', lineno))
    return tokens
