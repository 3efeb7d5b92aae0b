"""
Tiny-C Lexer (Tokenizer)
========================

This module converts source text into a flat, ordered list of tokens
for the parser.

Token Categories
----------------
- Keywords: int, return, void
- Identifiers: runs of ASCII letters that are not keywords
- Integers: runs of decimal digits (no sign, no range check here)
- Delimiters: ( ) { } ;
- Operators: - ~ !   (recognized for future grammar growth; the parser
  does not consume them yet)

Comments
--------
Only single-line comments are supported: // comment

Every other character, whitespace included, is skipped without producing
a token. A '/' that is not followed by a second '/' is a LexError.

Example Usage
-------------
>>> from rcc.tinyc.lexer import Lexer
>>> for token in Lexer("int main(void){return 2;}", "main.c").tokenize():
...     print(token)
Token(KEYWORD, 'int', 1:1)
Token(IDENTIFIER, 'main', 1:5)
Token(OPEN_PAREN, '(', 1:9)
Token(KEYWORD, 'void', 1:10)
Token(CLOSE_PAREN, ')', 1:14)
Token(OPEN_BRACE, '{', 1:15)
Token(KEYWORD, 'return', 1:16)
Token(INTEGER, '2', 1:23)
Token(SEMICOLON, ';', 1:24)
Token(CLOSE_BRACE, '}', 1:25)
"""

import logging
import string
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional

from rcc.errors import SourceLocation
from rcc.tinyc.errors import LexError, InvalidCharacterError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Closed set of token kinds produced by the lexer."""

    KEYWORD = auto()             # int, return, void
    IDENTIFIER = auto()          # function names
    INTEGER = auto()             # decimal literals

    OPEN_PAREN = auto()          # (
    CLOSE_PAREN = auto()         # )
    OPEN_BRACE = auto()          # {
    CLOSE_BRACE = auto()         # }
    SEMICOLON = auto()           # ;

    # Unary operators, not consumed by the parser yet
    NEGATION = auto()            # -
    BITWISE_COMPLEMENT = auto()  # ~
    LOGICAL_NEGATION = auto()    # !


KEYWORDS: frozenset[str] = frozenset({"int", "return", "void"})

# Single-character tokens
PUNCTUATION: dict[str, TokenKind] = {
    ";": TokenKind.SEMICOLON,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "-": TokenKind.NEGATION,
    "~": TokenKind.BITWISE_COMPLEMENT,
    "!": TokenKind.LOGICAL_NEGATION,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexeme from the source.

    Only kind and text take part in equality; the position fields are
    carried for error reporting.

    Attributes:
        kind: The TokenKind classification
        text: The lexeme exactly as it appears in the source
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    text: str
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)
    filename: str = field(default="<input>", compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Tiny-C source code.

    The scan is a single left-to-right pass with an explicit cursor. At
    each position the current character decides what to consume: letters
    and digits are consumed by maximal munch, '//' comments through the
    end of the line, punctuation one character at a time.

    Unrecognized characters are skipped. Pass strict=True to reject them
    with InvalidCharacterError instead.

    Usage:
        tokens = list(Lexer(source_text, filename).tokenize())
    """

    LETTERS = string.ascii_letters
    DIGITS = string.digits
    WHITESPACE = " \t\r\n\v\f"

    def __init__(self, source: str, filename: str = "<input>", strict: bool = False):
        """
        Initialize the lexer with source code.

        Args:
            source: The source text to tokenize
            filename: Name of the source file (for error messages)
            strict: Raise on unrecognized characters instead of skipping them
        """
        self.source = source
        self.filename = filename
        self.strict = strict

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code, in source order.

        Raises:
            LexError: On a '/' that does not start a line comment
        """
        while not self._at_end():
            char = self._peek()

            if char == "/":
                self._skip_comment()
                continue

            if char in self.LETTERS:
                yield self._scan_word()
                continue

            if char in self.DIGITS:
                yield self._scan_integer()
                continue

            kind = PUNCTUATION.get(char)
            if kind is not None:
                token = self._make_token(kind, char)
                self._advance()
                yield token
                continue

            self._skip_unrecognized(char)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at the character at the cursor + offset; '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, keeping line/column tracking current."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _current_line_text(self) -> str:
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    def _make_token(self, kind: TokenKind, text: str,
                    line: Optional[int] = None, column: Optional[int] = None) -> Token:
        return Token(
            kind=kind,
            text=text,
            line=line or self._line,
            column=column or self._column,
            filename=self.filename,
        )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_word(self) -> Token:
        """
        Scan a keyword or identifier.

        Consumes the longest run of ASCII letters, so 'intx' and
        'returning' are identifiers rather than keyword prefixes.
        """
        line, column = self._line, self._column
        start = self._pos
        while self._peek() and self._peek() in self.LETTERS:
            self._advance()

        text = self.source[start:self._pos]
        kind = TokenKind.KEYWORD if text in KEYWORDS else TokenKind.IDENTIFIER
        return self._make_token(kind, text, line, column)

    def _scan_integer(self) -> Token:
        """Scan the longest run of decimal digits."""
        line, column = self._line, self._column
        start = self._pos
        while self._peek() and self._peek() in self.DIGITS:
            self._advance()

        return self._make_token(TokenKind.INTEGER, self.source[start:self._pos], line, column)

    def _skip_comment(self) -> None:
        """
        Skip a '//' comment through the end of its line.

        Raises:
            LexError: If the '/' is not followed by another '/'
        """
        if self._peek(1) != "/":
            raise LexError(
                "malformed comment start",
                SourceLocation(self.filename, self._line, self._column),
                hint="line comments start with '//'",
                source_line=self._current_line_text(),
            )

        while not self._at_end() and self._peek() != "\n":
            self._advance()

        # Consume the newline itself
        self._advance()

    def _skip_unrecognized(self, char: str) -> None:
        if self.strict and char not in self.WHITESPACE:
            raise InvalidCharacterError(
                char,
                SourceLocation(self.filename, self._line, self._column),
                source_line=self._current_line_text(),
            )

        if char not in self.WHITESPACE:
            logger.debug(f"{self.filename}:{self._line}:{self._column}: skipping {char!r}")
        self._advance()


# =============================================================================
# Convenience Functions
# =============================================================================

def lex(source: str, filename: str = "<input>", strict: bool = False) -> list[Token]:
    """
    Tokenize a complete source text.

    Args:
        source: Source code
        filename: Source filename for error messages
        strict: Reject unrecognized characters

    Returns:
        Tokens in source order

    Raises:
        LexError: If the source contains a malformed comment opener
    """
    tokens = list(Lexer(source, filename, strict=strict).tokenize())
    logger.debug(f"{filename}: {len(tokens)} tokens")
    return tokens
