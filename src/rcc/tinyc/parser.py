"""
Tiny-C Recursive Descent Parser
===============================

This module implements a predictive recursive descent parser. It takes
the token list from the lexer and builds an Abstract Syntax Tree (AST).

Grammar (EBNF)
--------------
program    ::= function
function   ::= 'int' IDENTIFIER '(' 'void' ')' '{' statement '}'
statement  ::= 'return' expression ';'
expression ::= INTEGER

Each rule is one method. The cursor only moves forward and there is no
backtracking: the first token that does not match aborts the whole
parse with a ParseError naming the rule that failed. Running out of
tokens is reported the same way rather than as an IndexError.

Example Usage
-------------
>>> from rcc.tinyc.lexer import lex
>>> from rcc.tinyc.parser import Parser
>>> ast = Parser(lex("int main(void){return 2;}")).parse()
>>> ast.function.id
'main'
"""

import logging
from typing import Optional

from rcc.errors import SourceLocation
from rcc.tinyc.lexer import Token, TokenKind, lex
from rcc.tinyc.ast import (
    ProgramNode,
    FunctionNode,
    StatementNode,
    ConstantNode,
    UINT32_MAX,
)
from rcc.tinyc.errors import (
    UnexpectedEndError,
    UnexpectedTokenError,
    IntegerOverflowError,
)

logger = logging.getLogger(__name__)

# Per-rule error descriptions
FUNCTION_ERROR = "invalid function definition"
STATEMENT_ERROR = "invalid return statement"
EXPRESSION_ERROR = "invalid expression"


class Parser:
    """
    Recursive descent parser for Tiny-C.

    Attributes:
        tokens: Tokens to parse, in source order
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []

        self._pos = 0

    def parse(self) -> ProgramNode:
        """
        Parse the token list into an AST.

        Returns:
            ProgramNode holding the single function

        Raises:
            ParseError: If the tokens do not form a program
        """
        function = self.parse_function()

        if not self._at_end():
            token = self._peek()
            raise UnexpectedTokenError(
                "unexpected tokens after function definition",
                token.text,
                "end of input",
                token.location,
                self._get_source_line(token.line),
            )

        logger.debug(f"{self.filename}: parsed function '{function.id}'")
        return ProgramNode(
            children=(function,),
            location=SourceLocation(self.filename, 1, 1),
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.tokens)

    def _peek(self) -> Optional[Token]:
        """Current token, or None once the list is exhausted."""
        if self._at_end():
            return None
        return self.tokens[self._pos]

    def _advance(self) -> Token:
        token = self.tokens[self._pos]
        self._pos += 1
        return token

    def _end_location(self) -> SourceLocation:
        """Location just past the last token, for end-of-input errors."""
        if not self.tokens:
            return SourceLocation(self.filename, 1, 1)
        last = self.tokens[-1]
        return SourceLocation(last.filename, last.line, last.column + len(last.text))

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _expect(
        self,
        rule: str,
        expected: str,
        text: Optional[str] = None,
        kind: Optional[TokenKind] = None,
    ) -> Token:
        """
        Consume the current token if it has the given text and/or kind.

        Args:
            rule: Error description of the calling grammar rule
            expected: Human description of the wanted token, for the hint
            text: Required token text
            kind: Required token kind

        Raises:
            UnexpectedEndError: If there are no tokens left
            UnexpectedTokenError: If the token does not match
        """
        token = self._peek()
        if token is None:
            raise UnexpectedEndError(expected, self._end_location(), rule)

        if (text is not None and token.text != text) or (kind is not None and token.kind != kind):
            raise UnexpectedTokenError(
                rule,
                token.text,
                expected,
                token.location,
                self._get_source_line(token.line),
            )

        return self._advance()

    # =========================================================================
    # Grammar Rules
    # =========================================================================

    def parse_function(self) -> FunctionNode:
        """function ::= 'int' IDENTIFIER '(' 'void' ')' '{' statement '}'"""
        start = self._expect(FUNCTION_ERROR, "'int'", text="int")
        name = self._expect(FUNCTION_ERROR, "function name", kind=TokenKind.IDENTIFIER)
        self._expect(FUNCTION_ERROR, "'('", text="(")
        self._expect(FUNCTION_ERROR, "'void'", text="void")
        self._expect(FUNCTION_ERROR, "')'", text=")")
        self._expect(FUNCTION_ERROR, "'{'", text="{")

        statement = self.parse_statement()

        self._expect(FUNCTION_ERROR, "'}'", text="}")

        return FunctionNode(
            id=name.text,
            children=(statement,),
            location=start.location,
        )

    def parse_statement(self) -> StatementNode:
        """statement ::= 'return' expression ';'"""
        start = self._expect(STATEMENT_ERROR, "'return'", text="return")
        expression = self.parse_expression()
        self._expect(STATEMENT_ERROR, "';'", text=";")

        return StatementNode(children=(expression,), location=start.location)

    def parse_expression(self) -> ConstantNode:
        """expression ::= INTEGER"""
        token = self._expect(EXPRESSION_ERROR, "integer literal", kind=TokenKind.INTEGER)

        value = int(token.text)
        if value > UINT32_MAX:
            raise IntegerOverflowError(
                token.text,
                token.location,
                self._get_source_line(token.line),
            )

        return ConstantNode(value, location=token.location)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(
    tokens: list[Token],
    filename: str = "<input>",
    source_lines: Optional[list[str]] = None,
) -> ProgramNode:
    """
    Parse a token list into an AST.

    Raises:
        ParseError: If the tokens do not match the grammar
    """
    return Parser(tokens, filename, source_lines).parse()


def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """Lex and parse source text in one call."""
    return parse(lex(source, filename), filename, source.split("\n"))
