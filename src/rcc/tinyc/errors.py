"""
Tiny-C Compiler Error Hierarchy
===============================

This module defines the exception hierarchy for the compiler stages.
All exceptions inherit from TinyCError, which itself inherits from
RccError for consistent error handling across the package.

Exception Hierarchy
-------------------
TinyCError (base for all compiler errors)
├── LexError - malformed input the lexer cannot tokenize
│   └── InvalidCharacterError - unrecognized character (strict mode only)
├── ParseError - token stream does not match the grammar
│   ├── UnexpectedEndError - token stream ran out
│   ├── UnexpectedTokenError - wrong token kind or literal
│   ├── IntegerOverflowError - literal does not fit 32 bits unsigned
│   └── ArityError - AST node built with the wrong number of children
└── CodeGenError - AST shape the generator cannot emit

Error Message Format
--------------------
    main.c:1:23: error: invalid expression
        int main(void){return x;}
                              ^
    hint: expected integer literal, found 'x'
"""

from typing import Optional

from rcc.errors import RccError, SourceLocation


# =============================================================================
# Base Compiler Exception
# =============================================================================

class TinyCError(RccError):
    """
    Base exception for all compiler stage errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            main.c:1:5: error: invalid function definition
                int 42(void){return 2;}
                    ^
            hint: expected function name, found '42'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Lexer Errors
# =============================================================================

class LexError(TinyCError):
    """
    Source text that cannot be tokenized.

    The only malformed input in the default mode is a '/' that does not
    start a '//' line comment.
    """
    pass


class InvalidCharacterError(LexError):
    """
    Unrecognized character in strict mode.

    The default lexer skips such characters; this error is only raised
    when the lexer was created with strict=True.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Parser Errors
# =============================================================================

class ParseError(TinyCError):
    """
    Token stream that does not match the grammar.

    The message names the grammar rule that failed; the hint (when set)
    names the token that rule expected.
    """
    pass


class UnexpectedEndError(ParseError):
    """
    The token stream ended while a rule still expected a token.

    The message names the rule that was cut short, like any other parse
    error; the hint says what it was waiting for.
    """

    def __init__(
        self,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        rule: Optional[str] = None,
    ):
        self.expected = expected
        self.rule = rule
        if expected:
            hint = f"expected {expected}, found end of input"
        else:
            hint = "unexpected end of input"
        super().__init__(
            rule or "unexpected end of input",
            location=location,
            hint=hint,
        )


class UnexpectedTokenError(ParseError):
    """
    A token of the wrong kind or with the wrong text.

    Attributes:
        found: Text of the offending token
        expected: Description of what the rule wanted
    """

    def __init__(
        self,
        message: str,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = f"expected {expected}, found '{found}'" if expected else None
        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class IntegerOverflowError(ParseError):
    """Integer literal outside the unsigned 32-bit range."""

    def __init__(
        self,
        literal: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.literal = literal
        super().__init__(
            f"integer literal '{literal}' is too large",
            location=location,
            hint="integer constants must fit in 32 bits (0 to 4294967295)",
            source_line=source_line,
        )


class ArityError(ParseError):
    """An AST node was given a number of children its grammar rule forbids."""

    def __init__(self, node_name: str, expected: int, actual: int):
        self.node_name = node_name
        self.expected = expected
        self.actual = actual
        word = "child" if expected == 1 else "children"
        super().__init__(f"{node_name} takes exactly {expected} {word}, got {actual}")


# =============================================================================
# Code Generation Errors
# =============================================================================

class CodeGenError(TinyCError):
    """
    AST shape the code generator does not know how to emit.

    With the current grammar the only case is a return statement whose
    child is not a constant.
    """
    pass
