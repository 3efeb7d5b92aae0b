"""
rcc Error Hierarchy
===================

This module defines the root of the exception hierarchy for rcc.
All exceptions inherit from RccError, allowing callers to catch every
compiler or driver failure with a single except clause if desired.

Exception Hierarchy
-------------------
RccError (base)
├── TinyCError (compiler stages, see rcc.tinyc.errors)
│   ├── LexError
│   ├── ParseError
│   └── CodeGenError
└── ToolchainError - external assembler/linker failed

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class RccError(Exception):
    """
    Base exception for all rcc errors.

        try:
            compile_source(text)
        except RccError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Driver Exceptions
# =============================================================================

class ToolchainError(RccError):
    """
    The external assembler/linker could not produce an executable.

    Raised when the tool is missing, times out, or exits with a non-zero
    status. The captured diagnostics are kept so the driver can show them.

    Attributes:
        command: The command line that was run
        return_code: Exit status, or None if the tool never ran to completion
        stderr: Captured standard error of the tool
    """

    def __init__(
        self,
        message: str,
        command: Optional[list[str]] = None,
        return_code: Optional[int] = None,
        stderr: str = "",
    ):
        self.message = message
        self.command = command or []
        self.return_code = return_code
        self.stderr = stderr
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.command:
            parts.append(f"command: {' '.join(self.command)}")
        if self.stderr.strip():
            parts.append(self.stderr.rstrip())
        return "\n".join(parts)
