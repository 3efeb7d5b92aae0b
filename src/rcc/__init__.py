"""
rcc - A Tiny Ahead-of-Time C Compiler
=====================================

rcc compiles a minimal C subset (one `int NAME(void)` function that
returns an integer constant) to x86-64 assembly, then hands the result
to the system toolchain to produce an executable.

Main Components
---------------
- **tinyc**: the compiler core
    Lexer, recursive descent parser, AST and x86-64 code generator

- **toolchain**: external tool integration
    Output path derivation, gcc invocation, intermediate file cleanup

- **cli**: the `rcc` command

Quick Start
-----------
    >>> from rcc import compile_source
    >>> asm = compile_source("int main(void) { return 2; }")

Or from the shell:
    $ rcc main.c && ./main; echo $?
    2
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from rcc.errors import RccError, SourceLocation, ToolchainError
from rcc.tinyc import (
    Compiler,
    CompilerOptions,
    compile_source,
    compile_file,
    lex,
    parse,
    generate,
    TinyCError,
    LexError,
    ParseError,
    CodeGenError,
)
from rcc.toolchain import ToolchainConfig, build_executable, derive_output_paths

__all__ = [
    "__version__",
    # Errors
    "RccError",
    "SourceLocation",
    "ToolchainError",
    "TinyCError",
    "LexError",
    "ParseError",
    "CodeGenError",
    # Compiler
    "Compiler",
    "CompilerOptions",
    "compile_source",
    "compile_file",
    "lex",
    "parse",
    "generate",
    # Toolchain
    "ToolchainConfig",
    "build_executable",
    "derive_output_paths",
]
