"""
Tiny-C Compiler Main Module
===========================

This module provides the in-process compiler interface. It runs the
three stages in order:

    Source → Lex → Parse → Generate → Assembly

Usage
-----
Command line:
    $ rcc main.c

Programmatic:
    >>> from rcc.tinyc import compile_source
    >>> asm = compile_source('int main(void){return 2;}')

Error Handling
--------------
Each stage fails fast: the first LexError, ParseError or CodeGenError
propagates to the caller unchanged and no partial result is returned.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rcc.errors import RccError
from rcc.tinyc.lexer import Lexer, Token
from rcc.tinyc.parser import Parser
from rcc.tinyc.codegen import CodeGenerator, DEFAULT_TARGET
from rcc.tinyc.ast import ProgramNode

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        target: Target triple selecting the symbol naming convention
                (x86_64-linux or x86_64-darwin)
        strict: Reject unrecognized characters instead of skipping them
    """
    target: str = DEFAULT_TARGET
    strict: bool = False


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        tokens: Token list produced by the lexer
        ast: Tree produced by the parser
        assembly: Generated assembly text
    """
    filename: str = ""
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[ProgramNode] = None
    assembly: str = ""


class Compiler:
    """
    Runs the lexer, parser and code generator for one compilation unit.

    Example:
        result = Compiler().compile_file("main.c")
        print(result.assembly)
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()
        # Fail early on a bad target rather than after lexing and parsing
        self._generator = CodeGenerator.for_target(self.options.target)

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile source text to assembly.

        Raises:
            TinyCError: If any stage fails
        """
        result = CompilerResult(filename=filename)

        logger.debug(f"{filename}: lexing")
        result.tokens = list(Lexer(source, filename, strict=self.options.strict).tokenize())

        logger.debug(f"{filename}: parsing {len(result.tokens)} tokens")
        result.ast = Parser(result.tokens, filename, source.split("\n")).parse()

        logger.debug(f"{filename}: generating code for {self.options.target}")
        result.assembly = self._generator.generate(result.ast)

        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Read and compile a source file.

        Raises:
            FileNotFoundError: If the file does not exist
            RccError: If the file is not valid UTF-8
            TinyCError: If any stage fails
        """
        return self.compile_source(read_source(filepath), str(filepath))


def read_source(filepath: str | Path) -> str:
    """
    Read a source file as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist
        RccError: If the file is not valid UTF-8
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {filepath}")

    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise RccError(
            f"{filepath}: source is not valid UTF-8 "
            f"(byte 0x{e.object[e.start]:02X} at offset {e.start})"
        ) from e


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_source(
    source: str,
    filename: str = "<input>",
    target: str = DEFAULT_TARGET,
) -> str:
    """
    Compile source text and return the assembly.

    Raises:
        TinyCError: If compilation fails

    Example:
        >>> print(compile_source('int main(void){return 7;}'), end="")
        	.globl main
        main:
        	mov	$7, %rax
        	ret
    """
    compiler = Compiler(CompilerOptions(target=target))
    return compiler.compile_source(source, filename).assembly


def compile_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
    target: str = DEFAULT_TARGET,
) -> str:
    """
    Compile a source file, optionally writing the assembly to output_path.

    The output file is only written once every stage has succeeded.
    """
    compiler = Compiler(CompilerOptions(target=target))
    result = compiler.compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.assembly, encoding="utf-8")

    return result.assembly
