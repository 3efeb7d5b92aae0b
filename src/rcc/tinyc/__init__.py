"""
Tiny-C Compiler
===============

An ahead-of-time compiler for a very small C subset: a single
`int NAME(void)` function whose body is one `return` of an integer
constant. It emits x86-64 assembly in AT&T syntax.

Pipeline
--------
    Source → Lexer → Parser → AST → Code Generator → Assembly

Each stage is also available on its own:

>>> from rcc.tinyc import lex, parse, generate
>>> asm = generate(parse(lex("int main(void){return 2;}")))

Language Subset
---------------
    int NAME(void) { return INTEGER; }

Line comments (//) are allowed anywhere. The lexer also recognizes the
unary operators -, ~ and !, which the grammar does not use yet.
"""

from rcc.tinyc.compiler import (
    Compiler,
    CompilerOptions,
    CompilerResult,
    compile_source,
    compile_file,
    read_source,
)
from rcc.tinyc.errors import (
    TinyCError,
    LexError,
    InvalidCharacterError,
    ParseError,
    UnexpectedEndError,
    UnexpectedTokenError,
    IntegerOverflowError,
    ArityError,
    CodeGenError,
)
from rcc.tinyc.lexer import Lexer, Token, TokenKind, lex
from rcc.tinyc.parser import Parser, parse, parse_source
from rcc.tinyc.codegen import CodeGenerator, generate, TARGETS, DEFAULT_TARGET
from rcc.tinyc.ast import (
    ASTNode,
    ASTVisitor,
    ASTPrinter,
    ProgramNode,
    FunctionNode,
    StatementNode,
    Expression,
    ConstantNode,
)

__all__ = [
    # Main API
    "Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_source",
    "compile_file",
    "read_source",
    # Errors
    "TinyCError",
    "LexError",
    "InvalidCharacterError",
    "ParseError",
    "UnexpectedEndError",
    "UnexpectedTokenError",
    "IntegerOverflowError",
    "ArityError",
    "CodeGenError",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "lex",
    # Parser
    "Parser",
    "parse",
    "parse_source",
    # Code Generator
    "CodeGenerator",
    "generate",
    "TARGETS",
    "DEFAULT_TARGET",
    # AST Nodes
    "ASTNode",
    "ASTVisitor",
    "ASTPrinter",
    "ProgramNode",
    "FunctionNode",
    "StatementNode",
    "Expression",
    "ConstantNode",
]
