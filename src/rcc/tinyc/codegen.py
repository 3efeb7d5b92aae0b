"""
x86-64 Code Generator for Tiny-C
================================

This module turns the AST into x86-64 assembly text in AT&T syntax,
ready for the GNU assembler (invoked through gcc by the driver).

Code Generation Strategy
------------------------
The tree is walked structurally and each node returns its own text:

- ProgramNode: the code of each child, in order
- FunctionNode: a global symbol declaration and label, then the body
- StatementNode: load the returned constant into %rax, then ret
- ConstantNode: no code of its own; only a return statement emits it

No prologue or epilogue is generated. The subset has no parameters,
locals or calls, so nothing touches the stack.

Generated Assembly Format
-------------------------
    	.globl main
    main:
    	mov	$2, %rax
    	ret

Usage
-----
>>> from rcc.tinyc.parser import parse_source
>>> from rcc.tinyc.codegen import CodeGenerator
>>> print(CodeGenerator().generate(parse_source('int main(void){return 2;}')))
"""

import logging

from rcc.tinyc.ast import (
    ASTNode,
    ASTVisitor,
    ProgramNode,
    FunctionNode,
    StatementNode,
    ConstantNode,
)
from rcc.tinyc.errors import CodeGenError

logger = logging.getLogger(__name__)

RETURN_REGISTER = "%rax"

# Target triple -> prefix added to C symbol names
TARGETS: dict[str, str] = {
    "x86_64-linux": "",
    "x86_64-darwin": "_",
}
DEFAULT_TARGET = "x86_64-linux"


class CodeGenerator(ASTVisitor):
    """
    Generates x86-64 assembly from a Tiny-C AST.

    Generation is a pure function of the tree: the same AST always gives
    byte-identical text.

    Attributes:
        symbol_prefix: Prepended to function names in the emitted symbols
    """

    def __init__(self, symbol_prefix: str = ""):
        self.symbol_prefix = symbol_prefix

    @classmethod
    def for_target(cls, target: str = DEFAULT_TARGET) -> "CodeGenerator":
        """
        Create a generator using the symbol convention of a target.

        Raises:
            ValueError: If the target is unknown
        """
        if target not in TARGETS:
            known = ", ".join(sorted(TARGETS))
            raise ValueError(f"unknown target '{target}' (known: {known})")
        return cls(symbol_prefix=TARGETS[target])

    def generate(self, program: ProgramNode) -> str:
        """
        Generate assembly code from an AST.

        Returns:
            Complete assembly source text

        Raises:
            CodeGenError: If the tree holds a shape that cannot be emitted
        """
        asm = self.visit(program)
        logger.debug(f"generated {len(asm)} bytes of assembly")
        return asm

    # =========================================================================
    # Assembly Output Helpers
    # =========================================================================

    @staticmethod
    def _instruction(mnemonic: str, operands: str = "") -> str:
        if operands:
            return f"\t{mnemonic}\t{operands}\n"
        return f"\t{mnemonic}\n"

    @staticmethod
    def _label(name: str) -> str:
        return f"{name}:\n"

    # =========================================================================
    # Node Visitors
    # =========================================================================

    def generic_visit(self, node: ASTNode) -> str:
        return ""

    def visit_ProgramNode(self, node: ProgramNode) -> str:
        return "".join(self.visit(child) for child in node.children)

    def visit_FunctionNode(self, node: FunctionNode) -> str:
        symbol = f"{self.symbol_prefix}{node.id}"
        parts = []
        for statement in node.children:
            parts.append(f"\t.globl {symbol}\n")
            parts.append(self._label(symbol))
            parts.append(self.visit(statement))
        return "".join(parts)

    def visit_StatementNode(self, node: StatementNode) -> str:
        expression = node.expression
        if not isinstance(expression, ConstantNode):
            raise CodeGenError(
                "not a constant return value",
                location=node.location,
                hint="return statements can only return an integer constant",
            )

        return (
            self._instruction("mov", f"${expression.value}, {RETURN_REGISTER}")
            + self._instruction("ret")
        )

    def visit_ConstantNode(self, node: ConstantNode) -> str:
        return ""


# =============================================================================
# Convenience Functions
# =============================================================================

def generate(program: ProgramNode, target: str = DEFAULT_TARGET) -> str:
    """
    Generate assembly for a parsed program.

    Raises:
        CodeGenError: If the tree holds a shape that cannot be emitted
    """
    return CodeGenerator.for_target(target).generate(program)
