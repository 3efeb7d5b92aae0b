# =============================================================================
# test_codegen.py - Code Generator Unit Tests
# =============================================================================
# Tests for the x86-64 code generator.
#
# Test coverage includes:
#   - Exact AT&T syntax of the emitted text
#   - Symbol naming per target
#   - Determinism
#   - Trees the generator refuses to emit
# =============================================================================

import pytest
from rcc.tinyc.parser import parse_source
from rcc.tinyc.codegen import CodeGenerator, generate, TARGETS, DEFAULT_TARGET
from rcc.tinyc.ast import ProgramNode, FunctionNode, StatementNode, ConstantNode
from rcc.tinyc.errors import CodeGenError


# =============================================================================
# Helper Functions
# =============================================================================

def program(name: str, statement: StatementNode) -> ProgramNode:
    return ProgramNode(children=(FunctionNode(id=name, children=(statement,)),))


def returning(value: int) -> StatementNode:
    return StatementNode(children=(ConstantNode(value),))


# =============================================================================
# Output Format Tests
# =============================================================================

class TestOutputFormat:
    """The emitted text must be accepted by the GNU assembler as-is."""

    def test_minimal_program(self):
        asm = generate(parse_source("int main(void){return 2;}"))
        assert asm == "\t.globl main\nmain:\n\tmov\t$2, %rax\n\tret\n"

    def test_function_name_used_for_symbol(self):
        asm = generate(program("answer", returning(42)))
        assert asm.splitlines() == [
            "\t.globl answer",
            "answer:",
            "\tmov\t$42, %rax",
            "\tret",
        ]

    def test_max_value(self):
        asm = generate(program("main", returning(4294967295)))
        assert "\tmov\t$4294967295, %rax\n" in asm

    def test_zero(self):
        asm = generate(program("main", returning(0)))
        assert "$0, %rax" in asm

    def test_no_prologue_or_epilogue(self):
        asm = generate(program("main", returning(1)))
        assert "push" not in asm
        assert "%rsp" not in asm
        assert "%rbp" not in asm

    def test_ends_with_newline(self):
        assert generate(program("main", returning(1))).endswith("ret\n")


# =============================================================================
# Target Tests
# =============================================================================

class TestTargets:
    """Symbol naming per target platform."""

    def test_default_target(self):
        assert DEFAULT_TARGET == "x86_64-linux"
        assert TARGETS[DEFAULT_TARGET] == ""

    def test_darwin_prefixes_symbol(self):
        asm = generate(program("main", returning(3)), target="x86_64-darwin")
        assert asm == "\t.globl _main\n_main:\n\tmov\t$3, %rax\n\tret\n"

    def test_unknown_target(self):
        with pytest.raises(ValueError, match="unknown target"):
            CodeGenerator.for_target("mips-ultrix")

    def test_explicit_prefix(self):
        asm = CodeGenerator(symbol_prefix="__").generate(program("f", returning(1)))
        assert asm.startswith("\t.globl __f\n__f:\n")


# =============================================================================
# Determinism Tests
# =============================================================================

class TestDeterminism:
    """Same tree in, same bytes out."""

    def test_repeated_generation(self):
        ast = parse_source("int main(void){return 9;}")
        gen = CodeGenerator()
        assert gen.generate(ast) == gen.generate(ast)

    def test_equal_trees_from_different_sources(self):
        a = parse_source("int main(void){return 9;}")
        b = parse_source("// comment\nint  main ( void ) { return 9 ; }\n")
        assert generate(a) == generate(b)


# =============================================================================
# Error Tests
# =============================================================================

class TestCodeGenErrors:
    """Trees the generator cannot emit."""

    def test_non_constant_return_value(self):
        nested = StatementNode(children=(returning(1),))
        with pytest.raises(CodeGenError) as exc_info:
            generate(program("main", nested))
        assert exc_info.value.message == "not a constant return value"

    def test_standalone_constant_emits_nothing(self):
        assert CodeGenerator().generate(ConstantNode(5)) == ""

    def test_standalone_statement(self):
        assert CodeGenerator().generate(returning(5)) == "\tmov\t$5, %rax\n\tret\n"
