"""
Tiny-C Compiler Pipeline Tests
==============================

End-to-end tests of lex → parse → generate, through both the stage
functions and the Compiler class.

Test Organization
-----------------
- TestPipeline: properties of the full pipeline
- TestCompiler: Compiler / CompilerOptions / CompilerResult
- TestCompileFile: file based helpers
"""

import pytest
from rcc import compile_source, lex, parse, generate
from rcc.errors import RccError
from rcc.tinyc.compiler import Compiler, CompilerOptions, compile_file, read_source
from rcc.tinyc.lexer import TokenKind
from rcc.tinyc.ast import ProgramNode, FunctionNode, StatementNode, ConstantNode
from rcc.tinyc.errors import (
    TinyCError,
    LexError,
    ParseError,
    InvalidCharacterError,
    IntegerOverflowError,
)


# =============================================================================
# Pipeline Properties
# =============================================================================

class TestPipeline:
    """Properties of generate(parse(lex(source)))."""

    @pytest.mark.parametrize("name,value", [
        ("main", 0),
        ("main", 2),
        ("f", 255),
        ("answer", 42),
        ("LongName", 4294967295),
    ])
    def test_round_trip_shape(self, name, value):
        asm = generate(parse(lex(f"int {name}(void){{return {value};}}")))
        assert f"\t.globl {name}\n" in asm
        assert f"\n{name}:\n" in asm
        assert f"\tmov\t${value}, %rax\n\tret\n" in asm

    def test_determinism(self):
        source = "int main(void) {\n    return 123;\n}\n"
        assert compile_source(source) == compile_source(source)

    def test_concrete_scenario(self):
        source = "int main(void){return 2;}"

        tokens = lex(source)
        assert [(t.kind, t.text) for t in tokens] == [
            (TokenKind.KEYWORD, "int"),
            (TokenKind.IDENTIFIER, "main"),
            (TokenKind.OPEN_PAREN, "("),
            (TokenKind.KEYWORD, "void"),
            (TokenKind.CLOSE_PAREN, ")"),
            (TokenKind.OPEN_BRACE, "{"),
            (TokenKind.KEYWORD, "return"),
            (TokenKind.INTEGER, "2"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.CLOSE_BRACE, "}"),
        ]

        ast = parse(tokens)
        assert ast == ProgramNode(children=(
            FunctionNode(id="main", children=(
                StatementNode(children=(ConstantNode(2),)),
            )),
        ))

        assert generate(ast) == "\t.globl main\nmain:\n\tmov\t$2, %rax\n\tret\n"

    def test_lex_error_propagates(self):
        with pytest.raises(LexError):
            compile_source("int main(void){return 2;} / oops")

    def test_overflow_propagates(self):
        with pytest.raises(IntegerOverflowError):
            compile_source("int main(void){return 4294967296;}")

    def test_all_stage_errors_share_base(self):
        for source in ("/", "int", "int main(void){return 99999999999;}"):
            with pytest.raises(TinyCError):
                compile_source(source)
            with pytest.raises(RccError):
                compile_source(source)

    def test_unrecognized_characters_ignored(self):
        """Stray characters are skipped, not reported."""
        noisy = "int main(void) @ { return 2; } #"
        assert compile_source(noisy) == compile_source("int main(void){return 2;}")


# =============================================================================
# Compiler Class Tests
# =============================================================================

class TestCompiler:
    """The Compiler object and its options."""

    def test_result_fields(self):
        result = Compiler().compile_source("int main(void){return 5;}", "five.c")
        assert result.filename == "five.c"
        assert len(result.tokens) == 10
        assert result.ast.function.id == "main"
        assert result.assembly.endswith("\tret\n")

    def test_default_options(self):
        options = CompilerOptions()
        assert options.target == "x86_64-linux"
        assert options.strict is False

    def test_target_option(self):
        compiler = Compiler(CompilerOptions(target="x86_64-darwin"))
        asm = compiler.compile_source("int main(void){return 1;}").assembly
        assert asm.startswith("\t.globl _main\n_main:\n")

    def test_bad_target_fails_early(self):
        with pytest.raises(ValueError):
            Compiler(CompilerOptions(target="z80"))

    def test_strict_option(self):
        compiler = Compiler(CompilerOptions(strict=True))
        with pytest.raises(InvalidCharacterError):
            compiler.compile_source("int main(void){return 2;} $")

    def test_error_has_filename(self):
        with pytest.raises(ParseError) as exc_info:
            Compiler().compile_source("int main(void){return;}", "bad.c")
        assert str(exc_info.value).startswith("bad.c:1:22: error:")

    def test_compiler_is_reusable(self):
        compiler = Compiler()
        first = compiler.compile_source("int a(void){return 1;}").assembly
        second = compiler.compile_source("int b(void){return 2;}").assembly
        assert "a:" in first and "b:" not in first
        assert "b:" in second and "a:" not in second


# =============================================================================
# File Helpers
# =============================================================================

class TestCompileFile:
    """Reading sources from disk."""

    def test_compile_file(self, tmp_path):
        source = tmp_path / "prog.c"
        source.write_text("int main(void) { return 7; }\n")
        result = Compiler().compile_file(source)
        assert result.filename == str(source)
        assert "$7, %rax" in result.assembly

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Compiler().compile_file(tmp_path / "nope.c")

    def test_invalid_utf8(self, tmp_path):
        source = tmp_path / "latin1.c"
        source.write_bytes(b"// caf\xe9\nint main(void){return 2;}")
        with pytest.raises(RccError) as exc_info:
            Compiler().compile_file(source)
        assert not isinstance(exc_info.value, TinyCError)
        assert "not valid UTF-8" in str(exc_info.value)
        assert "0xE9" in str(exc_info.value)

    def test_read_source(self, tmp_path):
        source = tmp_path / "prog.c"
        source.write_text("int main(void){return x;}")
        assert read_source(source) == "int main(void){return x;}"

    def test_writes_output(self, tmp_path):
        source = tmp_path / "prog.c"
        source.write_text("int main(void){return 1;}")
        out = tmp_path / "prog.s"
        asm = compile_file(source, out)
        assert out.read_text() == asm

    def test_no_output_on_failure(self, tmp_path):
        source = tmp_path / "prog.c"
        source.write_text("int main(void){return x;}")
        out = tmp_path / "prog.s"
        with pytest.raises(ParseError):
            compile_file(source, out)
        assert not out.exists()
