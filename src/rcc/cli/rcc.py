"""
rcc - Tiny-C Compiler Command-Line Interface
============================================

Compiles one source file to a native executable:

    source.c → rcc → source.s → gcc → source

Usage Examples
--------------
Build an executable next to the source:
    $ rcc main.c

Choose the executable name:
    $ rcc main.c -o prog

Stop after code generation:
    $ rcc -S main.c

Inspect the front end:
    $ rcc --tokens main.c
    $ rcc --ast main.c
"""

import logging
from pathlib import Path
from typing import Optional

import click

from rcc import __version__
from rcc.cli.errors import fail, handle_cli_exception
from rcc.tinyc import (
    Compiler,
    CompilerOptions,
    ASTPrinter,
    TARGETS,
    DEFAULT_TARGET,
    lex,
    read_source,
)
from rcc.toolchain import ToolchainConfig, derive_output_paths, build_executable

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_files",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: executable named after the source)",
)
@click.option(
    "-S", "assembly_only",
    is_flag=True,
    help="Write assembly only (default: input.s), do not link",
)
@click.option(
    "-k", "--keep",
    is_flag=True,
    help="Keep the intermediate assembly file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the AST and exit",
)
@click.option(
    "--target",
    type=click.Choice(sorted(TARGETS)),
    default=DEFAULT_TARGET,
    show_default=True,
    help="Target platform (symbol naming convention)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject unrecognized characters instead of skipping them",
)
@click.option(
    "--cc",
    default=None,
    help="Assembler/linker command (default: $RCC_CC or gcc)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="rcc")
def main(
    input_files: tuple[Path, ...],
    output: Optional[Path],
    assembly_only: bool,
    keep: bool,
    tokens: bool,
    ast: bool,
    target: str,
    strict: bool,
    cc: Optional[str],
    verbose: bool,
) -> None:
    """
    Compile a Tiny-C source file into an executable.

    INPUT_FILE is the single source file to compile.

    \b
    Supported language:
        int NAME(void) { return INTEGER; }
        // line comments
    """
    if not input_files:
        fail("rcc: fatal error: no input files")
    if len(input_files) > 1:
        fail("rcc can only handle one file")

    input_file = input_files[0]
    setup_logging(verbose)

    config = ToolchainConfig.from_env()
    if cc:
        config.cc = cc
    if keep:
        config.keep_assembly = True

    try:
        if tokens:
            # Lexing only; the token stream is shown even if it does not parse
            source = read_source(input_file)
            for token in lex(source, str(input_file), strict=strict):
                click.echo(repr(token))
            return

        compiler = Compiler(CompilerOptions(target=target, strict=strict))
        result = compiler.compile_file(input_file)

        if ast:
            click.echo(ASTPrinter().print(result.ast))
            return

        try:
            asm_path, exe_path = derive_output_paths(input_file)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="INPUT_FILE")

        if assembly_only:
            asm_path = output or asm_path
            asm_path.write_text(result.assembly, encoding="utf-8")
            logger.info(f"Compiled {input_file} -> {asm_path}")
            return

        exe_path = output or exe_path
        build_executable(result.assembly, asm_path, exe_path, config)
        logger.info(f"Compiled {input_file} -> {exe_path}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
