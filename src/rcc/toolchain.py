"""
External Toolchain Integration
==============================

The compiler core stops at assembly text. This module covers the steps
the driver performs around it:

1. Derive the assembly and executable paths from the source path
2. Write the assembly file
3. Run the system C compiler driver (gcc by default) to assemble and link
4. Remove the intermediate assembly file

Configuration
-------------
ToolchainConfig holds the settings; ToolchainConfig.from_env() reads:

    RCC_CC        assembler/linker command (default: gcc)
    RCC_KEEP_ASM  keep the .s file when set to 1/true/yes
    RCC_TIMEOUT   seconds to wait for the toolchain (default: 60)
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from rcc.errors import ToolchainError

logger = logging.getLogger(__name__)

ASSEMBLY_SUFFIX = ".s"


@dataclass
class ToolchainConfig:
    """
    Settings for the external assembler/linker step.

    Attributes:
        cc: Command that assembles and links a .s file (gcc-compatible CLI)
        keep_assembly: Leave the intermediate .s file on disk
        timeout: Seconds before the toolchain process is abandoned
    """
    cc: str = "gcc"
    keep_assembly: bool = False
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "ToolchainConfig":
        """Create a ToolchainConfig, overriding defaults from RCC_* variables."""
        config = cls()

        if cc := os.environ.get("RCC_CC"):
            config.cc = cc

        if keep := os.environ.get("RCC_KEEP_ASM"):
            config.keep_assembly = keep.strip().lower() in ("1", "true", "yes")

        if timeout := os.environ.get("RCC_TIMEOUT"):
            try:
                config.timeout = float(timeout)
            except ValueError:
                logger.warning(f"Ignoring invalid RCC_TIMEOUT value {timeout!r}")

        return config


def derive_output_paths(source: str | Path) -> tuple[Path, Path]:
    """
    Work out where the assembly and the executable go.

    Both live next to the source. The base name is the file name up to
    its first '.', so 'dir/prog.c' gives 'dir/prog.s' and 'dir/prog'.
    A source without a suffix would be overwritten by its own executable,
    so in that case the executable gets '.out' appended.

    Returns:
        (assembly_path, executable_path)

    Raises:
        ValueError: If the assembly path would be the source itself
    """
    path = Path(source)
    base = path.name.split(".", 1)[0] or path.stem
    executable = path.with_name(base)
    if executable == path:
        executable = path.with_name(base + ".out")
    assembly = path.with_name(base + ASSEMBLY_SUFFIX)
    if assembly == path:
        raise ValueError(f"refusing to overwrite source file {path} with generated assembly")
    return assembly, executable


def assemble_and_link(
    asm_path: str | Path,
    exe_path: str | Path,
    config: ToolchainConfig | None = None,
) -> subprocess.CompletedProcess:
    """
    Turn an assembly file into an executable with the external toolchain.

    Runs `CC -o EXE ASM` once.

    Raises:
        ToolchainError: If the tool is missing, times out, or fails
    """
    config = config or ToolchainConfig()
    cmd = [config.cc, "-o", str(exe_path), str(asm_path)]
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=config.timeout,
        )
    except FileNotFoundError:
        raise ToolchainError(f"'{config.cc}' not found - is a C toolchain installed?", command=cmd)
    except subprocess.TimeoutExpired:
        raise ToolchainError(f"'{config.cc}' timed out after {config.timeout:g}s", command=cmd)

    if result.returncode != 0:
        raise ToolchainError(
            f"'{config.cc}' failed with exit code {result.returncode}",
            command=cmd,
            return_code=result.returncode,
            stderr=result.stderr,
        )

    return result


def build_executable(
    assembly: str,
    asm_path: str | Path,
    exe_path: str | Path,
    config: ToolchainConfig | None = None,
) -> Path:
    """
    Write assembly text to disk and link it into an executable.

    The assembly file is removed afterwards, whether linking worked or
    not, unless config.keep_assembly is set.

    Returns:
        Path of the executable

    Raises:
        ToolchainError: If assembling or linking fails
    """
    config = config or ToolchainConfig()
    asm_path = Path(asm_path)
    exe_path = Path(exe_path)

    asm_path.write_text(assembly, encoding="utf-8")
    logger.debug(f"Wrote {len(assembly)} bytes to {asm_path}")

    try:
        assemble_and_link(asm_path, exe_path, config)
    finally:
        if not config.keep_assembly:
            asm_path.unlink(missing_ok=True)
            logger.debug(f"Removed {asm_path}")

    return exe_path
