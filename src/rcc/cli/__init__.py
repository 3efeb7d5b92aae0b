"""
rcc Command-Line Interface
==========================

- **rcc**: compile one Tiny-C source file to an executable

The tool is a Click application; see `rcc --help`.
"""

__all__ = ["rcc"]
