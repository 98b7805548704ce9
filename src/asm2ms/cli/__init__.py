"""
asm2ms Command-Line Interface
=============================

- **asm2ms**: assemble a .asm source file into a .ms file

Implemented as a Click-based CLI application with unified error
reporting and exit codes.
"""

__all__ = ["asm2ms"]
