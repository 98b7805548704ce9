"""
asm2ms - Assembler for the .ms Instruction Word Format
======================================================

This package assembles mnemonic source (.asm) into .ms files: one 32-bit
instruction word per line, written as hex text and followed by the source
line it was assembled from.

    movi R1, 5      ->  0x00168105 ; movi R1, 5
    load R2, R1     ->  0x00116500 ; load R2, R1

Main Components
---------------
- **cpu**: Register file and instruction table
- **assembler**: Line pipeline, operand resolvers and instruction encoder
- **config**: File locations and output record format
- **cli**: The asm2ms command-line tool

Quick Start
-----------
    >>> from asm2ms import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_file("program.asm")
    >>> asm.write_output("program.ms")

Or from the command line:
    $ asm2ms program.asm -o program.ms
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from asm2ms.assembler import Assembler, Record, assemble, assemble_file, encode
from asm2ms.config import AssemblerConfig, RecordFormat
from asm2ms.cpu import Command, Register
from asm2ms.errors import (
    Asm2msError,
    IoError,
    AssemblerError,
    UndefinedCommandError,
    OperandCountMismatchError,
    UnsupportedRegisterError,
    MalformedImmediateError,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "Record",
    "assemble",
    "assemble_file",
    "encode",
    # Configuration
    "AssemblerConfig",
    "RecordFormat",
    # Instruction set
    "Command",
    "Register",
    # Exception hierarchy
    "Asm2msError",
    "IoError",
    "AssemblerError",
    "UndefinedCommandError",
    "OperandCountMismatchError",
    "UnsupportedRegisterError",
    "MalformedImmediateError",
]
