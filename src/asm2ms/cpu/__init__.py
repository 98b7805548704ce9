"""
asm2ms CPU Package
==================

Register file and instruction table of the target machine, shared by the
operand resolvers and the instruction encoder.

Usage:
    from asm2ms.cpu import Command, COMMAND_TABLE, Register
"""

from asm2ms.cpu.isa import (
    Register,
    Field,
    Template,
    Command,
    CommandInfo,
    COMMAND_TABLE,
    MNEMONICS,
)

__all__ = [
    "Register",
    "Field",
    "Template",
    "Command",
    "CommandInfo",
    "COMMAND_TABLE",
    "MNEMONICS",
]
