"""
asm2ms Assembler
================

Line-oriented assembler producing .ms files: one encoded instruction word
per line, each annotated with the source line it came from.

Main Components
---------------
- **Assembler**: Drives the line pipeline and holds the results
- **lexer**: Splits source into lines and lines into tokens
- **operands**: Register and immediate resolvers
- **encoder**: Command lookup, operand count check and word rendering

Assembly Process
----------------
A single forward pass over independent lines:

1. Tokenize the line (single spaces, commas stripped)
2. Look up the mnemonic and check the operand count
3. Resolve the operands and render the instruction template
4. Append "<word> ; <source>" to the output

A rejected line is reported and contributes nothing to the output. There
are no labels, symbols, macros or directives.

Example Usage
-------------
>>> from asm2ms.assembler import encode
>>> encode("addi", ["R0", "R1", "16"])
'0x0011e010'
"""

from asm2ms.assembler.assembler import (
    Assembler,
    Record,
    assemble,
    assemble_file,
    format_record,
    read_source,
    write_output,
)
from asm2ms.assembler.encoder import (
    Instruction,
    check_operand_count,
    encode,
    encode_instruction,
    parse_instruction,
)
from asm2ms.assembler.lexer import Token, split_lines, tokenize_line
from asm2ms.assembler.operands import (
    double_register,
    resolve_immediate,
    resolve_register,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "Record",
    "assemble",
    "assemble_file",
    "format_record",
    "read_source",
    "write_output",
    # Encoder
    "Instruction",
    "check_operand_count",
    "encode",
    "encode_instruction",
    "parse_instruction",
    # Lexer
    "Token",
    "split_lines",
    "tokenize_line",
    # Operands
    "double_register",
    "resolve_immediate",
    "resolve_register",
]
