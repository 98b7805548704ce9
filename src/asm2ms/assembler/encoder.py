"""
Instruction Encoder
===================

Turns one tokenized source line into an instruction word.

Encoding is two steps:

1. parse_instruction() looks the mnemonic up in the command table and
   captures the template and required operand count.
2. encode_instruction() checks the operand count, resolves each operand in
   the order the command declares them, then renders the template with the
   resolved values.

Resolution stops at the first bad operand. The template is only rendered
once every field has a value, so a partially filled word is never produced.

Example
-------
>>> from asm2ms.assembler.encoder import encode
>>> encode("mov", ["R1", "R2"])
'0x00126100'
>>> encode("load", ["R2", "R1"])
'0x00116500'
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence
import logging

from asm2ms.assembler.lexer import Token
from asm2ms.assembler.operands import (
    double_register,
    resolve_immediate,
    resolve_register,
)
from asm2ms.cpu import Command, Field, Template
from asm2ms.errors import (
    AssemblerError,
    OperandCountMismatchError,
    SourceLocation,
    UndefinedCommandError,
    UnsupportedRegisterError,
)

logger = logging.getLogger(__name__)


@dataclass
class Instruction:
    """
    One parsed source line.

    Attributes:
        command: The resolved command (UNDEFINED for unknown mnemonics)
        mnemonic: The mnemonic text as written
        operand_count: Required operand count, None for UNDEFINED
        template: The command's word template, None for UNDEFINED
        source: The source line verbatim
        location: Where the line starts
        word: The encoded word, set once encoding succeeds
    """
    command: Command
    mnemonic: str
    operand_count: Optional[int]
    template: Optional[Template]
    source: str = ""
    location: Optional[SourceLocation] = None
    word: Optional[str] = None

    @property
    def is_encoded(self) -> bool:
        return self.word is not None


def parse_instruction(
    tokens: Sequence[Token],
    source: str = "",
    location: Optional[SourceLocation] = None,
) -> Instruction:
    """
    Build an Instruction from the first token of a line.

    Never fails; unknown mnemonics give a Command.UNDEFINED instruction.
    """
    mnemonic = tokens[0].text if tokens else ""
    command = Command.from_mnemonic(mnemonic)
    info = command.info
    return Instruction(
        command=command,
        mnemonic=mnemonic,
        operand_count=info.operand_count if info else None,
        template=info.template if info else None,
        source=source,
        location=location,
    )


def check_operand_count(instruction: Instruction, tokens: Sequence[Token]) -> None:
    """
    Verify that a line has exactly the operands its command requires.

    Raises:
        UndefinedCommandError: If the mnemonic is unknown
        OperandCountMismatchError: If the operand count is wrong
    """
    actual = len(tokens) - 1
    if instruction.operand_count == actual:
        return

    if instruction.command is Command.UNDEFINED:
        raise UndefinedCommandError(instruction.mnemonic)
    raise OperandCountMismatchError(
        instruction.mnemonic, instruction.operand_count, actual
    )


def _resolve_field(field: Field, token: Token) -> str:
    if not field.is_register:
        return resolve_immediate(token.text)

    register = resolve_register(token.text)
    if register is None:
        raise UnsupportedRegisterError(token.text)
    if field is Field.RD_DOUBLED:
        return double_register(register)
    return register.digit


def encode_instruction(instruction: Instruction, tokens: Sequence[Token]) -> str:
    """
    Check, resolve and render one instruction.

    The operand count is checked first, so a short token list is reported
    as an error rather than failing on a missing operand.

    Args:
        instruction: A parsed instruction
        tokens: All tokens of the line; token 0 is the mnemonic

    Returns:
        The encoded word, also stored in instruction.word

    Raises:
        UndefinedCommandError: For Command.UNDEFINED
        OperandCountMismatchError: If the line has the wrong operand count
        UnsupportedRegisterError: If a register operand is not R0 to R5
        MalformedImmediateError: If an immediate operand is not 0 to 255
    """
    check_operand_count(instruction, tokens)

    values: dict[Field, str] = {}
    for position, field in enumerate(instruction.command.info.operands, start=1):
        token = tokens[position]
        try:
            values[field] = _resolve_field(field, token)
        except AssemblerError as e:
            # Point the error at the operand rather than the line start
            if instruction.location is not None:
                e.with_location(
                    replace(instruction.location, column=token.column),
                    instruction.source,
                )
            raise

    instruction.word = instruction.template.render(values)
    logger.debug(f"{instruction.mnemonic}: {instruction.word}")
    return instruction.word


def encode(mnemonic: str, operands: Sequence[str]) -> str:
    """
    Encode a single instruction given as a mnemonic and operand strings.

    Raises:
        AssemblerError: If the instruction cannot be encoded
    """
    tokens = [Token(mnemonic, 1)] + [Token(op, 0) for op in operands]
    return encode_instruction(parse_instruction(tokens), tokens)
