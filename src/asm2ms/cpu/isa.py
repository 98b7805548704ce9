"""
Instruction Set Definition
==========================

This module defines the register file and the instruction table of the
target machine. Every instruction is a single 32-bit word written as ten
characters of text ("0x" followed by eight hex digits). Operands are packed
into fixed nibble positions of that word.

Registers
---------
Six general purpose registers, R0 to R5. A register field is one hex digit
holding the register ordinal.

Fields
------
Each instruction word is described by a template: fixed hex text with named
placeholders where operand values are substituted.

| Placeholder | Field        | Encoding                                   |
|-------------|--------------|--------------------------------------------|
| <RD>        | RD           | destination register digit                 |
| <RX>        | RX           | first source / index register digit        |
| <RY>        | RY           | second source register digit               |
| <RD*>       | RD_DOUBLED   | (ordinal << 1) + 1, one hex digit          |
| <IMM>       | IMM          | 8-bit immediate, two lowercase hex digits  |

The RD_DOUBLED field is used by load/loadi. Its low bit is the addressing
mode flag and the register number sits in the bits above it, so R2 encodes
as 5 and R5 as b.

Instruction Table
-----------------
| Mnemonic | Template               | Operands     |
|----------|------------------------|--------------|
| mov      | 0x001<RX>6<RD>00       | RD, RX       |
| movi     | 0x00168<RD><IMM>       | RD, IMM      |
| nop      | 0x00166600             |              |
| jump     | 0x011<RX>6600          | RX           |
| jumpi    | 0x0116e6<IMM>          | IMM          |
| jz       | 0x023<RX>e6<IMM>       | RX, IMM      |
| jnz      | 0x033<RX>e6<IMM>       | RX, IMM      |
| add      | 0x001<RX><RY><RD>00    | RD, RX, RY   |
| addi     | 0x001<RX>e<RD><IMM>    | RD, RX, IMM  |
| and      | 0x000<RX><RY><RD>00    | RD, RX, RY   |
| andi     | 0x000<RX>e<RD><IMM>    | RD, RX, IMM  |
| load     | 0x001<RX>6<RD*>00      | RD*, RX      |
| loadi    | 0x0016e<RD*><IMM>      | RD*, IMM     |

The operand column gives the order in which operands appear in source,
which is not the order of the fields inside the word.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping, Optional, Union
import re


# =============================================================================
# Registers
# =============================================================================

class Register(Enum):
    """
    General purpose registers.

    The value is the register ordinal, which is also its field encoding.
    """
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5

    @property
    def digit(self) -> str:
        """The plain register field: the ordinal as a single digit."""
        return str(self.value)

    @classmethod
    def from_name(cls, name: str) -> Optional["Register"]:
        """
        Look up a register by its exact (uppercase) name.

        Returns None for anything that is not R0 to R5.
        """
        return cls.__members__.get(name)


# =============================================================================
# Fields and Templates
# =============================================================================

class Field(Enum):
    """Named placeholders that may appear in an instruction template."""
    RD = "<RD>"
    RX = "<RX>"
    RY = "<RY>"
    RD_DOUBLED = "<RD*>"
    IMM = "<IMM>"

    @property
    def is_register(self) -> bool:
        return self is not Field.IMM


_PLACEHOLDER_RE = re.compile("|".join(re.escape(f.value) for f in Field))

Segment = Union[str, Field]


class Template:
    """
    A parsed instruction template.

    The template text is split once into literal text and Field
    placeholders. Rendering interleaves the literals with resolved field
    values, so a substituted value can never be mistaken for a placeholder.

        >>> t = Template("0x001<RX>6<RD>00")
        >>> t.render({Field.RD: "1", Field.RX: "2"})
        '0x00126100'
    """

    def __init__(self, text: str):
        self.text = text
        self.segments: tuple[Segment, ...] = tuple(self._parse(text))
        self.fields: tuple[Field, ...] = tuple(
            s for s in self.segments if isinstance(s, Field)
        )

    @staticmethod
    def _parse(text: str) -> Iterator[Segment]:
        pos = 0
        for match in _PLACEHOLDER_RE.finditer(text):
            if match.start() > pos:
                yield text[pos:match.start()]
            yield Field(match.group())
            pos = match.end()
        if pos < len(text):
            yield text[pos:]

    def render(self, values: Mapping[Field, str]) -> str:
        """
        Produce the instruction word.

        Raises:
            KeyError: If a field of the template has no value
        """
        return "".join(
            values[s] if isinstance(s, Field) else s for s in self.segments
        )

    def __repr__(self) -> str:
        return f"Template({self.text!r})"


# =============================================================================
# Commands
# =============================================================================

@dataclass(frozen=True)
class CommandInfo:
    """
    Static encoding data for one command.

    Attributes:
        template: The parsed instruction word template
        operands: Fields filled from source operands, in source order
    """
    template: Template
    operands: tuple[Field, ...]

    @property
    def operand_count(self) -> int:
        return len(self.operands)


class Command(Enum):
    """
    Instruction mnemonics.

    The value is the mnemonic as written in source. UNDEFINED stands for any
    first token that is not a known mnemonic.
    """
    MOV = "mov"
    MOVI = "movi"
    NOP = "nop"
    JUMP = "jump"
    JUMPI = "jumpi"
    JZ = "jz"
    JNZ = "jnz"
    ADD = "add"
    ADDI = "addi"
    AND = "and"
    ANDI = "andi"
    LOAD = "load"
    LOADI = "loadi"
    UNDEFINED = None

    @classmethod
    def from_mnemonic(cls, mnemonic: str) -> "Command":
        """
        Look up a mnemonic. Matching is exact and case-sensitive.

        Never fails: unknown mnemonics map to Command.UNDEFINED.
        """
        return _MNEMONIC_MAP.get(mnemonic, cls.UNDEFINED)

    @property
    def info(self) -> Optional[CommandInfo]:
        return COMMAND_TABLE.get(self)

    @property
    def operand_count(self) -> Optional[int]:
        """Required number of operands, or None for UNDEFINED."""
        info = self.info
        return info.operand_count if info is not None else None


_MNEMONIC_MAP: dict[str, Command] = {
    c.value: c for c in Command if c is not Command.UNDEFINED
}


def _info(template: str, *operands: Field) -> CommandInfo:
    return CommandInfo(Template(template), operands)


# =============================================================================
# Command Table
# =============================================================================
# Key: Command
# Value: CommandInfo(template, operands in source order)
# =============================================================================

COMMAND_TABLE: dict[Command, CommandInfo] = {
    Command.MOV: _info("0x001<RX>6<RD>00", Field.RD, Field.RX),
    Command.MOVI: _info("0x00168<RD><IMM>", Field.RD, Field.IMM),
    Command.NOP: _info("0x00166600"),
    Command.JUMP: _info("0x011<RX>6600", Field.RX),
    Command.JUMPI: _info("0x0116e6<IMM>", Field.IMM),
    Command.JZ: _info("0x023<RX>e6<IMM>", Field.RX, Field.IMM),
    Command.JNZ: _info("0x033<RX>e6<IMM>", Field.RX, Field.IMM),
    Command.ADD: _info("0x001<RX><RY><RD>00", Field.RD, Field.RX, Field.RY),
    Command.ADDI: _info("0x001<RX>e<RD><IMM>", Field.RD, Field.RX, Field.IMM),
    Command.AND: _info("0x000<RX><RY><RD>00", Field.RD, Field.RX, Field.RY),
    Command.ANDI: _info("0x000<RX>e<RD><IMM>", Field.RD, Field.RX, Field.IMM),
    Command.LOAD: _info("0x001<RX>6<RD*>00", Field.RD_DOUBLED, Field.RX),
    Command.LOADI: _info("0x0016e<RD*><IMM>", Field.RD_DOUBLED, Field.IMM),
}

MNEMONICS: frozenset[str] = frozenset(_MNEMONIC_MAP)


def _check_table(table: Mapping[Command, CommandInfo] = COMMAND_TABLE) -> None:
    # Each template field must appear once and be filled by exactly one operand.
    for command, info in table.items():
        fields = info.template.fields
        if len(set(fields)) != len(fields):
            raise ValueError(
                f"template {info.template.text!r} of '{command.value}' "
                "repeats a placeholder"
            )
        if sorted(fields, key=lambda f: f.value) != sorted(
            info.operands, key=lambda f: f.value
        ):
            raise ValueError(
                f"template {info.template.text!r} of '{command.value}' "
                f"does not match operands {info.operands}"
            )


_check_table()
