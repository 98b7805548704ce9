"""
asm2ms Configuration
====================

Assembler settings: file locations and the output record format.
Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

Output Record Format
--------------------
Every encoded line becomes one record of the .ms file:

    ANNOTATED (default):  0x00126100 ; mov R1, R2\\r\\n
    BARE:                 0x00126100mov R1, R2\\r\\n

BARE is the older variant without a separator, kept for tools that still
expect it.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import os


class RecordFormat(Enum):
    """Separator written between an encoded word and its source line."""
    ANNOTATED = "annotated"
    BARE = "bare"

    @property
    def separator(self) -> str:
        return " ; " if self is RecordFormat.ANNOTATED else ""


DEFAULT_INPUT = Path("program.asm")
DEFAULT_OUTPUT = Path("program.ms")


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        input_path: Source file to read (default: program.asm)
        output_path: Output file to write (default: program.ms)
        record_format: Output record layout (default: ANNOTATED)
        line_terminator: Written after every record (default: CR LF)
        sync: Flush the output to disk before returning (default: True)
        encoding: Text encoding of the source file (default: utf-8)
    """
    input_path: Path = DEFAULT_INPUT
    output_path: Path = DEFAULT_OUTPUT
    record_format: RecordFormat = RecordFormat.ANNOTATED
    line_terminator: str = "\r\n"
    sync: bool = True
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            ASM2MS_INPUT: Source file path
            ASM2MS_OUTPUT: Output file path
            ASM2MS_FORMAT: Record format ("annotated" or "bare")
            ASM2MS_NO_SYNC: Set to 1/true/yes to skip the durability flush

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if input_path := os.environ.get("ASM2MS_INPUT"):
            config.input_path = Path(input_path)

        if output_path := os.environ.get("ASM2MS_OUTPUT"):
            config.output_path = Path(output_path)

        if record_format := os.environ.get("ASM2MS_FORMAT"):
            try:
                config.record_format = RecordFormat(record_format.lower())
            except ValueError:
                pass  # Ignore invalid values

        if no_sync := os.environ.get("ASM2MS_NO_SYNC"):
            if no_sync.lower() in ("1", "true", "yes"):
                config.sync = False

        return config
