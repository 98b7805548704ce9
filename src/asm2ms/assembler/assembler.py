"""
asm2ms Assembler - Main Interface
=================================

This module provides the Assembler class, the primary interface for
turning assembly source into a .ms file. It drives the line pipeline:

1. Split the source into lines and each line into tokens
2. Look up the mnemonic and check the operand count
3. Encode the instruction (operand resolution + template rendering)
4. Append a record for the line to the output buffer

Lines are independent. A line that fails any step is reported and left
out of the output; the pass always continues with the next line. Only
reading the source or writing the output can abort a run.

Empty lines are skipped. A line holding only spaces has an empty mnemonic
and is reported as an undefined command.

Example Usage
-------------
>>> from asm2ms.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... movi R1, 5
... add R0, R0, R1
... ''')
b'0x00168105 ; movi R1, 5\r\n0x00101000 ; add R0, R0, R1\r\n'
>>>
>>> asm.write_output("program.ms")

Command-Line Usage
------------------
    $ asm2ms                          # program.asm -> program.ms
    $ asm2ms boot.asm -o boot.ms -l boot.lst
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import os

from asm2ms.assembler.encoder import (
    Instruction,
    encode_instruction,
    parse_instruction,
)
from asm2ms.assembler.lexer import split_lines, tokenize_line
from asm2ms.config import AssemblerConfig, RecordFormat
from asm2ms.errors import (
    AssemblerError,
    ErrorCollector,
    IoError,
    SourceLocation,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Output Records
# =============================================================================

@dataclass(frozen=True)
class Record:
    """
    One line of output: an encoded word and the source it came from.

    Attributes:
        word: The encoded instruction word ("0x........")
        source: The source line verbatim
        line: Source line number (1-indexed)
    """
    word: str
    source: str
    line: int = 0


def format_record(
    record: Record,
    record_format: RecordFormat = RecordFormat.ANNOTATED,
    line_terminator: str = "\r\n",
) -> bytes:
    """
    Serialize a record for the .ms file.

    Example:
        >>> format_record(Record("0x00166600", "nop"))
        b'0x00166600 ; nop\\r\\n'
    """
    text = f"{record.word}{record_format.separator}{record.source}{line_terminator}"
    return text.encode("utf-8")


# =============================================================================
# File I/O
# =============================================================================

def read_source(path: str | Path, encoding: str = "utf-8") -> str:
    """
    Read a whole source file.

    Raises:
        IoError: If the file cannot be opened, read or decoded
    """
    path = Path(path)
    try:
        data = path.read_bytes()
        text = data.decode(encoding)
    except OSError as e:
        raise IoError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise IoError(path, f"not valid {encoding} text: {e.reason}") from e

    logger.info(f"Read {len(data)} bytes")
    return text


def write_output(path: str | Path, data: bytes, sync: bool = True) -> None:
    """
    Write the output buffer, replacing any existing file.

    Args:
        path: Output file path
        data: The complete output buffer
        sync: Flush the file to disk before returning

    Raises:
        IoError: If the file cannot be opened, written or flushed
    """
    path = Path(path)
    try:
        with open(path, "wb") as f:
            f.write(data)
            logger.info(f"Saved {len(data)} bytes")
            if sync:
                f.flush()
                os.fsync(f.fileno())
                logger.info("Data synced")
    except OSError as e:
        raise IoError(path, e.strerror or str(e)) from e


# =============================================================================
# Assembler
# =============================================================================

class Assembler:
    """
    Main assembler class.

    Holds the result of the last assemble call: the records, the output
    buffer and the per-line errors. Each assemble call starts from scratch.

    Attributes:
        config: Output format and I/O settings
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()
        self._records: list[Record] = []
        self._rejected: list[tuple[int, str]] = []
        self._errors = ErrorCollector()
        self._output = b""
        self._source_file: Optional[Path] = None

    def _reset(self) -> None:
        self._records = []
        self._rejected = []
        self._errors.clear()
        self._output = b""

    # =========================================================================
    # Assembly
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> bytes:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The output buffer (all records of successfully encoded lines)
        """
        self._reset()

        for number, line in split_lines(source):
            if not line:
                logger.debug(f"{filename}:{number}: empty line skipped")
                continue

            record = self._assemble_line(line, number, filename)
            if record is not None:
                self._records.append(record)
            else:
                self._rejected.append((number, line))

        self._output = b"".join(
            format_record(r, self.config.record_format, self.config.line_terminator)
            for r in self._records
        )
        return self._output

    def _assemble_line(self, line: str, number: int, filename: str) -> Optional[Record]:
        """Run one line through the pipeline, recording any error."""
        location = SourceLocation(filename, number, 1)
        tokens = tokenize_line(line)
        instruction: Instruction = parse_instruction(tokens, line, location)

        try:
            word = encode_instruction(instruction, tokens)
        except AssemblerError as e:
            e.with_location(location, line)
            self._errors.add(e)
            logger.info(f"{location}: {e.message}")
            return None

        return Record(word, line, number)

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble a source file.

        Raises:
            IoError: If the file cannot be read
        """
        filepath = Path(filepath)
        self._source_file = filepath
        source = read_source(filepath, self.config.encoding)
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output
    # =========================================================================

    def write_output(self, filepath: str | Path | None = None) -> None:
        """
        Write the output buffer to a .ms file.

        Args:
            filepath: Output path (default: config.output_path)

        Raises:
            IoError: If the file cannot be written
        """
        write_output(
            filepath if filepath is not None else self.config.output_path,
            self._output,
            sync=self.config.sync,
        )

    def get_listing(self) -> str:
        """
        Format an assembly listing.

        One row per non-empty source line, in source order: the line number,
        the encoded word (or ********** for rejected lines) and the source.
        """
        rows = [(r.line, r.word, r.source) for r in self._records]
        rows += [(number, "*" * 10, line) for number, line in self._rejected]
        rows.sort()
        return "".join(f"{n:5d}  {word:<10}  {text}\n" for n, word, text in rows)

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write the assembly listing to a text file.

        Raises:
            IoError: If the file cannot be written
        """
        write_output(filepath, self.get_listing().encode("utf-8"), sync=False)

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_output(self) -> bytes:
        return self._output

    def get_records(self) -> list[Record]:
        return list(self._records)

    def get_source_file(self) -> Optional[Path]:
        return self._source_file

    def has_errors(self) -> bool:
        return self._errors.has_errors()

    def get_errors(self) -> list[AssemblerError]:
        return list(self._errors.errors)

    def get_error_report(self) -> str:
        return self._errors.report()


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Assemble source code and return the output buffer.

    Per-line errors do not raise; use an Assembler instance to inspect them.
    """
    asm = Assembler(config)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Assemble a source file and return the output buffer.

    Raises:
        IoError: If the file cannot be read
    """
    asm = Assembler(config)
    return asm.assemble_file(filepath)
