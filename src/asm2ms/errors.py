"""
asm2ms Error Hierarchy
======================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from Asm2msError, allowing callers to catch every
assembler-related failure with a single except clause if desired.

Exception Hierarchy
-------------------
Asm2msError (base)
├── IoError - reading the source or writing the output failed (fatal)
└── AssemblerError (per-line, recoverable)
    ├── UndefinedCommandError - mnemonic is not in the instruction table
    ├── OperandCountMismatchError - wrong number of operands for a mnemonic
    ├── UnsupportedRegisterError - operand is not one of R0..R5
    └── MalformedImmediateError - operand is not an unsigned 8-bit integer

Severity
--------
IoError aborts the whole run. Every AssemblerError only rejects the line it
was raised for: the assembler records it and moves on to the next line, so
a single run reports every bad line at once.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Asm2msError(Exception):
    """
    Base exception for all asm2ms errors.

        try:
            assembler.assemble_file("program.asm")
        except Asm2msError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# I/O Exceptions
# =============================================================================

class IoError(Asm2msError):
    """
    Reading the source or writing the output failed.

    This is the only fatal error of an assembly run. The original
    exception (OSError, UnicodeDecodeError) is kept as __cause__ by the
    code raising it.

    Attributes:
        path: The file that could not be read or written
        reason: Description of the underlying failure
    """

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(Asm2msError):
    """
    Base exception for all per-line assembler errors.

    Resolvers raise these without a location; the assembler attaches the
    location and source text of the offending line with with_location()
    before recording the error.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def with_location(
        self,
        location: SourceLocation,
        source_line: Optional[str] = None,
    ) -> "AssemblerError":
        """
        Attach a source location to this error and return it.

        Only fills in what is missing, so an error that already knows a more
        precise column keeps it.
        """
        if self.location is None:
            self.location = location
        if self.source_line is None:
            self.source_line = source_line
        self.args = (self._format_message(),)
        return self

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            program.asm:3:5: error: unsupported register 'R9'
                mov R9, R1
                    ^
            hint: registers are R0 to R5
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class UndefinedCommandError(AssemblerError):
    """
    The first token of a line is not a known mnemonic.

    Mnemonics are matched literally and in lowercase, so "MOV" is
    reported here as well.
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic

        hint = None
        if mnemonic.lower() != mnemonic:
            hint = f"mnemonics are lowercase, did you mean '{mnemonic.lower()}'?"

        super().__init__(
            f"undefined command '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class OperandCountMismatchError(AssemblerError):
    """
    A known mnemonic was given the wrong number of operands.

    Example:
        mov R1, R2, R3  ; Error: mov takes 2 operands
    """

    def __init__(
        self,
        mnemonic: str,
        expected: int,
        actual: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.expected = expected
        self.actual = actual

        operand_word = "operand" if expected == 1 else "operands"
        super().__init__(
            f"'{mnemonic}' takes {expected} {operand_word}, got {actual}",
            location=location,
            hint="operands are separated by single spaces",
            source_line=source_line,
        )


class UnsupportedRegisterError(AssemblerError):
    """An operand in a register slot is not one of R0 to R5."""

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            f"unsupported register '{token}'",
            location=location,
            hint="registers are R0 to R5",
            source_line=source_line,
        )


class MalformedImmediateError(AssemblerError):
    """
    An operand in an immediate slot is not an unsigned 8-bit integer.

    The parse diagnostic is kept verbatim in `reason`. Values above 255
    are rejected, never wrapped.
    """

    def __init__(
        self,
        token: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        self.reason = reason
        super().__init__(
            f"malformed immediate '{token}': {reason}",
            location=location,
            hint="immediates are decimal values from 0 to 255",
            source_line=source_line,
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects per-line errors for batch reporting.

    The assembler uses this to keep going after a rejected line, so one run
    reports every bad line at once.

    Example:
        collector = ErrorCollector()
        collector.add(UndefinedCommandError("xyz"))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: list[AssemblerError] = []

    def add(self, error: AssemblerError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """
        Format all errors for display.

        Returns:
            Formatted string with all errors and a count summary
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")  # Blank line between errors

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
