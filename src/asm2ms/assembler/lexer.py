"""
Source Line Lexer
=================

Splits assembly source into lines and lines into tokens.

The source language is deliberately simple: one instruction per line,
the mnemonic first, then operands. Tokens are separated by single spaces
and a comma may trail (or lead) any token:

    mov R1, R2
    addi R0, R1, 16

Splitting is on every single space, so two consecutive spaces produce an
empty token. This keeps the operand count of a line exactly what was
written; "mov R1,  R2" is reported as a three-operand mov.

Example
-------
>>> from asm2ms.assembler.lexer import tokenize_line
>>> tokenize_line("mov R1, R2")
[Token('mov', 1), Token('R1', 5), Token('R2', 9)]
"""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Token:
    """
    One space-separated word of a source line.

    Attributes:
        text: Token text with surrounding commas removed
        column: Column of the first character of text (1-indexed)
    """
    text: str
    column: int

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.column})"


def split_lines(source: str) -> Iterator[tuple[int, str]]:
    """
    Split source text into numbered lines.

    Lines end with "\\n" or "\\r\\n". A final line terminator does not start
    an extra empty line.

    Yields:
        (line_number, line_text) pairs, line numbers starting at 1
    """
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for number, line in enumerate(lines, start=1):
        if line.endswith("\r"):
            line = line[:-1]
        yield number, line


def tokenize_line(line: str) -> list[Token]:
    """
    Split a line on single spaces and strip commas from every token.

    Args:
        line: One source line without its terminator

    Returns:
        All tokens of the line, including empty ones
    """
    tokens = []
    column = 1
    for word in line.split(" "):
        stripped = word.strip(",")
        offset = len(word) - len(word.lstrip(",")) if stripped else 0
        tokens.append(Token(stripped, column + offset))
        column += len(word) + 1
    return tokens
