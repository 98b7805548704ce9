"""
Operand Resolvers
=================

Turn operand tokens into field values for the instruction encoder.

- resolve_register: "r3" -> Register.R3, anything else -> None
- resolve_immediate: "5" -> "05", "255" -> "ff", "256" -> error
- double_register: Register.R2 -> "5" (the load/loadi destination field)
"""

import re
from typing import Optional

from asm2ms.cpu import Register
from asm2ms.errors import MalformedImmediateError


IMMEDIATE_MAX = 0xFF

# Unsigned integer syntax: digits with an optional leading plus sign
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def resolve_register(token: str) -> Optional[Register]:
    """
    Resolve a register operand.

    The token is upper-cased and must then be exactly one of R0 to R5.

    Returns:
        The register, or None when the token is not a register. Callers
        must check for None before using the result.
    """
    return Register.from_name(token.upper())


def resolve_immediate(token: str) -> str:
    """
    Resolve an 8-bit unsigned immediate operand.

    Args:
        token: Decimal integer text

    Returns:
        The value as two lowercase hex digits

    Raises:
        MalformedImmediateError: If the token is not an integer in 0..255
    """
    if not token:
        raise MalformedImmediateError(token, "cannot parse integer from empty string")
    if not _UNSIGNED_RE.fullmatch(token):
        raise MalformedImmediateError(token, "invalid digit found in string")

    value = int(token)
    if value > IMMEDIATE_MAX:
        raise MalformedImmediateError(token, "number too large to fit in target type")

    return f"{value:02x}"


def double_register(register: Register) -> str:
    """
    Encode the doubled destination field used by load and loadi.

    The ordinal is shifted left one bit and the low bit is set, then
    written as lowercase hex without padding (R0..R5 -> 1, 3, 5, 7, 9, b).
    """
    return f"{(register.value << 1) + 1:x}"
