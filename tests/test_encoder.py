# =============================================================================
# test_encoder.py - Instruction Encoder Tests
# =============================================================================
# Tests for instruction parsing, operand count checks and word encoding.
# Covers every command of the instruction table and every failure mode.
# =============================================================================

import pytest

from asm2ms.assembler.encoder import (
    check_operand_count,
    encode,
    encode_instruction,
    parse_instruction,
)
from asm2ms.assembler.lexer import tokenize_line
from asm2ms.cpu import Command, Template
from asm2ms.errors import (
    MalformedImmediateError,
    OperandCountMismatchError,
    SourceLocation,
    UndefinedCommandError,
    UnsupportedRegisterError,
)


# =============================================================================
# Encoding Tests
# =============================================================================

class TestEncode:
    """Test the encoded word of every command."""

    @pytest.mark.parametrize("mnemonic, operands, word", [
        ("nop", [], "0x00166600"),
        ("mov", ["R1", "R2"], "0x00126100"),
        ("movi", ["R3", "5"], "0x00168305"),
        ("jump", ["R4"], "0x01146600"),
        ("jumpi", ["255"], "0x0116e6ff"),
        ("jz", ["R1", "16"], "0x0231e610"),
        ("jnz", ["R2", "0"], "0x0332e600"),
        ("add", ["R0", "R1", "R2"], "0x00112000"),
        ("addi", ["R0", "R1", "16"], "0x0011e010"),
        ("and", ["R3", "R4", "R5"], "0x00045300"),
        ("andi", ["R5", "R4", "128"], "0x0004e580"),
        ("load", ["R2", "R1"], "0x00116500"),
        ("loadi", ["R5", "10"], "0x0016eb0a"),
    ])
    def test_words(self, mnemonic, operands, word):
        assert encode(mnemonic, operands) == word

    def test_nop_has_no_placeholders(self):
        word = encode("nop", [])
        assert "<" not in word and ">" not in word

    def test_mov_field_positions(self):
        """RX goes in the fourth nibble, RD in the sixth."""
        assert encode("mov", ["R1", "R2"]) == "0x001" + "2" + "6" + "1" + "00"

    def test_load_doubles_destination(self):
        """load R2 puts (2 << 1) + 1 = 5 in the destination field, not 2."""
        word = encode("load", ["R2", "R1"])
        assert word[7] == "5"

    def test_loadi_doubled_r5_is_hex(self):
        assert encode("loadi", ["R5", "0"])[7] == "b"

    def test_plain_commands_do_not_double(self):
        assert encode("mov", ["R2", "R1"]) == "0x00116200"

    def test_lowercase_registers(self):
        assert encode("mov", ["r1", "r2"]) == encode("mov", ["R1", "R2"])


# =============================================================================
# Failure Tests
# =============================================================================

class TestEncodeErrors:
    """Test failures raised while encoding."""

    def test_unsupported_register(self):
        with pytest.raises(UnsupportedRegisterError) as exc_info:
            encode("mov", ["R1", "R9"])
        assert exc_info.value.token == "R9"

    def test_first_bad_register_wins(self):
        """Resolution stops at the first failing operand."""
        with pytest.raises(UnsupportedRegisterError) as exc_info:
            encode("add", ["X", "R1", "Y"])
        assert exc_info.value.token == "X"

    def test_register_checked_before_immediate(self):
        with pytest.raises(UnsupportedRegisterError):
            encode("addi", ["R0", "R7", "abc"])

    def test_malformed_immediate(self):
        with pytest.raises(MalformedImmediateError):
            encode("movi", ["R1", "300"])

    def test_register_in_immediate_slot(self):
        with pytest.raises(MalformedImmediateError):
            encode("jumpi", ["R1"])

    def test_immediate_in_register_slot(self):
        with pytest.raises(UnsupportedRegisterError):
            encode("jump", ["12"])

    def test_undefined_command(self):
        with pytest.raises(UndefinedCommandError):
            encode("xyz", [])

    def test_undefined_command_regardless_of_operands(self):
        with pytest.raises(UndefinedCommandError):
            encode("xyz", ["R1", "R2"])

    def test_operand_count_mismatch(self):
        with pytest.raises(OperandCountMismatchError) as exc_info:
            encode("mov", ["R1", "R2", "R3"])
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3

    def test_nop_with_operand(self):
        with pytest.raises(OperandCountMismatchError):
            encode("nop", ["R1"])


# =============================================================================
# Instruction Tests
# =============================================================================

class TestInstruction:
    """Test the two-step parse/encode interface."""

    def test_parse_captures_table_data(self):
        instruction = parse_instruction(tokenize_line("addi R0, R1, 4"))
        assert instruction.command is Command.ADDI
        assert instruction.operand_count == 3
        assert instruction.template.text == "0x001<RX>e<RD><IMM>"
        assert not instruction.is_encoded

    def test_parse_unknown(self):
        instruction = parse_instruction(tokenize_line("halt"))
        assert instruction.command is Command.UNDEFINED
        assert instruction.operand_count is None
        assert instruction.template is None

    def test_encode_stores_word(self):
        tokens = tokenize_line("jump R3")
        instruction = parse_instruction(tokens)
        word = encode_instruction(instruction, tokens)
        assert instruction.word == word == "0x01136600"
        assert instruction.is_encoded

    def test_failed_encode_leaves_word_unset(self):
        tokens = tokenize_line("mov R1, R8")
        instruction = parse_instruction(tokens)
        with pytest.raises(UnsupportedRegisterError):
            encode_instruction(instruction, tokens)
        assert instruction.word is None

    def test_check_operand_count_for_undefined(self):
        tokens = tokenize_line("MOV R1, R2")
        with pytest.raises(UndefinedCommandError):
            check_operand_count(parse_instruction(tokens), tokens)

    def test_error_points_at_operand(self):
        line = "mov R1, R8"
        tokens = tokenize_line(line)
        location = SourceLocation("prog.asm", 4, 1)
        instruction = parse_instruction(tokens, line, location)
        with pytest.raises(UnsupportedRegisterError) as exc_info:
            encode_instruction(instruction, tokens)
        assert exc_info.value.location == SourceLocation("prog.asm", 4, 9)
        assert exc_info.value.source_line == line

    def test_short_line_reports_count_mismatch(self):
        """Too few tokens is an operand count error, not an IndexError."""
        tokens = tokenize_line("mov R1")
        instruction = parse_instruction(tokens)
        with pytest.raises(OperandCountMismatchError) as exc_info:
            encode_instruction(instruction, tokens)
        assert exc_info.value.actual == 1
        assert instruction.word is None

    def test_encode_undefined_instruction(self):
        tokens = tokenize_line("halt")
        with pytest.raises(UndefinedCommandError):
            encode_instruction(parse_instruction(tokens), tokens)

    def test_renders_instruction_template(self):
        """The word comes from the template captured on the instruction."""
        tokens = tokenize_line("mov R1, R2")
        instruction = parse_instruction(tokens)
        instruction.template = Template("0x<RX><RD>")
        assert encode_instruction(instruction, tokens) == "0x21"
