# =============================================================================
# test_isa.py - Instruction Set Tests
# =============================================================================
# Tests for the register file, template parsing and the command table.
# =============================================================================

import pytest

from asm2ms.cpu import COMMAND_TABLE, MNEMONICS, Command, Field, Register, Template
from asm2ms.cpu.isa import CommandInfo, _check_table


# =============================================================================
# Register Tests
# =============================================================================

class TestRegister:
    """Test register lookup and digit encoding."""

    @pytest.mark.parametrize("ordinal", range(6))
    def test_digit_is_ordinal(self, ordinal):
        """Each register encodes to its ordinal digit."""
        register = Register.from_name(f"R{ordinal}")
        assert register is not None
        assert register.digit == str(ordinal)

    @pytest.mark.parametrize("name", ["R6", "r1", "R", "R01", "", "X1"])
    def test_unknown_names(self, name):
        """Lookup is exact; anything else is not a register."""
        assert Register.from_name(name) is None


# =============================================================================
# Template Tests
# =============================================================================

class TestTemplate:
    """Test template parsing and rendering."""

    def test_fixed_template_has_no_fields(self):
        template = Template("0x00166600")
        assert template.fields == ()
        assert template.render({}) == "0x00166600"

    def test_segments(self):
        template = Template("0x001<RX>6<RD*>00")
        assert template.segments == ("0x001", Field.RX, "6", Field.RD_DOUBLED, "00")

    def test_doubled_field_is_distinct_from_plain(self):
        """<RD*> must not be read as <RD> followed by text."""
        template = Template("<RD*><RD>")
        assert template.fields == (Field.RD_DOUBLED, Field.RD)

    def test_render_does_not_rescan_values(self):
        """A value that looks like a placeholder is emitted as-is."""
        template = Template("<RD>-<RX>")
        assert template.render({Field.RD: "<RX>", Field.RX: "2"}) == "<RX>-2"

    def test_render_missing_field(self):
        with pytest.raises(KeyError):
            Template("0x<IMM>").render({})


# =============================================================================
# Command Table Tests
# =============================================================================

class TestCommandTable:
    """Test mnemonic lookup and per-command static data."""

    def test_thirteen_commands(self):
        assert len(COMMAND_TABLE) == 13
        assert Command.UNDEFINED not in COMMAND_TABLE
        assert MNEMONICS == {c.value for c in COMMAND_TABLE}

    @pytest.mark.parametrize("mnemonic", sorted(MNEMONICS))
    def test_lookup(self, mnemonic):
        assert Command.from_mnemonic(mnemonic).value == mnemonic

    @pytest.mark.parametrize("mnemonic", ["MOV", "Mov", "xyz", "", "mov,"])
    def test_lookup_is_literal(self, mnemonic):
        """No case folding: uppercase mnemonics are undefined."""
        assert Command.from_mnemonic(mnemonic) is Command.UNDEFINED

    @pytest.mark.parametrize("command, count", [
        (Command.NOP, 0),
        (Command.JUMP, 1),
        (Command.JUMPI, 1),
        (Command.JZ, 2),
        (Command.JNZ, 2),
        (Command.MOV, 2),
        (Command.MOVI, 2),
        (Command.LOAD, 2),
        (Command.LOADI, 2),
        (Command.ADD, 3),
        (Command.ADDI, 3),
        (Command.AND, 3),
        (Command.ANDI, 3),
    ])
    def test_operand_counts(self, command, count):
        assert command.operand_count == count

    def test_undefined_has_no_count(self):
        assert Command.UNDEFINED.operand_count is None
        assert Command.UNDEFINED.info is None

    def test_templates_fill_every_field_once(self):
        for command, info in COMMAND_TABLE.items():
            assert sorted(f.value for f in info.template.fields) == \
                sorted(f.value for f in info.operands), command
            assert len(set(info.template.fields)) == len(info.template.fields)

    def test_only_load_commands_use_doubled_field(self):
        users = {c for c, info in COMMAND_TABLE.items()
                 if Field.RD_DOUBLED in info.operands}
        assert users == {Command.LOAD, Command.LOADI}

    def test_words_are_ten_characters(self):
        """Every template renders to '0x' plus eight hex digits."""
        for info in COMMAND_TABLE.values():
            values = {f: "00" if f is Field.IMM else "0" for f in info.operands}
            word = info.template.render(values)
            assert len(word) == 10
            assert word.startswith("0x")
            int(word, 16)


class TestTableCheck:
    """The import-time table check rejects inconsistent entries."""

    def test_shipped_table_passes(self):
        _check_table()

    def test_repeated_placeholder(self):
        table = {
            Command.MOV: CommandInfo(Template("0x<RD><RD>"), (Field.RD, Field.RD)),
        }
        with pytest.raises(ValueError, match="repeats a placeholder"):
            _check_table(table)

    def test_operand_without_placeholder(self):
        table = {
            Command.MOV: CommandInfo(Template("0x<RD>00"), (Field.RD, Field.RX)),
        }
        with pytest.raises(ValueError, match="does not match operands"):
            _check_table(table)
