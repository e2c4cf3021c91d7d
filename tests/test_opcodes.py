"""
Unit Tests for the Opcode Table
===============================

Tests for the 256-entry Intel 8080 opcode table.

Test coverage includes:
- Totality of the table and valid lengths for every opcode
- Agreement between the table and the nibble length rule
- Representative entries from every instruction group
- Undocumented alias opcodes
- Lookup edge cases
"""

import dataclasses

import pytest

from i8080_dis.disassembler.opcodes import (
    MNEMONICS,
    OPCODE_TABLE,
    UNDOCUMENTED_OPCODES,
    OpcodeEntry,
    expected_length,
    is_alias,
    lookup,
    opcodes_for,
)


# =============================================================================
# Table Invariants
# =============================================================================

class TestTableInvariants:
    """Tests for the construction-time invariants of the table."""

    def test_table_has_256_entries(self):
        """Every byte value has a slot."""
        assert len(OPCODE_TABLE) == 256

    @pytest.mark.parametrize("opcode", range(256))
    def test_every_opcode_has_valid_entry(self, opcode):
        """Lookup is total and every length is 1, 2 or 3."""
        entry = lookup(opcode)

        assert isinstance(entry, OpcodeEntry)
        assert entry.length in (1, 2, 3)
        assert entry.mnemonic

    def test_lengths_match_nibble_rule(self):
        """The octal-built table agrees with the nibble length rule."""
        mismatches = [
            opcode for opcode in range(256)
            if OPCODE_TABLE[opcode].length != expected_length(opcode)
        ]
        assert mismatches == []

    def test_length_distribution(self):
        """30 three-byte, 18 two-byte and 208 one-byte opcodes."""
        lengths = [entry.length for entry in OPCODE_TABLE]

        assert lengths.count(3) == 30
        assert lengths.count(2) == 18
        assert lengths.count(1) == 208

    def test_entries_are_immutable(self):
        """Entries are frozen."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            OPCODE_TABLE[0].length = 3

    def test_operand_size(self):
        """operand_size is the number of trailing bytes."""
        assert lookup(0x00).operand_size == 0
        assert lookup(0x3E).operand_size == 1
        assert lookup(0xC3).operand_size == 2


# =============================================================================
# Instruction Groups
# =============================================================================

class TestInstructionGroups:
    """Spot checks of entries across the instruction set."""

    @pytest.mark.parametrize("opcode, length, mnemonic, template", [
        # Data transfer
        (0x01, 3, "LXI", "B"),
        (0x11, 3, "LXI", "D"),
        (0x21, 3, "LXI", "H"),
        (0x31, 3, "LXI", "SP"),
        (0x02, 1, "STAX", "B"),
        (0x0A, 1, "LDAX", "B"),
        (0x12, 1, "STAX", "D"),
        (0x1A, 1, "LDAX", "D"),
        (0x22, 3, "SHLD", ""),
        (0x2A, 3, "LHLD", ""),
        (0x32, 3, "STA", ""),
        (0x3A, 3, "LDA", ""),
        (0x06, 2, "MVI", "B"),
        (0x36, 2, "MVI", "M"),
        (0x3E, 2, "MVI", "A"),
        (0x41, 1, "MOV", "B,C"),
        (0x77, 1, "MOV", "M,A"),
        (0x7E, 1, "MOV", "A,M"),
        (0xEB, 1, "XCHG", ""),
        # 16-bit arithmetic
        (0x03, 1, "INX", "B"),
        (0x0B, 1, "DCX", "B"),
        (0x23, 1, "INX", "H"),
        (0x3B, 1, "DCX", "SP"),
        (0x09, 1, "DAD", "B"),
        (0x39, 1, "DAD", "SP"),
        # 8-bit arithmetic and logic
        (0x3C, 1, "INR", "A"),
        (0x35, 1, "DCR", "M"),
        (0x80, 1, "ADD", "B"),
        (0x86, 1, "ADD", "M"),
        (0x8F, 1, "ADC", "A"),
        (0x90, 1, "SUB", "B"),
        (0x9E, 1, "SBB", "M"),
        (0xA7, 1, "ANA", "A"),
        (0xAF, 1, "XRA", "A"),
        (0xB0, 1, "ORA", "B"),
        (0xBE, 1, "CMP", "M"),
        (0xC6, 2, "ADI", ""),
        (0xCE, 2, "ACI", ""),
        (0xD6, 2, "SUI", ""),
        (0xDE, 2, "SBI", ""),
        (0xE6, 2, "ANI", ""),
        (0xEE, 2, "XRI", ""),
        (0xF6, 2, "ORI", ""),
        (0xFE, 2, "CPI", ""),
        # Rotates and flags
        (0x07, 1, "RLC", ""),
        (0x0F, 1, "RRC", ""),
        (0x17, 1, "RAL", ""),
        (0x1F, 1, "RAR", ""),
        (0x27, 1, "DAA", ""),
        (0x2F, 1, "CMA", ""),
        (0x37, 1, "STC", ""),
        (0x3F, 1, "CMC", ""),
        # Branches
        (0xC3, 3, "JMP", ""),
        (0xC2, 3, "JNZ", ""),
        (0xCA, 3, "JZ", ""),
        (0xD2, 3, "JNC", ""),
        (0xDA, 3, "JC", ""),
        (0xE2, 3, "JPO", ""),
        (0xEA, 3, "JPE", ""),
        (0xF2, 3, "JP", ""),
        (0xFA, 3, "JM", ""),
        (0xCD, 3, "CALL", ""),
        (0xC4, 3, "CNZ", ""),
        (0xFC, 3, "CM", ""),
        (0xC9, 1, "RET", ""),
        (0xC0, 1, "RNZ", ""),
        (0xF8, 1, "RM", ""),
        (0xC7, 1, "RST", "0"),
        (0xDF, 1, "RST", "3"),
        (0xFF, 1, "RST", "7"),
        (0xE9, 1, "PCHL", ""),
        # Stack, I/O and machine control
        (0xC5, 1, "PUSH", "B"),
        (0xF5, 1, "PUSH", "PSW"),
        (0xE1, 1, "POP", "H"),
        (0xF1, 1, "POP", "PSW"),
        (0xE3, 1, "XTHL", ""),
        (0xF9, 1, "SPHL", ""),
        (0xD3, 2, "OUT", ""),
        (0xDB, 2, "IN", ""),
        (0xF3, 1, "DI", ""),
        (0xFB, 1, "EI", ""),
        (0x76, 1, "HLT", ""),
        (0x00, 1, "NOP", ""),
    ])
    def test_entry(self, opcode, length, mnemonic, template):
        """Test a single table entry."""
        entry = lookup(opcode)

        assert entry.length == length
        assert entry.mnemonic == mnemonic
        assert entry.operand_template == template

    def test_mov_block(self):
        """$40-$7F is MOV except $76 (HLT)."""
        movs = opcodes_for("MOV")

        assert len(movs) == 63
        assert 0x76 not in movs
        assert min(movs) == 0x40
        assert max(movs) == 0x7F

    def test_mnemonics_set(self):
        """The canonical mnemonic set contains no placeholder names."""
        assert "MOV" in MNEMONICS
        assert "RST" in MNEMONICS
        assert len(MNEMONICS) == 78


# =============================================================================
# Undocumented Opcodes
# =============================================================================

class TestAliases:
    """Tests for undocumented duplicate encodings."""

    def test_nop_aliases(self):
        """Seven extra encodings decode as NOP."""
        assert opcodes_for("NOP") == [0x00, 0x08, 0x10, 0x18, 0x20, 0x28, 0x30, 0x38]

    def test_jmp_alias(self):
        """$CB is JMP, identical to $C3."""
        assert lookup(0xCB) == lookup(0xC3)
        assert opcodes_for("jmp") == [0xC3, 0xCB]

    def test_ret_alias(self):
        """$D9 is RET, identical to $C9."""
        assert lookup(0xD9) == lookup(0xC9)

    def test_call_aliases(self):
        """$DD, $ED and $FD are CALL, identical to $CD."""
        assert opcodes_for("CALL") == [0xCD, 0xDD, 0xED, 0xFD]
        for opcode in (0xDD, 0xED, 0xFD):
            assert lookup(opcode) == lookup(0xCD)

    def test_is_alias(self):
        """Only undocumented encodings are reported as aliases."""
        assert len(UNDOCUMENTED_OPCODES) == 12
        assert is_alias(0xCB)
        assert is_alias(0x08)
        assert not is_alias(0xC3)
        assert not is_alias(0x00)


# =============================================================================
# Lookup Edge Cases
# =============================================================================

class TestLookup:
    """Tests for lookup argument handling."""

    @pytest.mark.parametrize("opcode", [-1, 256, 0x1000])
    def test_out_of_range(self, opcode):
        """Non-byte values are rejected."""
        with pytest.raises(ValueError):
            lookup(opcode)

    def test_unknown_mnemonic(self):
        """Unknown mnemonic gives no opcodes."""
        assert opcodes_for("LDAA") == []

    def test_package_exports(self):
        """Mnemonic helpers are part of the package API."""
        import i8080_dis

        assert i8080_dis.opcodes_for("RET") == [0xC9, 0xD9]
        assert i8080_dis.MNEMONICS is MNEMONICS
        assert "opcodes_for" in i8080_dis.__all__
        assert "MNEMONICS" in i8080_dis.__all__
