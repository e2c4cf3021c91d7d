"""
Intel 8080 Opcode Table
=======================

This module defines the complete Intel 8080 opcode table: one entry for
every one of the 256 possible opcode byte values, giving the total
instruction length, the mnemonic, and the fixed operand template.

Opcode Structure
----------------
The 8080 opcode byte splits naturally into three octal fields:

    7 6 | 5 4 3 | 2 1 0
     x  |   y   |   z

- x=0: misc loads, 16-bit arithmetic, INR/DCR/MVI, rotates
- x=1: MOV r[y],r[z] (with 01 110 110 being HLT)
- x=2: ALU op[y] on register r[z]
- x=3: returns, jumps, calls, stack ops, I/O, immediates, RST

Register fields index "B C D E H L M A"; register-pair fields index
"B D H SP" (or "B D H PSW" for PUSH/POP).

Instruction Lengths
-------------------
- 3 bytes: 16-bit immediates and addresses (LXI, SHLD, LHLD, STA, LDA),
  jumps and calls
- 2 bytes: one 8-bit immediate (MVI, ADI..CPI, IN, OUT)
- 1 byte: everything else

Undocumented Opcodes
--------------------
Twelve opcode values are undocumented duplicates of documented ones:

    $08 $10 $18 $20 $28 $30 $38  -> NOP
    $CB                          -> JMP
    $D9                          -> RET
    $DD $ED $FD                  -> CALL

They are real table entries and decode exactly like the canonical
encoding. is_alias() reports them for callers that care.

Operand Templates
-----------------
Register and restart-vector operands are baked into the table
("B,C", "SP", "PSW", "3"). Instructions whose only operand is the
trailing bytes (JMP, CALL, STA, ADI, IN, ...) carry an empty template;
their operand text is synthesized from the consumed bytes by the
formatter.

Reference
---------
- Intel 8080 Microcomputer Systems User's Manual (1975)

Copyright (c) 2026 i8080-dis Contributors
"""

from dataclasses import dataclass

from ..errors import OpcodeTableError


# =============================================================================
# Opcode Entry
# =============================================================================

@dataclass(frozen=True)
class OpcodeEntry:
    """
    Decoding information for one opcode byte value.

    This dataclass is immutable (frozen) so the table cannot be modified
    at runtime.

    Attributes:
        length: Total instruction length in bytes, including the opcode (1-3)
        mnemonic: The instruction mnemonic (e.g., "MOV", "JMP")
        operand_template: Fixed operand text (e.g., "B,C", "SP"), or ""
    """
    length: int
    mnemonic: str
    operand_template: str = ""

    @property
    def operand_size(self) -> int:
        """Number of trailing operand bytes (0, 1, or 2)."""
        return self.length - 1

    def __repr__(self) -> str:
        return (
            f"OpcodeEntry(length={self.length}, mnemonic={self.mnemonic!r}, "
            f"operand_template={self.operand_template!r})"
        )


# =============================================================================
# Field Decoding Tables
# =============================================================================

REGISTERS = ("B", "C", "D", "E", "H", "L", "M", "A")
REGISTER_PAIRS = ("B", "D", "H", "SP")
STACK_PAIRS = ("B", "D", "H", "PSW")
CONDITIONS = ("NZ", "Z", "NC", "C", "PO", "PE", "P", "M")

ALU_REGISTER_OPS = ("ADD", "ADC", "SUB", "SBB", "ANA", "XRA", "ORA", "CMP")
ALU_IMMEDIATE_OPS = ("ADI", "ACI", "SUI", "SBI", "ANI", "XRI", "ORI", "CPI")
ROTATE_AND_FLAG_OPS = ("RLC", "RRC", "RAL", "RAR", "DAA", "CMA", "STC", "CMC")

# z=2 in the x=0 quadrant: indirect loads/stores through a pair or address
_INDIRECT_OPS = (
    (1, "STAX", "B"),
    (1, "LDAX", "B"),
    (1, "STAX", "D"),
    (1, "LDAX", "D"),
    (3, "SHLD", ""),
    (3, "LHLD", ""),
    (3, "STA", ""),
    (3, "LDA", ""),
)

# z=3 in the x=3 quadrant
_MISC_OPS = (
    (3, "JMP", ""),
    (3, "JMP", ""),     # $CB, undocumented
    (2, "OUT", ""),
    (2, "IN", ""),
    (1, "XTHL", ""),
    (1, "XCHG", ""),
    (1, "DI", ""),
    (1, "EI", ""),
)

# z=1, q=1 in the x=3 quadrant
_RETURN_AND_SP_OPS = (
    (1, "RET", ""),
    (1, "RET", ""),     # $D9, undocumented
    (1, "PCHL", ""),
    (1, "SPHL", ""),
)

UNDOCUMENTED_OPCODES = frozenset({
    0x08, 0x10, 0x18, 0x20, 0x28, 0x30, 0x38,
    0xCB,
    0xD9,
    0xDD, 0xED, 0xFD,
})


# =============================================================================
# Table Construction
# =============================================================================

def _decode_fields(opcode: int) -> OpcodeEntry:
    """
    Build the entry for one opcode from its x/y/z octal fields.

    Every branch returns; there is no default case, so an opcode value
    that falls through is a construction bug caught by _build_table().
    """
    x = opcode >> 6
    y = (opcode >> 3) & 0x07
    z = opcode & 0x07
    p = y >> 1
    q = y & 0x01

    if x == 0:
        if z == 0:
            return OpcodeEntry(1, "NOP")
        if z == 1:
            if q == 0:
                return OpcodeEntry(3, "LXI", REGISTER_PAIRS[p])
            return OpcodeEntry(1, "DAD", REGISTER_PAIRS[p])
        if z == 2:
            return OpcodeEntry(*_INDIRECT_OPS[y])
        if z == 3:
            return OpcodeEntry(1, "DCX" if q else "INX", REGISTER_PAIRS[p])
        if z == 4:
            return OpcodeEntry(1, "INR", REGISTERS[y])
        if z == 5:
            return OpcodeEntry(1, "DCR", REGISTERS[y])
        if z == 6:
            return OpcodeEntry(2, "MVI", REGISTERS[y])
        return OpcodeEntry(1, ROTATE_AND_FLAG_OPS[y])

    if x == 1:
        # MOV M,M would sit here
        if y == 6 and z == 6:
            return OpcodeEntry(1, "HLT")
        return OpcodeEntry(1, "MOV", f"{REGISTERS[y]},{REGISTERS[z]}")

    if x == 2:
        return OpcodeEntry(1, ALU_REGISTER_OPS[y], REGISTERS[z])

    if z == 0:
        return OpcodeEntry(1, "R" + CONDITIONS[y])
    if z == 1:
        if q == 0:
            return OpcodeEntry(1, "POP", STACK_PAIRS[p])
        return OpcodeEntry(*_RETURN_AND_SP_OPS[p])
    if z == 2:
        return OpcodeEntry(3, "J" + CONDITIONS[y])
    if z == 3:
        return OpcodeEntry(*_MISC_OPS[y])
    if z == 4:
        return OpcodeEntry(3, "C" + CONDITIONS[y])
    if z == 5:
        if q == 0:
            return OpcodeEntry(1, "PUSH", STACK_PAIRS[p])
        return OpcodeEntry(3, "CALL")
    if z == 6:
        return OpcodeEntry(2, ALU_IMMEDIATE_OPS[y])
    return OpcodeEntry(1, "RST", str(y))


def expected_length(opcode: int) -> int:
    """
    Instruction length from the opcode's high and low nibbles.

    This is the historical length rule stated independently of the octal
    decoding above; the two must agree for every opcode.
    """
    high = opcode >> 4
    low = opcode & 0x0F

    if (
        (high <= 0x3 and low == 0x1)
        or ((0x2 <= high <= 0x3 or high >= 0xC) and low in (0x2, 0xA))
        or (high == 0xC and low in (0x3, 0xB))
        or (high >= 0xC and low in (0x4, 0xC, 0xD))
    ):
        return 3
    if (
        (high == 0xD and low in (0x3, 0xB))
        or ((high <= 0x3 or high >= 0xC) and low in (0x6, 0xE))
    ):
        return 2
    return 1


def _build_table() -> tuple[OpcodeEntry, ...]:
    """
    Build and validate the 256-entry opcode table.

    Raises:
        OpcodeTableError: If any entry is missing, has a length outside
            {1, 2, 3}, or disagrees with the nibble length rule.
    """
    table = tuple(_decode_fields(opcode) for opcode in range(256))

    if len(table) != 256:
        raise OpcodeTableError(f"opcode table has {len(table)} entries, expected 256")

    for opcode, entry in enumerate(table):
        if not isinstance(entry, OpcodeEntry):
            raise OpcodeTableError(f"opcode ${opcode:02X} has no table entry")
        if entry.length not in (1, 2, 3):
            raise OpcodeTableError(
                f"opcode ${opcode:02X} ({entry.mnemonic}) has invalid length {entry.length}"
            )
        if entry.length != expected_length(opcode):
            raise OpcodeTableError(
                f"opcode ${opcode:02X} ({entry.mnemonic}) has length {entry.length}, "
                f"expected {expected_length(opcode)}"
            )

    return table


# =============================================================================
# Opcode Table
# =============================================================================
# Indexed directly by opcode value. Built and validated once at import.
# =============================================================================

OPCODE_TABLE: tuple[OpcodeEntry, ...] = _build_table()

MNEMONICS = frozenset(entry.mnemonic for entry in OPCODE_TABLE)


# =============================================================================
# Lookup Functions
# =============================================================================

def lookup(opcode: int) -> OpcodeEntry:
    """
    Get the table entry for an opcode byte.

    Args:
        opcode: Opcode value, 0x00-0xFF

    Returns:
        The OpcodeEntry for that value. Never fails for a byte value.

    Raises:
        ValueError: If opcode is not a byte value
    """
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"opcode must be 0-255, got {opcode}")
    return OPCODE_TABLE[opcode]


def is_alias(opcode: int) -> bool:
    """Check if an opcode is an undocumented duplicate of another encoding."""
    return opcode in UNDOCUMENTED_OPCODES


def opcodes_for(mnemonic: str) -> list[int]:
    """
    Get every opcode value that decodes to the given mnemonic.

    Args:
        mnemonic: Instruction mnemonic (case-insensitive)

    Returns:
        Sorted list of opcode values (empty if the mnemonic is unknown)
    """
    mnemonic = mnemonic.upper()
    return [opcode for opcode, entry in enumerate(OPCODE_TABLE) if entry.mnemonic == mnemonic]
