"""
Listing Line Formatter
======================

Renders decoded instructions as listing text. Every function here is
pure: nothing is printed, and colour or other terminal styling is left
to the caller.

Line Layout
-----------
    0000  21 34 12  LXI	H,$1234
    0003  3e 7f     MVI	A,#0x7f
    0005  00        NOP

- Address: 4 lowercase hex digits
- Byte dump: three 3-character slots, "xx " per byte or "   " padding
- Mnemonic, then a tab and the operand text when there is one

Operand Text
------------
The opcode's fixed template (register names) comes first. Operand bytes
are rendered as:

- 1 byte:  #0x7f   (8-bit immediate)
- 2 bytes: $1234   (16-bit value; stored low byte first, shown high first)

When both exist they are joined with a comma ("H,$1234").

Copyright (c) 2026 i8080-dis Contributors
"""

from typing import Iterable


BYTE_SLOTS = 3
BYTE_PAD = "   "


def format_immediate(operand_bytes: bytes) -> str:
    """
    Synthesize operand text from the trailing instruction bytes.

    Args:
        operand_bytes: 0, 1 or 2 bytes, in image order

    Returns:
        "" for no bytes, "#0xNN" for one byte, "$HHLL" for two
    """
    if len(operand_bytes) == 1:
        return f"#0x{operand_bytes[0]:02x}"
    if len(operand_bytes) == 2:
        # Little-endian in memory, big-endian on screen
        return f"${operand_bytes[1]:02x}{operand_bytes[0]:02x}"
    return ""


def format_operand(template: str, operand_bytes: bytes) -> str:
    """
    Combine the table template with the synthesized operand text.

    Args:
        template: Fixed operand text from the opcode table (may be "")
        operand_bytes: Trailing bytes consumed for the instruction

    Returns:
        The complete operand text, e.g. "B,C", "A,#0x7f", "$1234", or ""
    """
    synthesized = format_immediate(operand_bytes)
    if template and synthesized:
        return f"{template},{synthesized}"
    return template or synthesized


def format_bytes(raw_bytes: bytes) -> str:
    """
    Render the byte dump column, padded so every instruction lines up.

    Each byte takes "xx " and each missing byte "   ", so the column is
    always nine characters wide (including the trailing space).
    """
    slots = [f"{b:02x} " for b in raw_bytes]
    slots.extend([BYTE_PAD] * (BYTE_SLOTS - len(slots)))
    return "".join(slots)


def format_record(record) -> str:
    """
    Format one instruction record as a listing line.

    Args:
        record: An InstructionRecord

    Returns:
        The listing line, without a trailing newline
    """
    line = f"{record.address:04x}  {format_bytes(record.raw_bytes)} {record.mnemonic}"
    if record.operand_text:
        line += f"\t{record.operand_text}"
    return line


def format_compact(record) -> str:
    """Format a record without the byte dump: address, mnemonic and operand."""
    if record.operand_text:
        return f"{record.address:04x}  {record.mnemonic}\t{record.operand_text}"
    return f"{record.address:04x}  {record.mnemonic}"


def format_listing(records: Iterable, show_bytes: bool = True) -> str:
    """
    Format a sequence of records as a multi-line listing.

    Args:
        records: InstructionRecords in address order
        show_bytes: Include the byte dump column

    Returns:
        One line per record joined with newlines (no trailing newline)
    """
    render = format_record if show_bytes else format_compact
    return "\n".join(render(record) for record in records)
