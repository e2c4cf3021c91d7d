"""
i8080-dis Disassembler Module
=============================

This module provides the Intel 8080 instruction-stream decoder:

- opcodes: the total 256-entry opcode table
- decoder: the forward, single-pass stream decoder
- formatter: listing-line rendering

Usage:
    from i8080_dis.disassembler import disassemble, format_listing

    records = disassemble(image)
    print(format_listing(records))

Copyright (c) 2026 i8080-dis Contributors
"""

from .opcodes import MNEMONICS, OPCODE_TABLE, OpcodeEntry, lookup, is_alias, opcodes_for
from .decoder import (
    ADDRESS_SPACE,
    Decoder,
    DecodeOutcome,
    InstructionRecord,
    TruncatedInstruction,
    decode,
    decode_one,
    disassemble,
)
from .formatter import format_compact, format_listing, format_operand, format_record

__all__ = [
    "MNEMONICS",
    "OPCODE_TABLE",
    "OpcodeEntry",
    "lookup",
    "is_alias",
    "opcodes_for",
    "ADDRESS_SPACE",
    "Decoder",
    "DecodeOutcome",
    "InstructionRecord",
    "TruncatedInstruction",
    "decode",
    "decode_one",
    "disassemble",
    "format_compact",
    "format_listing",
    "format_operand",
    "format_record",
]
