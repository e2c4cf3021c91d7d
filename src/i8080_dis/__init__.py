"""
i8080-dis - Intel 8080 Disassembler
===================================

This package decodes raw Intel 8080 machine-code images into assembly
listings: one line per instruction with address, raw bytes, mnemonic and
operands.

Main Components
---------------
- **disassembler**: opcode table, stream decoder and line formatter
- **loader**: reads an image file into memory
- **cli**: the ``i8080dis`` command-line tool

Quick Start
-----------
    >>> from i8080_dis import disassemble, format_listing
    >>> records = disassemble(bytes([0x3E, 0x7F, 0x76]))
    >>> print(format_listing(records))
    0000  3e 7f     MVI	A,#0x7f
    0002  76        HLT

Or use the command-line tool:
    $ i8080dis rom.bin

Reference Documentation
-----------------------
- Intel 8080 Microcomputer Systems User's Manual (1975)
"""

__version__ = "1.0.0"
__author__ = "i8080-dis Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from i8080_dis.errors import (
    I8080Error,
    ImageUnavailableError,
    ImageTooLargeError,
    DecodeError,
    TruncatedInstructionError,
    OpcodeTableError,
)
from i8080_dis.disassembler import (
    MNEMONICS,
    OPCODE_TABLE,
    OpcodeEntry,
    lookup,
    is_alias,
    opcodes_for,
    Decoder,
    InstructionRecord,
    TruncatedInstruction,
    decode,
    decode_one,
    disassemble,
    format_listing,
    format_record,
)
from i8080_dis.loader import load_image
from i8080_dis.config import ListingConfig

__all__ = [
    "__version__",
    # Errors
    "I8080Error",
    "ImageUnavailableError",
    "ImageTooLargeError",
    "DecodeError",
    "TruncatedInstructionError",
    "OpcodeTableError",
    # Disassembler
    "MNEMONICS",
    "OPCODE_TABLE",
    "OpcodeEntry",
    "lookup",
    "is_alias",
    "opcodes_for",
    "Decoder",
    "InstructionRecord",
    "TruncatedInstruction",
    "decode",
    "decode_one",
    "disassemble",
    "format_listing",
    "format_record",
    # Loading and configuration
    "load_image",
    "ListingConfig",
]
