"""
Intel 8080 Stream Decoder
=========================

Walks a byte image from a starting offset, one instruction at a time,
using the opcode table to decide how many operand bytes follow each
opcode. The walk is a single forward pass: no backtracking, no
resynchronisation, no control-flow analysis.

Each step produces a DecodeOutcome:

- InstructionRecord: a fully decoded instruction
- TruncatedInstruction: the image ended before the instruction did.
  This is always the last outcome of a pass.

Usage:
    from i8080_dis.disassembler import decode, disassemble

    # Lazy, structured outcomes
    for outcome in decode(image):
        if isinstance(outcome, TruncatedInstruction):
            ...
        else:
            print(outcome)

    # Eager list, truncation raised as TruncatedInstructionError
    records = disassemble(image)

Copyright (c) 2026 i8080-dis Contributors
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from ..errors import TruncatedInstructionError
from .formatter import format_immediate, format_operand, format_record
from .opcodes import OPCODE_TABLE


# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class InstructionRecord:
    """
    A single decoded 8080 instruction.

    Attributes:
        address: Offset of the opcode byte in the image
        opcode: The opcode byte
        operand_bytes: Trailing bytes consumed (0-2), in image order
        length: Total instruction length in bytes
        mnemonic: The instruction mnemonic (e.g., "MVI", "JMP")
        operand_text: Formatted operand text (e.g., "A,#0x7f"), may be empty
    """
    address: int
    opcode: int
    operand_bytes: bytes
    length: int
    mnemonic: str
    operand_text: str

    @property
    def raw_bytes(self) -> bytes:
        """All bytes of the instruction, opcode first."""
        return bytes([self.opcode]) + self.operand_bytes

    @property
    def operand_template(self) -> str:
        """The fixed operand text from the opcode table."""
        return OPCODE_TABLE[self.opcode].operand_template

    @property
    def synthesized_text(self) -> str:
        """The part of the operand text built from the operand bytes."""
        return format_immediate(self.operand_bytes)

    def __str__(self) -> str:
        return format_record(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": f"{self.address:04x}",
            "address_int": self.address,
            "opcode": f"{self.opcode:02x}",
            "mnemonic": self.mnemonic,
            "operand": self.operand_text,
            "length": self.length,
            "bytes": [f"{b:02x}" for b in self.raw_bytes],
        }


@dataclass(frozen=True)
class TruncatedInstruction:
    """
    Failure outcome: an opcode needs more trailing bytes than remain.

    Attributes:
        address: Offset of the opcode byte
        opcode: The opcode byte
        required: Trailing bytes the opcode needs (1 or 2)
        available: Trailing bytes actually left in the image (0 or 1)
    """
    address: int
    opcode: int
    required: int
    available: int

    @property
    def missing(self) -> int:
        """How many bytes the image is short by."""
        return self.required - self.available

    def to_error(self, records: tuple = ()) -> TruncatedInstructionError:
        """Convert to the matching exception, optionally carrying earlier records."""
        return TruncatedInstructionError(
            self.address, self.opcode, self.required, self.available, records
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": "truncated instruction",
            "address": f"{self.address:04x}",
            "address_int": self.address,
            "opcode": f"{self.opcode:02x}",
            "required": self.required,
            "available": self.available,
        }


DecodeOutcome = Union[InstructionRecord, TruncatedInstruction]

# Addresses are 16-bit, so an image can hold at most 64 KiB
ADDRESS_SPACE = 0x10000


# =============================================================================
# Decoding
# =============================================================================

def _check_image(image: bytes, start: int) -> None:
    if len(image) > ADDRESS_SPACE:
        raise ValueError(
            f"Image of {len(image)} bytes exceeds the {ADDRESS_SPACE}-byte address space"
        )
    if not 0 <= start <= len(image):
        raise ValueError(f"Start offset {start} outside image of {len(image)} bytes")


def decode_one(image: bytes, offset: int) -> DecodeOutcome:
    """
    Decode the single instruction whose opcode is at offset.

    Args:
        image: The byte image
        offset: Offset of the opcode byte

    Returns:
        An InstructionRecord, or a TruncatedInstruction if the image ends
        before the instruction does

    Raises:
        ValueError: If offset is not inside the image
    """
    if not 0 <= offset < len(image):
        raise ValueError(f"Offset {offset} beyond data length {len(image)}")

    opcode = image[offset]
    entry = OPCODE_TABLE[opcode]

    available = len(image) - offset - 1
    if entry.operand_size > available:
        return TruncatedInstruction(
            address=offset,
            opcode=opcode,
            required=entry.operand_size,
            available=available,
        )

    operand_bytes = bytes(image[offset + 1:offset + entry.length])
    return InstructionRecord(
        address=offset,
        opcode=opcode,
        operand_bytes=operand_bytes,
        length=entry.length,
        mnemonic=entry.mnemonic,
        operand_text=format_operand(entry.operand_template, operand_bytes),
    )


def decode(image: bytes, start: int = 0) -> Iterator[DecodeOutcome]:
    """
    Lazily decode an image from start to end.

    Yields one InstructionRecord per instruction. If the image ends in the
    middle of an instruction, a single TruncatedInstruction is yielded
    and the sequence stops there.

    Args:
        image: The byte image (not modified)
        start: Offset of the first opcode (default 0)

    Returns:
        Iterator of DecodeOutcome values in strictly increasing address order

    Raises:
        ValueError: If the image is larger than the 64 KiB address space,
            or start is outside 0..len(image). Raised by the call itself,
            before any iteration.
    """
    _check_image(image, start)
    return _decode_pass(image, start)


def _decode_pass(image: bytes, start: int) -> Iterator[DecodeOutcome]:
    logger.debug(f"Decoding {len(image) - start} bytes from offset {start:04x}")

    cursor = start
    count = 0
    while cursor < len(image):
        outcome = decode_one(image, cursor)
        if isinstance(outcome, TruncatedInstruction):
            logger.debug(
                f"Truncated instruction {outcome.opcode:02x} at {outcome.address:04x}: "
                f"needs {outcome.required} bytes, {outcome.available} left"
            )
            yield outcome
            return
        yield outcome
        cursor += outcome.length
        count += 1

    logger.debug(f"Decoded {count} instructions")


def disassemble(
    image: bytes,
    start: int = 0,
    count: Optional[int] = None,
) -> List[InstructionRecord]:
    """
    Decode an image into a list of records.

    Args:
        image: The byte image
        start: Offset of the first opcode
        count: Maximum number of instructions to decode (None = all)

    Returns:
        List of InstructionRecord objects

    Raises:
        TruncatedInstructionError: If the image ends mid-instruction before
            count records were produced. The records decoded so far are
            available as the exception's ``records`` attribute.
    """
    records: List[InstructionRecord] = []
    if count is not None and count <= 0:
        return records

    for outcome in decode(image, start):
        if isinstance(outcome, TruncatedInstruction):
            raise outcome.to_error(tuple(records))
        records.append(outcome)
        if count is not None and len(records) >= count:
            break

    return records


# =============================================================================
# Decoder Object
# =============================================================================

class Decoder:
    """
    Decoder bound to one image.

    Each iteration starts a fresh pass from the configured start offset,
    so iterating twice gives identical sequences. The image is never
    modified.

    Attributes:
        image: The byte image being decoded
        start: Offset of the first opcode
    """

    def __init__(self, image: bytes, start: int = 0):
        _check_image(image, start)
        self.image = bytes(image)
        self.start = start

    def __iter__(self) -> Iterator[DecodeOutcome]:
        return decode(self.image, self.start)

    def __len__(self) -> int:
        """Number of bytes this decoder covers."""
        return len(self.image) - self.start

    def records(self, count: Optional[int] = None) -> List[InstructionRecord]:
        """Decode eagerly; see disassemble()."""
        return disassemble(self.image, self.start, count)

    def to_text(self, count: Optional[int] = None) -> str:
        """
        Decode and return the formatted listing.

        Raises:
            TruncatedInstructionError: If the image ends mid-instruction
        """
        return "\n".join(str(record) for record in self.records(count))
