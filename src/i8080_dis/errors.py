"""
i8080-dis Error Hierarchy
=========================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from I8080Error, allowing callers to catch every
package-related error with a single except clause if desired.

Exception Hierarchy
-------------------
I8080Error (base)
├── ImageUnavailableError - the byte image could not be read
├── ImageTooLargeError - the image is larger than the 64 KiB address space
├── DecodeError (instruction-stream errors)
│   └── TruncatedInstructionError - image ends in the middle of an instruction
└── OpcodeTableError - the opcode table is incomplete or inconsistent

The two failure categories a user can hit, ImageUnavailableError and
TruncatedInstructionError, are deliberately separate classes so the
command-line layer can map them to different exit statuses.

Copyright (c) 2026 i8080-dis Contributors
"""

from pathlib import Path
from typing import Union


# =============================================================================
# Base Exception Class
# =============================================================================

class I8080Error(Exception):
    """
    Base exception for all i8080-dis errors.

        try:
            records = disassemble(load_image("rom.bin"))
        except I8080Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Loader Exceptions
# =============================================================================

class ImageUnavailableError(I8080Error):
    """
    The byte image could not be obtained.

    Raised by the loader only; the decoder never sees this case.

    Attributes:
        path: The path that was being read
        reason: Human-readable cause (usually the OS error text)
    """

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read image '{self.path}': {reason}")


class ImageTooLargeError(I8080Error):
    """
    The image does not fit in the 8080's 16-bit address space.

    Attributes:
        path: The path that was read
        size: Image size in bytes
        limit: Largest allowed size in bytes
    """

    def __init__(self, path: Union[str, Path], size: int, limit: int):
        self.path = Path(path)
        self.size = size
        self.limit = limit
        super().__init__(
            f"image '{self.path}' is {size} bytes, larger than the "
            f"{limit}-byte address space"
        )


# =============================================================================
# Decoder Exceptions
# =============================================================================

class DecodeError(I8080Error):
    """Base exception for errors found while walking an instruction stream."""
    pass


class TruncatedInstructionError(DecodeError):
    """
    An opcode requires more trailing bytes than the image has left.

    Always fatal to the decode pass. Carries enough detail to produce a
    precise diagnostic.

    Attributes:
        address: Address of the opcode byte
        opcode: The opcode value
        required: Number of trailing operand bytes the opcode needs
        available: Number of bytes that actually remained after the opcode
        records: Instructions successfully decoded before the failure
    """

    def __init__(
        self,
        address: int,
        opcode: int,
        required: int,
        available: int,
        records: tuple = (),
    ):
        self.address = address
        self.opcode = opcode
        self.required = required
        self.available = available
        self.records = tuple(records)
        super().__init__(self._format_message())

    @property
    def missing(self) -> int:
        """Number of bytes the image is short by."""
        return self.required - self.available

    def _format_message(self) -> str:
        """
        Format the diagnostic.

        Example output:
            incomplete instruction: reading additional bytes for
            instruction "01" at 0000 (needs 2, 0 available)
        """
        return (
            f"incomplete instruction: reading additional bytes for "
            f"instruction \"{self.opcode:02x}\" at {self.address:04x} "
            f"(needs {self.required}, {self.available} available)"
        )


# =============================================================================
# Table Exceptions
# =============================================================================

class OpcodeTableError(I8080Error):
    """
    The opcode table violates its construction invariant.

    Raised at import time if any opcode value lacks an entry or an entry
    has a length outside {1, 2, 3}. Seeing this means the package itself
    is broken, not the input.
    """
    pass
