"""
Image Loader
============

Reads a binary image file into memory in one go. The decoder works on
the returned bytes and never touches the filesystem itself.

Any OS-level failure (missing file, permission denied, path is a
directory, ...) is reported as ImageUnavailableError, which is kept
separate from decode failures so callers can tell the two apart.
Images larger than the 8080's 64 KiB address space are rejected with
ImageTooLargeError.

Copyright (c) 2026 i8080-dis Contributors
"""

import logging
from pathlib import Path
from typing import Union

from i8080_dis.disassembler.decoder import ADDRESS_SPACE
from i8080_dis.errors import ImageTooLargeError, ImageUnavailableError

# Logger for this module
logger = logging.getLogger(__name__)


def load_image(filepath: Union[str, Path]) -> bytes:
    """
    Load a byte image from a file.

    Args:
        filepath: Path to the binary image

    Returns:
        The complete file contents as immutable bytes

    Raises:
        ImageUnavailableError: If the file cannot be read
        ImageTooLargeError: If the file is larger than 64 KiB

    Example:
        >>> image = load_image("invaders.bin")
        >>> records = disassemble(image)
    """
    filepath = Path(filepath)
    try:
        data = filepath.read_bytes()
    except OSError as e:
        logger.debug(f"Failed to read {filepath}: {e}")
        raise ImageUnavailableError(filepath, e.strerror or str(e)) from e

    if len(data) > ADDRESS_SPACE:
        raise ImageTooLargeError(filepath, len(data), ADDRESS_SPACE)

    logger.debug(f"Loaded {len(data)} bytes from {filepath}")
    return data
