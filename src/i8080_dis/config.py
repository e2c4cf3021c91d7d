"""
i8080-dis Configuration
=======================

Listing configuration for the command-line tool. Configuration can
come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

Environment Variables
---------------------
    I8080DIS_COLOR   "1"/"true"/"yes" or "0"/"false"/"no": colour diagnostics
    NO_COLOR         Any non-empty value disables colour (https://no-color.org)
    I8080DIS_COUNT   Default maximum number of instructions to list
    I8080DIS_FORMAT  Default output format: "listing", "compact" or "json"

Copyright (c) 2026 i8080-dis Contributors
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

# Logger for this module
logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("listing", "compact", "json")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class ListingConfig:
    """
    Settings that control how a listing is produced.

    Attributes:
        color: Colour the "error:" prefix of diagnostics (default: True)
        count: Maximum number of instructions to list (None = all)
        output_format: "listing" (full lines), "compact" (no byte dump)
            or "json"
        start: Offset of the first opcode in the image (default: 0)
    """
    color: bool = True
    count: Optional[int] = None
    output_format: str = "listing"
    start: int = 0

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {', '.join(OUTPUT_FORMATS)}, "
                f"got {self.output_format!r}"
            )
        if self.count is not None and self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if self.start < 0:
            raise ValueError(f"start must be non-negative, got {self.start}")

    @property
    def show_bytes(self) -> bool:
        """True when the byte dump column is part of the output."""
        return self.output_format == "listing"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ListingConfig":
        """
        Create a ListingConfig from environment variables.

        Invalid values are logged and ignored, leaving the default.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            ListingConfig with values from the environment
        """
        if environ is None:
            environ = os.environ

        config = cls()

        if color := environ.get("I8080DIS_COLOR"):
            value = color.strip().lower()
            if value in _TRUE_VALUES:
                config = replace(config, color=True)
            elif value in _FALSE_VALUES:
                config = replace(config, color=False)
            else:
                logger.warning(f"Ignoring invalid I8080DIS_COLOR value {color!r}")

        # NO_COLOR wins over I8080DIS_COLOR
        if environ.get("NO_COLOR"):
            config = replace(config, color=False)

        if count := environ.get("I8080DIS_COUNT"):
            try:
                config = replace(config, count=int(count))
            except ValueError:
                logger.warning(f"Ignoring invalid I8080DIS_COUNT value {count!r}")

        if output_format := environ.get("I8080DIS_FORMAT"):
            if output_format in OUTPUT_FORMATS:
                config = replace(config, output_format=output_format)
            else:
                logger.warning(f"Ignoring invalid I8080DIS_FORMAT value {output_format!r}")

        return config

    def with_overrides(self, **overrides) -> "ListingConfig":
        """
        Return a copy with the given fields replaced.

        Overrides whose value is None are skipped, so unset command-line
        options leave the configured value in place.
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
