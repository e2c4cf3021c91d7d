"""
i8080dis - Intel 8080 Disassembler Command-Line Interface
=========================================================

This module implements the command-line interface for the Intel 8080
disassembler. It loads a raw binary image, decodes it from start to end
and writes one listing line per instruction.

Usage Examples
--------------
Disassemble a ROM:
    $ i8080dis invaders.bin

Limit number of instructions:
    $ i8080dis invaders.bin --count 20

Start decoding at an offset:
    $ i8080dis invaders.bin --start 0x100

Output to file:
    $ i8080dis invaders.bin -o listing.asm

Machine-readable output:
    $ i8080dis invaders.bin --json

Exit Codes
----------
0  - Success
64 - Missing or invalid arguments
65 - Image ends in the middle of an instruction, or is larger than 64 KiB
70 - Internal error
74 - Image unreadable, or output file unwritable
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from i8080_dis import __version__
from i8080_dis.cli.errors import ExitCode, UsageExitCommand, handle_cli_exception
from i8080_dis.config import ListingConfig
from i8080_dis.disassembler import (
    InstructionRecord,
    TruncatedInstruction,
    decode,
    format_compact,
    format_record,
)
from i8080_dis.loader import load_image

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def parse_offset(value: Optional[str]) -> Optional[int]:
    """
    Parse an offset given as hex (0x prefix or $ prefix) or decimal.

    Raises:
        click.BadParameter: If the value is not a number in 0-65535
    """
    if value is None:
        return None
    try:
        if value.lower().startswith("0x"):
            offset = int(value, 16)
        elif value.startswith("$"):
            offset = int(value[1:], 16)
        else:
            offset = int(value)
    except ValueError:
        raise click.BadParameter(f"invalid offset '{value}'", param_hint="'--start'")

    if not 0 <= offset <= 0xFFFF:
        raise click.BadParameter(
            "offset must be 0-65535 (0x0000-0xFFFF)", param_hint="'--start'"
        )
    return offset


def render(records: List[InstructionRecord], config: ListingConfig) -> str:
    """Render decoded records in the configured output format."""
    if config.output_format == "json":
        return json.dumps([record.to_dict() for record in records], indent=2) + "\n"

    render_line = format_record if config.show_bytes else format_compact
    return "".join(render_line(record) + "\n" for record in records)


def write_output(text: str, output: Optional[Path]) -> None:
    """Write the listing to a file, or to stdout when no file is given."""
    if output:
        output.write_text(text, encoding="utf-8")
        logger.debug(f"Output written to: {output}")
    else:
        click.echo(text, nl=False)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=UsageExitCommand)
@click.argument(
    "input_file",
    required=False,
    type=click.Path(path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "-c", "--count",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum number of instructions to disassemble (default: all)",
)
@click.option(
    "-s", "--start",
    type=str,
    default=None,
    help="Offset of the first opcode (hex with 0x or $ prefix, or decimal). Default: 0",
)
@click.option(
    "--no-bytes",
    is_flag=True,
    default=False,
    help="Omit raw bytes from output (show only address, mnemonic and operand)",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Emit a JSON array of decoded instructions",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Colour error messages (default: on unless NO_COLOR is set)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="i8080dis")
@click.pass_context
def main(
    ctx: click.Context,
    input_file: Optional[Path],
    output: Optional[Path],
    count: Optional[int],
    start: Optional[str],
    no_bytes: bool,
    json_output: bool,
    color: Optional[bool],
    verbose: bool,
) -> None:
    """
    Disassemble Intel 8080 machine code.

    INPUT_FILE is the raw binary image to disassemble. Each output line
    shows the address, the instruction bytes, the mnemonic and its
    operands.

    Examples:

        # Disassemble a whole ROM
        i8080dis invaders.bin

        # First 20 instructions to a file
        i8080dis invaders.bin --count 20 -o listing.asm
    """
    setup_logging(verbose)

    if input_file is None:
        click.echo(ctx.get_usage())
        sys.exit(ExitCode.USAGE)

    output_format = None
    if json_output:
        output_format = "json"
    elif no_bytes:
        output_format = "compact"

    config = ListingConfig.from_env()
    color_enabled = config.color if color is None else color

    try:
        config = config.with_overrides(
            color=color,
            count=count,
            start=parse_offset(start),
            output_format=output_format,
        )

        image = load_image(input_file)
        logger.debug(f"Input file: {input_file} ({len(image)} bytes)")
        logger.debug(f"Start offset: {config.start:04x}")

        if config.start > len(image):
            raise click.BadParameter(
                f"offset {config.start} is past the end of a {len(image)}-byte image",
                param_hint="'--start'",
            )

        records: List[InstructionRecord] = []
        failure: Optional[TruncatedInstruction] = None
        if config.count != 0:
            for outcome in decode(image, config.start):
                if isinstance(outcome, TruncatedInstruction):
                    failure = outcome
                    break
                records.append(outcome)
                if config.count is not None and len(records) >= config.count:
                    break

        # Lines decoded before a truncation are still part of the listing
        write_output(render(records, config), output)
        logger.debug(f"Instructions disassembled: {len(records)}")

        if failure is not None:
            raise failure.to_error(tuple(records))

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, color=color_enabled)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
