"""
i8080-dis Command-Line Interface
================================

This package provides the command-line tool for i8080-dis:

- **i8080dis**: Intel 8080 disassembler

The tool is a Click-based CLI application. Exit codes are shared
through ``i8080_dis.cli.errors.ExitCode``.
"""

__all__ = ["i8080dis"]
