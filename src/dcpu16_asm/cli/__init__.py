"""
DCPU-16 Command-Line Interface
==============================

This package provides the command-line tools:

- **dcasm**: DCPU-16 assembler

Each tool is a Click-based CLI application with help text and
consistent error reporting.
"""

__all__ = ["dcasm"]
