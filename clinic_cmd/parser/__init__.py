"""
Parser module for command syntax analysis.

This module provides the recursive descent parser for converting
tokenized input into a Program.
"""

from .command_parser import CommandParser, ParseError, parse, parse_source

__all__ = [
    "CommandParser",
    "ParseError",
    "parse",
    "parse_source",
]
