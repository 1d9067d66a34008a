"""
AST Transformer for turning parsed programs into plain data.

This module provides read-only views of the parsed AST for the
consumers of a Program: structured dictionaries per command and
pandas tables of commands and tokens.
"""

from dataclasses import fields
from typing import Any, Iterable

import pandas as pd

from clinic_cmd.lexer import Token
from clinic_cmd.syntax_tree.nodes import COMMAND_TYPES, Command, CommandType, Program


def _collect_field_columns() -> list[str]:
    columns: list[str] = []
    for command_cls in COMMAND_TYPES:
        for f in fields(command_cls):
            if f.name not in columns:
                columns.append(f.name)
    return columns


# Every field name across the command variants, in declaration order
FIELD_COLUMNS: list[str] = _collect_field_columns()

TOKEN_COLUMNS = ["kind", "text", "position", "line", "column"]


class ASTTransformer:
    """
    Transforms AST nodes into plain data.

    Provides methods to convert the AST to:
    - structured parameters, one dict per command
    - lists of those dicts for a whole program
    """

    def transform_to_structured(self, node: Command | CommandType) -> dict[str, Any]:
        """
        Transform a command to structured parameters.

        Absent optional fields are left out, so a consumer can tell a
        field that was not given from one that was.

        Args:
            node: A Command or a bare command variant

        Returns:
            Dictionary with the command tag under "command" and one entry
            per present field
        """
        command = node.command_type if isinstance(node, Command) else node
        result: dict[str, Any] = {"command": command.kind.value}

        for f in fields(command):
            value = getattr(command, f.name)
            if value is not None:
                result[f.name] = value

        return result

    def transform_program(self, program: Program) -> list[dict[str, Any]]:
        """Transform every command of a program, in order."""
        return [self.transform_to_structured(cmd) for cmd in program.commands]


def program_to_frame(program: Program) -> pd.DataFrame:
    """
    Tabulate a program, one row per command.

    Args:
        program: The parsed program

    Returns:
        DataFrame with a "command" column and one column per field in
        FIELD_COLUMNS; fields a command lacks are missing values
    """
    records = ASTTransformer().transform_program(program)
    return pd.DataFrame.from_records(records, columns=["command", *FIELD_COLUMNS])


def tokens_to_frame(tokens: Iterable[Token]) -> pd.DataFrame:
    """Tabulate tokens with their kind names and source locations."""
    records = [
        (token.kind.name, token.text, token.position, token.line, token.column)
        for token in tokens
    ]
    return pd.DataFrame.from_records(records, columns=TOKEN_COLUMNS)
