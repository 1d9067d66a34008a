"""
Syntax Tree module for command parsing.

This module defines the node types that represent parsed commands
and provides transformation utilities.

Note: Named 'syntax_tree' instead of 'ast' to avoid conflict with Python's built-in ast module.
"""

from clinic_cmd.syntax_tree.nodes import (
    COMMAND_TYPES,
    Command,
    CommandKind,
    CommandType,
    DrugAddCommand,
    DrugEditCommand,
    DrugRemoveCommand,
    HelpCommandsCommand,
    PatientAddCommand,
    PatientDiagnoseCommand,
    PatientRegisterCommand,
    PatientRemoveCommand,
    PatientStatusCommand,
    PatientTreatmentCommand,
    Program,
)

_TRANSFORMER_EXPORTS = {"ASTTransformer", "FIELD_COLUMNS", "program_to_frame", "tokens_to_frame"}


# Lazy imports so that parsing does not load pandas
def __getattr__(name: str):
    if name in _TRANSFORMER_EXPORTS:
        from clinic_cmd.syntax_tree import transformer

        return getattr(transformer, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "COMMAND_TYPES",
    "Command",
    "CommandKind",
    "CommandType",
    "DrugAddCommand",
    "DrugEditCommand",
    "DrugRemoveCommand",
    "HelpCommandsCommand",
    "PatientAddCommand",
    "PatientDiagnoseCommand",
    "PatientRegisterCommand",
    "PatientRemoveCommand",
    "PatientStatusCommand",
    "PatientTreatmentCommand",
    "Program",
    "ASTTransformer",
    "FIELD_COLUMNS",
    "program_to_frame",
    "tokens_to_frame",
]
