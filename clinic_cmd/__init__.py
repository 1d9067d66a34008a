"""
Clinic CMD - A command language for clinical record keeping.

This package tokenizes and parses scripts of clinical commands
(patients, visits, diagnoses, treatments, drug catalog) into a typed
AST for an interpreter to execute.

Usage:
    from clinic_cmd import parse_source

    program = parse_source('patient add "John_Doe"')
    for command in program.commands:
        print(command.kind, command.command_type)
"""

_EXPORTS = {
    "tokenize": "clinic_cmd.lexer",
    "Token": "clinic_cmd.lexer",
    "TokenKind": "clinic_cmd.lexer",
    "LexError": "clinic_cmd.lexer",
    "parse": "clinic_cmd.parser.command_parser",
    "parse_source": "clinic_cmd.parser.command_parser",
    "CommandParser": "clinic_cmd.parser.command_parser",
    "ParseError": "clinic_cmd.parser.command_parser",
    "Program": "clinic_cmd.syntax_tree.nodes",
    "Command": "clinic_cmd.syntax_tree.nodes",
    "CommandKind": "clinic_cmd.syntax_tree.nodes",
    "program_to_frame": "clinic_cmd.syntax_tree.transformer",
    "tokens_to_frame": "clinic_cmd.syntax_tree.transformer",
}


# Lazy imports, resolved on first attribute access
def __getattr__(name: str):
    if name in _EXPORTS:
        from importlib import import_module

        return getattr(import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = sorted(_EXPORTS)

__version__ = "0.1.0"
