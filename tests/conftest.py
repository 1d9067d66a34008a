"""
Pytest configuration and shared fixtures for clinic-cmd tests.
"""

import pytest

from clinic_cmd.lexer import TokenKind, tokenize


@pytest.fixture
def clinic_script() -> str:
    """
    A script touching every subject.
    Contains: patient add/remove, drug add, diagnose, treatment, helpcommands
    """
    return """
      patient add "John_Doe"
      patient remove "Jane_Doe"
      drug add "Paracetamol" {pills}
      patient diagnose "John_Doe" [Mild fever]
      patient treatment "John_Doe" "Paracetamol" 01/01/2023 to 05/01/2023
      helpcommands
    """


@pytest.fixture
def visit_script() -> str:
    """A treatment with trailing fields followed by a timed registration."""
    return """
      patient treatment "John_Doe" "Paracetamol" 01/01/2023 to 05/01/2023 "1 time per day" 500mg
      patient register "John_Doe" 01/01/2023 23:00
    """


@pytest.fixture
def kinds():
    """Return a helper that tokenizes a string and lists the token kinds."""

    def _kinds(source: str) -> list[TokenKind]:
        return [token.kind for token in tokenize(source)]

    return _kinds
