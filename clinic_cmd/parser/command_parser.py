"""
Command Parser - Recursive descent parser for clinic command scripts.

This module parses token lists into a Program, handling:
- Patient commands (add, remove, register, status, diagnose, treatment)
- Drug catalog commands (add, remove, edit)
- The helpcommands command
- Optional trailing fields of register and treatment
"""

from typing import Callable, Sequence

from clinic_cmd.lexer import Token, TokenKind, tokenize
from clinic_cmd.syntax_tree.nodes import (
    Command,
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

END_OF_INPUT = "end of input"


class ParseError(Exception):
    """Exception raised when the tokens do not follow the grammar."""

    def __init__(
        self,
        message: str,
        expected: TokenKind | None = None,
        found: Token | None = None,
    ):
        self.expected = expected
        self.found = found
        self.actual = found.kind.name if found else END_OF_INPUT
        if found:
            super().__init__(f"{message} at line {found.line}, column {found.column}")
        else:
            super().__init__(message)


class CommandParser:
    """
    Recursive descent parser for clinic command scripts.

    Grammar:
        program      := command*
        command      := PATIENT patient_cmd | DRUG drug_cmd | HELPCOMMANDS
        patient_cmd  := ADD PATIENT_NAME
                      | REMOVE PATIENT_NAME
                      | REGISTER PATIENT_NAME DATE TIME?
                      | STATUS PATIENT_NAME PATIENT_STATUS
                      | DIAGNOSE PATIENT_NAME DIAGNOSE_TEXT
                      | TREATMENT PATIENT_NAME DRUG_NAME DATE TREATMENT_PERIOD DATE
                            (FREQUENCY | DOSAGE | TIME)*
        drug_cmd     := ADD DRUG_NAME DRUG_TYPE
                      | REMOVE DRUG_NAME
                      | EDIT DRUG_NAME DRUG_TYPE

    There is no statement terminator: a command ends where its rule stops
    accepting tokens. The first error aborts the whole parse.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    def parse(self) -> Program:
        """Parse all tokens into a Program."""
        self.pos = 0
        commands: list[Command] = []

        while self._current_token() is not None:
            commands.append(Command(self._parse_command()))

        return Program(commands=tuple(commands))

    def _current_token(self) -> Token | None:
        """Get the current token, or None at end of input."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _advance(self) -> Token:
        """Advance and return the current token."""
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _match(self, *kinds: TokenKind) -> bool:
        """Check if current token matches any of the given kinds."""
        token = self._current_token()
        return token is not None and token.kind in kinds

    def _expect(self, kind: TokenKind, what: str) -> str:
        """Expect a token of the given kind and return its text."""
        token = self._current_token()
        if token is None or token.kind != kind:
            actual = token.kind.name if token else END_OF_INPUT
            raise ParseError(
                f"Expected {what}. Expected {kind.name}, got {actual}", kind, token
            )
        return self._advance().text

    def _parse_command(self) -> CommandType:
        """Parse one command, dispatching on its leading keyword."""
        token = self._advance()

        if token.kind == TokenKind.PATIENT:
            return self._parse_patient_command()
        if token.kind == TokenKind.DRUG:
            return self._parse_drug_command()
        if token.kind == TokenKind.HELPCOMMANDS:
            return HelpCommandsCommand()

        raise ParseError(f"Unexpected token: {token.kind.name}", found=token)

    def _parse_action(
        self, subject: str, rules: dict[TokenKind, Callable[[], CommandType]]
    ) -> CommandType:
        """Consume an action keyword and run the rule registered for it."""
        token = self._current_token()
        if token is None:
            raise ParseError(f"Expected {subject} action, got {END_OF_INPUT}")
        if token.kind not in rules:
            raise ParseError(f"Unexpected {subject} action: {token.kind.name}", found=token)
        self._advance()
        return rules[token.kind]()

    def _parse_patient_command(self) -> CommandType:
        return self._parse_action(
            "patient",
            {
                TokenKind.ADD: self._parse_patient_add,
                TokenKind.REMOVE: self._parse_patient_remove,
                TokenKind.REGISTER: self._parse_patient_register,
                TokenKind.STATUS: self._parse_patient_status,
                TokenKind.DIAGNOSE: self._parse_patient_diagnose,
                TokenKind.TREATMENT: self._parse_patient_treatment,
            },
        )

    def _parse_drug_command(self) -> CommandType:
        return self._parse_action(
            "drug",
            {
                TokenKind.ADD: self._parse_drug_add,
                TokenKind.REMOVE: self._parse_drug_remove,
                TokenKind.EDIT: self._parse_drug_edit,
            },
        )

    def _parse_patient_add(self) -> PatientAddCommand:
        return PatientAddCommand(
            patient_name=self._expect(TokenKind.PATIENT_NAME, "patient name")
        )

    def _parse_patient_remove(self) -> PatientRemoveCommand:
        return PatientRemoveCommand(
            patient_name=self._expect(TokenKind.PATIENT_NAME, "patient name")
        )

    def _parse_patient_register(self) -> PatientRegisterCommand:
        """
        Parse patient register arguments.
        Format: "Name_Surname" dd/mm/yyyy [hh:mm]
        """
        patient_name = self._expect(TokenKind.PATIENT_NAME, "patient name")
        date = self._expect(TokenKind.DATE, "date")

        time = None
        if self._match(TokenKind.TIME):
            time = self._advance().text

        return PatientRegisterCommand(patient_name=patient_name, date=date, time=time)

    def _parse_patient_status(self) -> PatientStatusCommand:
        patient_name = self._expect(TokenKind.PATIENT_NAME, "patient name")
        status = self._expect(TokenKind.PATIENT_STATUS, "patient status")
        return PatientStatusCommand(patient_name=patient_name, status=status)

    def _parse_patient_diagnose(self) -> PatientDiagnoseCommand:
        patient_name = self._expect(TokenKind.PATIENT_NAME, "patient name")
        diagnose_text = self._expect(TokenKind.DIAGNOSE_TEXT, "diagnose text")
        return PatientDiagnoseCommand(patient_name=patient_name, diagnose_text=diagnose_text)

    def _parse_patient_treatment(self) -> PatientTreatmentCommand:
        """
        Parse patient treatment arguments.
        Format: "Name_Surname" "Drug" dd/mm/yyyy to dd/mm/yyyy [frequency] [dosage] [time]

        The trailing fields are read in any order until a token of another
        kind shows up; that token is left for the next command. A field given
        twice keeps its last value.
        """
        patient_name = self._expect(TokenKind.PATIENT_NAME, "patient name")
        drug_name = self._expect(TokenKind.DRUG_NAME, "drug name")
        start_date = self._expect(TokenKind.DATE, "start date")
        self._expect(TokenKind.TREATMENT_PERIOD, "treatment period")
        end_date = self._expect(TokenKind.DATE, "end date")

        optional: dict[TokenKind, str | None] = {
            TokenKind.FREQUENCY: None,
            TokenKind.DOSAGE: None,
            TokenKind.TIME: None,
        }
        while self._match(*optional):
            token = self._advance()
            optional[token.kind] = token.text

        return PatientTreatmentCommand(
            patient_name=patient_name,
            drug_name=drug_name,
            start_date=start_date,
            end_date=end_date,
            frequency=optional[TokenKind.FREQUENCY],
            dosage=optional[TokenKind.DOSAGE],
            time=optional[TokenKind.TIME],
        )

    def _parse_drug_add(self) -> DrugAddCommand:
        drug_name = self._expect(TokenKind.DRUG_NAME, "drug name")
        drug_type = self._expect(TokenKind.DRUG_TYPE, "drug type")
        return DrugAddCommand(drug_name=drug_name, drug_type=drug_type)

    def _parse_drug_remove(self) -> DrugRemoveCommand:
        return DrugRemoveCommand(drug_name=self._expect(TokenKind.DRUG_NAME, "drug name"))

    def _parse_drug_edit(self) -> DrugEditCommand:
        drug_name = self._expect(TokenKind.DRUG_NAME, "drug name")
        drug_type = self._expect(TokenKind.DRUG_TYPE, "drug type")
        return DrugEditCommand(drug_name=drug_name, drug_type=drug_type)


def parse(tokens: Sequence[Token]) -> Program:
    """
    Parse a token list into a Program.

    Args:
        tokens: Tokens as produced by the lexer

    Returns:
        The parsed Program

    Raises:
        ParseError: If the tokens do not follow the grammar
    """
    return CommandParser(tokens).parse()


def parse_source(source: str) -> Program:
    """
    Tokenize and parse a command script.

    Args:
        source: The script text

    Returns:
        The parsed Program

    Raises:
        LexError: If the text cannot be tokenized
        ParseError: If the tokens do not follow the grammar
    """
    return parse(tokenize(source))
