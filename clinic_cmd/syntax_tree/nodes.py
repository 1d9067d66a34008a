"""
AST Node definitions for the command parser.

This module defines the closed set of command shapes produced by
parsing a clinic command script, and the Program/Command wrappers
around them.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Union


class CommandKind(Enum):
    """Tag of each command variant."""

    PATIENT_ADD = "PatientAddCommand"
    PATIENT_REMOVE = "PatientRemoveCommand"
    PATIENT_REGISTER = "PatientRegisterCommand"
    PATIENT_STATUS = "PatientStatusCommand"
    PATIENT_DIAGNOSE = "PatientDiagnoseCommand"
    PATIENT_TREATMENT = "PatientTreatmentCommand"
    DRUG_ADD = "DrugAddCommand"
    DRUG_REMOVE = "DrugRemoveCommand"
    DRUG_EDIT = "DrugEditCommand"
    HELP_COMMANDS = "HelpCommandsCommand"


def _describe(node) -> str:
    """Render the set fields of a command node, skipping absent ones."""
    parts = [
        f"{f.name}={getattr(node, f.name)!r}"
        for f in fields(node)
        if getattr(node, f.name) is not None
    ]
    return f"{node.kind.value}({', '.join(parts)})"


# Patient-related commands


@dataclass(frozen=True, repr=False)
class PatientAddCommand:
    """patient add "Name_Surname" """

    kind: ClassVar[CommandKind] = CommandKind.PATIENT_ADD

    patient_name: str

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class PatientRemoveCommand:
    """patient remove "Name_Surname" """

    kind: ClassVar[CommandKind] = CommandKind.PATIENT_REMOVE

    patient_name: str

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class PatientRegisterCommand:
    """
    Represents a visit registration.

    Format: patient register "Name_Surname" dd/mm/yyyy [hh:mm]
    """

    kind: ClassVar[CommandKind] = CommandKind.PATIENT_REGISTER

    patient_name: str
    date: str
    time: str | None = None

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class PatientStatusCommand:
    """patient status "Name_Surname" ASA-II"""

    kind: ClassVar[CommandKind] = CommandKind.PATIENT_STATUS

    patient_name: str
    status: str  # ASA code, not validated here

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class PatientDiagnoseCommand:
    """patient diagnose "Name_Surname" [free text]"""

    kind: ClassVar[CommandKind] = CommandKind.PATIENT_DIAGNOSE

    patient_name: str
    diagnose_text: str

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class PatientTreatmentCommand:
    """
    Represents a prescribed treatment.

    Format:
        patient treatment "Name_Surname" "Drug" dd/mm/yyyy to dd/mm/yyyy
            [frequency] [dosage] [time]

    The trailing fields come in any order. None means the field was not
    given.
    """

    kind: ClassVar[CommandKind] = CommandKind.PATIENT_TREATMENT

    patient_name: str
    drug_name: str
    start_date: str
    end_date: str
    frequency: str | None = None
    dosage: str | None = None
    time: str | None = None

    def __repr__(self) -> str:
        return _describe(self)


# Drug-related commands


@dataclass(frozen=True, repr=False)
class DrugAddCommand:
    """drug add "Drug" {type}"""

    kind: ClassVar[CommandKind] = CommandKind.DRUG_ADD

    drug_name: str
    drug_type: str

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class DrugRemoveCommand:
    """drug remove "Drug" """

    kind: ClassVar[CommandKind] = CommandKind.DRUG_REMOVE

    drug_name: str

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class DrugEditCommand:
    """drug edit "Drug" {type}"""

    kind: ClassVar[CommandKind] = CommandKind.DRUG_EDIT

    drug_name: str
    drug_type: str

    def __repr__(self) -> str:
        return _describe(self)


@dataclass(frozen=True, repr=False)
class HelpCommandsCommand:
    """helpcommands"""

    kind: ClassVar[CommandKind] = CommandKind.HELP_COMMANDS

    def __repr__(self) -> str:
        return _describe(self)


CommandType = Union[
    PatientAddCommand,
    PatientRemoveCommand,
    PatientRegisterCommand,
    PatientStatusCommand,
    PatientDiagnoseCommand,
    PatientTreatmentCommand,
    DrugAddCommand,
    DrugRemoveCommand,
    DrugEditCommand,
    HelpCommandsCommand,
]

COMMAND_TYPES: tuple[type, ...] = (
    PatientAddCommand,
    PatientRemoveCommand,
    PatientRegisterCommand,
    PatientStatusCommand,
    PatientDiagnoseCommand,
    PatientTreatmentCommand,
    DrugAddCommand,
    DrugRemoveCommand,
    DrugEditCommand,
    HelpCommandsCommand,
)


@dataclass(frozen=True)
class Command:
    """Wraps exactly one command variant."""

    command_type: CommandType

    def __post_init__(self) -> None:
        # Subclasses of the variants are rejected too
        if type(self.command_type) not in COMMAND_TYPES:
            raise TypeError(
                f"Not a command variant: {type(self.command_type).__name__}"
            )

    @property
    def kind(self) -> CommandKind:
        return self.command_type.kind

    def __repr__(self) -> str:
        return f"Command({self.command_type!r})"


@dataclass(frozen=True)
class Program:
    """
    Represents the complete AST of a command script.

    Structure:
        command_1 command_2 ... (in source order)
    """

    commands: tuple[Command, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but store it immutably
        object.__setattr__(self, "commands", tuple(self.commands))

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)

    def __repr__(self) -> str:
        return "Program([" + ", ".join(repr(cmd) for cmd in self.commands) + "])"
