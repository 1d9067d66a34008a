"""
Tests for the AST node definitions.
"""

import dataclasses

import pytest

from clinic_cmd.syntax_tree.nodes import (
    COMMAND_TYPES,
    Command,
    CommandKind,
    HelpCommandsCommand,
    PatientAddCommand,
    PatientRegisterCommand,
    PatientTreatmentCommand,
    Program,
)


class TestClosedSet:
    """Tests for the fixed set of command variants."""

    def test_ten_variants(self):
        assert len(COMMAND_TYPES) == 10
        assert len(CommandKind) == 10

    def test_one_tag_per_variant(self):
        tags = {cls.kind for cls in COMMAND_TYPES}
        assert tags == set(CommandKind)

    def test_tag_value_is_class_name(self):
        for cls in COMMAND_TYPES:
            assert cls.kind.value == cls.__name__

    def test_command_rejects_foreign_payload(self):
        with pytest.raises(TypeError):
            Command("patient add")

    def test_command_rejects_variant_subclass(self):
        class VipAddCommand(PatientAddCommand):
            pass

        with pytest.raises(TypeError, match="VipAddCommand"):
            Command(VipAddCommand(patient_name="John_Doe"))

    def test_command_exposes_kind(self):
        assert Command(HelpCommandsCommand()).kind == CommandKind.HELP_COMMANDS


class TestImmutability:
    """Tests for frozen nodes."""

    def test_variant_is_frozen(self):
        command = PatientAddCommand(patient_name="John_Doe")
        with pytest.raises(dataclasses.FrozenInstanceError):
            command.patient_name = "Jane_Doe"

    def test_program_stores_tuple(self):
        commands = [Command(HelpCommandsCommand())]
        program = Program(commands=commands)
        commands.append(Command(HelpCommandsCommand()))
        assert isinstance(program.commands, tuple)
        assert len(program) == 1

    def test_help_has_no_fields(self):
        assert dataclasses.fields(HelpCommandsCommand) == ()


class TestRepr:
    """Tests for readable node representations."""

    def test_absent_fields_hidden(self):
        command = PatientRegisterCommand(patient_name="John_Doe", date="01/01/2023")
        assert repr(command) == (
            "PatientRegisterCommand(patient_name='John_Doe', date='01/01/2023')"
        )

    def test_help(self):
        assert repr(HelpCommandsCommand()) == "HelpCommandsCommand()"

    def test_program(self):
        program = Program(commands=(Command(PatientAddCommand(patient_name="A_B")),))
        assert repr(program) == "Program([Command(PatientAddCommand(patient_name='A_B'))])"

    def test_treatment_optional_defaults(self):
        command = PatientTreatmentCommand(
            patient_name="A_B", drug_name="X", start_date="01/01/2023", end_date="02/01/2023"
        )
        assert "dosage" not in repr(command)
