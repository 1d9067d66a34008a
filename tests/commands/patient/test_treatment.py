"""
Tests for patient treatment - required period and optional trailing fields.

Trailing fields: frequency, dosage, time (any order, last one wins).
"""

import pytest

from clinic_cmd.parser import ParseError, parse_source
from clinic_cmd.syntax_tree.nodes import CommandKind, PatientTreatmentCommand

PREFIX = 'patient treatment "John_Doe" "Paracetamol" 01/01/2023 to 05/01/2023'


def _treatment(trailing: str = "") -> PatientTreatmentCommand:
    program = parse_source(f"{PREFIX} {trailing}")
    return program.commands[0].command_type


class TestRequiredFields:
    """Tests for the required part of a treatment."""

    def test_bare_treatment(self):
        assert _treatment() == PatientTreatmentCommand(
            patient_name="John_Doe",
            drug_name="Paracetamol",
            start_date="01/01/2023",
            end_date="05/01/2023",
        )

    def test_optional_fields_absent(self):
        command = _treatment()
        assert command.frequency is None
        assert command.dosage is None
        assert command.time is None

    def test_missing_period_marker(self):
        with pytest.raises(ParseError, match="Expected TREATMENT_PERIOD, got DATE"):
            parse_source('patient treatment "John_Doe" "Paracetamol" 01/01/2023 05/01/2023')

    def test_missing_end_date(self):
        with pytest.raises(ParseError, match="Expected DATE, got end of input"):
            parse_source('patient treatment "John_Doe" "Paracetamol" 01/01/2023 to')

    def test_patient_and_drug_swapped(self):
        with pytest.raises(ParseError, match="Expected PATIENT_NAME, got DRUG_NAME"):
            parse_source('patient treatment "Paracetamol" "John_Doe" 01/01/2023 to 05/01/2023')


class TestOptionalFields:
    """Tests for the trailing frequency/dosage/time loop."""

    def test_quoted_frequency_and_dosage(self):
        command = _treatment('"1 time per day" 500mg')
        assert command.frequency == "1 time per day"
        assert command.dosage == "500mg"
        assert command.time is None

    def test_unquoted_frequency(self):
        assert _treatment("2 times per day").frequency == "2 times per day"

    def test_all_three(self):
        command = _treatment('"3 times per day" 250mg 08:00')
        assert (command.frequency, command.dosage, command.time) == (
            "3 times per day",
            "250mg",
            "08:00",
        )

    @pytest.mark.parametrize(
        "trailing",
        [
            '"2 times per day" 5mg 12:00',
            '5mg 12:00 "2 times per day"',
            '12:00 "2 times per day" 5mg',
        ],
    )
    def test_order_does_not_matter(self, trailing):
        command = _treatment(trailing)
        assert (command.frequency, command.dosage, command.time) == (
            "2 times per day",
            "5mg",
            "12:00",
        )

    def test_last_dosage_wins(self):
        assert _treatment("500mg 250mg").dosage == "250mg"

    def test_last_of_each_kind_wins(self):
        command = _treatment('08:00 "1 time per day" 10:00 100mg "2 times per day"')
        assert command.time == "10:00"
        assert command.frequency == "2 times per day"
        assert command.dosage == "100mg"

    def test_loop_stops_at_next_command(self):
        program = parse_source(f'{PREFIX} 500mg patient add "Jane_Doe"')
        assert [cmd.kind for cmd in program.commands] == [
            CommandKind.PATIENT_TREATMENT,
            CommandKind.PATIENT_ADD,
        ]
        assert program.commands[0].command_type.dosage == "500mg"

    def test_loop_leaves_unknown_token(self):
        """A token the loop does not take is parsed as the next command."""
        with pytest.raises(ParseError, match="Unexpected token: PATIENT_STATUS"):
            parse_source(f"{PREFIX} 500mg ASA-II")
