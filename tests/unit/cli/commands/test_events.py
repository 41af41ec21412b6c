"""Unit tests for event commands."""

from pathlib import Path

import pandas as pd
import pytest
from click.testing import CliRunner

from src.cli import cli
from src.models import PaymentType, Schedule
from src.repositories.local_repository import LocalJsonRepository


def _store(env) -> LocalJsonRepository:
    return LocalJsonRepository(env["LOCAL_DATA_DIR"])


class TestListEventsCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_newest_first(self, runner, cli_env):
        result = runner.invoke(cli, ["list-events"])

        assert result.exit_code == 0, result.output
        assert result.output.index("Concierto Benéfico") < result.output.index("Gala de Premios Anual")
        assert "2 event(s)" in result.output

    def test_crew_listing(self, runner, cli_env):
        result = runner.invoke(cli, ["list-events", "--crew"])

        assert result.exit_code == 0, result.output
        assert "sh-001" in result.output
        assert "Alta Seg. Social" in result.output

    def test_empty_store(self, runner, cli_env):
        store = _store(cli_env)
        store.delete_event("ev-001")
        store.delete_event("ev-002")

        result = runner.invoke(cli, ["list-events"])
        assert result.exit_code == 0
        assert "No events stored." in result.output


class TestCreateAndDeleteEventCommands:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_create_event(self, runner, cli_env):
        result = runner.invoke(
            cli, ["create-event", "--title", "Presentación de Temporada", "--date", "2024-07-01"]
        )

        assert result.exit_code == 0, result.output
        created = [e for e in _store(cli_env).list_events() if e.title == "Presentación de Temporada"]
        assert len(created) == 1
        assert created[0].date == "2024-07-01"
        assert created[0].shifts == []
        assert created[0].id in result.output

    def test_blank_title_is_rejected(self, runner, cli_env):
        result = runner.invoke(cli, ["create-event", "--title", " ", "--date", "2024-07-01"])
        assert result.exit_code == 3

    def test_delete_event(self, runner, cli_env):
        result = runner.invoke(cli, ["delete-event", "ev-002", "--yes"])

        assert result.exit_code == 0, result.output
        assert _store(cli_env).get_event("ev-002") is None

    def test_delete_asks_for_confirmation(self, runner, cli_env):
        result = runner.invoke(cli, ["delete-event", "ev-002"], input="n\n")

        assert result.exit_code == 130
        assert _store(cli_env).get_event("ev-002") is not None

    def test_delete_unknown_event(self, runner, cli_env):
        result = runner.invoke(cli, ["delete-event", "ev-999", "--yes"])
        assert result.exit_code == 7


class TestAddCrewCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_fills_details_from_staff_directory(self, runner, cli_env):
        result = runner.invoke(
            cli,
            ["add-crew", "ev-001", "--dni", "00000003A", "--salary", "180", "--schedule", "Media"],
        )

        assert result.exit_code == 0, result.output
        event = _store(cli_env).get_event("ev-001")
        assert len(event.shifts) == 4
        added = event.shifts[-1]
        assert added.person_name == "Elena Soto Marín"
        assert added.role == "Ope. Camara"
        assert added.payment_type == PaymentType.COOPERATIVA
        assert added.schedule == Schedule.HALF
        assert added.event_id == "ev-001"

    def test_social_security_dates_only_for_alta(self, runner, cli_env):
        runner.invoke(
            cli,
            [
                "add-crew", "ev-001", "--name", "Rosa Díaz", "--role", "Auxiliar",
                "--payment-type", "Alta Seg. Social", "--salary", "90",
                "--ss-start", "2024-03-15", "--ss-end", "2024-03-15",
            ],
        )
        runner.invoke(
            cli,
            [
                "add-crew", "ev-001", "--name", "Óscar Peña", "--role", "Grafismo",
                "--payment-type", "Factura", "--ss-start", "2024-03-15",
            ],
        )

        event = _store(cli_env).get_event("ev-001")
        rosa = next(s for s in event.shifts if s.person_name == "Rosa Díaz")
        oscar = next(s for s in event.shifts if s.person_name == "Óscar Peña")
        assert rosa.social_security_start_date == "2024-03-15"
        assert rosa.social_security
        assert oscar.social_security_start_date is None

    def test_duplicate_person_is_rejected(self, runner, cli_env):
        result = runner.invoke(cli, ["add-crew", "ev-001", "--dni", "00000001R"])

        assert result.exit_code == 3
        assert "already on this event's crew" in result.output
        assert len(_store(cli_env).get_event("ev-001").shifts) == 3

    def test_role_is_required(self, runner, cli_env):
        result = runner.invoke(
            cli, ["add-crew", "ev-001", "--name", "Sin Puesto", "--payment-type", "Factura"]
        )
        assert result.exit_code == 3

    def test_payment_type_is_required(self, runner, cli_env):
        result = runner.invoke(cli, ["add-crew", "ev-001", "--name", "Sin Tipo", "--role", "Auxiliar"])
        assert result.exit_code == 3

    def test_unknown_event(self, runner, cli_env):
        result = runner.invoke(cli, ["add-crew", "ev-999", "--dni", "00000003A"])
        assert result.exit_code == 7


class TestExportCrewCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_all_events_sheet(self, runner, cli_env):
        result = runner.invoke(cli, ["export-crew"])

        assert result.exit_code == 0, result.output
        assert "Exported 2 event(s)" in result.output
        assert list(Path(cli_env["EXPORT_DIR"]).glob("Produccion_*.xlsx"))

    def test_single_event_with_columns(self, runner, cli_env):
        result = runner.invoke(
            cli, ["export-crew", "--event-id", "ev-001", "--columns", "role, personName,phone"]
        )

        assert result.exit_code == 0, result.output
        exports = list(Path(cli_env["EXPORT_DIR"]).glob("Equipo_ev-001_*.xlsx"))
        assert len(exports) == 1

        frame = pd.read_excel(exports[0], sheet_name="Equipo", dtype=str)
        assert list(frame.columns) == ["Puesto", "Nombre Completo", "Teléfono"]
        assert len(frame) == 3

    def test_columns_require_event(self, runner, cli_env):
        result = runner.invoke(cli, ["export-crew", "--columns", "role"])
        assert result.exit_code == 3

    def test_unknown_column(self, runner, cli_env):
        result = runner.invoke(cli, ["export-crew", "--event-id", "ev-001", "--columns", "salario"])
        assert result.exit_code == 3
        assert "Unknown export columns: salario" in result.output

    def test_unknown_event(self, runner, cli_env):
        result = runner.invoke(cli, ["export-crew", "--event-id", "ev-999"])
        assert result.exit_code == 7
