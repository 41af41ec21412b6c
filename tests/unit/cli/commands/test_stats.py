"""Unit tests for the stats command."""

import pytest
from click.testing import CliRunner

from src.cli import cli
from src.repositories.local_repository import LocalJsonRepository


class TestStatsCommand:
    @pytest.fixture
    def runner(self):
        return CliRunner()

    def test_cost_per_event(self, runner, cli_env):
        result = runner.invoke(cli, ["stats"])

        assert result.exit_code == 0, result.output
        assert "GALA DE PREMIOS..." in result.output
        assert "550.00 €" in result.output
        assert "557.80 €" in result.output

    def test_role_distribution(self, runner, cli_env):
        result = runner.invoke(cli, ["stats"])

        assert "Distribución por puesto" in result.output
        assert "| Otros       | 2      | 33% |" in result.output
        assert "Realización" in result.output

    def test_empty_store(self, runner, cli_env):
        store = LocalJsonRepository(cli_env["LOCAL_DATA_DIR"])
        store.delete_event("ev-001")
        store.delete_event("ev-002")

        result = runner.invoke(cli, ["stats"])
        assert result.exit_code == 0
        assert "No events stored." in result.output
