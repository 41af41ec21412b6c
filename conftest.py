"""
Global pytest configuration and fixtures.
"""
from decimal import Decimal
from typing import Dict

import pytest

from src.config import CrewBillingConfig, reload_config
from src.config.logging_config import reset_logging
from src.models import PaymentType, ProductionEvent, Schedule, StaffMember, TechnicianShift


@pytest.fixture
def test_env_vars(tmp_path) -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "STORAGE_BACKEND": "local",
        "LOCAL_DATA_DIR": str(tmp_path / "data"),
        "EXPORT_DIR": str(tmp_path / "exports"),
        "DEFAULT_BILLING_FILTER": "ALL",
        "ENVIRONMENT": "testing",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "MAX_RETRIES": "2",
        "RETRY_DELAY": "0.01",
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    for key in ("DATA_SPREADSHEET_ID", "LOG_FILE", "LOG_FORMAT", "GOOGLE_PRIVATE_KEY"):
        monkeypatch.delenv(key, raising=False)

    # Clear the global config to force reload with test values
    import src.config.settings
    src.config.settings._config = None

    yield test_env_vars

    src.config.settings._config = None


@pytest.fixture
def cli_env(mock_env, monkeypatch):
    """Test environment for CLI commands, with quiet logging."""
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return {**mock_env, "LOG_LEVEL": "WARNING"}


@pytest.fixture
def test_config(mock_env) -> CrewBillingConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def sample_staff():
    """Two directory entries, one with a bank account."""
    return [
        StaffMember(
            id="st-a",
            first_name="Lucía",
            last_name="Prieto",
            dni="11111111H",
            role="Cámara",
            province="Madrid",
            bank_account="ES00 0000 0000 0000 0000 0001",
        ),
        StaffMember(id="st-b", first_name="Iker", last_name="Soto", dni="22222222J"),
    ]


@pytest.fixture
def sample_events():
    """Two events covering every payment type."""
    return [
        ProductionEvent(
            id="ev-a",
            title="Festival de Otoño",
            date="2024-05-10",
            shifts=[
                TechnicianShift(
                    id="sh-a1",
                    event_id="ev-a",
                    role="Cámara",
                    person_name="Lucía Prieto",
                    dni="11111111H",
                    payment_type=PaymentType.AUTONOMO,
                    agreed_salary=Decimal("250"),
                    schedule=Schedule.FULL,
                ),
                TechnicianShift(
                    id="sh-a2",
                    event_id="ev-a",
                    role="Sonido",
                    person_name="Iker Soto",
                    dni="22222222J",
                    payment_type=PaymentType.ALTA_SEG_SOCIAL,
                    agreed_salary=Decimal("120"),
                    schedule=Schedule.HALF,
                    social_security_start_date="2024-05-10",
                    social_security_end_date="2024-05-10",
                ),
            ],
        ),
        ProductionEvent(
            id="ev-b",
            title="Gala Benéfica",
            date="2024-06-02",
            shifts=[
                TechnicianShift(
                    id="sh-b1",
                    event_id="ev-b",
                    role="Cámara 2",
                    person_name="Lucía Prieto",
                    dni="11111111H",
                    payment_type=PaymentType.COOPERATIVA,
                    agreed_salary=Decimal("200"),
                    invoice_number="F-77",
                    total_invoice_amount=Decimal("242"),
                ),
                TechnicianShift(
                    id="sh-b2",
                    event_id="ev-b",
                    role="Realización",
                    person_name="Nora Vidal",
                    dni="33333333P",
                    payment_type=PaymentType.PLANTILLA,
                ),
            ],
        ),
    ]


@pytest.fixture(autouse=True)
def restore_logging():
    """Leave the root logger as pytest found it."""
    yield
    reset_logging()


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "api: mark test as touching Google API wrappers")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "google" in item.name.lower() or "sheets" in item.name.lower():
            item.add_marker(pytest.mark.api)
