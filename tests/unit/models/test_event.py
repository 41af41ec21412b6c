"""Unit tests for the production event and shift models."""

import datetime as dt
from decimal import Decimal

from src.models import PaymentType, ProductionEvent, Schedule, TechnicianShift


class TestPaymentType:
    def test_parse_known_values(self):
        assert PaymentType.parse("Cooperativa") == PaymentType.COOPERATIVA
        assert PaymentType.parse("alta seg. social") == PaymentType.ALTA_SEG_SOCIAL
        assert PaymentType.parse(PaymentType.EMPRESA) == PaymentType.EMPRESA

    def test_parse_unknown_values(self):
        assert PaymentType.parse("Freelance") == PaymentType.UNKNOWN
        assert PaymentType.parse(None) == PaymentType.UNKNOWN


class TestTechnicianShift:
    """Test suite for TechnicianShift."""

    def test_create_from_stored_document(self):
        shift = TechnicianShift.model_validate(
            {
                "id": "s1",
                "eventId": "e1",
                "role": "Cámara",
                "personName": "Ana Ruiz",
                "dni": "12345678Z",
                "agreedSalary": 250,
                "paymentType": "Autonomo",
                "schedule": "Media",
                "invoiceNumber": "F-1",
                "totalInvoiceAmount": "302.5",
            }
        )

        assert shift.event_id == "e1"
        assert shift.person_name == "Ana Ruiz"
        assert shift.agreed_salary == Decimal("250")
        assert shift.payment_type == PaymentType.AUTONOMO
        assert shift.schedule == Schedule.HALF
        assert shift.total_invoice_amount == Decimal("302.5")

    def test_missing_fields_degrade(self):
        shift = TechnicianShift.model_validate({"agreedSalary": "abc"})

        assert shift.role == ""
        assert shift.dni == ""
        assert shift.agreed_salary == Decimal("0")
        assert shift.payment_type == PaymentType.UNKNOWN
        assert shift.schedule == Schedule.FULL
        assert shift.total_invoice_amount is None

    def test_blank_override_is_unset(self):
        shift = TechnicianShift(totalInvoiceAmount="")
        assert shift.total_invoice_amount is None

    def test_zero_override_is_kept(self):
        shift = TechnicianShift(totalInvoiceAmount=0)
        assert shift.total_invoice_amount == Decimal("0")

    def test_schedule_enum_value_is_kept(self):
        shift = TechnicianShift(schedule=Schedule.HALF)
        assert shift.schedule == Schedule.HALF

    def test_to_document(self):
        shift = TechnicianShift(
            id="s1",
            person_name="Ana Ruiz",
            payment_type=PaymentType.ALTA_SEG_SOCIAL,
            agreed_salary=Decimal("300"),
            social_security_start_date="2024-03-15",
        )

        document = shift.to_document()

        assert document["personName"] == "Ana Ruiz"
        assert document["agreedSalary"] == 300.0
        assert document["paymentType"] == "Alta Seg. Social"
        assert document["schedule"] == "Completa"
        assert document["socialSecurity"] is True
        assert "invoiceNumber" not in document
        assert "totalInvoiceAmount" not in document

    def test_document_round_trip(self):
        shift = TechnicianShift(
            id="s1", payment_type="Cooperativa", total_invoice_amount="217.8"
        )
        restored = TechnicianShift.model_validate(shift.to_document())
        assert restored == shift


class TestProductionEvent:
    """Test suite for ProductionEvent."""

    def test_date_normalization(self):
        assert ProductionEvent(date=dt.date(2024, 3, 15)).date == "2024-03-15"
        assert ProductionEvent(date=dt.datetime(2024, 3, 15, 20, 0)).date == "2024-03-15"
        assert ProductionEvent(date="2024-03-15T20:00:00Z").date == "2024-03-15"
        assert ProductionEvent(date="2024-03-15").date == "2024-03-15"

    def test_missing_shifts_become_empty_list(self):
        event = ProductionEvent.model_validate({"id": "e1", "shifts": None})
        assert event.shifts == []

    def test_with_stamped_shifts(self):
        event = ProductionEvent(
            id="e1",
            shifts=[TechnicianShift(id="s1", event_id="other"), TechnicianShift(id="s2")],
        )

        stamped = event.with_stamped_shifts()

        assert [s.event_id for s in stamped.shifts] == ["e1", "e1"]
        assert event.shifts[0].event_id == "other"

    def test_find_shift(self):
        event = ProductionEvent(id="e1", shifts=[TechnicianShift(id="s1")])
        assert event.find_shift("s1").id == "s1"
        assert event.find_shift("missing") is None

    def test_to_document_serializes_shifts(self):
        event = ProductionEvent(
            id="e1", title="Gala", date="2024-03-15", shifts=[TechnicianShift(id="s1")]
        )

        document = event.to_document()

        assert document["title"] == "Gala"
        assert document["shifts"][0]["id"] == "s1"
        assert document["shifts"][0]["socialSecurity"] is False
