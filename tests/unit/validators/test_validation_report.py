"""Unit tests for ValidationReport."""

from src.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)


class TestValidationReport:
    def test_empty_report(self):
        report = ValidationReport()

        assert report.is_valid()
        assert not report.has_errors()
        assert report.summary() == "No issues found"
        assert report.format() == "Validation successful - no issues found"

    def test_counts_by_severity(self):
        report = ValidationReport()
        report.add_error("event_id", "Wrong event", "e2")
        report.add_warning("dni", "No DNI", "")
        report.add_warning("dni", "No DNI", "")
        report.add_info("invoice_number", "Invoice pending", None)

        assert report.error_count == 1
        assert report.warning_count == 2
        assert report.info_count == 1
        assert not report.is_valid()
        assert report.summary() == "1 error(s), 2 warning(s), 1 info message(s)"

    def test_warnings_do_not_invalidate(self):
        report = ValidationReport()
        report.add_warning("dni", "No DNI", "")
        assert report.is_valid()

    def test_issues_with_keeps_order(self):
        report = ValidationReport()
        report.add_info("a", "first", None)
        report.add_error("b", "error", None)
        report.add_info("c", "second", None)

        assert [i.field for i in report.issues_with(ValidationSeverity.INFO)] == ["a", "c"]

    def test_merge(self):
        first, second = ValidationReport(), ValidationReport()
        first.add_error("a", "x", None)
        second.add_warning("b", "y", None)

        first.merge(second)

        assert first.error_count == 1
        assert first.warning_count == 1

    def test_format_groups_most_severe_first(self):
        report = ValidationReport()
        report.add_info("invoice_number", "Invoice pending", None, {"event": "Gala"})
        report.add_error("event_id", "Wrong event", "e2", {"event": "Gala", "shift": "s1"})

        text = report.format()

        assert text.index("ERRORS:") < text.index("INFO:")
        assert "[ERROR] event_id: Wrong event (event=Gala, shift=s1)" in text

    def test_issue_str_without_context(self):
        issue = ValidationIssue(ValidationSeverity.WARNING, "dni", "No DNI", "")
        assert str(issue) == "[WARNING] dni: No DNI"

    def test_severity_ordering(self):
        assert ValidationSeverity.INFO < ValidationSeverity.WARNING < ValidationSeverity.ERROR
