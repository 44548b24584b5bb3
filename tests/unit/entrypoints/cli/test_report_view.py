"""Unit tests for the Rich rendering of verification reports."""

import io

from rich.console import Console

from pactverify.domain.mismatches import StatusMismatch
from pactverify.domain.report import InteractionOutcome, VerificationReport
from pactverify.entrypoints.cli.helpers.report_view import build_table, print_report


def render(report: VerificationReport) -> str:
    buffer = io.StringIO()
    print_report(report, Console(file=buffer, width=200, color_system=None))
    return buffer.getvalue()


def test_one_row_per_outcome():
    report = VerificationReport(
        "order-ui",
        "order-api",
        (
            InteractionOutcome("order exists", "order 1 exists"),
            InteractionOutcome(
                "order missing", mismatches=(StatusMismatch("status", 404, 200),)
            ),
        ),
    )
    table = build_table(report)
    assert table.row_count == 2
    assert [column.header for column in table.columns] == [
        "#",
        "Interaction",
        "Provider state",
        "Result",
        "Details",
    ]


def test_rendered_report_shows_summary_and_details():
    report = VerificationReport(
        "order-ui",
        "order-api",
        (InteractionOutcome("order missing", mismatches=(StatusMismatch("status", 404, 200),)),),
    )
    output = render(report)
    assert "0/1 interaction(s) passed" in output
    assert "order missing" in output
    assert "failed" in output
    assert "StatusMismatch at status: expected 404, actual 200" in output


def test_empty_report_prints_only_the_summary():
    report = VerificationReport("order-ui", "order-api")
    assert render(report).strip() == report.summary()
