"""Tests for severity aggregation."""

from core.models import Artifact, Severity
from core.severity import count_by_severity, severity_delta


class TestCountBySeverity:
    """Tests for count_by_severity."""

    def test_counts_every_level(self, after_chart):
        """Test all levels are present, including zeros."""
        counts = count_by_severity(after_chart)
        assert counts == {
            Severity.CRITICAL: 1,
            Severity.HIGH: 2,
            Severity.MEDIUM: 1,
            Severity.LOW: 1,
            Severity.UNKNOWN: 1,
        }

    def test_conservation(self, before_chart, after_chart):
        """Test counts sum to the total number of per-image findings."""
        for artifact in (before_chart, after_chart):
            assert sum(count_by_severity(artifact).values()) == artifact.vulnerability_count

    def test_shared_cve_counted_per_image(self, make_image):
        """Test a CVE in two images counts twice."""
        artifact = Artifact(
            "a/b",
            "1",
            (make_image("x", findings={"CVE-1": "HIGH"}), make_image("y", findings={"CVE-1": "HIGH"})),
        )
        assert count_by_severity(artifact)[Severity.HIGH] == 2

    def test_empty_artifact(self, empty_chart):
        """Test an empty artifact has all-zero counts."""
        assert set(count_by_severity(empty_chart).values()) == {0}


class TestSeverityDelta:
    """Tests for severity_delta."""

    def test_fixed_order_and_values(self, before_chart, after_chart):
        """Test rows follow the table order with current, previous and difference."""
        rows = severity_delta(before_chart, after_chart)
        assert [(r.severity, r.current, r.previous, r.difference) for r in rows] == [
            (Severity.CRITICAL, 1, 1, 0),
            (Severity.HIGH, 2, 1, 1),
            (Severity.MEDIUM, 1, 1, 0),
            (Severity.LOW, 1, 1, 0),
            (Severity.UNKNOWN, 1, 0, 1),
        ]

    def test_unknown_omitted_when_zero(self, before_chart):
        """Test the unknown row only appears when either side has unknown findings."""
        rows = severity_delta(before_chart, before_chart)
        assert [r.severity for r in rows] == [
            Severity.CRITICAL,
            Severity.HIGH,
            Severity.MEDIUM,
            Severity.LOW,
        ]

    def test_unknown_on_before_side_only(self, after_chart, empty_chart):
        """Test unknown findings on the before side still produce a row."""
        rows = severity_delta(after_chart, empty_chart)
        assert rows[-1].severity is Severity.UNKNOWN
        assert (rows[-1].current, rows[-1].previous, rows[-1].difference) == (0, 1, -1)

    def test_rows_conserve_totals(self, before_chart, after_chart):
        """Test current and previous columns sum to each artifact's findings."""
        rows = severity_delta(before_chart, after_chart)
        assert sum(r.current for r in rows) == after_chart.vulnerability_count
        assert sum(r.previous for r in rows) == before_chart.vulnerability_count

    def test_self_comparison_has_no_differences(self, before_chart, after_chart):
        """Test comparing an artifact with itself gives zero differences."""
        for artifact in (before_chart, after_chart):
            rows = severity_delta(artifact, artifact)
            assert all(row.difference == 0 for row in rows)
            assert all(row.current == row.previous for row in rows)
