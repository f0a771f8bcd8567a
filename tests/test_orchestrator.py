"""
Tests for the orchestrator workflows: scan, compare, partial scans and the
interactive menu.
"""

import json
from unittest.mock import Mock, patch

import pytest

from cli import parse_args
from core.exceptions import ScanException, ValidationException
from core.models import ArtifactScanResult, ImageScanOutcome
from core.orchestrator import HelmscanOrchestrator
from core.scanner import ArtifactScanner


@pytest.fixture(autouse=True)
def tools_installed():
    with patch("core.orchestrator.ToolValidator") as validator:
        yield validator


@pytest.fixture
def scan_results(before_chart, after_chart, single_image_artifact):
    return {
        "bitnami/nginx@15.0.0": ArtifactScanResult(artifact=before_chart),
        "bitnami/nginx@15.1.0": ArtifactScanResult(artifact=after_chart),
        "nginx:1.25": ArtifactScanResult(artifact=single_image_artifact),
    }


@pytest.fixture
def scanner(scan_results):
    scanner = Mock(spec=ArtifactScanner)
    scanner.scan.side_effect = lambda ref: scan_results[ref]
    return scanner


def _orchestrator(argv, scanner, tmp_path, inputs=()):
    args = parse_args(argv + ["--output-dir", str(tmp_path / "reports")])
    answers = iter(inputs)
    orchestrator = HelmscanOrchestrator(args, scanner=scanner, input_fn=lambda prompt: next(answers))
    orchestrator.config.validate()
    return orchestrator


class TestCompare:
    """Tests for the comparison workflow."""

    def test_compare_returns_first_format(self, scanner, tmp_path):
        """Test the first requested format is returned."""
        orchestrator = _orchestrator(["--compare", "-f", "markdown,json"], scanner, tmp_path)
        report = orchestrator.compare_artifacts("bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0")
        assert report.startswith("## Helm Chart Comparison Report bitnami/nginx@15.0.0 to bitnami/nginx@15.1.0")

    def test_compare_saves_every_format(self, scanner, tmp_path):
        """Test --report saves one file per format."""
        orchestrator = _orchestrator(["--report", "-f", "markdown,json,html"], scanner, tmp_path)
        orchestrator.compare_artifacts("bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0")

        base = tmp_path / "reports" / "bitnami_nginx_15.0.0_to_bitnami_nginx_15.1.0_helm_comparison"
        assert base.with_suffix(".md").exists()
        assert base.with_suffix(".html").exists()
        document = json.loads(base.with_suffix(".json").read_text())
        assert document["report_type"] == "helm_comparison"

    def test_no_files_without_report_flag(self, scanner, tmp_path):
        """Test reports are only printed by default."""
        orchestrator = _orchestrator([], scanner, tmp_path)
        orchestrator.compare_artifacts("bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0")
        assert not (tmp_path / "reports").exists()

    def test_mixed_kinds_rejected(self, scanner, tmp_path):
        """Test a chart cannot be compared with an image."""
        orchestrator = _orchestrator([], scanner, tmp_path)
        with pytest.raises(ValidationException):
            orchestrator.compare_artifacts("bitnami/nginx@15.0.0", "nginx:1.25")
        scanner.scan.assert_not_called()

    def test_helm_checked_for_charts(self, scanner, tmp_path, tools_installed):
        """Test both tools are validated for chart comparisons."""
        orchestrator = _orchestrator([], scanner, tmp_path)
        orchestrator.compare_artifacts("bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0")
        tools = tools_installed.call_args[0][0]
        assert [tool.name() for tool in tools] == ["trivy", "helm"]


class TestPartialScans:
    """Tests for the incomplete-scan policy."""

    @pytest.fixture
    def partial(self, scan_results, after_chart):
        failure = ImageScanOutcome(reference="docker.io/bitnami/os-shell:12", error_message="timeout")
        scan_results["bitnami/nginx@15.1.0"] = ArtifactScanResult(artifact=after_chart, failures=(failure,))

    def test_incomplete_scan_rejected(self, scanner, tmp_path, partial, caplog):
        """Test failures abort the comparison by default."""
        orchestrator = _orchestrator([], scanner, tmp_path)
        with pytest.raises(ScanException, match="1 image"):
            orchestrator.compare_artifacts("bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0")
        assert "docker.io/bitnami/os-shell:12: timeout" in caplog.text

    def test_allow_partial(self, scanner, tmp_path, partial, caplog):
        """Test --allow-partial reports on the images that scanned."""
        orchestrator = _orchestrator(["--allow-partial"], scanner, tmp_path)
        report = orchestrator.compare_artifacts("bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0")
        assert "### Images" in report
        assert "incomplete" in caplog.text


class TestScan:
    """Tests for the single-scan workflow."""

    def test_scan_and_save(self, scanner, tmp_path):
        """Test a single image scan is rendered and saved."""
        orchestrator = _orchestrator(["--report"], scanner, tmp_path)
        report = orchestrator.scan_artifact("nginx:1.25")

        assert report.startswith("## Image Scan Report docker.io/library/nginx@1.25")
        saved = tmp_path / "reports" / "image_scan_docker.io_library_nginx_1.25.md"
        assert saved.read_text() == report

    def test_only_trivy_checked_for_images(self, scanner, tmp_path, tools_installed):
        """Test helm is not required for image scans."""
        orchestrator = _orchestrator([], scanner, tmp_path)
        orchestrator.scan_artifact("nginx:1.25")
        tools = tools_installed.call_args[0][0]
        assert [tool.name() for tool in tools] == ["trivy"]


class TestRun:
    """Tests for command dispatch."""

    def test_run_scan(self, scanner, tmp_path, capsys):
        """Test a single reference prints its scan report."""
        _orchestrator(["nginx:1.25"], scanner, tmp_path).run()
        assert "Image Scan Report" in capsys.readouterr().out

    def test_run_compare(self, scanner, tmp_path, capsys):
        """Test --compare prints the comparison report."""
        argv = ["--compare", "bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0", "-f", "json"]
        _orchestrator(argv, scanner, tmp_path).run()
        assert json.loads(capsys.readouterr().out)["report_type"] == "helm_comparison"

    def test_compare_needs_two_refs(self, scanner, tmp_path):
        """Test --compare with one reference exits."""
        with pytest.raises(SystemExit) as exc:
            _orchestrator(["--compare", "nginx:1.25"], scanner, tmp_path).run()
        assert exc.value.code == 1

    def test_errors_exit(self, scanner, tmp_path):
        """Test domain errors exit with status 1."""
        with pytest.raises(SystemExit) as exc:
            _orchestrator(["--compare", "bitnami/nginx@15.0.0", "nginx:1.25"], scanner, tmp_path).run()
        assert exc.value.code == 1

    def test_invalid_format_exits(self, scanner, tmp_path):
        """Test unknown formats exit before scanning."""
        args = parse_args(["nginx:1.25", "-f", "xlsx"])
        with pytest.raises(SystemExit):
            HelmscanOrchestrator(args, scanner=scanner).run()
        scanner.scan.assert_not_called()


class TestInteractiveMenu:
    """Tests for the interactive menu."""

    def test_scan_then_exit(self, scanner, tmp_path, capsys):
        """Test menu option 1 scans and option 3 exits."""
        orchestrator = _orchestrator([], scanner, tmp_path, inputs=["1", "nginx:1.25", "3"])
        orchestrator.run()
        out = capsys.readouterr().out
        assert "Artifact Security Scanner Menu" in out
        assert "Image Scan Report" in out

    def test_compare_option(self, scanner, tmp_path, capsys):
        """Test menu option 2 compares two references."""
        inputs = ["2", "bitnami/nginx@15.0.0", "bitnami/nginx@15.1.0", "3"]
        _orchestrator([], scanner, tmp_path, inputs=inputs).run()
        assert "Helm Chart Comparison Report" in capsys.readouterr().out

    def test_errors_do_not_end_menu(self, scanner, tmp_path, caplog):
        """Test invalid choices and failed actions return to the menu."""
        inputs = ["9", "2", "bitnami/nginx@15.0.0", "nginx:1.25", "3"]
        _orchestrator([], scanner, tmp_path, inputs=inputs).run()
        assert "Invalid option" in caplog.text
        assert "Cannot compare a Helm chart" in caplog.text
