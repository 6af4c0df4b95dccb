"""Tests for billscan.cli."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from billscan.cli import cli
from billscan.models import CategoryMatch, ExtractedBill, ScanResult
from billscan.ocr import ExtractionFailure

if TYPE_CHECKING:
    from pathlib import Path
    from unittest.mock import MagicMock


class TestExtractCommand:
    """Tests for `billscan extract`."""

    def test_reads_stdin(self, sample_receipt_text: str) -> None:
        result = CliRunner().invoke(cli, ["extract"], input=sample_receipt_text)

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["vendorName"] == "BEST BUY 1234"
        assert data["totalAmount"] == "59.24"
        assert data["items"][0]["unitPrice"] == "9.99"

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "receipt.txt"
        path.write_text("Corner Market\nTotal: $4.20\n", encoding="utf-8")

        result = CliRunner().invoke(cli, ["extract", str(path)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["vendorName"] == "Corner Market"
        assert data["date"] is None


class TestCategorizeCommand:
    """Tests for `billscan categorize`."""

    def test_with_vendor(self) -> None:
        result = CliRunner().invoke(
            cli,
            ["categorize", "bought a new MacBook laptop", "--vendor", "Apple Store"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["category"] == "Electronics"
        assert data["subcategory"] == "Computers"

    def test_fallback(self) -> None:
        result = CliRunner().invoke(cli, ["categorize", "xyz"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "category": "Other",
            "confidence": 100,
            "subcategory": None,
        }


class TestScanCommand:
    """Tests for `billscan scan`."""

    @patch("billscan.cli.scan_receipt")
    def test_prints_scan_result(
        self, mock_scan: MagicMock, receipt_image: Path
    ) -> None:
        mock_scan.return_value = ScanResult(
            bill=ExtractedBill(raw_text="Corner Market", vendor_name="Corner Market"),
            category=CategoryMatch(category="Other", confidence=100),
        )

        result = CliRunner().invoke(
            cli, ["scan", str(receipt_image), "--product", "milk"]
        )

        assert result.exit_code == 0, result.output
        mock_scan.assert_called_once_with(str(receipt_image), "milk")
        data = json.loads(result.stdout)
        assert data["bill"]["vendorName"] == "Corner Market"
        assert data["category"]["category"] == "Other"

    @patch("billscan.cli.scan_receipt")
    def test_extraction_failure_exits_nonzero(
        self, mock_scan: MagicMock, receipt_image: Path
    ) -> None:
        mock_scan.side_effect = ExtractionFailure("Failed to extract text")

        result = CliRunner().invoke(cli, ["scan", str(receipt_image)])

        assert result.exit_code == 1
        assert "Failed to extract text" in result.output

    def test_missing_image_rejected(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["scan", str(tmp_path / "missing.png")])
        assert result.exit_code == 2


class TestCategoriesCommand:
    """Tests for `billscan categories`."""

    def test_lists_categories_in_order(self) -> None:
        result = CliRunner().invoke(cli, ["categories"])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0] == "Electronics"
        assert lines[-1] == "Other"
        assert len(lines) == 9

    def test_with_subcategories(self) -> None:
        result = CliRunner().invoke(cli, ["categories", "--with-subcategories"])

        assert result.exit_code == 0, result.output
        assert "  Computers" in result.stdout.splitlines()


class TestLogLevelOption:
    """Tests for the --log-level group option."""

    def test_invalid_env_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        result = CliRunner().invoke(cli, ["categories"])

        assert result.exit_code == 1
        assert "LOG_LEVEL" in result.output

    def test_explicit_level_overrides_env(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        result = CliRunner().invoke(cli, ["--log-level", "debug", "categories"])

        assert result.exit_code == 0, result.output
