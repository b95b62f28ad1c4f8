"""Tests for metrics parsing and the report."""

import json

import pytest
from rich.console import Console

from atacpipe.atac.atac_qc import (
    MetricsAggregator,
    align_severity,
    parse_fastp_json,
    parse_flagstat,
    parse_markdup,
)


class TestParsers:
    """Test the tool output parsers."""

    def test_fastp_json(self, fastp_json):
        d = parse_fastp_json(fastp_json)
        assert d["raw_reads"] == 1000000
        assert d["clean_reads"] == 950000
        assert d["q30_rate"] == pytest.approx(93.21)
        assert d["gc_content"] == pytest.approx(45.12)
        assert d["mean_length"] == pytest.approx(147.5)
        assert d["dup_rate"] == pytest.approx(12.34)

    def test_fastp_json_single_end(self, tmp_path):
        f = tmp_path / "se.fastp.json"
        f.write_text(json.dumps({
            "summary": {"after_filtering": {"total_reads": 10, "read1_mean_length": 50}}
        }))
        d = parse_fastp_json(str(f))
        assert d == {"clean_reads": 10, "mean_length": 50}

    def test_fastp_json_missing(self, tmp_path):
        assert parse_fastp_json(str(tmp_path / "none.json")) == {}

    def test_flagstat(self, flagstat):
        assert parse_flagstat(flagstat)["align_rate"] == pytest.approx(95.0)

    def test_flagstat_without_percent(self, tmp_path):
        f = tmp_path / "a.flagstat"
        f.write_text(
            "200 + 0 in total (QC-passed reads + QC-failed reads)\n"
            "150 + 0 mapped (N/A : N/A)\n"
        )
        assert parse_flagstat(str(f))["align_rate"] == pytest.approx(75.0)

    def test_flagstat_primary_mapped_ignored(self, tmp_path):
        f = tmp_path / "a.flagstat"
        f.write_text(
            "100 + 0 in total (QC-passed reads + QC-failed reads)\n"
            "80 + 0 mapped (80.00% : N/A)\n"
            "60 + 0 primary mapped (60.00% : N/A)\n"
        )
        assert parse_flagstat(str(f))["align_rate"] == pytest.approx(80.0)

    def test_markdup(self, markdup_log):
        assert parse_markdup(markdup_log)["dup_rate"] == pytest.approx(20.0)

    def test_markdup_nothing_examined(self, tmp_path):
        f = tmp_path / "a.markdup.log"
        f.write_text("EXAMINED: 0\nDUPLICATE TOTAL: 0\n")
        assert parse_markdup(str(f)) == {}


class TestSeverity:
    """Test the alignment rate levels."""

    @pytest.mark.parametrize(
        "pct, level",
        [
            (99.0, "high confidence"),
            (90.0, "high confidence"),
            (89.99, "marginal"),
            (70.0, "marginal"),
            (69.9, "low confidence"),
        ],
    )
    def test_levels(self, pct, level):
        assert align_severity(pct)[0] == level


class TestMetricsAggregator:
    """Test the aggregated report."""

    def test_empty_report_is_na(self, tmp_path):
        m = MetricsAggregator("smp")
        report = tmp_path / "smp.atacpipe.report.txt"
        m.write(str(report))
        lines = report.read_text().splitlines()
        assert len(lines) == 7
        assert all(line.endswith(": NA") for line in lines)

    def test_full_report(self, tmp_path, fastp_json, flagstat):
        m = MetricsAggregator("smp")
        m.add_trim(fastp_json)
        m.add_flagstat(flagstat)
        report = tmp_path / "smp.atacpipe.report.txt"
        metrics_json = tmp_path / "smp.metrics.json"
        m.write(str(report), str(metrics_json))
        assert report.read_text().splitlines() == [
            "Q30 rate: 93.21%",
            "Mean clean read length: 147.5",
            "GC content: 45.12%",
            "Duplication rate: 12.34%",
            "Total raw reads: 1000000",
            "Total clean reads: 950000",
            "Alignment rate: 95.00%",
        ]
        d = json.loads(metrics_json.read_text())
        assert d["name"] == "smp"
        assert d["raw_reads"] == 1000000

    def test_markdup_is_fallback(self, fastp_json, markdup_log):
        m = MetricsAggregator("smp")
        m.add_trim(fastp_json)
        m.add_markdup(markdup_log)
        assert m.metrics["dup_rate"] == pytest.approx(12.34)

    def test_markdup_fills_bam_mode(self, markdup_log):
        m = MetricsAggregator("smp")
        m.add_markdup(markdup_log)
        assert m.metrics["dup_rate"] == pytest.approx(20.0)

    def test_file_has_no_markup(self, tmp_path, flagstat):
        m = MetricsAggregator("smp")
        m.add_flagstat(flagstat)
        report = tmp_path / "r.txt"
        m.write(str(report))
        text = report.read_text()
        assert "[green]" not in text
        assert "confidence" not in text

    def test_show_colors_alignment_rate(self, flagstat):
        m = MetricsAggregator("smp")
        m.add_flagstat(flagstat)
        assert "[green]Alignment rate: 95.00% (high confidence)[/green]" in m.render(color=True)
        console = Console(record=True, width=120)
        m.show(console)
        text = console.export_text()
        assert "Alignment rate: 95.00% (high confidence)" in text
