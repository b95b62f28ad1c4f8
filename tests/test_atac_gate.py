"""Tests for the StepGate resume logic."""

import os

import pytest

from atacpipe.atac.atac_gate import StepGate, artifact_ok
from atacpipe.utils.errors import StageFailureError


class TestArtifact:
    """Test when an artifact counts as produced."""

    def test_missing_file(self, tmp_path):
        assert artifact_ok(str(tmp_path / "a.bam")) is False

    def test_empty_file(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_text("")
        assert artifact_ok(str(f)) is False

    def test_non_empty_file(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_text("data")
        assert artifact_ok(str(f)) is True

    def test_glob_all_matches_non_empty(self, tmp_path):
        (tmp_path / "smp_1.fastq").write_text("@r1\n")
        (tmp_path / "smp_2.fastq").write_text("")
        assert artifact_ok(str(tmp_path / "smp*.fastq")) is False
        (tmp_path / "smp_2.fastq").write_text("@r1\n")
        assert artifact_ok(str(tmp_path / "smp*.fastq")) is True

    def test_directory(self, tmp_path):
        d = tmp_path / "index"
        d.mkdir()
        assert artifact_ok(str(d)) is False
        (d / "ref.1.bt2").write_text("x")
        assert artifact_ok(str(d)) is True


class TestStepGate:
    """Test should_run and verify under each policy."""

    def test_should_run_missing(self, tmp_path):
        gate = StepGate()
        assert gate.should_run([str(tmp_path / "a.bam")]) is True

    def test_should_run_zero_bytes(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_bytes(b"")
        assert StepGate().should_run([str(f)]) is True

    def test_skip_when_done(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_bytes(b"BAM")
        assert StepGate().should_run([str(f)]) is False

    def test_all_artifacts_required(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_bytes(b"BAM")
        assert StepGate().should_run([str(f), str(f) + ".bai"]) is True

    def test_no_artifacts_always_runs(self):
        assert StepGate().should_run([]) is True

    def test_force_runs_when_done(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_bytes(b"BAM")
        assert StepGate("force").should_run([str(f)]) is True

    def test_force_keeps_shared(self, tmp_path):
        f = tmp_path / "ref.1.bt2"
        f.write_bytes(b"BT2")
        assert StepGate("force").should_run([str(f)], shared=True) is False

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            StepGate("always")

    def test_verify_ok(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_bytes(b"BAM")
        assert StepGate().verify([str(f)], "align") is True

    def test_verify_empty_output(self, tmp_path):
        f = tmp_path / "a.bam"
        f.write_bytes(b"")
        log_file = os.path.join(str(tmp_path), "align.stderr")
        with pytest.raises(StageFailureError) as exc:
            StepGate().verify([str(f)], "align", log_file=log_file)
        assert exc.value.stage == "align"
        assert "a.bam" in exc.value.message
        assert log_file in exc.value.hint
