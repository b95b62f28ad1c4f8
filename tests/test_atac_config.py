"""Tests for configuration validation."""

import os

import pytest
import yaml

from atacpipe.atac.atac_config import AtacConfig
from atacpipe.atac.atac_input import Mode
from atacpipe.utils.errors import ConfigValidationError, FormatError, PathError


@pytest.fixture
def fq(data_dir):
    f = data_dir / "reads.fq.gz"
    f.write_bytes(b"@r1\nACGT\n+\nIIII\n")
    return str(f)


def make_config(fq, genome, annotation, out_dir, **kwargs):
    args = {
        "input": fq,
        "genome": genome,
        "annotation": annotation,
        "out_dir": out_dir,
    }
    args.update(kwargs)
    return AtacConfig(**args)


class TestValues:
    """Test range and conflict checks."""

    def test_defaults(self, fq, genome, annotation, out_dir):
        c = make_config(fq, genome, annotation, out_dir)
        assert c.quality_base == 20
        assert c.threads == 8
        assert c.bin_size == 0
        assert c.mapq == 30
        assert c.policy == "resume"
        assert c.mode == Mode.FASTQ_SE
        assert c.is_paired is False
        assert c.smp_name == "reads"

    @pytest.mark.parametrize("q", [-1, 41, 100])
    def test_quality_out_of_range(self, fq, genome, annotation, out_dir, q):
        with pytest.raises(ConfigValidationError):
            make_config(fq, genome, annotation, out_dir, quality_base=q)

    @pytest.mark.parametrize("q", [0, 40])
    def test_quality_bounds(self, fq, genome, annotation, out_dir, q):
        assert make_config(fq, genome, annotation, out_dir, quality_base=q).quality_base == q

    @pytest.mark.parametrize("key", ["quality_base", "threads", "bin_size", "mapq"])
    def test_bool_is_not_int(self, fq, genome, annotation, out_dir, key):
        with pytest.raises(ConfigValidationError):
            make_config(fq, genome, annotation, out_dir, **{key: True})

    def test_threads_min(self, fq, genome, annotation, out_dir):
        with pytest.raises(ConfigValidationError):
            make_config(fq, genome, annotation, out_dir, threads=1)

    def test_negative_bin_size(self, fq, genome, annotation, out_dir):
        with pytest.raises(ConfigValidationError):
            make_config(fq, genome, annotation, out_dir, bin_size=-5)

    def test_force_and_skip(self, fq, genome, annotation, out_dir):
        with pytest.raises(ConfigValidationError):
            make_config(fq, genome, annotation, out_dir, force=True, skip=True)

    def test_force_policy(self, fq, genome, annotation, out_dir):
        assert make_config(fq, genome, annotation, out_dir, force=True).policy == "force"

    def test_no_dirs_created_on_error(self, fq, genome, annotation, out_dir):
        with pytest.raises(ConfigValidationError):
            make_config(fq, genome, annotation, out_dir, quality_base=41)
        assert not os.path.exists(os.path.join(out_dir, "reads"))


class TestFiles:
    """Test input files and output layout."""

    def test_missing_input(self, data_dir, genome, annotation, out_dir):
        with pytest.raises(PathError):
            make_config(str(data_dir / "none.fq"), genome, annotation, out_dir)

    def test_missing_genome(self, fq, tmp_path, annotation, out_dir):
        with pytest.raises(PathError):
            make_config(fq, str(tmp_path / "none.fa"), annotation, out_dir)

    def test_sra_accession_not_required(self, genome, annotation, out_dir):
        c = make_config("SRR1234567", genome, annotation, out_dir)
        assert c.mode == Mode.SRA
        assert c.input == "SRR1234567"
        assert c.smp_name == "SRR1234567"
        assert c.is_paired is None

    def test_annotation_extension(self, fq, genome, tmp_path, out_dir):
        bad = tmp_path / "ref.bed"
        bad.write_text("chr1\t1\t10\n")
        with pytest.raises(FormatError):
            make_config(fq, genome, str(bad), out_dir)

    def test_annotation_columns(self, fq, genome, tmp_path, out_dir):
        bad = tmp_path / "ref.gff3"
        bad.write_text("##gff-version 3\nchr1\ttest\tgene\t1\t10\t.\t+\t.\n")
        with pytest.raises(FormatError):
            make_config(fq, genome, str(bad), out_dir)

    def test_paired_input(self, data_dir, genome, annotation, out_dir):
        fq1 = data_dir / "demo_1.fq"
        fq2 = data_dir / "demo_2.fq"
        fq1.write_text("@r1\nACGT\n+\nIIII\n")
        fq2.write_text("@r1\nACGT\n+\nIIII\n")
        c = make_config(str(fq1), genome, annotation, out_dir, input2=str(fq2))
        assert c.mode == Mode.FASTQ_PE
        assert c.is_paired is True
        assert c.smp_name == "demo"

    def test_layout_and_save(self, fq, genome, annotation, out_dir):
        c = make_config(fq, genome, annotation, out_dir)
        for d in ["config", "log", "raw_data", "clean_data", "bam_files", "peak", "bw_files", "report"]:
            assert os.path.isdir(os.path.join(out_dir, "reads", d))
        assert c.bam == os.path.join(out_dir, "reads", "bam_files", "reads.bam")
        assert c.report_txt.endswith("report/reads.atacpipe.report.txt")
        c.save()
        with open(c.config_yaml) as fh:
            d = yaml.safe_load(fh)
        assert d["mode"] == "fastq_se"
        assert d["smp_name"] == "reads"
