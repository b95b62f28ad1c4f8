"""Shared fixtures for atacpipe tests."""

import json
import os

import pytest

from atacpipe.utils.errors import StageFailureError


FASTP_JSON = {
    "summary": {
        "before_filtering": {
            "total_reads": 1000000,
            "q30_rate": 0.9012,
        },
        "after_filtering": {
            "total_reads": 950000,
            "q30_rate": 0.9321,
            "gc_content": 0.4512,
            "read1_mean_length": 148,
            "read2_mean_length": 147,
        },
    },
    "duplication": {"rate": 0.1234},
}

FLAGSTAT = """1000000 + 0 in total (QC-passed reads + QC-failed reads)
0 + 0 secondary
0 + 0 supplementary
0 + 0 duplicates
950000 + 0 mapped (95.00% : N/A)
1000000 + 0 paired in sequencing
"""

MARKDUP = """COMMAND: samtools markdup -r -s - -
READ: 1000
WRITTEN: 800
EXCLUDED: 0
EXAMINED: 1000
PAIRED: 1000
DUPLICATE TOTAL: 200
"""

GTF = (
    "#!genome-build test\n"
    "chr1\ttest\tgene\t1\t10\t.\t+\t.\tgene_id \"g1\";\n"
)


def write_output(path):
    """Write a plausible tool output, content picked by the file name."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    if path.endswith(".fastp.json"):
        content = json.dumps(FASTP_JSON)
    elif path.endswith(".flagstat"):
        content = FLAGSTAT
    elif path.endswith(".markdup.log"):
        content = MARKDUP
    else:
        content = "data\n"
    with open(path, "w") as fh:
        fh.write(content)


class FakeInvoker:
    """Records ToolCmd calls and creates the declared outputs."""

    def __init__(self, extra_outputs=None, fail=None, create_outputs=True):
        self.calls = []
        self.extra_outputs = extra_outputs or {}
        self.fail = fail
        self.create_outputs = create_outputs

    @property
    def n_calls(self):
        return len(self.calls)

    @property
    def labels(self):
        return [label for label, _ in self.calls]

    def run(self, cmd, label=None):
        label = label or cmd.name
        self.calls.append((label, cmd))
        if label == self.fail:
            raise StageFailureError(label, "{} failed, exit code: 1".format(cmd.name))
        if self.create_outputs:
            for f in cmd.outputs + self.extra_outputs.get(label, []):
                write_output(f)
        return (0, "", "")


@pytest.fixture
def genome(tmp_path):
    """Two chromosomes, 14 non-N bases."""
    d = tmp_path / "genome"
    d.mkdir()
    fa = d / "ref.fa"
    fa.write_text(">chr1\nACGTNNACGT\n>chr2\nGGCCAANN\n")
    return str(fa)


@pytest.fixture
def annotation(tmp_path):
    d = tmp_path / "anno"
    d.mkdir()
    gtf = d / "ref.gtf"
    gtf.write_text(GTF)
    return str(gtf)


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture
def out_dir(tmp_path):
    return str(tmp_path / "results")


@pytest.fixture
def fastp_json(tmp_path):
    f = tmp_path / "smp.fastp.json"
    f.write_text(json.dumps(FASTP_JSON))
    return str(f)


@pytest.fixture
def flagstat(tmp_path):
    f = tmp_path / "smp.flagstat"
    f.write_text(FLAGSTAT)
    return str(f)


@pytest.fixture
def markdup_log(tmp_path):
    f = tmp_path / "smp.markdup.log"
    f.write_text(MARKDUP)
    return str(f)


@pytest.fixture
def fake_invoker():
    return FakeInvoker()
