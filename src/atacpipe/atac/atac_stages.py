#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
Stages of ATAC pipeline

Stage: name, artifacts, runner, enabled, metrics, shared
  - artifacts(a): glob patterns, the output of the stage; None for
    in-process stages (never gated)
  - runner(a, invoker): run the stage
  - enabled(a): run the stage or not, eg: bigwig, cleanup
  - metrics(a, agg): collect metrics from the output
  - shared: the output is shared across runs (genome index)

`a` is the AtacR1 object: config, files, is_paired, genome_size

STAGE_TABLE: Mode -> ordered list of stage names
"""

import os
from atacpipe.utils.utils import log
from atacpipe.utils.file import check_dir, remove_file, symlink_file, list_file
from atacpipe.utils.genome import GenomeIndex
from atacpipe.utils.seq import fx_ext
from atacpipe.sra.fasterq import FasterqDump
from atacpipe.trim.fastp import Fastp
from atacpipe.align.bowtie2 import Bowtie2
from atacpipe.bam.samtools import Samtools
from atacpipe.callpeak.macs2 import Macs2
from atacpipe.bam2bw.bam2bw import Bam2bw
from atacpipe.atac.atac_input import Mode, reclassify_sra, guess_bam_paired


class Stage(object):
    def __init__(self, name, artifacts=None, runner=None, enabled=None,
        metrics=None, shared=False):
        self.name = name
        self.artifacts = artifacts
        self.runner = runner
        self.enabled = enabled
        self.metrics = metrics
        self.shared = shared


    @property
    def gated(self):
        return self.artifacts is not None


    def is_enabled(self, a):
        return self.enabled(a) if callable(self.enabled) else True


    def get_artifacts(self, a):
        return self.artifacts(a) if self.gated else []


    def run(self, a, invoker):
        return self.runner(a, invoker)


    def __repr__(self):
        return 'Stage({})'.format(self.name)


################################################################################
## helper
def genome_index(a):
    return GenomeIndex(a.genome, threads=a.threads)


def get_genome_size(a):
    """
    read from index.yaml, written by the index stage
    """
    if not isinstance(getattr(a, 'genome_size', None), int):
        a.genome_size = genome_index(a).effective_genome_size()
    return a.genome_size


def fasterq(a):
    return FasterqDump(sra=a.input, out_dir=a.raw_dir, smp_name=a.smp_name,
        threads=a.threads)


def raw_fq_list(a):
    """
    SRA: the extracted reads
    FASTQ: symlink to raw_data/, named by mate
      SE: <smp><ext>
      PE: <smp>_R1<ext>, <smp>_R2<ext>
    """
    if a.mode == Mode.SRA:
        return fasterq(a).list_fq()
    fq_list = [i for i in [a.input, a.input2] if isinstance(i, str)]
    out = []
    for i, fq in enumerate(fq_list):
        suffix = '_R{}'.format(i + 1) if len(fq_list) > 1 else ''
        dest = os.path.join(a.raw_dir, a.smp_name + suffix + fx_ext(fq))
        if os.path.abspath(fq) == os.path.abspath(dest):
            out.append(fq)
            continue
        symlink_file(fq, dest, absolute_path=True, force=True)
        out.append(dest)
    return out


def clean_fq_list(a):
    return [a.clean_fq1, a.clean_fq2] if a.is_paired else [a.clean_fq]


def align_bam(a):
    """BAM input: start from the input file"""
    return a.input if a.mode == Mode.BAM else a.bam_sorted


def samtools(a):
    return Samtools(threads=a.threads, mapq=a.mapq)


################################################################################
## runners
def run_extract(a, invoker):
    invoker.run(fasterq(a).get_cmd(), 'extract')


def run_reclassify(a, invoker):
    a.is_paired = reclassify_sra(fasterq(a).list_fq())


def run_bam_layout(a, invoker):
    a.is_paired = guess_bam_paired(a.input)


def run_trim(a, invoker):
    fq_list = raw_fq_list(a)
    fq1 = fq_list[0]
    fq2 = fq_list[1] if a.is_paired else None
    clean_fq1, clean_fq2 = (a.clean_fq1, a.clean_fq2) if a.is_paired \
        else (a.clean_fq, None)
    cmd = Fastp(fq1=fq1, fq2=fq2, clean_fq1=clean_fq1, clean_fq2=clean_fq2,
        trim_json=a.trim_json, trim_html=a.trim_html,
        quality_base=a.quality_base, threads=a.threads).get_cmd()
    invoker.run(cmd, 'trim')


def run_index(a, invoker):
    g = genome_index(a)
    check_dir(g.index_dir)
    invoker.run(g.get_cmd(), 'index')
    g.write_meta()


def run_align(a, invoker):
    fq_list = clean_fq_list(a)
    fq2 = fq_list[1] if a.is_paired else None
    cmd = Bowtie2(fq1=fq_list[0], fq2=fq2, index=genome_index(a).index,
        bam=a.bam_raw, align_log=a.align_log, threads=a.threads).get_cmd()
    invoker.run(cmd, 'align')


def run_sort(a, invoker):
    invoker.run(samtools(a).sort(a.bam_raw, a.bam_sorted), 'sort')


def run_flagstat(a, invoker):
    invoker.run(samtools(a).flagstat(align_bam(a), a.flagstat), 'flagstat')


def run_dedup(a, invoker):
    cmd = samtools(a).rm_dup(align_bam(a), a.bam_dedup, a.markdup_log,
        is_paired=a.is_paired)
    invoker.run(cmd, 'dedup')


def run_sort_filtered(a, invoker):
    invoker.run(samtools(a).sort(a.bam_dedup, a.bam), 'sort_filtered')


def run_callpeak(a, invoker):
    cmd = Macs2(bam=a.bam, out_dir=a.peak_dir, prefix=a.smp_name,
        genome_size=get_genome_size(a), is_paired=a.is_paired).get_cmd()
    invoker.run(cmd, 'callpeak')


def run_bigwig(a, invoker):
    cmd = Bam2bw(bam=a.bam, bw=a.bw, binSize=a.bin_size,
        effectiveGenomeSize=get_genome_size(a), numberOfProcessors=a.threads,
        is_paired=a.is_paired).get_cmd()
    invoker.run(cmd, 'bigwig')


def run_cleanup(a, invoker):
    """
    remove intermediate files, never the input files
    """
    rm_list = [a.bam_raw, a.bam_sorted, a.bam_sorted + '.bai', a.bam_dedup]
    if a.mode == Mode.SRA:
        rm_list += list_file(a.raw_dir, a.smp_name + '*.fastq')
    rm_list = [i for i in rm_list if i not in [a.input, a.input2]]
    remove_file(rm_list, show_log=True)
    log.info('[cleanup] intermediate files removed: {}'.format(a.project_dir))


################################################################################
STAGES = {
    'extract': Stage('extract',
        artifacts=lambda a: [os.path.join(a.raw_dir, a.smp_name + '*.fastq')],
        runner=run_extract),
    'reclassify': Stage('reclassify', runner=run_reclassify),
    'bam_layout': Stage('bam_layout', runner=run_bam_layout),
    'trim': Stage('trim',
        artifacts=lambda a: clean_fq_list(a) + [a.trim_json],
        runner=run_trim,
        metrics=lambda a, agg: agg.add_trim(a.trim_json)),
    'index': Stage('index',
        artifacts=lambda a: [genome_index(a).index + '.1.bt2*',
            genome_index(a).index_meta],
        runner=run_index,
        shared=True),
    'align': Stage('align',
        artifacts=lambda a: [a.bam_raw],
        runner=run_align),
    'sort': Stage('sort',
        artifacts=lambda a: [a.bam_sorted, a.bam_sorted + '.bai'],
        runner=run_sort),
    'flagstat': Stage('flagstat',
        artifacts=lambda a: [a.flagstat],
        runner=run_flagstat,
        metrics=lambda a, agg: agg.add_flagstat(a.flagstat)),
    'dedup': Stage('dedup',
        artifacts=lambda a: [a.bam_dedup, a.markdup_log],
        runner=run_dedup,
        metrics=lambda a, agg: agg.add_markdup(a.markdup_log)),
    'sort_filtered': Stage('sort_filtered',
        artifacts=lambda a: [a.bam, a.bam + '.bai'],
        runner=run_sort_filtered),
    'callpeak': Stage('callpeak',
        artifacts=lambda a: [a.peak],
        runner=run_callpeak),
    'bigwig': Stage('bigwig',
        artifacts=lambda a: [a.bw],
        runner=run_bigwig,
        enabled=lambda a: a.bin_size > 0),
    'cleanup': Stage('cleanup',
        runner=run_cleanup,
        enabled=lambda a: a.remove),
}


FASTQ_STAGES = ['trim', 'index', 'align', 'sort', 'flagstat', 'dedup',
    'sort_filtered', 'callpeak', 'bigwig', 'cleanup']


STAGE_TABLE = {
    Mode.SRA: ['extract', 'reclassify'] + FASTQ_STAGES,
    Mode.FASTQ_SE: FASTQ_STAGES,
    Mode.FASTQ_PE: FASTQ_STAGES,
    Mode.BAM: ['bam_layout', 'index', 'flagstat', 'dedup', 'sort_filtered',
        'callpeak', 'bigwig', 'cleanup'],
}


def get_stages(mode):
    return [STAGES[i] for i in STAGE_TABLE[mode]]
