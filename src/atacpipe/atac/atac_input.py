#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
Classify the input of ATAC pipeline

1. --input, --input2: FASTQ_PE
2. --input
   .sra, no extension (accession): SRA
   .fastq, .fq, .fastq.gz, .fq.gz: FASTQ_SE
   .bam: BAM
3. SRA, after extraction: 1 file SE, 2 files PE, >= 3 files single-cell
4. BAM, guess SE/PE from the flags of the first 10000 records (best-effort)
"""

import os
from enum import Enum
import pysam
from atacpipe.utils.utils import log
from atacpipe.utils.file import file_abspath, is_valid_bam
from atacpipe.utils.seq import fx_ext, is_fastq_name
from atacpipe.utils.errors import (
    FormatError, InvalidInputPairError, UnrecognizedInputError,
    UnsupportedDataShapeError, StageFailureError
)


class Mode(Enum):
    SRA = 'sra'
    FASTQ_SE = 'fastq_se'
    FASTQ_PE = 'fastq_pe'
    BAM = 'bam'


def check_fq_pair(fq1, fq2):
    """
    Valid pair: both in FASTQ format, same extension, not the same file
    """
    if not (is_fastq_name(fq1) and is_fastq_name(fq2)):
        raise InvalidInputPairError(
            'not FASTQ files: --input {}, --input2 {}'.format(fq1, fq2))
    if fx_ext(fq1) != fx_ext(fq2):
        raise InvalidInputPairError(
            'extensions not match: {}, {}'.format(fx_ext(fq1), fx_ext(fq2)))
    if file_abspath(fq1) == file_abspath(fq2):
        raise InvalidInputPairError(
            '--input and --input2 are the same file: {}'.format(fq1))
    return True


def classify_input(x, x2=None):
    """
    Return the Mode of input

    Parameters
    ----------
    x : str
        Path to the input file, or SRA accession
    x2 : str or None
        Path to the second file of pair-end reads
    """
    if isinstance(x2, str):
        check_fq_pair(x, x2)
        return Mode.FASTQ_PE
    ext = fx_ext(x)
    if ext == '.sra':
        mode = Mode.SRA
    elif ext == '':
        log.warning('no extension, treat as SRA accession: {}'.format(x))
        mode = Mode.SRA
    elif is_fastq_name(x):
        mode = Mode.FASTQ_SE
    elif ext == '.bam':
        mode = Mode.BAM
    else:
        raise UnrecognizedInputError(
            'unknown input type: {}'.format(os.path.basename(x)))
    return mode


def reclassify_sra(fq_list):
    """
    Check the extracted reads: 1 file SE, 2 files PE

    Returns
    -------
    is_paired : bool
    """
    n = len(fq_list) if isinstance(fq_list, list) else 0
    if n == 0:
        raise StageFailureError('reclassify', 'no reads extracted from SRA',
            'check the log of extract stage')
    elif n == 1:
        is_paired = False
    elif n == 2:
        is_paired = True
    else:
        raise UnsupportedDataShapeError(
            '{} read files extracted, single-cell data not supported: {}'.format(
                n, ', '.join([os.path.basename(i) for i in fq_list])))
    log.info('SRA reads: {}'.format('PE' if is_paired else 'SE'))
    return is_paired


def guess_bam_paired(bam, n_records=10000):
    """
    Guess SE/PE from the SAM flags of the first n records;
    any even flag (bit 0x1 not set) means SE. best-effort, not guaranteed
    """
    if not is_valid_bam(bam):
        raise FormatError('not a valid BAM file: {}'.format(bam),
            'check the file is BAM format, eg: samtools view -H')
    flags = set()
    with pysam.AlignmentFile(bam, 'rb', check_sq=False) as r:
        for i, aln in enumerate(r.fetch(until_eof=True)):
            if i >= n_records:
                break
            flags.add(aln.flag)
    if len(flags) == 0:
        log.warning('empty BAM file, treat as SE: {}'.format(bam))
        return False
    is_paired = not any([f % 2 == 0 for f in flags])
    log.info('BAM reads (guess): {}, flags: {}'.format(
        'PE' if is_paired else 'SE', sorted(flags)))
    return is_paired
