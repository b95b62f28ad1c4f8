#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Functions for sequence files, names
# function
- fx_ext
- is_fastq_name
- smp_name
- genome_size
"""

import os
import re
import pyfastx
from atacpipe.utils.utils import log
from atacpipe.utils.file import file_prefix


FASTQ_EXT = ['.fastq.gz', '.fq.gz', '.fastq', '.fq']
SMP_DELIMITER = '[@:._-]'


def fx_ext(x):
    """
    The extension of file, lower case; compound: .fq.gz, .fastq.gz
    return '' if no extension
    >>> fx_ext('a/b/demo_1.fq.gz')
    '.fq.gz'
    """
    name = os.path.basename(x).lower()
    for ext in FASTQ_EXT:
        if name.endswith(ext):
            return ext
    return os.path.splitext(name)[1]


def is_fastq_name(x):
    return fx_ext(x) in FASTQ_EXT


def smp_name(x):
    """
    The name of sample, basename of file, strip at the first delimiter:
    '@', ':', '.', '_', '-'
    >>> smp_name('path/to/SRR123_1.fq.gz')
    'SRR123'
    """
    name = os.path.basename(x)
    out = re.split(SMP_DELIMITER, name, 1)[0]
    if len(out) == 0:
        out = file_prefix(name) # '.hidden.fq', '_a.fq'
    return out


def genome_size(fa):
    """
    Count the non-N bases of the genome fasta, as effective genome size
    support gzipped fasta
    """
    n = 0
    for _, seq in pyfastx.Fasta(fa, build_index=False):
        n += len(seq) - seq.upper().count('N')
    log.info('genome size (non-N): {} {}'.format(n, fa))
    return n
