#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
BAM manipulation, using samtools
- sort + index
- flagstat
- rm_dup: fixmate + markdup -r, filter by MAPQ, flag
exclude: -F 1804
    4    0x4    Read unmapped,
    8    0x8    Mate unmapped,
    256  0x100  Not primary alignment,
    512  0x200  Reads fails platform quality checks,
    1024 0x400  Read is PCR or optical duplicate
include: -f 2 (PE only)
    2    0x2    Read mapped in proper pair
"""

from atacpipe.utils.utils import update_obj
from atacpipe.utils.tool import ToolCmd


class Samtools(object):
    """
    >>> Samtools(threads=4).sort('in.bam', 'out.bam')
    """
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'threads': 2,
            'mapq': 30,
        }
        self = update_obj(self, args_init, force=False)


    def sort(self, bam_in, bam_out):
        """sort by coordinate, and index"""
        return ToolCmd('samtools', [
            'sort', '-@', self.threads, '-o', bam_out, bam_in,
            '&&', 'samtools', 'index', '-@', self.threads, bam_out,
        ], outputs=[bam_out, bam_out + '.bai'])


    def flagstat(self, bam, stat):
        return ToolCmd('samtools', [
            'flagstat', '-@', self.threads, bam,
            '>', stat,
        ], outputs=[stat])


    def rm_dup(self, bam_in, bam_out, stat, is_paired=True):
        """
        remove PCR duplicates, filter low quality alignments
        input bam could be in any order
        """
        args = [
            'sort', '-n', '-@', self.threads, '-o', '-', bam_in,
            '|', 'samtools', 'fixmate', '-m', '-@', self.threads, '-', '-',
            '|', 'samtools', 'sort', '-@', self.threads, '-o', '-', '-',
            '|', 'samtools', 'markdup', '-r', '-s', '-@', self.threads, '-', '-',
            '2>', stat,
            '|', 'samtools', 'view', '-b', '-@', self.threads,
            '-q', self.mapq, '-F', 1804,
        ]
        if is_paired:
            args += ['-f', 2]
        args += ['-o', bam_out, '-']
        return ToolCmd('samtools', args, outputs=[bam_out, stat])
