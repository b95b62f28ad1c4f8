#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Align reads to reference genome, using bowtie2
1. SE
bowtie2 --very-sensitive -p 8 -x index -U in.fq 2> align.log | samtools view -b -o raw.bam -
2. PE
bowtie2 --very-sensitive -X 2000 -p 8 -x index -1 r1.fq -2 r2.fq 2> align.log | ...
"""

from atacpipe.utils.utils import update_obj
from atacpipe.utils.tool import ToolCmd


class Bowtie2(object):
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'fq1': None,
            'fq2': None,
            'index': None,
            'bam': None,
            'align_log': None,
            'threads': 2,
            'max_fragment': 2000,
        }
        self = update_obj(self, args_init, force=False)
        self.is_paired = isinstance(self.fq2, str)


    def get_cmd(self):
        if self.is_paired:
            args_io = ['-X', self.max_fragment, '-1', self.fq1, '-2', self.fq2]
        else:
            args_io = ['-U', self.fq1]
        args = ['--very-sensitive', '-p', self.threads, '-x', self.index]
        args += args_io
        args += [
            '2>', self.align_log,
            '|', 'samtools', 'view', '-@', self.threads, '-b', '-o', self.bam, '-',
        ]
        return ToolCmd('bowtie2', args, outputs=[self.bam])
