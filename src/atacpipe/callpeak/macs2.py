#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Call peaks using MACS2
1. PE
macs2 callpeak -t in.bam -f BAMPE -g 2.7e9 -n smp --outdir peak --keep-dup all -q 0.05
2. SE, shift the 5' end of reads, ATAC-seq
macs2 callpeak -t in.bam -f BAM ... --nomodel --shift -100 --extsize 200
"""

import os
from atacpipe.utils.utils import update_obj
from atacpipe.utils.tool import ToolCmd


class Macs2(object):
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'bam': None,
            'out_dir': None,
            'prefix': None,
            'genome_size': None,
            'is_paired': True,
            'qval': 0.05,
        }
        self = update_obj(self, args_init, force=False)
        self.peak = os.path.join(self.out_dir, self.prefix + '_peaks.narrowPeak')


    def get_cmd(self):
        args = [
            'callpeak',
            '-t', self.bam,
            '-f', 'BAMPE' if self.is_paired else 'BAM',
            '-g', self.genome_size,
            '-n', self.prefix,
            '--outdir', self.out_dir,
            '--keep-dup', 'all',
            '-q', self.qval,
        ]
        if not self.is_paired:
            args += ['--nomodel', '--shift', -100, '--extsize', 200]
        return ToolCmd('macs2', args, outputs=[self.peak])
