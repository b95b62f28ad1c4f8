#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Extract reads from SRA, using fasterq-dump
1. SE: smp.fastq or smp_1.fastq
2. PE: smp_1.fastq, smp_2.fastq
3. single-cell: smp_1.fastq, smp_2.fastq, smp_3.fastq, ... (technical reads)

$ fasterq-dump in.sra --split-files --include-technical -e 8 -O raw_data -o smp.fastq
"""

import os
import re
from atacpipe.utils.utils import update_obj
from atacpipe.utils.file import list_file
from atacpipe.utils.tool import ToolCmd


class FasterqDump(object):
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'sra': None,
            'out_dir': None,
            'smp_name': None,
            'threads': 2,
        }
        self = update_obj(self, args_init, force=False)
        self.out_pattern = os.path.join(self.out_dir, self.smp_name + '*.fastq')


    def get_cmd(self):
        return ToolCmd('fasterq-dump', [
            self.sra,
            '--split-files',
            '--include-technical',
            '-e', self.threads,
            '-O', self.out_dir,
            '-o', self.smp_name + '.fastq',
        ])


    def list_fq(self):
        """
        The extracted fastq files, sorted by read number
        smp.fastq, smp_1.fastq, smp_2.fastq, ...
        """
        p = re.compile(r'^{}(_\d+)?\.fastq$'.format(re.escape(self.smp_name)))
        out = [i for i in list_file(self.out_dir, self.smp_name + '*.fastq')
            if p.match(os.path.basename(i))]
        return sorted(out, key=lambda i: (len(i), i))
