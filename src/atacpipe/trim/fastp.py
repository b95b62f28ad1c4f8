#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Trim adapters, low quality bases, using fastp
1. SE
fastp -i in.fq -o clean.fq -q 20 -w 8 -j out.json -h out.html
2. PE
fastp -i r1.fq -I r2.fq -o clean_1.fq -O clean_2.fq --detect_adapter_for_pe ...

the json report: before_filtering, after_filtering, duplication
"""

from atacpipe.utils.utils import update_obj
from atacpipe.utils.tool import ToolCmd


class Fastp(object):
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'fq1': None,
            'fq2': None,
            'clean_fq1': None,
            'clean_fq2': None,
            'trim_json': None,
            'trim_html': None,
            'quality_base': 20,
            'threads': 2,
        }
        self = update_obj(self, args_init, force=False)
        self.is_paired = isinstance(self.fq2, str)


    def get_cmd(self):
        args = ['-i', self.fq1, '-o', self.clean_fq1]
        outputs = [self.clean_fq1, self.trim_json]
        if self.is_paired:
            args += ['-I', self.fq2, '-O', self.clean_fq2,
                '--detect_adapter_for_pe']
            outputs.append(self.clean_fq2)
        args += [
            '-q', self.quality_base,
            '-w', self.threads,
            '-j', self.trim_json,
            '-h', self.trim_html,
        ]
        return ToolCmd('fastp', args, outputs=outputs)
