#!/usr/bin/env python
#-*- encoding:utf-8 -*-

"""
Convert bam to bigwig: bamCoverage, normalized by RPGC
Example:
$ bamCoverage -b in.bam -o out.bw --binSize 50 \
  --normalizeUsing RPGC --effectiveGenomeSize 100 \
  --extendReads --centerReads -p 8
"""

from atacpipe.utils.utils import update_obj
from atacpipe.utils.tool import ToolCmd


def get_bam_args(**kwargs):
    """
    Arguments for bamCoverage of deeptools
    """
    args = {
        'bam': None,
        'bw': None,
        'binSize': 50,
        'centerReads': True,
        'effectiveGenomeSize': None,
        'extendReads': True,
        'normalizeUsing': 'RPGC',
        'numberOfProcessors': 2,
        'is_paired': True,
    }
    args.update(kwargs)
    return args


class Bam2bw(object):
    def __init__(self, **kwargs):
        c = get_bam_args(**kwargs)
        self = update_obj(self, c, force=True)


    def get_cmd(self):
        """
        construct arguments to command line
        extendReads: SE reads extend to 200bp, the fragment size
        """
        args = [
            '-b', self.bam,
            '-o', self.bw,
            '--binSize', self.binSize,
            '--normalizeUsing', self.normalizeUsing,
            '--effectiveGenomeSize', self.effectiveGenomeSize,
            '-p', self.numberOfProcessors,
        ]
        if self.extendReads:
            args += ['--extendReads'] if self.is_paired else ['--extendReads', 200]
        if self.centerReads:
            args += ['--centerReads']
        return ToolCmd('bamCoverage', args, outputs=[self.bw])
