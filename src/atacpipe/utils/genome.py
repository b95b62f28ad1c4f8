#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Genome related files
files:
  - fasta
  - index [bowtie2], saved beside the fasta file, shared by runs
  - index.yaml, effective genome size
  - annotation [gtf, gff, gff3]
"""

import os
from xopen import xopen
from atacpipe.utils.utils import log, update_obj, Config, get_date
from atacpipe.utils.file import file_prefix, check_file
from atacpipe.utils.seq import genome_size
from atacpipe.utils.tool import ToolCmd
from atacpipe.utils.errors import FormatError, StageFailureError


ANNOTATION_EXT = ['.gtf', '.gff', '.gff3']


class GenomeIndex(object):
    """
    bowtie2 index of the genome
    <genome_dir>/<prefix>_bowtie2_index/<prefix>.*.bt2
    <genome_dir>/<prefix>_bowtie2_index/index.yaml

    >>> g = GenomeIndex('ref/hg38.fa', threads=8)
    >>> g.get_cmd() # bowtie2-build
    >>> g.write_meta()
    >>> g.effective_genome_size()
    """
    def __init__(self, genome, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.genome = genome
        self.init_args()


    def init_args(self):
        args_init = {
            'threads': 2,
        }
        self = update_obj(self, args_init, force=False)
        self.genome_dir = os.path.dirname(os.path.abspath(self.genome))
        self.prefix = file_prefix(self.genome)
        self.index_dir = os.path.join(
            self.genome_dir, self.prefix + '_bowtie2_index')
        self.index = os.path.join(self.index_dir, self.prefix)
        self.index_meta = os.path.join(self.index_dir, 'index.yaml')


    def get_cmd(self):
        return ToolCmd('bowtie2-build', [
            '--threads', self.threads,
            self.genome,
            self.index,
        ], outputs=[self.index + '.1.bt2'])


    def write_meta(self):
        d = {
            'genome': self.genome,
            'index': self.index,
            'effective_genome_size': genome_size(self.genome),
            'date': get_date(),
        }
        Config().dump(d, self.index_meta)
        return d


    def effective_genome_size(self):
        """
        Read from index.yaml, written by the index stage
        """
        d = Config().load(self.index_meta) if check_file(self.index_meta) else None
        s = d.get('effective_genome_size') if isinstance(d, dict) else None
        if not isinstance(s, int) or s <= 0:
            raise StageFailureError('index',
                'effective genome size not found: {}'.format(self.index_meta),
                'remove the index dir to rebuild it: {}'.format(self.index_dir))
        return s


def check_annotation(x):
    """
    Check the annotation file: GTF/GFF
    1. extension: .gtf, .gff, .gff3
    2. the first line (skip comments): 9 columns, tab-separated
    """
    ext = os.path.splitext(x)[1].lower()
    if ext not in ANNOTATION_EXT:
        raise FormatError('annotation extension not supported: {}'.format(x),
            'expect: {}'.format(', '.join(ANNOTATION_EXT)))
    n_col = 0
    with xopen(x, 'rt') as r:
        for line in r:
            if line.startswith('#') or len(line.strip()) == 0:
                continue
            n_col = len(line.rstrip('\r\n').split('\t'))
            break
    if n_col != 9:
        raise FormatError(
            'annotation expect 9 columns, got {}: {}'.format(n_col, x),
            'check the file is GTF/GFF format, tab-separated')
    log.info('annotation ok: {}'.format(x))
    return True
