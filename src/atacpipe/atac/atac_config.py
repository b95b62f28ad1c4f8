#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
Config for ATAC pipeline: defaults, validation, files

1. arguments: --input, --input2, --genome, --annotation, ...
2. validation: range of values, files
3. sample name, dirs and files, saved in config/config.yaml
"""

import os
from atacpipe.utils.utils import log, update_obj, Config
from atacpipe.utils.file import (
    check_dir, file_abspath, fix_out_dir, is_writable_dir
)
from atacpipe.utils.seq import smp_name, fx_ext
from atacpipe.utils.genome import check_annotation
from atacpipe.utils.errors import ConfigValidationError, PathError
from atacpipe.atac.atac_input import Mode, classify_input
from atacpipe.atac.atac_files import get_atac_dirs, get_atac_files


def is_int(x):
    """bool is not int for options"""
    return isinstance(x, int) and not isinstance(x, bool)


class AtacConfig(object):
    """
    >>> args = AtacConfig(input='a.fq.gz', genome='ref.fa', annotation='ref.gtf')
    >>> args.mode
    <Mode.FASTQ_SE: 'fastq_se'>
    """
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'input': None,
            'input2': None,
            'genome': None,
            'annotation': None,
            'quality_base': 20,
            'bin_size': 0,
            'out_dir': None,
            'threads': 8,
            'mapq': 30,
            'force': False,
            'skip': False,
            'remove': False,
            'resume_metrics': 'reuse',
            'smp_name': None,
        }
        self = update_obj(self, args_init, force=False)
        self.out_dir = fix_out_dir(self.out_dir)
        self.check_values()
        self.init_input()
        self.init_files()


    def check_values(self):
        if self.force and self.skip:
            raise ConfigValidationError('--force and --skip are mutually exclusive',
                'choose one of --force, --skip')
        if not is_int(self.quality_base) or \
            not 0 <= self.quality_base <= 40:
            raise ConfigValidationError(
                '--qualityBase out of range [0, 40]: {}'.format(self.quality_base))
        if not is_int(self.threads) or self.threads < 2:
            raise ConfigValidationError(
                '--threads expect >= 2, got: {}'.format(self.threads))
        if not is_int(self.bin_size) or self.bin_size < 0:
            raise ConfigValidationError(
                '--binSize expect >= 0, got: {}'.format(self.bin_size),
                'set --binSize 0 to skip bigwig')
        if not is_int(self.mapq) or self.mapq < 0:
            raise ConfigValidationError(
                '--mapq expect >= 0, got: {}'.format(self.mapq))
        if self.resume_metrics not in ['reuse', 'blank']:
            raise ConfigValidationError(
                '--resume-metrics expect reuse, blank; got: {}'.format(
                    self.resume_metrics))
        self.policy = 'force' if self.force else 'resume'


    def init_input(self):
        if not isinstance(self.input, str):
            raise ConfigValidationError('--input required')
        for k in ['genome', 'annotation']:
            if not isinstance(getattr(self, k), str):
                raise ConfigValidationError('--{} required'.format(k))
        self.mode = classify_input(self.input, self.input2)
        # SRA accession, not a local file
        is_accession = self.mode == Mode.SRA and fx_ext(self.input) == ''
        if not is_accession:
            self.input = file_abspath(self.input)
        self.input2 = file_abspath(self.input2)
        in_files = [self.input, self.input2] if not is_accession else [self.input2]
        in_files += [file_abspath(self.genome), file_abspath(self.annotation)]
        for f in in_files:
            if isinstance(f, str) and not os.path.isfile(f):
                raise PathError('file not exists: {}'.format(f))
        self.genome = file_abspath(self.genome)
        self.annotation = file_abspath(self.annotation)
        check_annotation(self.annotation)
        if self.mode == Mode.FASTQ_PE:
            self.is_paired = True
        elif self.mode == Mode.FASTQ_SE:
            self.is_paired = False
        else:
            self.is_paired = None # after extract, bam_layout
        if not isinstance(self.smp_name, str):
            self.smp_name = smp_name(self.input)


    def init_files(self, create_dirs=True):
        if not is_writable_dir(self.out_dir):
            raise PathError('output dir not writable: {}'.format(self.out_dir),
                'check the permission, or choose another --output')
        self.project_dir = os.path.join(self.out_dir, self.smp_name)
        atac_dirs = get_atac_dirs(self.out_dir, self.smp_name)
        atac_files = get_atac_files(self.out_dir, self.smp_name)
        self = update_obj(self, atac_dirs, force=True)
        self = update_obj(self, atac_files, force=True)
        if create_dirs:
            [check_dir(i) for i in atac_dirs.values()]


    def to_dict(self):
        d = self.__dict__.copy()
        d['mode'] = self.mode.value
        return d


    def save(self):
        Config().dump(self.to_dict(), self.config_yaml)
        log.info('config saved: {}'.format(self.config_yaml))
