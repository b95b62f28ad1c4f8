#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
ATAC-seq pipeline: main port

$ atacpipe --input SRR123.sra --genome ref.fa --annotation ref.gtf
"""

import sys
from atacpipe.atac.atac_r1 import AtacR1
from atacpipe.atac.atac_args import get_args_atac
from atacpipe.utils.utils import log, update_obj
from atacpipe.utils.errors import AtacError


class Atac(object):
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)


    def run(self):
        return AtacR1(**self.__dict__).run()


def get_args():
    return get_args_atac()


def main(argv=None):
    args = vars(get_args().parse_args(argv))
    try:
        Atac(**args).run()
    except AtacError as e:
        log.error(e.message)
        log.error('hint: {}'.format(e.hint))
        sys.exit(1)


if __name__ == "__main__":
    main()
