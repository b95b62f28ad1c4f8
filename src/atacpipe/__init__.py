#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
atacpipe: bulk ATAC-seq pipeline, from SRA/FASTQ/BAM to peaks and report
"""

__version__ = '1.0.0'
