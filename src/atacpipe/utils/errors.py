#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions for atacpipe

All errors are fatal: the run stops, the message and the hint are logged,
and the command exits with status 1.
"""


class AtacError(Exception):
    """Base exception for atacpipe errors"""

    hint = 'see --help for usage'

    def __init__(self, message, hint=None):
        super().__init__(message)
        self.message = message
        if hint is not None:
            self.hint = hint


class ConfigValidationError(AtacError):
    """Raised when an argument is missing, out of range or conflicting"""


class PathError(AtacError):
    """Raised when a file is missing or a directory is not writable"""

    hint = 'check the path exists and is readable/writable'


class FormatError(AtacError):
    """Raised when a file does not follow the expected format"""


class InvalidInputPairError(FormatError):
    """Raised when --input and --input2 are not a valid FASTQ pair"""

    hint = ('--input and --input2 must be two different FASTQ files with '
        'the same extension: fastq, fastq.gz, fq, fq.gz')


class UnrecognizedInputError(AtacError):
    """Raised when the input type could not be determined"""

    hint = 'supported input: .sra, SRA accession, .fastq(.gz), .fq(.gz), .bam'


class UnsupportedDataShapeError(AtacError):
    """Raised when the data is valid but not bulk ATAC-seq (eg: single-cell)"""

    hint = 'only bulk SE/PE libraries are supported'


class StageFailureError(AtacError):
    """Raised when an external tool fails or a stage produced no output"""

    def __init__(self, stage, message, hint=None):
        self.stage = stage
        super().__init__('[{}] {}'.format(stage, message), hint)
