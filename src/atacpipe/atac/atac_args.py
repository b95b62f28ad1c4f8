#!/usr/bin/env python3
# -*- coding:utf-8 -*-

import argparse
from atacpipe import __version__


class AtacArgumentParser(argparse.ArgumentParser):
    """
    exit with status 1 on usage error (argparse default: 2)
    """
    def error(self, message):
        self.print_usage()
        self.exit(1, '{}: error: {}\n'.format(self.prog, message))


def get_args_atac():
    example = "\n".join(
        [
            "Examples:",
            "1. SRA file",
            "$ atacpipe --input SRR123.sra --genome hg38.fa --annotation hg38.gtf",
            "2. PE reads, bigwig with bin size 10",
            "$ atacpipe --input r_1.fq.gz --input2 r_2.fq.gz --genome hg38.fa \\",
            "    --annotation hg38.gtf --binSize 10 -o results",
            "3. BAM file, start from duplicate removal",
            "$ atacpipe --input aligned.bam --genome hg38.fa --annotation hg38.gtf",
        ]
    )
    parser = AtacArgumentParser(
        prog="atacpipe",
        description="ATAC-seq pipeline: SRA/FASTQ/BAM to peaks",
        epilog=example,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="input",
        required=True,
        help="Input file: SRA (.sra, or accession), FASTQ (fastq, fq, *.gz), BAM",
    )
    parser.add_argument(
        "-I",
        "--input2",
        dest="input2",
        default=None,
        help="The second file of pair-end reads, FASTQ only",
    )
    parser.add_argument(
        "-g",
        "--genome",
        dest="genome",
        required=True,
        help="The reference genome, in FASTA format",
    )
    parser.add_argument(
        "-a",
        "--annotation",
        dest="annotation",
        required=True,
        help="The annotation file: gtf, gff, gff3",
    )
    parser.add_argument(
        "-q",
        "--qualityBase",
        dest="quality_base",
        type=int,
        default=20,
        help="The quality threshold for trimming, [0-40], default: [20]",
    )
    parser.add_argument(
        "-b",
        "--binSize",
        dest="bin_size",
        type=int,
        default=0,
        help="The bin size of bigwig file, 0 to skip bigwig, default: [0]",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="out_dir",
        default=None,
        help="Directory saving results, default: [cwd]",
    )
    parser.add_argument(
        "-p",
        "--threads",
        dest="threads",
        type=int,
        default=8,
        help="Number of threads, >= 2, default: [8]",
    )
    parser.add_argument(
        "--mapq",
        dest="mapq",
        type=int,
        default=30,
        help="The minimum MAPQ to keep alignments, default: [30]",
    )
    parser.add_argument(
        "--resume-metrics",
        dest="resume_metrics",
        choices=["reuse", "blank"],
        default="reuse",
        help="For skipped stages: parse metrics from existing files (reuse),\
            or leave them empty (blank), default: [reuse]",
    )
    parser.add_argument(
        "-f",
        "--force",
        dest="force",
        action="store_true",
        help="Re-run all stages, even the output exists",
    )
    parser.add_argument(
        "-s",
        "--skip",
        dest="skip",
        action="store_true",
        help="Skip the stages if the output exists (default behavior)",
    )
    parser.add_argument(
        "-r",
        "--remove",
        dest="remove",
        action="store_true",
        help="Remove intermediate files: extracted reads, raw/sorted bam",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    return parser
