#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
The default files for ATAC
: x, is the out_dir
: smp_name, the prefix of all files
"""

import os


def get_atac_dirs(x, smp_name):
    """
    x is the out_dir
    """
    d = {
        "config_dir": "config",
        "log_dir": "log",
        "raw_dir": "raw_data",
        "clean_dir": "clean_data",
        "bam_dir": "bam_files",
        "peak_dir": "peak",
        "bw_dir": "bw_files",
        "report_dir": "report",
    }
    return {k: os.path.join(x, smp_name, v) for k, v in d.items()}


def get_atac_files(x, smp_name):
    """
    x, is the out_dir
    """
    dd = get_atac_dirs(x, smp_name)
    config_dir = dd.get("config_dir", x)
    clean_dir = dd.get("clean_dir", x)
    bam_dir = dd.get("bam_dir", x)
    peak_dir = dd.get("peak_dir", x)
    bw_dir = dd.get("bw_dir", x)
    report_dir = dd.get("report_dir", x)
    d = {
        "config_yaml": os.path.join(config_dir, "config.yaml"),
        "trim_json": os.path.join(clean_dir, smp_name + ".fastp.json"),
        "trim_html": os.path.join(clean_dir, smp_name + ".fastp.html"),
        "bam_raw": os.path.join(bam_dir, smp_name + ".raw.bam"),
        "bam_sorted": os.path.join(bam_dir, smp_name + ".sorted.bam"),
        "bam_dedup": os.path.join(bam_dir, smp_name + ".dedup.bam"),
        "bam": os.path.join(bam_dir, smp_name + ".bam"),
        "align_log": os.path.join(bam_dir, smp_name + ".align.log"),
        "flagstat": os.path.join(bam_dir, smp_name + ".flagstat"),
        "markdup_log": os.path.join(bam_dir, smp_name + ".markdup.log"),
        "peak": os.path.join(peak_dir, smp_name + "_peaks.narrowPeak"),
        "bw": os.path.join(bw_dir, smp_name + ".bw"),
        "report_txt": os.path.join(report_dir, smp_name + ".atacpipe.report.txt"),
        "metrics_json": os.path.join(report_dir, smp_name + ".metrics.json"),
    }
    d.update(atac_fq_files(x, smp_name))
    return d


def atac_fq_files(x, smp_name):
    """
    clean reads, fastp output
    SE: smp.clean.fastq
    PE: smp_1.clean.fastq, smp_2.clean.fastq
    """
    dd = get_atac_dirs(x, smp_name)
    clean_dir = dd.get("clean_dir", x)
    d = {
        "clean_fq": os.path.join(clean_dir, smp_name + ".clean.fastq"),
        "clean_fq1": os.path.join(clean_dir, smp_name + "_1.clean.fastq"),
        "clean_fq2": os.path.join(clean_dir, smp_name + "_2.clean.fastq"),
    }
    return d
