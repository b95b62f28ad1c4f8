#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
Quality control metrics for ATACseq analysis
1. trim: fastp json, raw/clean reads, q30, gc, mean length, duplication
2. align: samtools flagstat, alignment rate
3. dedup: samtools markdup -s, duplication (when fastp is not available, BAM input)

report: 7 lines, <label>: <value>, NA for missing values
"""

import re
from rich.console import Console
from atacpipe.utils.utils import log, Config
from atacpipe.utils.file import file_exists


# (key, label), in the order of the report
METRICS = [
    ('q30_rate', 'Q30 rate'),
    ('mean_length', 'Mean clean read length'),
    ('gc_content', 'GC content'),
    ('dup_rate', 'Duplication rate'),
    ('raw_reads', 'Total raw reads'),
    ('clean_reads', 'Total clean reads'),
    ('align_rate', 'Alignment rate'),
]

PCT_KEYS = ['q30_rate', 'gc_content', 'dup_rate', 'align_rate']


################################################################################
def parse_fastp_json(x):
    """
    Parse the json report of fastp
    summary.before_filtering.total_reads
    summary.after_filtering: total_reads, q30_rate, gc_content,
        read1_mean_length, read2_mean_length
    duplication.rate
    rates are saved in percent
    """
    d = Config().load(x) if file_exists(x) else None
    if not isinstance(d, dict):
        log.warning('fastp report not found or empty: {}'.format(x))
        return {}
    summary = d.get('summary', {})
    before = summary.get('before_filtering', {})
    after = summary.get('after_filtering', {})
    len_list = [after.get(i) for i in ['read1_mean_length', 'read2_mean_length']]
    len_list = [i for i in len_list if isinstance(i, (int, float))]
    out = {
        'raw_reads': before.get('total_reads'),
        'clean_reads': after.get('total_reads'),
        'q30_rate': after.get('q30_rate'),
        'gc_content': after.get('gc_content'),
        'mean_length': sum(len_list) / len(len_list) if len_list else None,
        'dup_rate': d.get('duplication', {}).get('rate'),
    }
    for k in ['q30_rate', 'gc_content', 'dup_rate']:
        if isinstance(out[k], (int, float)):
            out[k] = out[k] * 100
    return {k: v for k, v in out.items() if v is not None}


def parse_flagstat(x):
    """
    Parse the output of samtools flagstat
    1000 + 0 in total (QC-passed reads + QC-failed reads)
    950 + 0 mapped (95.00% : N/A)
    """
    if not file_exists(x):
        log.warning('flagstat not found: {}'.format(x))
        return {}
    total, mapped, pct = None, None, None
    with open(x) as r:
        for line in r:
            m1 = re.match(r'^(\d+) \+ (\d+) in total', line)
            m2 = re.match(r'^(\d+) \+ (\d+) mapped \(([\d.]+)%', line)
            m3 = re.match(r'^(\d+) \+ (\d+) mapped \(', line)
            if m1:
                total = int(m1.group(1))
            elif m2 and mapped is None:
                mapped = int(m2.group(1))
                pct = float(m2.group(3))
            elif m3 and mapped is None:
                mapped = int(m3.group(1))
    if pct is None and isinstance(total, int) and total > 0 and mapped is not None:
        pct = mapped / total * 100
    return {'align_rate': pct} if pct is not None else {}


def parse_markdup(x):
    """
    Parse the stat of samtools markdup -s
    EXAMINED: 1000
    DUPLICATE TOTAL: 120
    """
    if not file_exists(x):
        log.warning('markdup stat not found: {}'.format(x))
        return {}
    d = {}
    with open(x) as r:
        for line in r:
            if ':' not in line:
                continue
            k, v = line.split(':', 1)
            d[k.strip()] = v.strip()
    try:
        examined = int(d.get('EXAMINED', 0))
        dup = int(d.get('DUPLICATE TOTAL', 0))
    except ValueError:
        log.warning('markdup stat not recognized: {}'.format(x))
        return {}
    return {'dup_rate': dup / examined * 100} if examined > 0 else {}


def align_severity(pct):
    """
    >= 90: high confidence; 70-90: marginal; < 70: low confidence
    """
    if pct >= 90:
        return ('high confidence', 'green')
    elif pct >= 70:
        return ('marginal', 'yellow')
    else:
        return ('low confidence', 'red')


def fmt_value(k, v):
    if v is None:
        return 'NA'
    if k in PCT_KEYS:
        return '{:.2f}%'.format(v)
    elif k == 'mean_length':
        return '{:.1f}'.format(v)
    else:
        return str(v)


class MetricsAggregator(object):
    """
    Collect metrics of stages, and write report

    >>> m = MetricsAggregator('smp')
    >>> m.add_trim('smp.fastp.json')
    >>> m.add_flagstat('smp.flagstat')
    >>> m.write('smp.atacpipe.report.txt', 'smp.metrics.json')
    >>> m.show()
    """
    def __init__(self, smp_name=None):
        self.smp_name = smp_name
        self.metrics = {k: None for k, _ in METRICS}


    def update(self, d, force=True):
        for k, v in d.items():
            if k not in self.metrics:
                continue
            if force or self.metrics[k] is None:
                self.metrics[k] = v


    def add_trim(self, x):
        self.update(parse_fastp_json(x))


    def add_flagstat(self, x):
        self.update(parse_flagstat(x))


    def add_markdup(self, x):
        """fallback of duplication rate, fastp first"""
        self.update(parse_markdup(x), force=False)


    def render(self, color=False):
        """
        Report lines; color=True for rich markup of terminal
        """
        lines = []
        for k, label in METRICS:
            v = self.metrics.get(k)
            line = '{}: {}'.format(label, fmt_value(k, v))
            if color and k == 'align_rate' and v is not None:
                level, c = align_severity(v)
                line = '[{c}]{line} ({level})[/{c}]'.format(
                    c=c, line=line, level=level)
            elif color and v is None:
                line = '[dim]{}[/dim]'.format(line)
            lines.append(line)
        return lines


    def write(self, report_txt, metrics_json=None):
        with open(report_txt, 'wt') as w:
            w.write('\n'.join(self.render(color=False)) + '\n')
        if isinstance(metrics_json, str):
            d = {'name': self.smp_name}
            d.update(self.metrics)
            Config().dump(d, metrics_json)
        log.info('report saved: {}'.format(report_txt))
        return report_txt


    def show(self, console=None):
        if console is None:
            console = Console()
        console.rule('[bold]atacpipe report: {}'.format(self.smp_name))
        for line in self.render(color=True):
            console.print(line)
