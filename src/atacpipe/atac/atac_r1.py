#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
ATACseq analysis for one sample: SRA, FASTQ (SE/PE) or BAM
analysis-module: see STAGE_TABLE in atac_stages

1. config: check arguments, files, save to config/config.yaml
2. stages: one by one, skip the stage if the output exists (--force to re-run)
3. report: metrics of trim, align, dedup
"""

from atacpipe.utils.utils import log, update_obj
from atacpipe.utils.tool import ToolInvoker
from atacpipe.atac.atac_config import AtacConfig
from atacpipe.atac.atac_gate import StepGate
from atacpipe.atac.atac_stages import get_stages
from atacpipe.atac.atac_qc import MetricsAggregator


class AtacR1(object):
    """
    >>> r = AtacR1(input='SRR123.sra', genome='ref.fa', annotation='ref.gtf')
    >>> r.run()
    {'smp_name': 'SRR123', 'steps': 12, ...}

    invoker: run the commands, default: ToolInvoker(log_dir)
    """
    def __init__(self, invoker=None, **kwargs):
        args = AtacConfig(**kwargs)
        args.save()
        self = update_obj(self, args.__dict__, force=True)
        if invoker is None:
            invoker = ToolInvoker(log_dir=self.log_dir)
        self.invoker = invoker
        self.gate = StepGate(self.policy)
        self.agg = MetricsAggregator(self.smp_name)


    def run_stage(self, stage, step, n_steps):
        """
        Returns
        -------
        step : int, the updated step counter
        status : str, run, skip
        """
        step += 1
        log.info('[{}/{}] {}'.format(step, n_steps, stage.name))
        if not stage.gated:
            stage.run(self, self.invoker)
            return (step, 'run')
        artifacts = stage.get_artifacts(self)
        if self.gate.should_run(artifacts, shared=stage.shared):
            stage.run(self, self.invoker)
            self.gate.verify(artifacts, stage.name,
                log_file='{}/{}.stderr'.format(self.log_dir, stage.name))
            if callable(stage.metrics):
                stage.metrics(self, self.agg)
            status = 'run'
        else:
            log.info('[{}] skipped, output exists: {}'.format(
                stage.name, ', '.join(artifacts)))
            if callable(stage.metrics) and self.resume_metrics == 'reuse':
                stage.metrics(self, self.agg)
                log.info('[{}] metrics reused from existing files'.format(
                    stage.name))
            status = 'skip'
        return (step, status)


    def run(self):
        stages = [i for i in get_stages(self.mode) if i.is_enabled(self)]
        n_steps = len(stages)
        log.info('{} mode: {}, {} stages'.format(
            self.smp_name, self.mode.value, n_steps))
        step = 0
        ran, skipped = [], []
        for s in stages:
            step, status = self.run_stage(s, step, n_steps)
            (ran if status == 'run' else skipped).append(s.name)
        # report
        self.agg.write(self.report_txt, self.metrics_json)
        self.agg.show()
        return {
            'smp_name': self.smp_name,
            'mode': self.mode.value,
            'is_paired': self.is_paired,
            'steps': step,
            'ran': ran,
            'skipped': skipped,
            'report': self.report_txt,
            'metrics': self.agg.metrics,
        }
