#!/usr/bin/env python3
# -*- coding:utf-8 -*-

"""
Gate for stages: skip the stage if the output exists

artifact: glob pattern, eg: bam_files/smp.bam, raw_data/smp*.fastq
satisfied: matches at least one path, and all matches are not empty
  - file: size > 0
  - dir: at least one entry

policy:
  - resume: skip the stage, if all artifacts are satisfied
  - force: run all stages (except the shared ones, eg: genome index)
"""

import os
from atacpipe.utils.utils import log
from atacpipe.utils.file import list_glob
from atacpipe.utils.errors import StageFailureError


POLICIES = ['resume', 'force']


def is_not_empty(x):
    if os.path.isdir(x):
        return len(os.listdir(x)) > 0
    elif os.path.isfile(x):
        return os.path.getsize(x) > 0
    else:
        return False


def artifact_ok(pattern):
    hits = list_glob(pattern)
    return len(hits) > 0 and all([is_not_empty(i) for i in hits])


class StepGate(object):
    """
    >>> gate = StepGate('resume')
    >>> if gate.should_run(['a.bam']):
    ...     run()
    ...     gate.verify(['a.bam'], 'align')
    """
    def __init__(self, policy='resume'):
        if policy not in POLICIES:
            raise ValueError('unknown policy: {}, expect: {}'.format(
                policy, POLICIES))
        self.policy = policy


    def is_done(self, artifacts):
        if isinstance(artifacts, str):
            artifacts = [artifacts]
        if not artifacts:
            return False
        return all([artifact_ok(i) for i in artifacts])


    def should_run(self, artifacts, shared=False):
        """
        shared stages are always gated by 'resume'
        """
        if self.policy == 'force' and not shared:
            return True
        return not self.is_done(artifacts)


    def verify(self, artifacts, stage=None, log_file=None):
        if isinstance(artifacts, str):
            artifacts = [artifacts]
        missing = [i for i in artifacts if not artifact_ok(i)]
        if len(missing) > 0:
            hint = 'check the log: {}'.format(log_file) if log_file else None
            raise StageFailureError(stage,
                'output missing or empty: {}'.format(', '.join(missing)), hint)
        log.info('[{}] output ok'.format(stage))
        return True
