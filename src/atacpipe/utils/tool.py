#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Run external tools

ToolCmd: name, args, cwd, outputs
ToolInvoker: run the ToolCmd in bash (pipefail), save cmd/stdout/stderr to
log_dir, raise StageFailureError on non-zero exit

Example:
>>> cmd = ToolCmd('samtools', ['index', 'a.bam'], outputs=['a.bam.bai'])
>>> ToolInvoker(log_dir='log').run(cmd, 'sort')
"""

import os
import shlex
from atacpipe.utils.utils import log, run_shell_cmd, which
from atacpipe.utils.file import check_dir
from atacpipe.utils.errors import StageFailureError


SHELL_OPS = ['|', '&&', '>', '2>', '1>', '>>']


class ToolCmd(object):
    """
    One command line; the shell operators in args are kept as-is,
    eg: ['bowtie2', ..., '|', 'samtools', 'view', ...]
    """
    def __init__(self, name, args=None, cwd=None, outputs=None):
        self.name = name
        self.args = [str(i) for i in args] if args else []
        self.cwd = cwd
        self.outputs = outputs if outputs else []


    def binaries(self):
        """All programs in the pipe"""
        out = [self.name]
        for i, a in enumerate(self.args[:-1]):
            if a in ['|', '&&']:
                out.append(self.args[i + 1])
        return out


    def cmd_line(self):
        tokens = [self.name] + self.args
        return ' '.join([i if i in SHELL_OPS else shlex.quote(i)
            for i in tokens])


    def __repr__(self):
        return 'ToolCmd({})'.format(self.cmd_line())


class ToolInvoker(object):
    """
    Run ToolCmd, one at a time
    """
    def __init__(self, log_dir=None):
        self.log_dir = log_dir
        self.n_calls = 0


    def check_binary(self, cmd, label):
        for b in cmd.binaries():
            if which(b) is None:
                raise StageFailureError(label,
                    'command not found: {}'.format(b),
                    'install {} and make sure it is in $PATH'.format(b))


    def save_log(self, label, suffix, msg, mode='at'):
        if self.log_dir is None:
            return None
        check_dir(self.log_dir)
        f = os.path.join(self.log_dir, '{}.{}'.format(label, suffix))
        with open(f, mode) as w:
            w.write(msg + '\n')
        return f


    def run(self, cmd, label=None):
        if label is None:
            label = cmd.name
        self.check_binary(cmd, label)
        cmd_line = cmd.cmd_line()
        self.save_log(label, 'cmd.sh', cmd_line)
        self.n_calls += 1
        rc, stdout, stderr = run_shell_cmd(cmd_line, cwd=cmd.cwd)
        self.save_log(label, 'stdout', stdout)
        stderr_log = self.save_log(label, 'stderr', stderr)
        if rc != 0:
            raise StageFailureError(label,
                '{} failed, exit code: {}'.format(cmd.name, rc),
                'check the log: {}'.format(stderr_log))
        log.info('{} finished: {}'.format(label, cmd.name))
        return (rc, stdout, stderr)
