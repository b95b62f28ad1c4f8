#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Help functions for general purpose
# function
update_obj
run_shell_cmd
get_date
which

# class
Config
"""

import os
import sys
import json
import signal
import logging
import subprocess
import yaml
import toml
from datetime import datetime
from dateutil import tz


logging.basicConfig(
    format='[%(asctime)s %(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    stream=sys.stdout)
log = logging.getLogger(__name__)
log.setLevel('INFO')


def update_obj(obj, d, force=True, remove=False):
    """
    Update the object, by dict
    Parameters:
    -----------
    obj : object
        an object
    d : dict
        a dict, save key:value pairs for object attribute:value
    force : bool
        update exists attributes to object, default: True
    remove : bool
        remove exists attributes from object, default: False
    """
    if remove is True:
        for k in list(obj.__dict__):
            delattr(obj, k)
    # add attributes
    if isinstance(d, dict):
        for k, v in d.items():
            if not hasattr(obj, k) or force:
                setattr(obj, k, v)
    return obj


class Config(object):
    """
    Working with config, support formats: json, yaml, yml, toml
    Config().load(), and Config.dump()

    Example:
    1. write to file
    >>> Config().dump(d, 'out.json')
    >>> Config().dump(d, 'out.yaml')

    2. load from file
    >>> d = Config().load('in.yaml')
    """
    def __init__(self, x=None, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.x = x


    def load(self, x=None):
        """
        Read data from x, auto-recognize the file-type by extension
        """
        if x is None:
            x = self.x # dict or str
        if x is None:
            x_dict = None
        elif isinstance(x, dict):
            x_dict = dict(sorted(x.items(), key=lambda i:i[0]))
        elif isinstance(x, str):
            reader = self.pick_reader(x)
            if reader is None:
                x_dict = None
                log.error('unknown x, {}'.format(x))
            else:
                x_dict = reader(x)
        else:
            x_dict = None
            log.warning('load(x=) dict,str expect, got {}'.format(
                type(x).__name__))
        return x_dict


    def dump(self, d=None, x=None):
        if d is None:
            d = self.load(self.x)
        if isinstance(x, str):
            writer = self.pick_writer(x)
            if writer is None:
                log.error('unknown x, {}'.format(x))
            else:
                writer(d, x)
        else:
            log.warning('dump(x=) expect str, got {}'.format(
                type(x).__name__))


    def guess_format(self, x):
        """
        Guess the file format by file extension
        str: yaml, yml, toml, json
        dict: dict
        """
        fmts = {
            'json': 'json',
            'yaml': 'yaml',
            'yml': 'yaml',
            'toml': 'toml',
        }
        fmt = None
        if isinstance(x, dict):
            fmt = 'dict'
        elif isinstance(x, str):
            ext = os.path.splitext(x)[1]
            ext = ext.lstrip('.').lower()
            fmt = fmts.get(ext, None)
        return fmt


    def pick_reader(self, x):
        fmt = self.guess_format(x)
        readers = {
            'json': self.from_json,
            'yaml': self.from_yaml,
            'toml': self.from_toml,
        }
        return readers.get(fmt, None)


    def pick_writer(self, x):
        fmt = self.guess_format(x)
        writers = {
            'json': self.to_json,
            'yaml': self.to_yaml,
            'toml': self.to_toml,
        }
        return writers.get(fmt, None)


    def _check_writable(self, d, x, func):
        if not isinstance(d, dict):
            log.error('{}(d=) failed, dict expect, got {}'.format(
                func, type(d).__name__))
            return False
        if not os.path.exists(os.path.dirname(x)):
            log.error('{}(x=) failed, dir not exists: {}'.format(func, x))
            return False
        return True


    # json
    def from_json(self, x):
        d = None
        if os.path.exists(x):
            try:
                with open(x, 'r') as r:
                    if os.path.getsize(x) > 0:
                        d = json.load(r)
            except ValueError as exc:
                log.error('from_json() failed, {}'.format(exc))
        else:
            log.error('from_json() failed, file not exists: {}'.format(x))
        return d


    def to_json(self, d, x):
        """
        Save dict to file as json format
        """
        x = os.path.abspath(x)
        if self._check_writable(d, x, 'to_json'):
            with open(x, 'wt') as w:
                json.dump(d, w, indent=4, sort_keys=True)


    # YAML
    def from_yaml(self, x):
        d = None
        if os.path.exists(x):
            try:
                with open(x, 'r') as r:
                    if os.path.getsize(x) > 0:
                        d = yaml.load(r, Loader=yaml.SafeLoader)
            except yaml.YAMLError as exc:
                log.error('from_yaml() failed, {}'.format(exc))
        else:
            log.error('from_yaml() failed, file not exists: {}'.format(x))
        return d


    def to_yaml(self, d, x):
        """
        Save dict to file as YAML format
        values not supported by yaml.safe_dump are saved as str
        """
        x = os.path.abspath(x)
        if self._check_writable(d, x, 'to_yaml'):
            d = {k:v if isinstance(v, (str, int, float, bool, list, dict,
                type(None))) else str(v) for k,v in d.items()}
            with open(x, 'wt') as w:
                yaml.safe_dump(d, w, default_flow_style=False)


    # TOML
    def from_toml(self, x):
        d = None
        if os.path.exists(x):
            try:
                if os.path.getsize(x) > 0:
                    d = toml.load(x)
            except toml.TomlDecodeError as exc:
                log.error('from_toml() failed, {}'.format(exc))
        else:
            log.error('from_toml() failed, file not exists: {}'.format(x))
        return d


    def to_toml(self, d, x):
        """
        Save dict to file as TOML format
        """
        x = os.path.abspath(x)
        if self._check_writable(d, x, 'to_toml'):
            with open(x, 'wt') as w:
                toml.dump(d, w)


def run_shell_cmd(cmd, cwd=None):
    """
    This command is from 'ENCODE-DCC/atac-seq-pipeline'
    https://github.com/ENCODE-DCC/atac-seq-pipeline/blob/master/src/encode_common.py
    run the command line in bash, with pipefail, return: (rc, stdout, stderr)
    """
    p = subprocess.Popen(['/bin/bash','-o','pipefail'], # to catch error in pipe
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        universal_newlines=True,
        cwd=cwd,
        preexec_fn=os.setsid) # to make a new process with a new PGID
    pid = p.pid
    pgid = os.getpgid(pid)
    cmd_name = '{} ...'.format(os.path.basename(cmd.split()[0]))
    log.info('run_shell_cmd: PID={}, PGID={}, CMD={}'.format(pid, pgid, cmd_name))
    stdout, stderr = p.communicate(cmd)
    rc = p.returncode
    if rc:
        err_str = 'PID={}, PGID={}, RC={}\nSTDERR={}\nSTDOUT={}'.format(
            pid,
            pgid,
            rc,
            stderr.strip(),
            stdout.strip())
        log.error(err_str)
        # kill all child processes
        try:
            os.killpg(pgid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    return (rc, stdout.strip('\n'), stderr.strip('\n'))


def get_date(timestamp=False):
    """
    Return the current date in UTC.timestamp or local-formated-string

    Example:
    >>> get_date()
    '2021-05-18 17:08:53'

    >>> get_date(True)
    1621328957.280303
    """
    now = datetime.now(tz.tzlocal())
    if isinstance(timestamp, bool) and timestamp:
        out = now.timestamp()
    else:
        out = now.strftime('%Y-%m-%d %H:%M:%S') # YY-mm-dd H:M:S
    return out


def which(command):
    """
    Return the full path of the executable command, or None
    see: https://stackoverflow.com/a/377028/2530783
    """
    def is_exe(fpath):
        return os.path.isfile(fpath) and os.access(fpath, os.X_OK)

    fpath, fname = os.path.split(command)
    if fpath:
        if is_exe(command):
            return command
    else:
        for path in os.environ.get("PATH", "").split(os.pathsep):
            exe_file = os.path.join(path, command)
            if is_exe(exe_file):
                return exe_file
    return None
