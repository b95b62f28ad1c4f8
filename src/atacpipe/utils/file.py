#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
functions for file manipulation
## 1. manipulate file
- check_dir
- check_file
- remove_file
- symlink_file
## 2. file info
- file_prefix
- file_abspath
- file_exists
- is_writable_dir
## 3. search files
- list_file
- list_glob
## 4. valid files
- is_valid_bam
"""

import os
import glob
import fnmatch
import pathlib
import pysam
from atacpipe.utils.utils import log


## 1. manipulate files
def check_dir(x, **kwargs):
    """Check if x is path
    Parameters
    ----------
    x : str
        Path to a file
    Keyword Parameters
    ------------------
    show_error : bool
        Show the error messages
    create_dirs : bool
        Create the dirs
    """
    show_error = kwargs.get('show_error', False)
    create_dirs = kwargs.get('create_dirs', True) # default: True
    out = False
    if isinstance(x, str):
        if os.path.isdir(x):
            out = True
        elif os.path.isfile(x):
            if show_error:
                log.error('file exists, not a directory: {}'.format(x))
        elif create_dirs:
            try:
                os.makedirs(x)
                out = True
            except OSError as err:
                if show_error:
                    log.error('`os.makedirs` failed: {}, {}'.format(x, err))
    elif isinstance(x, list):
        out = all([check_dir(i, **kwargs) for i in x])
    elif show_error:
        log.error('x expect str or list, got {}'.format(type(x).__name__))
    return out


def check_file(x, **kwargs):
    """
    Check the x file
    1. file exists
    Parameters
    ----------
    x : str
        Path to a file
    Keyword Parameters
    ------------------
    show_error : bool
        Show the error messages
    check_empty : bool
        Check if the file is empty or not
    """
    show_error = kwargs.get('show_error', False)
    check_empty = kwargs.get('check_empty', False)
    if isinstance(x, str):
        if os.path.isfile(x):
            out = os.stat(x).st_size > 0 if check_empty else True
        else:
            if show_error:
                log.error('file not exists: {}'.format(x))
            out = False # failed
    elif isinstance(x, list):
        out = all([check_file(i, **kwargs) for i in x])
    else:
        if show_error:
            log.error('x expect str or list, got {}'.format(type(x).__name__))
        out = False
    return out


def remove_file(x, **kwargs):
    """Remove files

    Parameters
    ----------
    x : str or list
        The file(s) to be removed

    show_log : bool
        Log the removed files
    """
    show_log = kwargs.get('show_log', True)
    if isinstance(x, str):
        if os.path.isfile(x) or os.path.islink(x):
            os.remove(x)
            if show_log:
                log.info('rm: {}'.format(x))
    elif isinstance(x, list):
        [remove_file(i, **kwargs) for i in x]
    elif x is not None:
        log.error('x, str or list expected, got {}'.format(
            type(x).__name__))


def symlink_file(src, dest, absolute_path=False, force=False):
    """
    Create symlink
    Parameters
    ----------
    src : str
        The source file
    dest : str
        The target file, dir exists
    absolute_path : bool
        Use abs_path instead
    force : bool
        Overwrite dest file
    """
    if not isinstance(src, str):
        log.error('src, expect str, got {}'.format(type(src).__name__))
    elif not isinstance(dest, str):
        log.error('dest, expect str, got {}'.format(type(dest).__name__))
    elif os.path.isfile(src):
        src = os.path.abspath(os.path.expanduser(os.path.expandvars(src)))
        if os.path.isdir(dest):
            dest_file = os.path.join(dest, os.path.basename(src))
        else:
            dest_file = dest
        dest_file = os.path.abspath(os.path.expanduser(os.path.expandvars(dest_file)))
        # the relative path of src
        src_dir_rel = os.path.relpath(os.path.dirname(src),
            os.path.dirname(dest_file))
        src_rel = os.path.join(src_dir_rel, os.path.basename(src))
        src_file = src if absolute_path else src_rel
        if os.path.lexists(dest_file) and force:
            os.remove(dest_file)
        if os.path.lexists(dest_file):
            log.info('symlink_file() skipped, dest exists: {}'.format(dest_file))
        else:
            os.symlink(src_file, dest_file)
    else:
        log.warning('symlink_file() failed, src not vaild: {}'.format(src))


## 2. file info
def file_prefix(x, with_dir=False):
    """
    Extract the prefix of file, remove extensions
    .gz, .fq.gz
    Parameters
    ----------
    x : str,list
        Path to a file, or list of files
    """
    if isinstance(x, str):
        if x.endswith('.gz') or x.endswith('.bz2'):
            x = os.path.splitext(x)[0]
        out = os.path.splitext(x)[0]
        if not with_dir:
            out = os.path.basename(out)
    elif isinstance(x, list):
        out = [file_prefix(i, with_dir) for i in x]
    elif x is None:
        out = None
    else:
        log.error('unknown x, str,list,None expected, got {}'.format(
            type(x).__name__))
        out = None
    return out


def file_abspath(x):
    """
    Return the absolute path of file
    Parameters
    ----------
    x : str,list
        Path to a file, or list of files
    """
    if x is None or x == 'None':
        out = None
    elif isinstance(x, str):
        out = os.path.abspath(os.path.expanduser(x))
    elif isinstance(x, list):
        out = [file_abspath(i) for i in x]
    else:
        log.warning('x, expect str,list, got {}'.format(type(x).__name__))
        out = x
    return out


def file_exists(x):
    """
    Check if file exists or not
    Parameters
    ----------
    x : str,list
        Path to a file, or list of files
    """
    if x is None:
        out = False
    elif isinstance(x, str):
        out = os.path.exists(x) # file/dir/link
    elif isinstance(x, list):
        out = [file_exists(i) for i in x]
    else:
        log.warning('x, expect str,list, got {}'.format(type(x).__name__))
        out = False
    return out


def is_writable_dir(x):
    """
    The dir exists (or could be created) and is writable
    """
    if not check_dir(x, create_dirs=True):
        return False
    return os.access(x, os.W_OK)


def fix_out_dir(x):
    """
    fix out_dir, if not "str", set "cwd()"
    """
    if not isinstance(x, str):
        x = str(pathlib.Path.cwd())
    return os.path.abspath(os.path.expanduser(x))


## 3. search files
def list_file(path='.', pattern='*'):
    """
    Search files by the pattern, within directory (first level)
    see base::list.files() function in R
    Parameters
    ----------
    path : str
        List files in path
    pattern : str
        see pattern of fnmatch
    example:
    list_file('./', '*.fq')
    """
    out = []
    if os.path.isdir(path):
        out = [os.path.join(path, f) for f in os.listdir(path)
            if fnmatch.fnmatch(f, pattern)]
    return sorted(out)


def list_glob(pattern):
    """
    List files/dirs match the glob pattern, in order
    """
    return sorted(glob.glob(pattern))


## 4. valid files
def is_valid_bam(x):
    """
    Check if x is valid BAM file

    Parameters
    ----------
    x : str
        Path to the BAM file
    """
    out = False
    if isinstance(x, str) and os.path.exists(x):
        try:
            with pysam.AlignmentFile(x, 'rb', check_sq=False):
                out = True
        except (ValueError, OSError):
            out = False
    return out
