"""Shared fixtures for the MySh tests."""

import os
import stat
import sys
import tempfile
from contextlib import contextmanager


class CapturedOutput:
    """Holds what was written to a descriptor inside ``captured_fd``."""

    def __init__(self):
        self.data = ""


@contextmanager
def captured_fd(fd: int):
    """
    Capture everything written to ``fd`` at the descriptor level.

    Child processes inherit the redirection, so this sees their output
    as well as our own.
    """
    captured = CapturedOutput()
    with tempfile.TemporaryFile() as tmp:
        sys.stdout.flush()
        sys.stderr.flush()
        saved = os.dup(fd)
        os.dup2(tmp.fileno(), fd)
        try:
            yield captured
        finally:
            sys.stdout.flush()
            sys.stderr.flush()
            os.dup2(saved, fd)
            os.close(saved)
            tmp.seek(0)
            captured.data = tmp.read().decode()


@contextmanager
def working_directory(path: str):
    """Temporarily change the process working directory."""
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def make_executable(path: str, content: str = "#!/bin/sh\nexit 0\n") -> str:
    """Write ``content`` to ``path`` and mark it executable."""
    with open(path, 'w') as f:
        f.write(content)
    os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def system_binary(name: str):
    """Path of ``name`` in the default search directories, or None."""
    for directory in ("/usr/local/bin", "/usr/bin", "/bin"):
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate
    return None


def run_in_child(func):
    """
    Call ``func`` in a forked child with stdout sent to a pipe.

    Returns the child's raw wait status and everything it printed. A child
    that returns from ``func`` instead of exiting ends with status 1.
    """
    read_fd, write_fd = os.pipe()
    sys.stdout.flush()
    sys.stderr.flush()
    pid = os.fork()
    if pid == 0:
        try:
            os.close(read_fd)
            sys.stdout = os.fdopen(write_fd, 'w')
            func()
        finally:
            os._exit(1)

    os.close(write_fd)
    with os.fdopen(read_fd) as reader:
        output = reader.read()
    _, status = os.waitpid(pid, 0)
    return status, output
