"""
Shared fixtures: an in-memory filesystem client, a deterministic clock and
a helper that runs one callable per participant on threads.
"""

import itertools
import posixpath
import threading
import time

import pytest

import nfsmark.nfsmark_errors as fe
from nfsmark.nfsmark_client import nfsClient


class journal:
    """Logical clock shared by several participants."""

    def __init__(self):
        self.lock = threading.Lock()
        self.ticks = itertools.count()
        self.events = []

    def record(self, rank, op):
        with self.lock:
            self.events.append((next(self.ticks), rank, op))


class memoryClient(nfsClient):
    """In-memory share. fail maps (op, n) to an error message, making the
    n-th call (1-based) of op fail."""

    def __init__(self, url="mem://share/bench", fail=None, rank=0, log=None, delay=0.0, mkdir_error=None):
        super().__init__(url)
        self.target = "/bench"
        self.dirs = {"/", "/bench"}
        self.files = set()
        self.fail = fail or {}
        self.rank = rank
        self.log = log
        self.delay = delay
        self.mkdir_error = mkdir_error
        self.counts = {}
        self.calls = []
        self.disconnected = False

    def _call(self, op, name):
        self.counts[op] = self.counts.get(op, 0) + 1
        self.calls.append((op, name))
        if self.log is not None:
            self.log.record(self.rank, op)
        if self.delay:
            time.sleep(self.delay)
        message = self.fail.get((op, self.counts[op]))
        if message is not None:
            raise fe.ClientError(message)

    def _path(self, name):
        return posixpath.normpath(posixpath.join(self.cwd, name))

    def connect(self):
        self.cwd = "/"
        self.connected = True

    def disconnect(self):
        self.connected = False
        self.disconnected = True

    def chdir(self, path):
        target = self._path(path)
        if target not in self.dirs:
            raise fe.ClientError(f"{target}: no such directory")
        self.cwd = target

    def mkdir(self, path):
        self._call("mkdir", path)
        if self.mkdir_error is not None:
            raise fe.ClientError(self.mkdir_error)
        self.dirs.add(self._path(path))

    def create(self, name):
        self._call("create", name)
        path = self._path(name)
        if path in self.files:
            raise fe.ClientError("File exists")
        self.files.add(path)
        return path

    def close(self, handle):
        pass

    def stat(self, name):
        self._call("stat", name)
        if self._path(name) not in self.files:
            raise fe.ClientError("No such file or directory")
        return {"size": 0}

    def unlink(self, name):
        self._call("unlink", name)
        path = self._path(name)
        if path not in self.files:
            raise fe.ClientError("No such file or directory")
        self.files.remove(path)


class tickClock:
    """Every call returns the previous value plus step, so each timed
    loop measures exactly step seconds."""

    def __init__(self, step):
        self.step = step
        self.now = 0.0

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


def run_participants(target, size):
    """Run target(rank) on one thread per rank and return the results
    ordered by rank. Exceptions raised on a thread are re-raised here."""
    results = [None] * size
    errors = []

    def worker(rank):
        try:
            results[rank] = target(rank)
        except BaseException as e:  # re-raised in the calling thread
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(rank,)) for rank in range(size)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
        assert not t.is_alive(), "participant thread did not finish"
    if errors:
        raise errors[0]
    return results


@pytest.fixture
def mem_client():
    client = memoryClient()
    client.connect()
    client.chdir(client.target)
    return client
