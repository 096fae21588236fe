"""
Unit tests for the filesystem clients: a temporary directory for PosixClient,
and a stand-in with the libnfs NFS surface for LibnfsClient.
"""

import errno
import io
import os
import posixpath
import stat
import sys
import types

import pytest

import nfsmark.nfsmark_errors as fe
from nfsmark.nfsmark_client import LibnfsClient, PosixClient, client_for_url


def test_client_for_url():
    assert isinstance(client_for_url("file:///mnt/share"), PosixClient)
    assert isinstance(client_for_url("/mnt/share"), PosixClient)
    assert isinstance(client_for_url("nfs://server/export/dir"), LibnfsClient)


def test_client_for_url_unsupported_scheme():
    with pytest.raises(fe.RemoteConnectionError):
        client_for_url("smb://server/share")


def test_libnfs_url_split():
    client = LibnfsClient("nfs://server/export/data/bench")

    assert client.server == "server"
    assert client.export == "/export/data"
    assert client.target == "/bench"


def test_posix_connect_missing_directory(tmp_path):
    client = PosixClient(f"file://{tmp_path / 'missing'}")

    with pytest.raises(fe.RemoteConnectionError):
        client.connect()


def test_posix_create_stat_unlink(tmp_path):
    with PosixClient(f"file://{tmp_path}") as client:
        client.chdir(client.target)
        handle = client.create("a.file.1.0")
        client.close(handle)

        assert (tmp_path / "a.file.1.0").stat().st_size == 0
        assert client.stat("a.file.1.0").st_size == 0

        client.unlink("a.file.1.0")
        assert not (tmp_path / "a.file.1.0").exists()

    assert not client.connected


def test_posix_create_is_exclusive(tmp_path):
    (tmp_path / "taken").touch()

    with PosixClient(str(tmp_path)) as client:
        with pytest.raises(fe.ClientError) as excinfo:
            client.create("taken")

    assert "exists" in str(excinfo.value)


def test_posix_stat_and_unlink_missing(tmp_path):
    with PosixClient(str(tmp_path)) as client:
        with pytest.raises(fe.ClientError):
            client.stat("nope")
        with pytest.raises(fe.ClientError):
            client.unlink("nope")


def test_posix_mkdir_tolerates_existing(tmp_path):
    (tmp_path / "0").mkdir()

    with PosixClient(str(tmp_path)) as client:
        client.mkdir("0")
        client.mkdir("1")
        client.chdir("1")
        client.close(client.create("x"))

    assert (tmp_path / "1" / "x").exists()


def test_posix_mkdir_other_errors(tmp_path):
    with PosixClient(str(tmp_path)) as client:
        with pytest.raises(fe.ClientError):
            client.mkdir("missing/parent/dir")


def test_posix_chdir_missing(tmp_path):
    with PosixClient(str(tmp_path)) as client:
        with pytest.raises(fe.ClientError):
            client.chdir("nowhere")


class fakeNFS:
    """Same surface as libnfs.NFS: only ENOENT raises, every other
    failure is a negative errno return value."""

    def __init__(self, url, mounted=True):
        self.url = url
        self.mounted = mounted
        self.dirs = {"/", "/bench"} if mounted else set()
        self.files = set()
        self.errors = {}

    def _result(self, op, path):
        ret = self.errors.get((op, path))
        if ret == -errno.ENOENT:
            raise IOError(errno.ENOENT, os.strerror(errno.ENOENT))
        return ret

    def open(self, path, mode="r"):
        if self._result("open", path) is not None:
            return None
        if posixpath.dirname(path) not in self.dirs:
            raise IOError(errno.ENOENT, os.strerror(errno.ENOENT))
        self.files.add(path)
        return io.BytesIO()

    def stat(self, path):
        if path in self.dirs:
            return {"mode": stat.S_IFDIR | 0o755, "size": 4096}
        if path in self.files:
            return {"mode": stat.S_IFREG | 0o660, "size": 0}
        raise IOError(errno.ENOENT, os.strerror(errno.ENOENT))

    def lstat(self, path):
        return self.stat(path)

    def unlink(self, path):
        ret = self._result("unlink", path)
        if ret is not None:
            return ret
        if path not in self.files:
            raise IOError(errno.ENOENT, os.strerror(errno.ENOENT))
        self.files.remove(path)
        return 0

    def mkdir(self, path):
        if path in self.dirs or path in self.files:
            return -errno.EEXIST
        ret = self._result("mkdir", path)
        if ret is not None:
            return ret
        self.dirs.add(path)
        return 0

    def rmdir(self, path):
        self.dirs.discard(path)
        return 0

    def listdir(self, path):
        return []


@pytest.fixture
def fake_libnfs(monkeypatch):
    """Install a libnfs module whose NFS class is fakeNFS."""
    created = []

    def factory(url):
        nfs = fakeNFS(url, mounted=factory.mounted)
        created.append(nfs)
        return nfs

    factory.mounted = True
    factory.created = created
    monkeypatch.setitem(sys.modules, "libnfs", types.SimpleNamespace(NFS=factory))
    return factory


def test_libnfs_connect_and_run_files(fake_libnfs):
    with LibnfsClient("nfs://server/export/bench") as client:
        assert fake_libnfs.created[0].url == "nfs://server/export"
        client.chdir(client.target)
        assert client.cwd == "/bench"

        client.close(client.create("h.file.1.0"))
        assert client.stat("h.file.1.0")["size"] == 0
        client.unlink("h.file.1.0")

        with pytest.raises(fe.ClientError):
            client.stat("h.file.1.0")
        with pytest.raises(fe.ClientError):
            client.unlink("h.file.1.0")

    assert client.nfs is None


def test_libnfs_failed_mount(fake_libnfs):
    fake_libnfs.mounted = False

    with pytest.raises(fe.RemoteConnectionError):
        LibnfsClient("nfs://server/export/bench").connect()


def test_libnfs_missing_target_directory(fake_libnfs):
    with LibnfsClient("nfs://server/export/absent") as client:
        with pytest.raises(fe.ClientError):
            client.chdir(client.target)


def test_libnfs_chdir_into_a_file(fake_libnfs):
    with LibnfsClient("nfs://server/export/bench") as client:
        client.chdir(client.target)
        client.close(client.create("plain"))
        with pytest.raises(fe.ClientError):
            client.chdir("plain")


def test_libnfs_mkdir_existing_directory(fake_libnfs):
    with LibnfsClient("nfs://server/export/bench") as client:
        client.chdir(client.target)
        client.mkdir("0")
        client.mkdir("0")
        client.chdir("0")
        assert client.cwd == "/bench/0"


def test_libnfs_mkdir_error(fake_libnfs):
    with LibnfsClient("nfs://server/export/bench") as client:
        client.chdir(client.target)
        fake_libnfs.created[0].errors[("mkdir", "/bench/1")] = -errno.EROFS

        with pytest.raises(fe.ClientError) as excinfo:
            client.mkdir("1")

    assert str(excinfo.value) == os.strerror(errno.EROFS)


def test_libnfs_unlink_permission_denied(fake_libnfs):
    with LibnfsClient("nfs://server/export/bench") as client:
        client.chdir(client.target)
        client.close(client.create("h.file.1.0"))
        fake_libnfs.created[0].errors[("unlink", "/bench/h.file.1.0")] = -errno.EACCES

        with pytest.raises(fe.ClientError) as excinfo:
            client.unlink("h.file.1.0")

    assert str(excinfo.value) == os.strerror(errno.EACCES)


def test_libnfs_create_in_missing_directory(fake_libnfs):
    with LibnfsClient("nfs://server/export/bench") as client:
        with pytest.raises(fe.ClientError):
            client.create("nodir/h.file.1.0")
