###################################################################################
# File-operation throughput benchmarking for networked filesystem shares
# 
# In order to produce rates that are comparable across processes, the following 
# are assumed about the benchmark runs:
#
# - Every participant creates, stats and deletes its own disjoint set of files.
# - Participants are synchronized at phase boundaries via collective operations.
# - Files are zero-length; only metadata operations are timed.
#
#	My convention:
#	-> using # to comment out code
#	-> using ## to add comments and explanation
#
###################################################################################

__version__ = "0.1.0"


"""Remote filesystem clients. Every call either succeeds or raises 
ClientError carrying the client's own description of the failure."""


import errno
import os
import posixpath
from abc import ABC, abstractmethod
from stat import S_ISDIR
from urllib.parse import urlparse

import nfsmark.nfsmark_errors as fe
import nfsmark.nfsmark_logging as fl


class nfsClient(ABC):

	def __init__(self, url):
		self.url = url
		self.cwd = None
		self.target = '.'		# directory the benchmark runs in, relative to the share
		self.connected = False

	@abstractmethod
	def connect(self):
		pass

	@abstractmethod
	def disconnect(self):
		pass

	@abstractmethod
	def chdir(self, path):
		pass

	@abstractmethod
	def mkdir(self, path):
		"""Create directory path; an already existing one is not an error."""
		pass

	@abstractmethod
	def create(self, name):
		"""Create name exclusively and return an open handle for close()."""
		pass

	@abstractmethod
	def close(self, handle):
		pass

	@abstractmethod
	def stat(self, name):
		pass

	@abstractmethod
	def unlink(self, name):
		pass

	def __enter__(self):
		self.connect()
		return self

	def __exit__(self, exc_type, exc_value, traceback):
		self.disconnect()
		return False


class PosixClient(nfsClient):
	"""Share that is already mounted locally, given as file:///<dir> or 
	as a plain path."""

	def __init__(self, url):
		super().__init__(url)
		parsed = urlparse(url)
		self.root = parsed.path if parsed.scheme == 'file' else url

	def _path(self, name):
		return os.path.join(self.cwd, name)

	def connect(self):
		if not os.path.isdir(self.root):
			raise fe.RemoteConnectionError(f'Failed to mount share {self.url}: {self.root} is not a directory')
		self.cwd = os.path.abspath(self.root)
		self.connected = True
		fl.nfsmark_logger.debug(f'Using mounted share at {self.cwd}')

	def disconnect(self):
		self.connected = False

	def chdir(self, path):
		target = self._path(path)
		if not os.path.isdir(target):
			raise fe.ClientError(f'{target}: no such directory')
		self.cwd = os.path.normpath(target)

	def mkdir(self, path):
		try:
			os.mkdir(self._path(path))
		except FileExistsError:
			fl.nfsmark_logger.debug(f'Directory {path} already exists.')
		except OSError as e:
			raise fe.ClientError(e.strerror or str(e)) from e

	def create(self, name):
		try:
			return os.open(self._path(name), os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o660)
		except OSError as e:
			raise fe.ClientError(e.strerror or str(e)) from e

	def close(self, handle):
		try:
			os.close(handle)
		except OSError as e:
			raise fe.ClientError(e.strerror or str(e)) from e

	def stat(self, name):
		try:
			return os.stat(self._path(name))
		except OSError as e:
			raise fe.ClientError(e.strerror or str(e)) from e

	def unlink(self, name):
		try:
			os.unlink(self._path(name))
		except OSError as e:
			raise fe.ClientError(e.strerror or str(e)) from e


class LibnfsClient(nfsClient):
	"""nfs://server/export/dir through the libnfs userspace client. The 
	last path component is the target directory inside the export.

	The binding raises only when a path does not exist; every other 
	failure of mkdir and unlink comes back as a negative errno."""

	def __init__(self, url):
		super().__init__(url)
		parsed = urlparse(url)
		export, _, target = parsed.path.rstrip('/').rpartition('/')
		self.server = parsed.netloc
		self.export = export or '/'
		self.target = '/' + target
		self.nfs = None

	def _path(self, name):
		return posixpath.join(self.cwd, name)

	def _check(self, ret, tolerate=()):
		if isinstance(ret, int) and ret < 0 and -ret not in tolerate:
			raise fe.ClientError(os.strerror(-ret))
		return ret

	def _stat(self, path):
		try:
			st = self.nfs.stat(path)
		except (OSError, ValueError) as e:
			raise fe.ClientError(str(e)) from e
		self._check(st)
		return st

	def _isdir(self, path):
		try:
			return S_ISDIR(self._stat(path)['mode'])
		except fe.ClientError:
			return False

	def connect(self):
		try:
			import libnfs
		except ImportError as e:
			raise fe.RemoteConnectionError(f'libnfs not available: {e}') from e

		if not self.server:
			raise fe.RemoteConnectionError(f'No server in url {self.url}')

		try:
			self.nfs = libnfs.NFS(f'nfs://{self.server}{self.export}')
		except (OSError, ValueError) as e:
			raise fe.RemoteConnectionError(f'Failed to mount nfs share : {e}') from e

		## NFS() does not report a failed mount, the export root tells
		if not self._isdir('/'):
			self.nfs = None
			raise fe.RemoteConnectionError(f'Failed to mount nfs share : {self.server}:{self.export}')

		self.cwd = '/'
		self.connected = True
		fl.nfsmark_logger.debug(f'Mounted {self.server}:{self.export}, target {self.target}')

	def disconnect(self):
		self.nfs = None
		self.connected = False

	def chdir(self, path):
		target = posixpath.normpath(self._path(path))
		if not self._isdir(target):
			raise fe.ClientError(f'{target}: no such directory')
		self.cwd = target

	def mkdir(self, path):
		try:
			ret = self.nfs.mkdir(self._path(path))
		except (OSError, ValueError) as e:
			raise fe.ClientError(str(e)) from e
		if ret == -errno.EEXIST:
			fl.nfsmark_logger.debug(f'Directory {path} already exists.')
		self._check(ret, tolerate=(errno.EEXIST,))

	def create(self, name):
		try:
			return self.nfs.open(self._path(name), mode='w')
		except (OSError, ValueError) as e:
			raise fe.ClientError(str(e)) from e

	def close(self, handle):
		try:
			self._check(handle.close())
		except (OSError, ValueError) as e:
			raise fe.ClientError(str(e)) from e

	def stat(self, name):
		return self._stat(self._path(name))

	def unlink(self, name):
		try:
			ret = self.nfs.unlink(self._path(name))
		except (OSError, ValueError) as e:
			raise fe.ClientError(str(e)) from e
		self._check(ret)


def client_for_url(url):

	scheme = urlparse(url).scheme
	if scheme == 'nfs':
		return LibnfsClient(url)
	if scheme in ('file', ''):
		return PosixClient(url)

	raise fe.RemoteConnectionError(f'Unsupported url scheme "{scheme}" in {url}')
