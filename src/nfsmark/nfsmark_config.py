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


"""Run configuration. Rank and size are established once the collective 
is up and are carried in a benchContext, never in module globals."""


import os
import socket

import nfsmark.nfsmark_errors as fe
from nfsmark.nfsmark_constants import *


class benchConfig:

	def __init__(self, url, files=DEFAULT_FILES, warmup=DEFAULT_WARMUP, unique_dir=False, mpi=False, debug=False):

		if files < 1:
			raise fe.ArgumentError(f'number of files must be at least 1, got {files}')
		if warmup < 0:
			raise fe.ArgumentError(f'number of warmup iterations cannot be negative, got {warmup}')

		self.url		= url
		self.files		= files
		self.warmup		= warmup
		self.unique_dir	= unique_dir
		self.mpi		= mpi
		self.debug		= debug

	@classmethod
	def from_args(cls, args):
		return cls(args.url, files=args.files, warmup=args.warmup,
			unique_dir=args.unique, mpi=args.mpi, debug=args.debug)


class benchContext:

	def __init__(self, config, rank, size, hostname, pid):

		self.config		= config
		self.rank		= rank
		self.size		= size
		self.hostname	= hostname
		self.pid		= pid

	@property
	def is_root(self):
		return self.rank == ROOT


def nfsmark_identity():
	"""Hostname and process id, the two components that keep every 
	participant's file names disjoint."""

	try:
		hostname = socket.gethostname()
	except OSError as e:
		raise fe.NfsmarkError(f'Failed to get hostname: {e}') from e

	return hostname, os.getpid()
