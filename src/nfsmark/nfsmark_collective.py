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


"""Collective operations over a fixed set of participants identified by 
rank. barrier() and gather() must be called by every participant or by 
none. There is no timeout: one wedged participant stalls all the others 
at the next collective."""


import threading
from abc import ABC, abstractmethod

import numpy as np

import nfsmark.nfsmark_errors as fe
import nfsmark.nfsmark_logging as fl
from nfsmark.nfsmark_constants import *


class Collective(ABC):

	def __init__(self, rank, size):
		self.rank = rank
		self.size = size

	@property
	def is_root(self):
		return self.rank == ROOT

	@abstractmethod
	def barrier(self):
		pass

	@abstractmethod
	def gather(self, value):
		"""Root receives the values of all participants ordered by rank, 
		everybody else receives None."""
		pass

	@abstractmethod
	def bcast(self, value):
		"""Every participant receives the value supplied by root."""
		pass

	def abort(self, status):
		pass

	def finalize(self):
		pass

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_value, traceback):
		self.finalize()
		return False


class SoloCollective(Collective):

	def __init__(self):
		super().__init__(ROOT, 1)

	def barrier(self):
		pass

	def gather(self, value):
		return [value]

	def bcast(self, value):
		return value


class MpiCollective(Collective):

	def __init__(self):

		try:
			from mpi4py import MPI
		except (ImportError, RuntimeError) as e:
			raise fe.CoordinatorInitError(f'mpi4py not available: {e}') from e

		self.MPI = MPI
		self.comm = MPI.COMM_WORLD
		super().__init__(self.comm.Get_rank(), self.comm.Get_size())
		fl.nfsmark_logger.debug(f'MPI initialized, rank {self.rank} of {self.size}')

	def barrier(self):
		self.comm.Barrier()

	def gather(self, value):

		sendbuf = np.array([value], dtype=float)
		## only root allocates the destination buffer
		recvbuf = np.empty(self.size, dtype=float) if self.is_root else None

		self.comm.Gather(sendbuf, recvbuf, root=ROOT)

		if recvbuf is None:
			return None
		return recvbuf.tolist()

	def bcast(self, value):
		return self.comm.bcast(value, root=ROOT)

	def abort(self, status):
		if self.size > 1:
			fl.nfsmark_logger.warning(f'Rank {self.rank} aborting all {self.size} participants.')
			self.comm.Abort(status)

	def finalize(self):
		if not self.MPI.Is_finalized():
			self.MPI.Finalize()


## N participants as threads of one process. Used to simulate multi-process 
## runs; each thread gets its own ThreadCollective from threadGroup.participants()

class threadGroup:

	def __init__(self, size):
		if size < 1:
			raise fe.CoordinatorInitError(f'a group needs at least one participant, got {size}')
		self.size = size
		self.sync = threading.Barrier(size)
		self.slots = [None] * size

	def participants(self):
		return [ThreadCollective(self, rank) for rank in range(self.size)]


class ThreadCollective(Collective):

	def __init__(self, group, rank):
		super().__init__(rank, group.size)
		self.group = group

	def _wait(self):
		try:
			self.group.sync.wait()
		except threading.BrokenBarrierError as e:
			raise fe.CollectiveAbortedError(f'rank {self.rank}: collective aborted by another participant') from e

	def barrier(self):
		self._wait()

	def gather(self, value):

		self.group.slots[self.rank] = value
		self._wait()
		result = list(self.group.slots) if self.is_root else None
		## keep the slots intact until root has copied them
		self._wait()

		return result

	def bcast(self, value):

		if self.is_root:
			self.group.slots[ROOT] = value
		self._wait()
		result = self.group.slots[ROOT]
		self._wait()

		return result

	def abort(self, status):
		if self.size > 1:
			self.group.sync.abort()


def init_collective(use_mpi):

	if use_mpi:
		return MpiCollective()

	return SoloCollective()
