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


import time

import nfsmark.nfsmark_classes as fc
import nfsmark.nfsmark_errors as fe
import nfsmark.nfsmark_logging as fl
import nfsmark.nfsmark_stats as fs
from nfsmark.nfsmark_constants import *


def nfsmark_filename(hostname, pid, index):
	return f'{hostname}.file.{pid}.{index}'


def _create_one(client, name):
	handle = client.create(name)
	client.close(handle)


def nfsmark_run_phase(client, operation, rank, pid, count, hostname, clock=time.perf_counter):
	"""Apply operation to files 0..count-1 of this participant and time 
	the whole loop. A create or stat failure ends the phase with an 
	OperationError; a delete failure is recorded as a CleanupWarning and 
	the loop goes on, so the rate always covers the full attempted count."""

	if operation not in OPERATIONS:
		raise ValueError(f"unknown operation {operation}")

	label = OP_LABELS[operation]
	warnings = []

	fl.nfsmark_logger.debug(f'Rank {rank}: {label} phase over {count} files.')

	start = clock()
	for i in range(count):
		name = nfsmark_filename(hostname, pid, i)
		try:
			if operation == CREATE:
				_create_one(client, name)
			elif operation == STAT:
				client.stat(name)
			else:
				client.unlink(name)
		except fe.ClientError as e:
			if operation != DELETE:
				raise fe.OperationError(label, name, str(e)) from e
			warning = fe.CleanupWarning(name, str(e))
			fl.nfsmark_logger.warning(str(warning))
			warnings.append(warning)
	elapsed = clock() - start

	rate = fs.nfsmark_rate(operation, count, elapsed)
	fl.nfsmark_logger.debug(f'Rank {rank}: {label} speed: {rate:2.2f} rps in {elapsed:2.2f}s')

	return fc.phaseResult(operation, count, elapsed, rate, warnings)
