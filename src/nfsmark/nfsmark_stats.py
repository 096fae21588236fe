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


import numpy as np

import nfsmark.nfsmark_classes as fc
import nfsmark.nfsmark_errors as fe
from nfsmark.nfsmark_constants import *



""" The following function fills in the aggregate, min, max, avg and 
population standard deviation of a vector of values into stats_vector. 
min and max come from a full scan of the values, so a zero or negative 
sample is a legitimate extremum and never mistaken for 'not yet set'. """

def nfsmark_static_stats_x5(values_vector, stats_vector):

	values = np.asarray(values_vector, dtype=float)
	if values.size == 0:
		raise ValueError('cannot compute statistics over an empty sample set')

	stats_vector[AGR] = np.sum(values)
	stats_vector[MIN] = np.min(values)
	stats_vector[MAX] = np.max(values)
	stats_vector[AVG] = stats_vector[AGR] / values.size

	## second pass, once the mean is known; divide by count, not count-1
	stats_vector[STD] = np.sqrt(np.sum((values - stats_vector[AVG]) ** 2) / values.size)

	return values.size


def nfsmark_aggregate(samples):
	"""Reduce the rate samples of every participant for one phase into 
	a rateSummary."""

	stats = np.zeros(STATS_LEN, dtype=float)
	count = nfsmark_static_stats_x5(samples, stats)

	return fc.rateSummary(stats, count)


def nfsmark_rate(operation, count, elapsed):

	if elapsed <= 0:
		raise fe.ZeroElapsedError(OP_LABELS[operation], count)

	return count / elapsed
