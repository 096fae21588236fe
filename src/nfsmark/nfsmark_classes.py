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

from nfsmark.nfsmark_constants import *


class rateSummary:

	def __init__(self, stats=None, count=0):

		if stats is None:
			stats = np.zeros(STATS_LEN, dtype=float)
		self.stats	= stats		# indexed by AGR, MIN, MAX, AVG, STD
		self.count	= count		# number of participants contributing

	@property
	def sum(self):
		return float(self.stats[AGR])

	@property
	def avg(self):
		return float(self.stats[AVG])

	@property
	def min(self):
		return float(self.stats[MIN])

	@property
	def max(self):
		return float(self.stats[MAX])

	@property
	def err(self):
		return float(self.stats[STD])

	def as_dict(self):
		return {'sum': self.sum, 'avg': self.avg, 'min': self.min,
			'max': self.max, 'err': self.err, 'count': self.count}

	def __repr__(self):
		return f'rateSummary({self.as_dict()})'


class phaseResult:

	def __init__(self, operation, count, elapsed, rate, warnings=None):

		self.operation	= operation
		self.count		= count		# files attempted, not files that succeeded
		self.elapsed	= elapsed	# seconds around the whole loop
		self.rate		= rate
		self.warnings	= warnings if warnings is not None else []

	@property
	def label(self):
		return OP_LABELS[self.operation]
