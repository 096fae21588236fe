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


"""This module defines project-level constants."""



""" The following constants tag the operation that a phase applies 
to every file of a participant's file set. They also index the lists 
that hold per-operation labels throughout nfsmark. """

CREATE		= 0		# open-or-create, then close
STAT		= 1		# metadata query by name
DELETE		= 2		# unlink, best-effort

OPERATIONS	= (CREATE, STAT, DELETE)
OP_LABELS	= ['Create', 'Stat', 'Delete']


""" The following constants are used in numpy arrays or lists 
throughout nfsmark in order to index to the part of the list or 
array that is designated for holding the value of the corresponding 
metric """ 

AGR			= 0		# aggregate or total, i.e. sum of all samples
MIN			= 1 	# minimum
MAX			= 2		# maximum
AVG			= 3		# average or mean
STD			= 4		# population standard deviation

STATS_LEN	= 5


ROOT		= 0		# rank that gathers samples and prints summaries

DEFAULT_FILES	= 100
DEFAULT_WARMUP	= 0

EXIT_OK			= 0
EXIT_FAILURE	= 1
EXIT_USAGE		= 2
