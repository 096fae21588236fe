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


__all__ = ["setup_nfsmark_logger", "set_nfsmark_loglevel", "nfsmark_logger", "nfsmark_print", "nfsmark_error", "nfsmark_intro"]
__version__ = "0.1.0"


import sys
import logging


def setup_nfsmark_logger(level):
	nfsmark_logger = logging.getLogger(':: nfsmark debug info')
	nfsmark_logger.setLevel(level)

	ch = logging.StreamHandler()
	ch.setLevel(level)


	formatter = logging.Formatter('\n%(name)s - %(filename)s::%(lineno)d - %(levelname)s :: %(message)s')

	ch.setFormatter(formatter)

	nfsmark_logger.addHandler(ch)

	return nfsmark_logger


def set_nfsmark_loglevel(logger, level):
	logger.setLevel(level)
	for handler in logger.handlers:
		handler.setLevel(level)
	return


nfsmark_logger = setup_nfsmark_logger(logging.INFO)


def nfsmark_print(message):
	print('nfsmark info: ' + message)
	return


def nfsmark_error(message):
	print('nfsmark ERROR: ' + message, file=sys.stderr)
	return



def nfsmark_intro():

	print('\n.: nfsmark: file-operation rates for networked filesystems :.\n')
