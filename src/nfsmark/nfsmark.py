#!/usr/bin/env python3


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

__all__ = ["main", "nfsmark_arg_parser"]
__version__ = "0.1.0"

import argparse
import sys

import logging

import nfsmark.nfsmark_bench as fb
import nfsmark.nfsmark_client as fn
import nfsmark.nfsmark_collective as fco
import nfsmark.nfsmark_config as fg
import nfsmark.nfsmark_errors as fe
import nfsmark.nfsmark_logging as fl
from nfsmark.nfsmark_constants import *


def nfsmark_arg_parser():

	## set up how nfsmark has to be invoked ...
	parser = argparse.ArgumentParser(prog='nfsmark', description="nfsmark -- measure create, stat and delete rates against a networked filesystem share, optionally across a cluster of cooperating processes.")
	parser.add_argument("url", help="Connection URL of the share and target directory, e.g. nfs://server/export/dir or file:///mnt/share/dir.", type=str)
	parser.add_argument("-f", "--files", help=f"Number of files per phase per participant (default {DEFAULT_FILES}).", type=int, default=DEFAULT_FILES)
	parser.add_argument("-w", "--warmup", help=f"Number of warmup iterations run before the measured phases (default {DEFAULT_WARMUP}, i.e. no warmup).", type=int, default=DEFAULT_WARMUP)
	parser.add_argument("-u", "--unique", help="Each participant works in its own subdirectory, named after its rank, instead of the shared target directory.", action="store_true")
	parser.add_argument("-m", "--mpi", help="Coordinate participants through MPI (launch with mpirun). Without it nfsmark runs as a single participant.", action="store_true")
	parser.add_argument("-d", "--debug", help="Turns on debug messages.", action="store_true")

	return parser


def main(argv=None):

	parser = nfsmark_arg_parser()

	## ... and get the required parameters from the command-line arguments
	args = parser.parse_args(argv)
	try:
		config = fg.benchConfig.from_args(args)
	except fe.ArgumentError as e:
		parser.error(str(e))

	if config.debug:
		fl.set_nfsmark_loglevel(fl.nfsmark_logger, logging.DEBUG)

	fl.nfsmark_logger.debug(f'Url is : {config.url}')
	fl.nfsmark_logger.debug(f'Files {config.files}, warmup {config.warmup}, unique dir {config.unique_dir}')

	## no remote connection is attempted before the participants are known
	try:
		collective = fco.init_collective(config.mpi)
	except fe.CoordinatorInitError as e:
		fl.nfsmark_error(f'Failed to initialize participants: {e}')
		return EXIT_FAILURE

	with collective:
		if collective.is_root:
			fl.nfsmark_intro()

		status = EXIT_FAILURE
		try:
			hostname, pid = fg.nfsmark_identity()
			ctx = fg.benchContext(config, collective.rank, collective.size, hostname, pid)

			with fn.client_for_url(config.url) as client:
				status = fb.nfsmark_run(client, collective, ctx)

		except fe.NfsmarkError as e:
			fl.nfsmark_error(str(e))

		## the client is disconnected by now; release the peers waiting on us
		if status != EXIT_OK:
			collective.abort(status)

		return status



if __name__ == "__main__":
	sys.exit(main())
