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


"""Exceptions raised across nfsmark. Everything fatal derives from 
NfsmarkError; delete failures are only recorded as CleanupWarning."""


class NfsmarkError(Exception):
	pass


class ArgumentError(NfsmarkError):
	pass


class RemoteConnectionError(NfsmarkError):
	"""Initializing, resolving or mounting the remote share failed."""
	pass


class CoordinatorInitError(NfsmarkError):
	"""The set of collective participants could not be established."""
	pass


class CollectiveAbortedError(NfsmarkError):
	"""Another participant gave up while this one waited at a collective."""
	pass


class ClientError(NfsmarkError):
	"""A single remote filesystem call failed. The message is the 
	human-readable description reported by the client."""
	pass


class OperationError(NfsmarkError):

	def __init__(self, operation, filename, message):
		super().__init__(f'{operation} failed for {filename}: {message}')
		self.operation = operation
		self.filename = filename
		self.message = message


class ZeroElapsedError(OperationError):

	def __init__(self, operation, count):
		super().__init__(operation, f'{count} files', 'elapsed time is zero, rate is undefined')
		self.count = count


class CleanupWarning(UserWarning):

	def __init__(self, filename, message):
		super().__init__(f'Failed to unlink {filename}: {message}')
		self.filename = filename
		self.message = message
