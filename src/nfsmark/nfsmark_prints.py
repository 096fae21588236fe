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


import sys

from tabulate import tabulate



def nfsmark_summary_line(label, summary):

	return (f'{label} rate: total: {summary.sum:.2f} {summary.avg:.2f} ±{summary.err:.2f}, '
		f'min: {summary.min:.2f}, max: {summary.max:.2f}, count: {summary.count}')


def nfsmark_print_summary(label, summary, file=None):

	print(nfsmark_summary_line(label, summary), file=file or sys.stdout)

	return True


def nfsmark_print_stats_table(row_labels, summaries, file=None):

	if len(row_labels) != len(summaries):
		raise ValueError(f'{len(row_labels)} labels for {len(summaries)} summaries')

	rows = [[label, s.sum, s.avg, s.err, s.min, s.max, s.count] for label, s in zip(row_labels, summaries)]

	print(f'\n{tabulate(rows, headers=["phase", "aggregate", "avg", "std dev", "min", "max", "count"], floatfmt=".2f")}\n',
		file=file or sys.stdout)

	return True
