"""
cmdkit: a base layer for command-line programs that run as tracked
background processes, with pid files, verbosity-filtered output and
argument encoding normalization.
"""

__version__ = "0.1.0"
