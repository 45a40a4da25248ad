"""Iterative PageRank as a chain of mrjob MapReduce jobs."""
__version__ = '0.1.0'
