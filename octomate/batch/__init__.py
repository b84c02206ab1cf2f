"""Batch processing module.

This module provides parsing, validation and execution of batch files.
"""

from octomate.batch.executor import BatchExecutor, ResultCallback
from octomate.batch.parser import BatchParser

__all__ = [
    # Parser
    "BatchParser",
    # Executor
    "BatchExecutor",
    "ResultCallback",
]
