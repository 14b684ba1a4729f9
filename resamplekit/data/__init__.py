"""
Data model for resampling.

This module provides:
- DataSource: Abstract base class for row-projectable datasets
- FrameSource / ArraySource: DataFrame and numpy array sources
- RowIndexPartition: Analysis/assessment index pair for one split
- Split: Source reference plus partition, with lazy table access
- ResampleSet: Ordered splits with ids, strategy metadata and result columns
"""

from resamplekit.data.partition import RowIndexPartition, merge_partitions
from resamplekit.data.resample_set import ResampleSet, SplitId
from resamplekit.data.source import ArraySource, DataSource, FrameSource, as_source
from resamplekit.data.split import Portion, Split, analysis, assessment, testing, training

__all__ = [
    "DataSource",
    "FrameSource",
    "ArraySource",
    "as_source",
    "RowIndexPartition",
    "merge_partitions",
    "Portion",
    "Split",
    "SplitId",
    "ResampleSet",
    "analysis",
    "assessment",
    "training",
    "testing",
]
