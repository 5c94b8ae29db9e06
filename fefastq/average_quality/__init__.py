"""
Submodule reporting the mean read quality of each FASTQ file in a directory
"""

__all__ = ["average_quality_runner"]

from .runner import average_quality_runner
