"""
Submodule writing copies of FASTQ files with a uniform separator line
"""

__all__ = ["replace_separator_runner"]

from .runner import replace_separator_runner
