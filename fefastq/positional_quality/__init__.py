"""
Submodule reporting the mean quality at each read position
"""

__all__ = ["positional_quality_runner"]

from .runner import positional_quality_runner
