"""
Quality score conversion and aggregation, sequential and parallel
"""

from .scores import *
from .aggregate import *
from .parallel import *
