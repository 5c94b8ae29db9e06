"""
Common utilities shared across fefastq components
"""

from .io import *
from .logging import *
from .options import *
from .constants_and_defaults import *
