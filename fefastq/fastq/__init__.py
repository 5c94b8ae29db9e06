"""
The FASTQ record model and parser
"""

from .errors import *
from .record import *
from .parser import *
