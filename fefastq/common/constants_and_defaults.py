"""
Constants needed for analysis
"""

# Sanger / Illumina 1.8+ encoding. Illumina 1.3-1.7 used 64.
PHRED_OFFSET = 33
PHRED64_OFFSET = 64

# Printable range of a Phred+33 quality symbol, inclusive
MIN_QUALITY_ORDINAL = 33
MAX_QUALITY_ORDINAL = 126

# Lines per FASTQ record: id, sequence, separator, quality
LINES_PER_RECORD = 4

DEFAULT_SEPARATOR = "+"
FASTQ_EXTENSIONS = [".fastq", ".fq", ".fastq.gz", ".fq.gz"]
