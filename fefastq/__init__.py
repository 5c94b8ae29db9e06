"""
fefastq: FASTQ record validation and quality score statistics.
"""

from .fastq import (
    FastqFile,
    Record,
    FefastqError,
    ParseError,
    InvalidRecordError,
    TruncatedInputError,
    IoFailureError,
    AggregationError,
    EmptyInputError,
    verify_integrity,
    parse,
    iter_records,
    read_fastq_file,
)
from .quality import (
    score,
    record_average,
    collection_average,
    positional_average,
    parallel_collection_average,
    parallel_positional_average,
)
