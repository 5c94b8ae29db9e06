"""
Average quality scores of a single record, of a collection of records, and at each read position.

All of these work on records that have already been validated by the parser. Positional averages
handle reads of different lengths: a read only contributes to the positions it covers, so the number
of reads averaged at each position can fall off towards the end of the read.
"""

__all__ = [
    "record_average",
    "collection_average",
    "positional_totals",
    "positional_average",
]

import logging
import math

from typing import Sequence

import numpy as np

from .scores import convert_quality_string
from ..common.constants_and_defaults import PHRED_OFFSET
from ..fastq import EmptyInputError, Record

_LOG = logging.getLogger(__name__)


def record_average(record: Record, offset: int = PHRED_OFFSET) -> float:
    """
    The mean quality score of one record.

    A record with an empty quality string has no defined average; ``math.nan``
    is returned for it rather than raising or returning 0.0. Callers that need
    an error instead should use collection_average.

    :param record: The record to average
    :param offset: The quality offset of the encoding
    :return: The mean score, or nan for an empty quality string
    """
    if not record.quality:
        return math.nan
    scores = convert_quality_string(record.quality, offset)
    return sum(scores) / len(scores)


def collection_average(records: Sequence[Record], offset: int = PHRED_OFFSET) -> float:
    """
    The mean of the per-record average quality over a collection.

    Every record counts once, whatever its length.

    :param records: The records to average
    :param offset: The quality offset of the encoding
    :return: The mean of the record averages
    :raises EmptyInputError: If there are no records, or a record has an empty quality string
    """
    if len(records) == 0:
        raise EmptyInputError("Cannot average the quality of zero records")

    total = 0.0
    for record in records:
        average = record_average(record, offset)
        if math.isnan(average):
            raise EmptyInputError(f"Record {record.id} has an empty quality string")
        total += average

    _LOG.debug(f"Averaged quality over {len(records)} records")
    return total / len(records)


def positional_totals(records: Sequence[Record], offset: int = PHRED_OFFSET) -> tuple[np.ndarray, np.ndarray]:
    """
    The running sums and counts behind positional_average.

    Element i of the sums is the total score at zero-based position i over every
    record whose quality string is longer than i, and element i of the counts is
    the number of those records. Both arrays are as long as the longest quality string.

    :param records: The records to tally
    :param offset: The quality offset of the encoding
    :return: A tuple of (position_sum, position_count)
    """
    max_length = max((len(record.quality) for record in records), default=0)
    position_sum = np.zeros(max_length, dtype=np.float64)
    position_count = np.zeros(max_length, dtype=np.int64)

    for record in records:
        length = len(record.quality)
        if not length:
            continue
        scores = np.fromiter(map(ord, record.quality), dtype=np.float64, count=length) - offset
        position_sum[:length] += scores
        position_count[:length] += 1

    return position_sum, position_count


def positional_average(records: Sequence[Record], offset: int = PHRED_OFFSET) -> np.ndarray:
    """
    The mean quality score at each read position.

    Position i is averaged only over the records that reach it, so this is not the
    same as padding short reads with zeros. The result is in position order and as
    long as the longest quality string; no records gives an empty array.

    :param records: The records to average
    :param offset: The quality offset of the encoding
    :return: A float array of per-position means
    """
    position_sum, position_count = positional_totals(records, offset)
    return position_sum / position_count
