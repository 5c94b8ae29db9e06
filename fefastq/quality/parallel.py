"""
Parallel versions of the collection and positional averages.

The records are split into contiguous partitions and each partition is reduced in its own worker
process by a :class:`concurrent.futures.ProcessPoolExecutor`. A worker only sees its own partition
and hands back a small partial result; the partial results are then combined in the calling process.
Partial averages are combined by weighting each with its record count, so the answer matches the
sequential reduction up to floating point summation order.
"""

__all__ = [
    "PartialAverage",
    "partition",
    "parallel_collection_average",
    "parallel_positional_average",
]

import logging
import math
import os

from concurrent.futures import Executor, ProcessPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .aggregate import positional_totals, record_average
from ..common.constants_and_defaults import PHRED_OFFSET
from ..fastq import EmptyInputError, Record

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartialAverage:
    """
    The reduction of one partition: the sum of its record averages and the number of records.
    """
    total: float
    count: int

    @property
    def mean(self) -> float:
        return self.total / self.count

    @staticmethod
    def combine(parts: Iterable["PartialAverage"]) -> float:
        """
        Merges partial results into the overall mean, weighting each part by its record count.

        :raises EmptyInputError: If the parts hold no records between them
        """
        total = 0.0
        count = 0
        for part in parts:
            total += part.total
            count += part.count
        if count == 0:
            raise EmptyInputError("Cannot average the quality of zero records")
        return total / count


def partition(records: Sequence[Record], partitions: int) -> list[Sequence[Record]]:
    """
    Splits records into contiguous, order preserving slices.

    Slice sizes differ by at most one. Fewer slices than asked for are returned
    when there are fewer records than partitions, so no slice is empty.

    :param records: The records to split
    :param partitions: The number of slices wanted, at least 1
    :return: The slices, in order
    """
    if partitions < 1:
        raise ValueError(f"Number of partitions must be at least 1 (got {partitions})")

    partitions = min(partitions, len(records))
    if partitions == 0:
        return []

    size, remainder = divmod(len(records), partitions)
    slices = []
    start = 0
    for i in range(partitions):
        stop = start + size + (1 if i < remainder else 0)
        slices.append(records[start:stop])
        start = stop
    return slices


def _average_worker(args: tuple[Sequence[Record], int]) -> PartialAverage:
    """Reduces one partition to the sum of its record averages."""
    records, offset = args
    total = 0.0
    for record in records:
        average = record_average(record, offset)
        if math.isnan(average):
            raise EmptyInputError(f"Record {record.id} has an empty quality string")
        total += average
    return PartialAverage(total=total, count=len(records))


def _positional_worker(args: tuple[Sequence[Record], int]) -> tuple[np.ndarray, np.ndarray]:
    """Reduces one partition to its per-position sums and counts."""
    records, offset = args
    return positional_totals(records, offset)


def _default_workers(max_workers: int | None) -> int:
    return max_workers or os.cpu_count() or 1


def _map_partitions(worker, slices: list, offset: int, max_workers: int, executor: Executor | None) -> list:
    jobs = [(part, offset) for part in slices]
    if executor is not None:
        return list(executor.map(worker, jobs))
    with ProcessPoolExecutor(max_workers=min(max_workers, len(jobs))) as pool:
        return list(pool.map(worker, jobs))


def parallel_collection_average(
        records: Sequence[Record],
        partitions: int | None = None,
        max_workers: int | None = None,
        offset: int = PHRED_OFFSET,
        executor: Executor | None = None) -> float:
    """
    The collection average, computed over partitions in worker processes.

    Gives the same result as collection_average within floating point
    tolerance, for any number of partitions.

    :param records: The records to average
    :param partitions: How many slices to split the records into. Defaults to the number of workers.
    :param max_workers: How many worker processes to start. Defaults to the number of CPUs.
    :param offset: The quality offset of the encoding
    :param executor: An already running executor to submit to, instead of starting a new pool
    :return: The mean of the record averages
    :raises EmptyInputError: If there are no records, or a record has an empty quality string
    """
    if len(records) == 0:
        raise EmptyInputError("Cannot average the quality of zero records")

    max_workers = _default_workers(max_workers)
    slices = partition(records, partitions if partitions is not None else max_workers)
    _LOG.debug(f"Averaging {len(records)} records over {len(slices)} partitions "
               f"(sizes {min(map(len, slices))}-{max(map(len, slices))})")

    parts = _map_partitions(_average_worker, slices, offset, max_workers, executor)
    return PartialAverage.combine(parts)


def parallel_positional_average(
        records: Sequence[Record],
        partitions: int | None = None,
        max_workers: int | None = None,
        offset: int = PHRED_OFFSET,
        executor: Executor | None = None) -> np.ndarray:
    """
    The positional average, computed over partitions in worker processes.

    Each worker returns the per-position sums and counts of its partition.
    Those are padded to the longest partition and added before dividing, so
    the result is in position order and matches positional_average.

    :param records: The records to average
    :param partitions: How many slices to split the records into. Defaults to the number of workers.
    :param max_workers: How many worker processes to start. Defaults to the number of CPUs.
    :param offset: The quality offset of the encoding
    :param executor: An already running executor to submit to, instead of starting a new pool
    :return: A float array of per-position means
    """
    if len(records) == 0:
        return np.zeros(0, dtype=np.float64)

    max_workers = _default_workers(max_workers)
    slices = partition(records, partitions if partitions is not None else max_workers)
    results = _map_partitions(_positional_worker, slices, offset, max_workers, executor)

    max_length = max(len(sums) for sums, _ in results)
    position_sum = np.zeros(max_length, dtype=np.float64)
    position_count = np.zeros(max_length, dtype=np.int64)
    for sums, counts in results:
        position_sum[:len(sums)] += sums
        position_count[:len(counts)] += counts

    return position_sum / position_count
