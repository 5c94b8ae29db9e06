"""
Reads FASTQ data into validated records.

A FASTQ record is four lines: identifier, sequence, separator and quality. Lines are read one at a time
and assigned to a slot by their position in the current group of four. A record is only built once
its quality line has been read, and it is checked straight away. Parsing stops at the first record that
fails the check; nothing read before it is returned.
"""

__all__ = [
    "iter_records",
    "parse",
    "read_fastq_file",
]

import logging

from pathlib import Path
from typing import Iterable, Iterator

from .errors import InvalidRecordError, IoFailureError, TruncatedInputError
from .record import FastqFile, Record
from ..common import open_input
from ..common.constants_and_defaults import LINES_PER_RECORD, MAX_QUALITY_ORDINAL, MIN_QUALITY_ORDINAL

_LOG = logging.getLogger(__name__)

SLOTS = ("id", "sequence", "separator", "quality")


def _quality_in_range(quality: str) -> bool:
    return all(MIN_QUALITY_ORDINAL <= ord(symbol) <= MAX_QUALITY_ORDINAL for symbol in quality)


def _read_lines(source: Iterable[str]) -> Iterator[str]:
    """
    Yields the lines of the source without their line terminators.
    Errors raised by the source itself are re-raised as IoFailureError. A closed
    file handle raises ValueError when read, so that counts as a read failure too.
    """
    try:
        lines = iter(source)
    except ValueError as exc:
        raise IoFailureError(f"Failed to read input: {exc}") from exc

    while True:
        try:
            line = next(lines)
        except StopIteration:
            return
        except (OSError, EOFError, ValueError) as exc:
            raise IoFailureError(f"Failed to read input: {exc}") from exc
        yield line.rstrip("\r\n")


def iter_records(source: Iterable[str], check_quality_range: bool = False) -> Iterator[Record]:
    """
    Yields validated records from a line-oriented text source.

    :param source: An open text handle or any iterable of lines
    :param check_quality_range: If set, records with quality symbols outside
        the printable Phred+33 range (ordinal 33 to 126) are also rejected
    :return: A generator of records, in source order

    Raises
    ------
    InvalidRecordError
        A record's sequence and quality lengths differ (or, with check_quality_range,
        it holds an out of range quality symbol). ``line`` is the 1-based number of its quality line.
    TruncatedInputError
        The source ended in the middle of a record.
    IoFailureError
        The source raised an error while being read.
    """
    slots: dict[str, str] = {}
    line_number = 0

    for line_number, line in enumerate(_read_lines(source), start=1):
        slot = SLOTS[(line_number - 1) % LINES_PER_RECORD]
        slots[slot] = line

        if slot != "quality":
            continue

        record = Record(**slots)
        slots = {}

        if not record.verify_integrity():
            _LOG.error(f"Invalid record on line {line_number}: sequence length {len(record.sequence)}, "
                       f"quality length {len(record.quality)}")
            raise InvalidRecordError(line_number)

        if check_quality_range and not _quality_in_range(record.quality):
            _LOG.error(f"Invalid record on line {line_number}: quality symbol outside the Phred+33 range")
            raise InvalidRecordError(
                line_number, f"Invalid record on line {line_number}: quality symbol out of range")

        yield record

    if slots:
        _LOG.error(f"Input ended after line {line_number}, part way through a record")
        raise TruncatedInputError(line_number)


def parse(source: Iterable[str], check_quality_range: bool = False) -> list[Record]:
    """
    Parses a whole FASTQ source.

    Either every record in the source is returned, or an error is raised and
    no records are returned. An empty source gives an empty list.

    :param source: An open text handle or any iterable of lines
    :param check_quality_range: See iter_records
    :return: The records, in source order
    """
    return list(iter_records(source, check_quality_range=check_quality_range))


def read_fastq_file(path: str | Path, check_quality_range: bool = False) -> FastqFile:
    """
    Opens and parses a FASTQ file. Gzip compressed files are read transparently.

    :param path: Path to the FASTQ file
    :param check_quality_range: See iter_records
    :return: The parsed file
    """
    _LOG.info(f'reading {path}')
    try:
        with open_input(path) as fq_in:
            records = parse(fq_in, check_quality_range=check_quality_range)
    except OSError as exc:
        raise IoFailureError(f"Failed to read {path}: {exc}") from exc

    _LOG.debug(f'{len(records)} records read from {path}')
    return FastqFile(source_path=str(path), records=records)
