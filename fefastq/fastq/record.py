"""
Module with definitions of the FASTQ record and file classes.
"""

__all__ = [
    "Record",
    "FastqFile",
    "verify_integrity",
    "write_record",
    "write_records",
]

import logging

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, TextIO

from .errors import InvalidRecordError
from ..common import open_output

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Record:
    """
    One read from a FASTQ file.

    :param id: The identifier line, conventionally starting with '@'
    :param sequence: The sequence line
    :param separator: The separator line, conventionally '+' optionally followed by the id
    :param quality: The quality line, one encoded symbol per residue of the sequence
    """
    id: str
    sequence: str
    separator: str
    quality: str

    def __str__(self) -> str:
        return f"{self.id}\n{self.sequence}\n{self.separator}\n{self.quality}"

    def verify_integrity(self) -> bool:
        """
        Check that the sequence and quality have the same number of characters.

        Python strings count characters, not bytes, so this compares one quality
        symbol against one residue whatever the text encoding of the source was.
        """
        return len(self.sequence) == len(self.quality)

    def with_separator(self, separator: str) -> "Record":
        """
        Returns a copy of this record with a new separator line.

        :param separator: The replacement separator line
        :return: The new record
        :raises InvalidRecordError: If the copy fails the integrity check
        """
        new_record = replace(self, separator=separator)
        if not new_record.verify_integrity():
            raise InvalidRecordError(message=f"Record {self.id} is invalid and cannot be rewritten")
        return new_record


def verify_integrity(record: Record) -> bool:
    """True if the record's sequence and quality strings have equal length."""
    return record.verify_integrity()


@dataclass
class FastqFile:
    """
    The records parsed from one input.

    :param source_path: Where the records were read from
    :param records: The records, in file order
    """
    source_path: str
    records: list[Record] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def name(self) -> str:
        return Path(self.source_path).name


def write_record(record: Record, handle: TextIO):
    """
    Writes the four lines of a record to an open handle

    :param record: The record to write
    :param handle: A text handle open for writing
    """
    handle.write(f"{record}\n")


def write_records(records: Iterable[Record], path: str | Path, mode: str = "wt") -> int:
    """
    Writes records to a FASTQ file, creating parent directories as needed.

    :param records: The records to write
    :param path: The output path. Names ending in .gz are compressed.
    :param mode: 'wt' to overwrite, 'xt' to refuse existing files, 'at' to append.
    :return: The number of records written
    """
    count = 0
    with open_output(path, mode=mode) as fq_out:
        for record in records:
            write_record(record, fq_out)
            count += 1
    _LOG.debug(f"Wrote {count} records to {path}")
    return count
