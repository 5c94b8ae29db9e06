"""
Exceptions raised while reading FASTQ data and computing quality statistics.
"""

__all__ = [
    "FefastqError",
    "ParseError",
    "InvalidRecordError",
    "TruncatedInputError",
    "IoFailureError",
    "AggregationError",
    "EmptyInputError",
]


class FefastqError(Exception):
    """Base class for all errors raised by fefastq."""


class ParseError(FefastqError):
    """A FASTQ source could not be turned into a list of records."""


class InvalidRecordError(ParseError):
    """
    A record failed the integrity check.

    :param line: 1-based number of the line that closed the offending record
        (its quality line), or None when the record was not read from a source.
    """

    def __init__(self, line: int | None = None, message: str | None = None):
        self.line = line
        if message is None:
            message = "Invalid record" if line is None else f"Invalid record on line {line}"
        super().__init__(message)

    def __reduce__(self):
        return self.__class__, (self.line, str(self))


class TruncatedInputError(ParseError):
    """
    The source ended part way through a four line record.

    :param line: The number of lines read before the source ended.
    """

    def __init__(self, line: int):
        self.line = line
        super().__init__(f"Input ended after line {line}, in the middle of a record")

    def __reduce__(self):
        return self.__class__, (self.line,)


class IoFailureError(ParseError):
    """Reading from the underlying stream failed."""


class AggregationError(FefastqError):
    """A quality statistic could not be computed."""


class EmptyInputError(AggregationError):
    """An average was requested over zero records or over an empty quality string."""
