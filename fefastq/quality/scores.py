"""
Conversion of quality symbols to numeric Phred scores
"""

__all__ = [
    "score",
    "convert_quality_string",
]

from ..common.constants_and_defaults import PHRED_OFFSET


def score(symbol: str, offset: int = PHRED_OFFSET) -> int:
    """
    Converts one quality symbol to its score. With the default offset, '!' is 0 and 'I' is 40.
    Symbols outside the usual range are converted without complaint.

    :param symbol: A single character
    :param offset: The quality offset of the encoding
    :return: The numeric quality score
    """
    return ord(symbol) - offset


def convert_quality_string(qual_str: str, offset: int = PHRED_OFFSET) -> list[int]:
    """
    Converts a plain quality string to a list of numerical equivalents

    :param qual_str: The string to convert
    :param offset: the quality offset for conversion for this fastq
    :return list: a list of numeric quality scores
    """
    return [ord(symbol) - offset for symbol in qual_str]
