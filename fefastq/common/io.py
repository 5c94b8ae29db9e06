"""
Functions related to system I/O
"""

__all__ = [
    "is_compressed",
    "open_input",
    "open_output",
    "validate_input_path",
    "validate_output_path",
    "strip_extension",
    "find_fastq_files",
    "plan_output_paths",
]

import contextlib
import gzip
import logging
import os
import sys

from pathlib import Path
from typing import Callable, Iterator, TextIO
from Bio import bgzf

_LOG = logging.getLogger(__name__)


def is_compressed(file: str | Path) -> bool:
    """
    Determine if file is compressed.

    At the moment, function is only able to correctly identify files which were
    gzip (or BGZF) compressed

    :param file: Path to a file.

    :return: True if file is compressed, False otherwise.

    Note
    ----
    To determine if the file is gzipped, the function reads the first two bytes of the input file. If these
    bytes are ``1f 8b``, the file is considered to be gzipped as it is highly
    unlikely that an ordinary text files start with those two bytes.
    """
    with open(file, "rb") as buffer:
        magic_number = buffer.read(2)
    if magic_number == b"\x1f\x8b":
        return True
    return False


@contextlib.contextmanager
def open_input(path: str | Path) -> Iterator[TextIO]:
    """
    Opens a file for reading.

    Besides regular text-based files, the function also handles gzipped files.
    BGZF is a series of gzip members, so the plain gzip reader handles both.

    :param path: The path to the input file.
    :return: The handle to the text file with input data.
    """
    open_: Callable[..., TextIO]
    if is_compressed(path):
        open_ = gzip.open
    else:
        open_ = open
    handle = open_(path, "rt", encoding="utf-8")
    try:
        yield handle
    finally:
        handle.close()


@contextlib.contextmanager
def open_output(path: str | Path, mode: str = 'wt') -> Iterator[TextIO]:
    """
    Opens a file for writing.

    If the directory containing the file does not exist, it will be created
    automatically. Names ending in .gz or .bgz are written BGZF compressed.

    :param path: The path to the output file.
    :param mode: The mode with which to open the file.
    :return: The handle to the text file where data should be written to.

    Raises
    ------
    3 = FileExistsError
        Raised if the output file already exists.
    11 = PermissionError
        Raised if the calling process does not have adequate access rights to
        write to the output file.
    """
    output_path = Path(path)
    output_dir = output_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)
    open_: Callable[..., TextIO]
    if {'.gz', '.bgz'} & set(output_path.suffixes):
        # bgzf has no "xt" mode
        if mode == "xt":
            if output_path.exists():
                _LOG.error(f"file '{path}' already exists")
                sys.exit(3)
            else:
                mode = "wt"
        open_ = bgzf.open
    else:
        open_ = open
    handle = open_(output_path, mode=mode)

    try:
        yield handle
    finally:
        handle.close()


def validate_input_path(path: str | Path):
    """
    Determine if the input path is valid.

    The input path is valid if it is a file and is not empty. If the path is
    not valid one of the exceptions described later is raised.

    :param path: Path to validate

    Raises
    ------
    5 = FileNotFoundError
        Raised if the input file does not exist or is not a file.
    7 = RuntimeError
        Raised if the input file is empty.
    9 = PermissionError
        Raised if the calling process has no read access to the file.
    """
    path = Path(path)

    if not path.is_file():
        _LOG.error(f"Path '{path}' does not exist or not a file")
        sys.exit(5)
    stats = path.stat()
    if stats.st_size == 0:
        _LOG.error(f"File '{path}' is empty")
        sys.exit(7)
    if not os.access(path, os.R_OK):
        _LOG.error(f"cannot read from '{path}': access denied")
        sys.exit(9)


def validate_output_path(path: str | Path, is_file: bool = True, overwrite: bool = False):
    """
    Determine if the output path is valid.

    If the output file is a directory, it is valid if it exists and the calling
    process has write access to it. If the output path is a file, it is
    valid if the file does not yet exist.

    :param path: The path to validate.
    :param is_file: (optional) If set, validate the path assuming that it points to a file (default).
    :param overwrite: (optional) If set, existing output will be overwritten

    Raises
    ------
    3 = FileExistsError
        Raised if path is a file and already exists.
    11 = PermissionError
        Raised if the calling process does not have adequate access rights to.
    """
    path = Path(path)
    if is_file:
        if path.is_file() and not overwrite:
            _LOG.error(f"file '{path}' already exists")
            sys.exit(3)
    else:
        if path.is_dir():
            if not os.access(path, os.W_OK):
                _LOG.error(f"cannot write to '{path}', access denied")
                sys.exit(11)
        else:
            path.mkdir(parents=True, exist_ok=True)


def strip_extension(path: str | Path, extensions: list[str]) -> str:
    """
    The file name without the longest matching extension, e.g. 'sample' for 'sample.fastq.gz'.
    Falls back to Path.stem if nothing matches.
    """
    name = Path(path).name
    matches = [ext for ext in extensions if name.endswith(ext) and len(ext) < len(name)]
    if not matches:
        return Path(path).stem
    return name[:-len(max(matches, key=len))]


def find_fastq_files(directory: str | Path, extensions: list[str]) -> list[Path]:
    """
    List the FASTQ files directly inside a directory.

    Only regular files whose name ends with one of the given extensions are
    returned. Subdirectories are not searched.

    :param directory: The directory to search.
    :param extensions: File name endings to accept, e.g. [".fastq", ".fq.gz"].
    :return: The matching paths, sorted by name.

    Raises
    ------
    NotADirectoryError
        If the directory does not exist.
    FileNotFoundError
        If no file in the directory matches.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Input directory '{directory}' does not exist or is not a directory")

    found = sorted(
        path for path in directory.iterdir()
        if path.is_file() and any(path.name.endswith(ext) for ext in extensions)
    )
    if not found:
        raise FileNotFoundError(f"No fastq files found in '{directory}'")

    _LOG.debug(f"Found {len(found)} fastq file(s) in {directory}")
    return found


def plan_output_paths(
        files: list[Path],
        directory: str | Path,
        extensions: list[str],
        suffix: str,
        overwrite: bool = False) -> dict[Path, Path]:
    """
    Name one output file per input, before anything is written.

    Each output is '<directory>/<input name without extension><suffix>' and is
    checked with validate_output_path.

    :param files: The input files.
    :param directory: The output directory.
    :param extensions: Extensions stripped from the input names.
    :param suffix: Appended to each stripped name, e.g. '_replaced.fastq'.
    :param overwrite: If set, existing output files are allowed.
    :return: The output path for each input path, in input order.

    Raises
    ------
    3 = FileExistsError
        Raised if two inputs would share an output file, or an output exists.
    """
    outputs: dict[Path, Path] = {}
    claimed: dict[Path, Path] = {}
    for path in files:
        output = Path(directory) / f"{strip_extension(path, extensions)}{suffix}"
        if output in claimed:
            _LOG.error(f"'{claimed[output].name}' and '{Path(path).name}' would both be written to '{output}'")
            sys.exit(3)
        claimed[output] = Path(path)
        validate_output_path(output, overwrite=overwrite)
        outputs[Path(path)] = output
    return outputs
