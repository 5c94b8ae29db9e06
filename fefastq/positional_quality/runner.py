"""
Runner for the per-position quality report.
"""

import logging

from concurrent.futures import ProcessPoolExecutor
from contextlib import nullcontext
from pathlib import Path

import numpy as np

from ..common import Options, find_fastq_files, open_output, plan_output_paths, validate_output_path
from ..fastq import read_fastq_file
from ..quality import parallel_positional_average, positional_average

__all__ = ["positional_quality_runner"]

_LOG = logging.getLogger(__name__)


def write_positional_table(averages: np.ndarray, output_file: Path):
    """
    Writes one 'position<TAB>average' row per read position, positions counted from 0.
    """
    with open_output(output_file) as out:
        out.write("position\taverage_quality\n")
        for position, average in enumerate(averages):
            out.write(f"{position}\t{average}\n")


def positional_quality_runner(options: Options, parallel: bool = False) -> dict[str, Path]:
    """
    Writes the mean quality at each read position for every FASTQ file in the input directory.

    Each file gets its own table, named '<file stem>.positional_quality.tsv' in the output
    directory. Reads of different lengths are allowed. Every input is parsed before the
    first table is written.

    :param options: The options for this run
    :param parallel: If set, reduce each file across options.threads worker processes
    :return: The table written for each input, keyed by input file name
    """
    files = find_fastq_files(options.input_dir, options.extensions)
    _LOG.info(f"Found {len(files)} FASTQ file(s) in {options.input_dir}")
    validate_output_path(options.output_dir, is_file=False)
    outputs = plan_output_paths(files, options.output_dir, options.extensions, ".positional_quality.tsv",
                                overwrite=options.overwrite_output)

    fastq_files = [read_fastq_file(path, check_quality_range=options.check_quality_range) for path in files]

    written: dict[str, Path] = {}

    pool = ProcessPoolExecutor(max_workers=options.threads) if parallel else nullcontext()
    with pool as executor:
        for path, fastq_file in zip(files, fastq_files):
            if parallel:
                averages = parallel_positional_average(
                    fastq_file.records,
                    partitions=options.partitions,
                    max_workers=options.threads,
                    offset=options.quality_offset,
                    executor=executor,
                )
            else:
                averages = positional_average(fastq_file.records, offset=options.quality_offset)

            if not len(averages):
                _LOG.warning(f"{fastq_file.name} has no quality data, writing an empty table")
            else:
                _LOG.info(f"{fastq_file.name}: {len(averages)} positions, "
                          f"lowest mean {averages.min():.2f} at position {int(averages.argmin())}")

            output_file = outputs[path]
            write_positional_table(averages, output_file)
            written[fastq_file.name] = output_file

    _LOG.info(f"Wrote {len(written)} positional quality table(s) to {options.output_dir}")
    return written
