"""
Runner for the average quality report.

Every FASTQ file in the input directory is parsed and the mean of its per-read average
quality is computed, either in this process or across a pool of worker processes.
One line per file is printed and the results are also saved as a tab separated table.
"""

import logging
import time

from concurrent.futures import ProcessPoolExecutor
from contextlib import nullcontext

from ..common import Options, find_fastq_files, open_output, validate_output_path
from ..fastq import EmptyInputError, read_fastq_file
from ..quality import collection_average, parallel_collection_average

__all__ = ["average_quality_runner"]

_LOG = logging.getLogger(__name__)


def average_quality_runner(options: Options, parallel: bool = False) -> dict[str, float]:
    """
    Computes the average quality of each FASTQ file in the input directory.

    Files without any records are reported in the log and left out of the results.
    A file holding an invalid record stops the run.

    :param options: The options for this run
    :param parallel: If set, reduce each file across options.threads worker processes
    :return: The average quality keyed by file name, in file name order
    """
    files = find_fastq_files(options.input_dir, options.extensions)
    _LOG.info(f"Found {len(files)} FASTQ file(s) in {options.input_dir}")

    validate_output_path(options.output_dir, is_file=False)
    output_file = options.output_dir / f"{options.output_prefix}.average_quality.tsv"
    validate_output_path(output_file, overwrite=options.overwrite_output)

    averages: dict[str, float] = {}
    start = time.time()

    pool = ProcessPoolExecutor(max_workers=options.threads) if parallel else nullcontext()
    with pool as executor:
        for file_num, path in enumerate(files, start=1):
            _LOG.info(f"Reading file {file_num} of {len(files)}")
            fastq_file = read_fastq_file(path, check_quality_range=options.check_quality_range)

            try:
                if parallel:
                    average = parallel_collection_average(
                        fastq_file.records,
                        partitions=options.partitions,
                        max_workers=options.threads,
                        offset=options.quality_offset,
                        executor=executor,
                    )
                else:
                    average = collection_average(fastq_file.records, offset=options.quality_offset)
            except EmptyInputError as exc:
                _LOG.warning(f"Skipping {fastq_file.name}: {exc}")
                continue

            averages[fastq_file.name] = average
            print(f"{fastq_file.name}\t{average}")

    _LOG.debug(f"Averaging took {time.time() - start:.2f} s")

    with open_output(output_file) as out:
        out.write("file\taverage_quality\n")
        for name, average in averages.items():
            out.write(f"{name}\t{average}\n")

    _LOG.info(f"Average quality table saved to {output_file}")
    return averages
