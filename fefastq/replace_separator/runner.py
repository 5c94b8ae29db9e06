"""
Runner that rewrites the separator line of every record.
"""

import logging

from pathlib import Path

from ..common import Options, find_fastq_files, plan_output_paths, validate_output_path
from ..fastq import read_fastq_file, write_records

__all__ = ["replace_separator_runner"]

_LOG = logging.getLogger(__name__)


def replace_separator_runner(options: Options) -> dict[str, Path]:
    """
    Writes a copy of each FASTQ file with every separator line set to options.separator.

    The copies are named '<file stem>_replaced.fastq' in the output directory. Every
    input is parsed before the first copy is written, so an invalid record in any
    file leaves the output directory untouched.

    :param options: The options for this run
    :return: The copy written for each input, keyed by input file name
    """
    files = find_fastq_files(options.input_dir, options.extensions)
    validate_output_path(options.output_dir, is_file=False)
    outputs = plan_output_paths(files, options.output_dir, options.extensions, "_replaced.fastq",
                                overwrite=options.overwrite_output)

    replaced = {}
    for path in files:
        fastq_file = read_fastq_file(path, check_quality_range=options.check_quality_range)
        replaced[path] = [record.with_separator(options.separator) for record in fastq_file.records]

    written: dict[str, Path] = {}
    for path, records in replaced.items():
        count = write_records(records, outputs[path])
        _LOG.info(f"Wrote {count} records from {path.name} to {outputs[path]}")
        written[path.name] = outputs[path]

    return written
