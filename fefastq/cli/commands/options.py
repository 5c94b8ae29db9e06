"""
Definitions of shared subcommand options.
"""

__all__ = ["input_group", "output_group", "run_group", "build_options"]

import argparse

from .base import Group
from ...common import Options

input_group = Group("input")
input_group.add_argument(
    "-i",
    "--input-dir",
    dest="input_dir",
    type=str,
    required=True,
    help="Directory holding the FASTQ files to process (plain or gzipped).",
)
input_group.add_argument(
    "-c",
    "--config",
    dest="config",
    type=str,
    default=None,
    help="Optional yaml file with run settings. Command line values take precedence.",
)
input_group.add_argument(
    "--check-quality-range",
    dest="check_quality_range",
    action="store_true",
    default=None,
    help="Reject records with quality symbols outside the printable Phred+33 range.",
)

output_group = Group("output")
output_group.add_argument(
    "-o",
    "--output-dir",
    dest="output_dir",
    type=str,
    default=None,
    help="Path to the output directory. Will create if not present (default is working directory).",
)
output_group.add_argument(
    "-p",
    "--prefix",
    dest="prefix",
    type=str,
    default=None,
    help="Prefix to use to name run-level output files.",
)
output_group.add_argument(
    "--overwrite",
    dest="overwrite",
    action="store_true",
    default=None,
    help="Overwrite existing output files.",
)

run_group = Group("run")
run_group.add_argument(
    "-t",
    "--threads",
    dest="threads",
    type=int,
    default=None,
    help="Number of worker processes for the parallel reduction [1].",
)
run_group.add_argument(
    "--partitions",
    dest="partitions",
    type=int,
    default=None,
    help="Number of partitions to split each file's records into [threads].",
)
run_group.add_argument(
    "-q",
    "--quality-offset",
    dest="quality_offset",
    type=int,
    default=None,
    help="Quality score offset [33].",
)


def build_options(arguments: argparse.Namespace, **extra) -> Options:
    """
    Turns parsed command line arguments into the Options for a run.
    """
    return Options.from_cli(
        input_dir=arguments.input_dir,
        output_dir=arguments.output_dir,
        output_prefix=arguments.prefix,
        config_file=arguments.config,
        check_quality_range=arguments.check_quality_range,
        overwrite_output=arguments.overwrite,
        threads=getattr(arguments, "threads", None),
        partitions=getattr(arguments, "partitions", None),
        quality_offset=getattr(arguments, "quality_offset", None),
        **extra,
    )
