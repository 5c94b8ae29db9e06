"""
Command line interface for the per-position quality report
"""

import argparse

from ...positional_quality import positional_quality_runner
from .base import BaseCommand
from .options import build_options, input_group, output_group, run_group


class Command(BaseCommand):
    """
    Write the mean quality score at each read position for every FASTQ file in a directory.
    """

    name = "positional-quality"
    description = "Mean quality score at each read position, one table per FASTQ file."
    groups = [input_group, output_group, run_group]

    def add_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "--parallel",
            dest="parallel",
            action="store_true",
            default=False,
            help="Split each file's records across worker processes.",
        )

    def execute(self, arguments: argparse.Namespace):
        options = build_options(arguments)
        positional_quality_runner(options, parallel=arguments.parallel)
