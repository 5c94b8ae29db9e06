"""
Command line interface for the average quality report
"""

import argparse

from ...average_quality import average_quality_runner
from .base import BaseCommand
from .options import build_options, input_group, output_group, run_group


class Command(BaseCommand):
    """
    Print the mean per-read quality score of every FASTQ file in a directory.
    """

    name = "average-quality"
    description = "Mean per-read quality score of each FASTQ file in a directory."
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
        average_quality_runner(options, parallel=arguments.parallel)
