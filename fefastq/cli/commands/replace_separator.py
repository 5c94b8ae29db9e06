import argparse

from ...replace_separator import replace_separator_runner
from .base import BaseCommand
from .options import build_options, input_group, output_group


class Command(BaseCommand):
    """
    Copy each FASTQ file in a directory with every separator line replaced.
    """

    name = "replace-separator"
    description = "Write '<stem>_replaced.fastq' copies with a uniform separator line ('+' by default)."
    groups = [input_group, output_group]

    def add_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "-s",
            "--separator",
            dest="separator",
            type=str,
            default=None,
            help="Replacement separator line ['+'].",
        )

    def execute(self, arguments: argparse.Namespace):
        options = build_options(arguments, separator=arguments.separator)
        replace_separator_runner(options)
