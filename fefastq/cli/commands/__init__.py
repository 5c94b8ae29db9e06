"""
fefastq subcommands. Each module defining a ``Command`` class is registered by the CLI.
"""

from .base import BaseCommand
