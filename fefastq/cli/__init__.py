from .cli import Cli, main, run
