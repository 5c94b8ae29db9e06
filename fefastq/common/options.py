"""
The class holding the configuration for a run. Every runner receives an Options object built by the caller,
so no component reads process-wide state such as sys.argv.

Values come from three places, in increasing order of precedence: the defaults in the definitions table,
an optional yaml config file (read with pyyaml), and the values given on the command line. Every value
is checked against the definitions table before the run starts.
"""

__all__ = ["Options"]

import logging
import sys

from pathlib import Path
from types import SimpleNamespace
from typing import Any

import yaml

try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader

from .constants_and_defaults import DEFAULT_SEPARATOR, FASTQ_EXTENSIONS, PHRED_OFFSET
from .io import validate_input_path

_LOG = logging.getLogger(__name__)

# (type, default, criteria1 (low/'is_dir'), criteria2 (high/None))
OPTION_DEFINITIONS = {
    'input_dir': (Path, None, 'is_dir', None),
    'output_dir': (Path, None, None, None),
    'output_prefix': (str, 'fefastq', None, None),
    'extensions': (list, FASTQ_EXTENSIONS, None, None),
    'threads': (int, 1, 1, 1000),
    'partitions': (int, None, 1, 100000),
    'quality_offset': (int, PHRED_OFFSET, 33, 64),
    'check_quality_range': (bool, False, None, None),
    'overwrite_output': (bool, False, None, None),
    'separator': (str, DEFAULT_SEPARATOR, None, None),
}


class Options(SimpleNamespace):
    """
    class representing the options

    :param input_dir: Directory holding the FASTQ files to process
    :param output_dir: Directory to write result files to
    :param output_prefix: Prefix for the run-level result files
    :param extensions: File name endings that mark a file as FASTQ
    :param threads: Number of worker processes for the parallel reductions
    :param partitions: Number of partitions to split each record collection into.
        Defaults to the number of threads.
    :param quality_offset: The quality offset (33 for Phred+33)
    :param check_quality_range: If true, records with quality symbols outside the
        printable Phred+33 range are rejected while parsing
    :param overwrite_output: If true, previous output will be overwritten, if filenames match
    :param separator: Replacement separator line used by replace-separator
    """

    def __init__(self,
                 input_dir: Path | None = None,
                 output_dir: Path | None = None,
                 output_prefix: str = "fefastq",
                 extensions: list[str] | None = None,
                 threads: int = 1,
                 partitions: int | None = None,
                 quality_offset: int = PHRED_OFFSET,
                 check_quality_range: bool = False,
                 overwrite_output: bool = False,
                 separator: str = DEFAULT_SEPARATOR,
                 **kwargs: Any
                 ):
        super().__init__(**kwargs)
        self.input_dir: Path | None = Path(input_dir) if input_dir is not None else None
        self.output_dir: Path = Path(output_dir) if output_dir is not None else Path.cwd()
        self.output_prefix: str = output_prefix
        self.extensions: list[str] = list(extensions) if extensions else list(FASTQ_EXTENSIONS)
        self.threads: int = threads
        self.partitions: int = partitions if partitions else threads
        self.quality_offset: int = quality_offset
        self.check_quality_range: bool = check_quality_range
        self.overwrite_output: bool = overwrite_output
        self.separator: str = separator

    @staticmethod
    def from_cli(input_dir: str | Path | None,
                 output_dir: str | Path | None,
                 output_prefix: str | None,
                 config_file: str | Path | None = None,
                 **overrides: Any):
        """
        Build the options for a run.

        Config file values replace the defaults, and any override that is not None replaces
        the config file value. Invalid values are logged and end the run.

        :param input_dir: Directory of FASTQ files, from the command line
        :param output_dir: Output directory, from the command line
        :param output_prefix: Prefix for output files, from the command line
        :param config_file: Optional yaml file with any of the keys of OPTION_DEFINITIONS
        :param overrides: Any other command line values, keyed like OPTION_DEFINITIONS
        :return: The validated Options
        """
        values = {key: default for key, (_, default, _, _) in OPTION_DEFINITIONS.items()}

        if config_file:
            _LOG.info(f'Using configuration file {config_file}')
            validate_input_path(config_file)
            values.update(Options.read_yaml(config_file, OPTION_DEFINITIONS))

        cli_values = dict(overrides)
        cli_values.update(input_dir=input_dir, output_dir=output_dir, output_prefix=output_prefix)
        for key, value in cli_values.items():
            if value is None:
                continue
            if key not in OPTION_DEFINITIONS:
                _LOG.warning(f"Ignoring unknown option `{key}`")
                continue
            values[key] = value

        if values['input_dir'] is None:
            _LOG.error("An input directory is required")
            sys.exit(1)

        for key, (type_of_var, _, criteria1, criteria2) in OPTION_DEFINITIONS.items():
            if type_of_var == Path and values[key] is not None:
                values[key] = Path(values[key])
            Options.check_and_log_error(key, values[key], criteria1, criteria2)

        options = Options(**values)
        options.log_configuration()
        return options

    @staticmethod
    def check_and_log_error(keyname, value_to_check, crit1, crit2):
        if value_to_check is None:
            pass
        elif crit1 == "is_dir":
            if not Path(value_to_check).is_dir():
                _LOG.error(f"`{keyname}` must be an existing directory (input: {value_to_check}).")
                sys.exit(1)
        elif isinstance(crit1, int) and isinstance(crit2, int):
            if not (crit1 <= value_to_check <= crit2):
                _LOG.error(f'`{keyname}` must be between {crit1} and {crit2} (input: {value_to_check}).')
                sys.exit(1)

    @staticmethod
    def read_yaml(config_yaml: str | Path, definitions: dict) -> dict:
        """
        Reads the yaml config and type checks each known key.
        Values of "." or None mean "use the default" and are skipped.
        """
        with open(config_yaml, 'r') as config_in:
            config = yaml.load(config_in, Loader=Loader) or {}

        if not isinstance(config, dict):
            _LOG.error(f"Config file {config_yaml} must be a mapping of option names to values")
            sys.exit(1)

        found = {}
        for key, value in config.items():
            if key not in definitions:
                _LOG.warning(f"Unknown key `{key}` in config, skipping.")
                continue
            type_of_var = definitions[key][0]
            if value is None or value == ".":
                _LOG.debug(f"No value entered for `{key}`, skipping.")
                continue

            if type_of_var in (Path, str):
                if not isinstance(value, str):
                    _LOG.error(f"Incorrect type for value entered for {key}: {type_of_var} (found: {value})")
                    sys.exit(1)
            elif type_of_var == bool or type_of_var == list:
                if not isinstance(value, type_of_var):
                    _LOG.error(f"Incorrect type for value entered for {key}: {type_of_var} (found: {value})")
                    sys.exit(1)
            else:
                try:
                    mismatch = isinstance(value, bool) or value != type_of_var(value)
                except (TypeError, ValueError):
                    mismatch = True
                if mismatch:
                    _LOG.error(f"Incorrect type for value entered for {key}: {type_of_var} (found: {value})")
                    sys.exit(1)

            found[key] = value
        return found

    def log_configuration(self):
        """
        Logs the configuration parameters of the run. Useful for reproducibility.
        """
        _LOG.info(f'Run Configuration...')
        _LOG.info(f'Input directory: {self.input_dir}')
        _LOG.info(f'Outputting files to {self.output_dir}')
        _LOG.info(f'Accepted file extensions: {", ".join(self.extensions)}')
        _LOG.info(f'Quality offset: {self.quality_offset}')
        _LOG.info(f'Worker processes: {self.threads}, partitions per file: {self.partitions}')
        if self.check_quality_range:
            _LOG.info(f'Rejecting quality symbols outside the printable Phred+33 range')
        if self.overwrite_output:
            _LOG.info(f'Overwriting any existing output files')
