"""
Tests for building run options from defaults, a yaml config and command line values
"""

from pathlib import Path

import pytest
import yaml

from fefastq.common import FASTQ_EXTENSIONS, Options


def write_config(path: Path, values: dict) -> Path:
    path.write_text(yaml.safe_dump(values, sort_keys=False), encoding="utf-8")
    return path


def test_defaults(tmp_path: Path):
    options = Options.from_cli(tmp_path, None, None)
    assert options.input_dir == tmp_path
    assert options.output_dir == Path.cwd()
    assert options.output_prefix == "fefastq"
    assert options.extensions == FASTQ_EXTENSIONS
    assert options.threads == 1
    assert options.partitions == 1
    assert options.quality_offset == 33
    assert options.check_quality_range is False
    assert options.separator == "+"


def test_partitions_default_to_threads(tmp_path: Path):
    options = Options.from_cli(tmp_path, tmp_path, "run", threads=4)
    assert options.partitions == 4


def test_config_values_are_used(tmp_path: Path):
    cfg = write_config(tmp_path / "conf.yml", {
        "threads": 3,
        "partitions": 12,
        "extensions": [".fq"],
        "check_quality_range": True,
        "output_prefix": "from_config",
    })
    options = Options.from_cli(tmp_path, tmp_path / "out", None, config_file=cfg)
    assert options.threads == 3
    assert options.partitions == 12
    assert options.extensions == [".fq"]
    assert options.check_quality_range is True
    assert options.output_prefix == "from_config"
    assert options.output_dir == tmp_path / "out"


def test_command_line_beats_config(tmp_path: Path):
    cfg = write_config(tmp_path / "conf.yml", {"threads": 3, "output_prefix": "from_config"})
    options = Options.from_cli(tmp_path, None, "from_cli", config_file=cfg, threads=5)
    assert options.threads == 5
    assert options.output_prefix == "from_cli"


def test_dot_and_empty_values_keep_defaults(tmp_path: Path):
    cfg = write_config(tmp_path / "conf.yml", {"threads": ".", "separator": None})
    options = Options.from_cli(tmp_path, None, None, config_file=cfg)
    assert options.threads == 1
    assert options.separator == "+"


@pytest.mark.parametrize("values", [
    {"threads": 0},
    {"quality_offset": 90},
    {"threads": "four"},
    {"check_quality_range": "yes"},
    {"extensions": ".fastq"},
])
def test_bad_config_values_exit(tmp_path: Path, values):
    cfg = write_config(tmp_path / "conf.yml", values)
    with pytest.raises(SystemExit) as ei:
        Options.from_cli(tmp_path, None, None, config_file=cfg)
    assert ei.value.code == 1


def test_missing_input_dir_exits(tmp_path: Path):
    with pytest.raises(SystemExit):
        Options.from_cli(tmp_path / "missing", None, None)
    with pytest.raises(SystemExit):
        Options.from_cli(None, None, None)


def test_config_can_supply_input_dir(tmp_path: Path):
    cfg = write_config(tmp_path / "conf.yml", {"input_dir": str(tmp_path)})
    options = Options.from_cli(None, None, None, config_file=cfg)
    assert options.input_dir == tmp_path
