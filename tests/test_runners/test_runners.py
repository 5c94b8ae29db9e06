"""
Tests for the average-quality, positional-quality and replace-separator runners
"""

import gzip

from pathlib import Path

import pytest

from fefastq.average_quality import average_quality_runner
from fefastq.common import Options
from fefastq.fastq import InvalidRecordError, read_fastq_file
from fefastq.positional_quality import positional_quality_runner
from fefastq.replace_separator import replace_separator_runner

SAMPLE_A = (
    "@a1\nACGT\n+a1\nIIII\n"
    "@a2\nAC\n+\n++\n"
)
SAMPLE_B = "@b1\nACG\n+\n!!!\n"


@pytest.fixture
def fastq_dir(tmp_path: Path) -> Path:
    in_dir = tmp_path / "in"
    in_dir.mkdir()
    (in_dir / "a.fastq").write_text(SAMPLE_A, encoding="utf-8")
    (in_dir / "b.fq").write_text(SAMPLE_B, encoding="utf-8")
    (in_dir / "readme.txt").write_text("not a fastq", encoding="utf-8")
    return in_dir


def make_options(in_dir: Path, out_dir: Path, **kwargs) -> Options:
    return Options(input_dir=in_dir, output_dir=out_dir, output_prefix="run", **kwargs)


@pytest.mark.parametrize("parallel", [False, True])
def test_average_quality_runner(fastq_dir: Path, tmp_path: Path, capsys, parallel):
    out_dir = tmp_path / "out"
    averages = average_quality_runner(make_options(fastq_dir, out_dir, threads=2), parallel=parallel)

    assert averages == pytest.approx({"a.fastq": 25.0, "b.fq": 0.0})
    printed = capsys.readouterr().out.splitlines()
    assert "a.fastq\t25.0" in printed
    assert "b.fq\t0.0" in printed

    table = (out_dir / "run.average_quality.tsv").read_text().splitlines()
    assert table[0] == "file\taverage_quality"
    assert table[1:] == ["a.fastq\t25.0", "b.fq\t0.0"]


def test_average_quality_runner_skips_files_without_records(fastq_dir: Path, tmp_path: Path):
    (fastq_dir / "c.fastq").write_text("", encoding="utf-8")
    averages = average_quality_runner(make_options(fastq_dir, tmp_path / "out"))
    assert "c.fastq" not in averages
    assert len(averages) == 2


def test_average_quality_runner_stops_on_invalid_record(fastq_dir: Path, tmp_path: Path):
    (fastq_dir / "bad.fastq").write_text("@x\nACGT\n+\nII\n", encoding="utf-8")
    with pytest.raises(InvalidRecordError):
        average_quality_runner(make_options(fastq_dir, tmp_path / "out"))


def test_average_quality_runner_refuses_existing_output(fastq_dir: Path, tmp_path: Path):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    (out_dir / "run.average_quality.tsv").write_text("old", encoding="utf-8")
    with pytest.raises(SystemExit) as ei:
        average_quality_runner(make_options(fastq_dir, out_dir))
    assert ei.value.code == 3

    average_quality_runner(make_options(fastq_dir, out_dir, overwrite_output=True))
    assert (out_dir / "run.average_quality.tsv").read_text() != "old"


@pytest.mark.parametrize("parallel", [False, True])
def test_positional_quality_runner(fastq_dir: Path, tmp_path: Path, parallel):
    out_dir = tmp_path / "out"
    written = positional_quality_runner(make_options(fastq_dir, out_dir, threads=2), parallel=parallel)

    assert written == {
        "a.fastq": out_dir / "a.positional_quality.tsv",
        "b.fq": out_dir / "b.positional_quality.tsv",
    }
    rows = written["a.fastq"].read_text().splitlines()
    assert rows == [
        "position\taverage_quality",
        "0\t25.0",
        "1\t25.0",
        "2\t40.0",
        "3\t40.0",
    ]


def test_replace_separator_runner(fastq_dir: Path, tmp_path: Path):
    out_dir = tmp_path / "out"
    written = replace_separator_runner(make_options(fastq_dir, out_dir))

    replaced = read_fastq_file(written["a.fastq"])
    original = read_fastq_file(fastq_dir / "a.fastq")
    assert written["a.fastq"] == out_dir / "a_replaced.fastq"
    assert [r.separator for r in replaced.records] == ["+", "+"]
    assert [r.quality for r in replaced.records] == [r.quality for r in original.records]


def test_replace_separator_runner_custom_separator(fastq_dir: Path, tmp_path: Path):
    written = replace_separator_runner(make_options(fastq_dir, tmp_path / "out", separator="+x"))
    assert read_fastq_file(written["b.fq"]).records[0].separator == "+x"


@pytest.fixture
def same_stem_dir(tmp_path: Path) -> Path:
    in_dir = tmp_path / "same"
    in_dir.mkdir()
    (in_dir / "sample.fastq").write_text(SAMPLE_A, encoding="utf-8")
    with gzip.open(in_dir / "sample.fastq.gz", "wt", encoding="utf-8") as handle:
        handle.write(SAMPLE_B)
    return in_dir


@pytest.mark.parametrize("overwrite", [False, True])
def test_positional_quality_runner_refuses_shared_output_name(same_stem_dir: Path, tmp_path: Path, overwrite):
    out_dir = tmp_path / "out"
    with pytest.raises(SystemExit) as ei:
        positional_quality_runner(make_options(same_stem_dir, out_dir, overwrite_output=overwrite))
    assert ei.value.code == 3
    assert list(out_dir.iterdir()) == []


def test_replace_separator_runner_refuses_shared_output_name(same_stem_dir: Path, tmp_path: Path):
    out_dir = tmp_path / "out"
    with pytest.raises(SystemExit) as ei:
        replace_separator_runner(make_options(same_stem_dir, out_dir, overwrite_output=True))
    assert ei.value.code == 3
    assert list(out_dir.iterdir()) == []


def test_replace_separator_runner_writes_nothing_when_a_file_is_invalid(tmp_path: Path):
    in_dir = tmp_path / "in"
    in_dir.mkdir()
    (in_dir / "a.fastq").write_text(SAMPLE_A, encoding="utf-8")
    (in_dir / "b.fastq").write_text("@x\nACGT\n+\nII\n", encoding="utf-8")
    out_dir = tmp_path / "out"

    with pytest.raises(InvalidRecordError):
        replace_separator_runner(make_options(in_dir, out_dir))
    assert list(out_dir.iterdir()) == []


@pytest.mark.parametrize("parallel", [False, True])
def test_positional_quality_runner_writes_nothing_when_a_file_is_invalid(tmp_path: Path, parallel):
    in_dir = tmp_path / "in"
    in_dir.mkdir()
    (in_dir / "a.fastq").write_text(SAMPLE_A, encoding="utf-8")
    (in_dir / "b.fastq").write_text("@x\nACGT\n+\nII\n", encoding="utf-8")
    out_dir = tmp_path / "out"

    with pytest.raises(InvalidRecordError):
        positional_quality_runner(make_options(in_dir, out_dir, threads=2), parallel=parallel)
    assert list(out_dir.iterdir()) == []
