import gzip
from pathlib import Path

import pytest
from Bio import bgzf

from fefastq.common.io import (
    find_fastq_files,
    is_compressed,
    open_input,
    open_output,
    plan_output_paths,
    strip_extension,
    validate_input_path,
    validate_output_path,
)


def test_is_compressed_plain_and_gz(tmp_path: Path):
    plain = tmp_path / "reads.fastq"
    plain.write_text("@r1\n", encoding="utf-8")
    gz = tmp_path / "reads.fastq.gz"
    with bgzf.BgzfWriter(gz, "wt") as f:
        f.write("@r1\n")

    assert is_compressed(plain) is False
    assert is_compressed(gz) is True


def test_open_input_reads_plain_gzip_and_bgzf(tmp_path: Path):
    plain = tmp_path / "a.fastq"
    plain.write_text("@r1\nA\n+\nI\n", encoding="utf-8")
    with open_input(plain) as fh:
        assert fh.read() == "@r1\nA\n+\nI\n"

    gz = tmp_path / "b.fastq.gz"
    with gzip.open(gz, "wt", encoding="utf-8") as fh:
        fh.write("@r2\nC\n+\n!\n")
    with open_input(gz) as fh:
        assert list(fh) == ["@r2\n", "C\n", "+\n", "!\n"]

    bgz = tmp_path / "c.fastq.bgz"
    with bgzf.BgzfWriter(bgz, "wt") as fh:
        fh.write("@r3\n")
    with open_input(bgz) as fh:
        assert fh.read() == "@r3\n"


def test_open_output_creates_dirs_and_writes_plain(tmp_path: Path):
    out = tmp_path / "nested/dir/out.tsv"
    with open_output(out) as fh:
        fh.write("position\taverage_quality\n")
    assert out.read_text(encoding="utf-8") == "position\taverage_quality\n"


def test_open_output_compresses_gz(tmp_path: Path):
    out_gz = tmp_path / "out.fastq.gz"
    with open_output(out_gz) as fh:
        fh.write("@r1\nA\n+\nI\n")
    with gzip.open(out_gz, "rt", encoding="utf-8") as fh:
        assert fh.read() == "@r1\nA\n+\nI\n"


def test_open_output_xt_mode_existing_gz_exits(tmp_path: Path):
    p = tmp_path / "exists.fastq.gz"
    with open_output(p) as fh:
        fh.write("x")
    with pytest.raises(SystemExit) as ei:
        with open_output(p, mode="xt"):
            pass
    assert ei.value.code == 3


def test_validate_input_path_errors(tmp_path: Path):
    with pytest.raises(SystemExit) as ei:
        validate_input_path(tmp_path / "missing.fastq")
    assert ei.value.code == 5

    empty = tmp_path / "empty.yml"
    empty.touch()
    with pytest.raises(SystemExit) as ei:
        validate_input_path(empty)
    assert ei.value.code == 7


def test_validate_output_path_file_and_dir(tmp_path: Path):
    f = tmp_path / "out.tsv"
    f.write_text("x", encoding="utf-8")
    with pytest.raises(SystemExit) as ei:
        validate_output_path(f, is_file=True, overwrite=False)
    assert ei.value.code == 3

    validate_output_path(f, is_file=True, overwrite=True)

    d2 = tmp_path / "new/dir"
    validate_output_path(d2, is_file=False)
    assert d2.is_dir()


def test_find_fastq_files_filters_and_sorts(tmp_path: Path):
    for name in ["b.fastq", "a.fq.gz", "notes.txt", "c.fq"]:
        (tmp_path / name).write_text("", encoding="utf-8")
    (tmp_path / "sub.fastq").mkdir()

    found = find_fastq_files(tmp_path, [".fastq", ".fq", ".fq.gz"])
    assert [p.name for p in found] == ["a.fq.gz", "b.fastq", "c.fq"]


def test_find_fastq_files_none_found(tmp_path: Path):
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")
    with pytest.raises(FileNotFoundError, match="No fastq files found"):
        find_fastq_files(tmp_path, [".fastq"])


def test_find_fastq_files_missing_dir(tmp_path: Path):
    with pytest.raises(NotADirectoryError):
        find_fastq_files(tmp_path / "missing", [".fastq"])


@pytest.mark.parametrize("name,expected", [
    ("sample.fastq", "sample"),
    ("sample.R1.fastq.gz", "sample.R1"),
    ("sample.fq", "sample"),
    ("sample.txt", "sample"),
])
def test_strip_extension(name, expected):
    assert strip_extension(Path("/data") / name, [".fastq", ".fq", ".fastq.gz", ".fq.gz"]) == expected


def test_plan_output_paths(tmp_path: Path):
    files = [tmp_path / "a.fastq", tmp_path / "b.fq.gz"]
    outputs = plan_output_paths(files, tmp_path / "out", [".fastq", ".fq.gz"], ".tsv")
    assert outputs == {files[0]: tmp_path / "out" / "a.tsv", files[1]: tmp_path / "out" / "b.tsv"}


def test_plan_output_paths_shared_name_exits(tmp_path: Path):
    files = [tmp_path / "sample.fastq", tmp_path / "sample.fastq.gz"]
    with pytest.raises(SystemExit) as ei:
        plan_output_paths(files, tmp_path, [".fastq", ".fastq.gz"], ".tsv", overwrite=True)
    assert ei.value.code == 3
