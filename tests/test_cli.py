from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner
from pypdf import PdfReader

from pdf_assembler.cli import cli

from conftest import build_pdf_bytes


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _page_count(path: Path) -> int:
    return len(PdfReader(str(path)).pages)


def test_info(runner: CliRunner, sample_pdf: Path) -> None:
    result = runner.invoke(cli, ["info", str(sample_pdf)])

    assert result.exit_code == 0
    assert "Number of Pages" in result.output
    assert "Sample" in result.output


def test_remove_writes_output(runner: CliRunner, sample_pdf: Path, tmp_path: Path) -> None:
    output = tmp_path / "trimmed.pdf"

    result = runner.invoke(cli, ["remove", str(sample_pdf), "--pages", "1,3-4", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert _page_count(output) == 2
    assert _page_count(sample_pdf) == 5
    assert "Removed 3 page(s)" in result.output


def test_remove_in_place(runner: CliRunner, sample_pdf: Path) -> None:
    result = runner.invoke(cli, ["remove", str(sample_pdf), "-p", "5"])

    assert result.exit_code == 0, result.output
    assert _page_count(sample_pdf) == 4


def test_remove_invalid_selection(runner: CliRunner, sample_pdf: Path) -> None:
    result = runner.invoke(cli, ["remove", str(sample_pdf), "-p", "one"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_insert_at_page(runner: CliRunner, pdf_factory, tmp_path: Path) -> None:
    base = pdf_factory("base.pdf", pages=3)
    extra = tmp_path / "extra.pdf"
    extra.write_bytes(build_pdf_bytes(2, width=100))
    output = tmp_path / "out.pdf"

    result = runner.invoke(
        cli, ["insert", str(base), str(extra), "--position", "at", "-n", "2", "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    widths = [int(page.mediabox.width) for page in PdfReader(str(output)).pages]
    assert widths == [200, 100, 101, 201, 202]


def test_insert_at_without_page_fails(runner: CliRunner, sample_pdf: Path) -> None:
    result = runner.invoke(cli, ["insert", str(sample_pdf), str(sample_pdf), "--position", "at"])

    assert result.exit_code == 1
    assert _page_count(sample_pdf) == 5


def test_merge(runner: CliRunner, pdf_factory, tmp_path: Path) -> None:
    first = pdf_factory("a.pdf", pages=2, title="First")
    second = pdf_factory("b.pdf", pages=1)
    output = tmp_path / "merged.pdf"

    result = runner.invoke(cli, ["merge", str(first), str(second), "-o", str(output)])

    assert result.exit_code == 0, result.output
    reader = PdfReader(str(output))
    assert len(reader.pages) == 3
    assert reader.metadata.get("/Title") == "First"


def test_split_by_bytes_with_zip(runner: CliRunner, tmp_path: Path) -> None:
    source = tmp_path / "heavy.pdf"
    source.write_bytes(build_pdf_bytes(4, content_lines=200))
    output_dir = tmp_path / "parts"

    result = runner.invoke(
        cli, ["split", str(source), "--max-bytes", "1", "-o", str(output_dir), "--zip"]
    )

    assert result.exit_code == 0, result.output
    chunks = sorted(output_dir.glob("chunk_*.pdf"))
    assert len(chunks) == 4
    assert all(_page_count(path) == 1 for path in chunks)
    assert (output_dir / "heavy_split.zip").exists()
    assert "split into 4 chunk(s)" in result.output


def test_split_uses_environment_default(
    runner: CliRunner, sample_pdf: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PDF_ASSEMBLER_MAX_SIZE_MB", "5")
    output_dir = tmp_path / "parts"

    result = runner.invoke(cli, ["split", str(sample_pdf), "-o", str(output_dir)])

    assert result.exit_code == 0, result.output
    assert [path.name for path in output_dir.glob("*.pdf")] == ["chunk_1.pdf"]


def test_split_empty_pdf(runner: CliRunner, empty_pdf: Path, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["split", str(empty_pdf), "-m", "1", "-o", str(tmp_path / "parts")])

    assert result.exit_code == 0
    assert "no pages" in result.output
    assert not (tmp_path / "parts").exists()


def test_split_rejects_non_positive_budget(runner: CliRunner, sample_pdf: Path, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["split", str(sample_pdf), "-m", "0", "-o", str(tmp_path / "parts")])

    assert result.exit_code == 1
    assert "greater than 0" in result.output


def test_invalid_pdf_reports_error(runner: CliRunner, tmp_path: Path) -> None:
    broken = tmp_path / "broken.pdf"
    broken.write_text("not a pdf")

    result = runner.invoke(cli, ["info", str(broken)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_size(runner: CliRunner, sample_pdf: Path) -> None:
    result = runner.invoke(cli, ["size", str(sample_pdf)])

    assert result.exit_code == 0, result.output
    assert "(5 pages)" in result.output


def test_split_empty_pdf_rejects_non_positive_budget(runner: CliRunner, empty_pdf: Path, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["split", str(empty_pdf), "--max-bytes", "0", "-o", str(tmp_path / "parts")])

    assert result.exit_code == 1
    assert "no pages" not in result.output
    assert "> 0 bytes" in result.output


def test_split_twice_replaces_previous_chunks(runner: CliRunner, tmp_path: Path) -> None:
    source = tmp_path / "heavy.pdf"
    source.write_bytes(build_pdf_bytes(6, content_lines=200))
    output_dir = tmp_path / "parts"
    output_dir.mkdir()
    (output_dir / "notes.pdf").write_bytes(b"keep me")

    first = runner.invoke(cli, ["split", str(source), "--max-bytes", "1", "-o", str(output_dir)])
    second = runner.invoke(cli, ["split", str(source), "--max-bytes", "10000000", "-o", str(output_dir)])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert sorted(path.name for path in output_dir.glob("*.pdf")) == ["chunk_1.pdf", "notes.pdf"]
    assert _page_count(output_dir / "chunk_1.pdf") == 6
