from __future__ import annotations

import csv
import subprocess
from pathlib import Path

import pytest

from westpac_extractor import pipeline
from westpac_extractor.config import RunConfig
from westpac_extractor.discover import discover_statements
from westpac_extractor.errors import ExtractionError
from westpac_extractor import extract
from westpac_extractor.extract import extract_lines, pdf_to_text
from westpac_extractor.lines import LineSource
from westpac_extractor.parse import DEFAULT_MAX_CONTINUATION_LINES


EMPTY_TEXT = """\
FOR THE PERIOD FROM 01 JAN 2023 TO 31 JAN 2023
OPENING BALANCE   TOTAL CREDITS   TOTAL DEBITS   CLOSING BALANCE
+ $10.00   $0.00   $0.00   + $10.00
"""


def _make_source(tmp_path: Path, files) -> Path:
    src = tmp_path / "src"
    for rel in files:
        p = src / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"%PDF-1.4")
    return src


def _fake_extract(texts):
    def _extract(pdf_path, config):
        key = f"{pdf_path.parent.name}/{pdf_path.name}"
        return LineSource.from_text(texts[key])
    return _extract


def test_discover_sorts_by_account_and_number(tmp_path):
    src = _make_source(tmp_path, ["b/2.pdf", "a/10.pdf", "a/9.pdf", "a/notes.pdf", "a/1.txt"])
    (src / "loose.pdf").write_bytes(b"")

    found = [(s.account, s.number) for s in discover_statements(src)]
    assert found == [("a", 9), ("a", 10), ("b", 2)]


def test_main_writes_quoted_csv(tmp_path, monkeypatch, legacy_text):
    src = _make_source(tmp_path, ["acc1/1.pdf", "acc1/2.pdf"])
    out = tmp_path / "out"
    out.mkdir()
    monkeypatch.setattr(
        pipeline, "extract_lines", _fake_extract({"acc1/1.pdf": legacy_text, "acc1/2.pdf": EMPTY_TEXT})
    )

    code = pipeline.main(["--source", str(src), "--output", str(out)])
    assert code == 0

    # el statement sin transacciones no genera archivo
    assert sorted(p.name for p in out.iterdir()) == ["acc1_1.csv"]

    raw = (out / "acc1_1.csv").read_text(encoding="utf-8")
    assert raw.startswith('"acc1","1","2022-12-29","250.00","SALARY ACME PTY LTD"\n')

    with (out / "acc1_1.csv").open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows[1] == ["acc1", "1", "2023-01-02", "-80.00", "EFTPOS PURCHASE\nWOOLWORTHS 1234\nSYDNEY AU"]
    assert rows[2][3] == "-100.00"


def test_invalid_statement_aborts_run(tmp_path, monkeypatch, modern_text, capsys):
    src = _make_source(tmp_path, ["a/1.pdf", "b/1.pdf"])
    out = tmp_path / "out"
    out.mkdir()
    broken = modern_text.replace("+ $2,500.00", "+ $2,400.00")
    monkeypatch.setattr(
        pipeline, "extract_lines", _fake_extract({"a/1.pdf": modern_text, "b/1.pdf": broken})
    )

    code = pipeline.main(["--source", str(src), "--output", str(out)])
    assert code == 1
    # fail-fast: ni siquiera el statement válido se escribe
    assert list(out.iterdir()) == []
    assert "CREDITS: esperado=2400.00, actual=2500.00" in capsys.readouterr().out


def test_bad_config_exit_code(tmp_path):
    assert pipeline.main(["--source", str(tmp_path / "nope"), "--output", str(tmp_path)]) == 2


def test_config_validation(tmp_path):
    cfg = RunConfig(source=tmp_path, output=tmp_path)
    assert cfg.pdf2text == "pdftotext"
    assert cfg.max_continuation_lines == DEFAULT_MAX_CONTINUATION_LINES
    assert pipeline.build_parser().parse_args(["--source", "s", "--output", "o"]).max_continuation_lines == cfg.max_continuation_lines
    with pytest.raises(ValueError):
        RunConfig(source=tmp_path, output=tmp_path, max_continuation_lines=0)


def test_pdf_to_text_uses_layout(monkeypatch, tmp_path):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout=b"  01 JAN  X  1.00  2.00\n", stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    text = pdf_to_text(tmp_path / "1.pdf", tool="/opt/bin/pdftotext")
    assert text == "  01 JAN  X  1.00  2.00\n"
    assert calls == [["/opt/bin/pdftotext", "-layout", str(tmp_path / "1.pdf"), "-"]]


def test_pdf_to_text_failures(monkeypatch, tmp_path):
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, **kw: subprocess.CompletedProcess(cmd, 1, stdout=b"", stderr=b"Syntax Error"),
    )
    with pytest.raises(ExtractionError, match="Syntax Error"):
        pdf_to_text(tmp_path / "1.pdf")

    def missing(cmd, **kw):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", missing)
    with pytest.raises(ExtractionError):
        pdf_to_text(tmp_path / "1.pdf", tool="no-such-tool")


def test_extraction_error_exit_code(tmp_path, monkeypatch):
    src = _make_source(tmp_path, ["a/1.pdf"])
    out = tmp_path / "out"
    out.mkdir()

    def boom(pdf_path, config):
        raise ExtractionError("Falló la conversión")

    monkeypatch.setattr(pipeline, "extract_lines", boom)
    assert pipeline.main(["--source", str(src), "--output", str(out)]) == 1


class _FakePage:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def extract_text(self, **kwargs):
        self.calls.append(kwargs)
        return self.text


class _FakePdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_extract_lines_with_pdfplumber_backend(monkeypatch, tmp_path):
    pages = [_FakePage("Opening Balance   + $1.00"), _FakePage(None), _FakePage("  01 JAN  X  1.00  2.00")]
    opened = []

    def fake_open(path):
        opened.append(path)
        return _FakePdf(pages)

    monkeypatch.setattr(extract.pdfplumber, "open", fake_open)

    def no_subprocess(*args, **kwargs):
        raise AssertionError("no debe llamar a pdftotext")

    monkeypatch.setattr(subprocess, "run", no_subprocess)

    cfg = RunConfig(source=tmp_path, output=tmp_path, extractor="pdfplumber")
    src = extract_lines(tmp_path / "1.pdf", cfg)

    assert list(src) == ["Opening Balance   + $1.00", "", "  01 JAN  X  1.00  2.00"]
    assert opened == [str(tmp_path / "1.pdf")]
    assert all(p.calls == [{"layout": True}] for p in pages)


def test_pdfplumber_failure_is_extraction_error(monkeypatch, tmp_path):
    def broken_open(path):
        raise OSError("not a PDF")

    monkeypatch.setattr(extract.pdfplumber, "open", broken_open)
    with pytest.raises(ExtractionError, match="not a PDF"):
        extract.pdf_to_text_pdfplumber(tmp_path / "1.pdf")


def test_extract_lines_defaults_to_pdftotext(monkeypatch, tmp_path):
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, **kw: subprocess.CompletedProcess(cmd, 0, stdout=b"a\nb\n", stderr=b""),
    )
    cfg = RunConfig(source=tmp_path, output=tmp_path)
    assert list(extract_lines(tmp_path / "1.pdf", cfg)) == ["a", "b"]
