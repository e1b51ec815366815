from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from svggloo.exporter import (
    Exporter,
    ExportError,
    ensure_available,
    export,
    export_with_cairosvg,
    export_with_svg2pdf,
    get_in_out_file,
)


@pytest.fixture
def calls(monkeypatch) -> list[list[str]]:
    recorded: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        assert kwargs["check"] is True
        recorded.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout="")

    monkeypatch.setattr("svggloo.exporter.shutil.which", lambda name: name)
    monkeypatch.setattr("svggloo.exporter.subprocess.run", fake_run)
    return recorded


def test_get_in_out_file() -> None:
    assert get_in_out_file(Path("brochure.svg")) == ("brochure.svg", "brochure.pdf")
    assert get_in_out_file("out/a.b.svg") == (str(Path("out/a.b.svg")), str(Path("out/a.b.pdf")))


def test_cairosvg_runs_once_per_file(calls: list[list[str]]) -> None:
    export_with_cairosvg(["a.svg", "b.svg"])
    assert calls == [
        ["cairosvg", "-f", "pdf", "-o", "a.pdf", "a.svg"],
        ["cairosvg", "-f", "pdf", "-o", "b.pdf", "b.svg"],
    ]


def test_svg2pdf_runs_once_per_file(calls: list[list[str]]) -> None:
    export_with_svg2pdf(["a.svg"])
    assert calls == [["svg2pdf", "a.svg", "a.pdf"]]


def test_export_returns_artifacts(calls: list[list[str]]) -> None:
    assert export(Exporter.CAIROSVG, ["x.svg"]) == [Path("x.pdf")]
    assert export("svg2pdf", ["y.svg"]) == [Path("y.pdf")]
    assert len(calls) == 2


def test_export_without_sources_does_nothing(monkeypatch) -> None:
    def fail(_name):
        raise AssertionError("program lookup should not happen")

    monkeypatch.setattr("svggloo.exporter.shutil.which", fail)
    assert export("inkscape", []) == []


def test_unknown_exporter() -> None:
    with pytest.raises(ExportError, match="Unknown exporter"):
        export("gimp", ["a.svg"])


def test_missing_program_aborts_before_running(monkeypatch) -> None:
    monkeypatch.setattr("svggloo.exporter.shutil.which", lambda _name: None)

    def fail(*_args, **_kwargs):
        raise AssertionError("nothing should run")

    monkeypatch.setattr("svggloo.exporter.subprocess.run", fail)
    with pytest.raises(ExportError, match="not found: `inkscape`"):
        export(Exporter.INKSCAPE, ["a.svg", "b.svg"])
    with pytest.raises(ExportError):
        ensure_available("svg2pdf")


def test_failing_command_raises_with_output(monkeypatch) -> None:
    monkeypatch.setattr("svggloo.exporter.shutil.which", lambda name: name)

    def fake_run(cmd, **_kwargs):
        raise subprocess.CalledProcessError(1, cmd, output="boom")

    monkeypatch.setattr("svggloo.exporter.subprocess.run", fake_run)
    with pytest.raises(ExportError) as exc:
        export_with_cairosvg(["a.svg"])
    assert "cairosvg -f pdf -o a.pdf a.svg" in str(exc.value)
    assert "boom" in str(exc.value)


def test_program_vanishing_after_lookup(monkeypatch) -> None:
    monkeypatch.setattr("svggloo.exporter.shutil.which", lambda name: name)

    def fake_run(cmd, **_kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr("svggloo.exporter.subprocess.run", fake_run)
    with pytest.raises(ExportError, match="not found"):
        export_with_svg2pdf(["a.svg"])
