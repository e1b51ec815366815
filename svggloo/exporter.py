"""
exporter.py

Responsibility: Convert rendered SVG files to PDF by running an external program.

Rules:
- The program is looked up on PATH before anything runs; a missing program aborts
  the whole export with an `ExportError`.
- Exit statuses are always checked; a failing command raises `ExportError` with its output.
- PDF files are written next to their SVG source, with the same stem.

This module intentionally does NOT know about templates, CSV data, or CLI parsing.
"""

from __future__ import annotations

import enum
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    pass


class Exporter(str, enum.Enum):
    INKSCAPE = "inkscape"
    CAIROSVG = "cairosvg"
    SVG2PDF = "svg2pdf"

    @classmethod
    def names(cls) -> list[str]:
        return [e.value for e in cls]


def get_in_out_file(src: str | Path) -> tuple[str, str]:
    """
    Return the input SVG path and the matching output PDF path, as strings.
    """
    path = Path(src)
    return str(path), str(path.with_suffix(".pdf"))


def _require_program(program: str) -> str:
    found = shutil.which(program)
    if found is None:
        raise ExportError(f"Export program not found: `{program}` (is it installed and on PATH?)")
    return found


def _run(cmd: list[str]) -> None:
    """
    Run an export command, raising an ExportError on failure.
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)
    except FileNotFoundError as e:
        raise ExportError(f"Export program not found: `{cmd[0]}`") from e
    except subprocess.CalledProcessError as e:
        raise ExportError(f"Command failed: {' '.join(cmd)}\n\n{e.stdout}") from e


def export_with_inkscape(srcs: Sequence[str | Path]) -> None:
    """
    Export all `srcs` in a single Inkscape batch call.
    """
    program = _require_program("inkscape")
    cmd = [
        program,
        "--export-area-drawing",
        "--batch-process",
        "--export-type=pdf",
        *(str(s) for s in srcs),
    ]
    _run(cmd)


def export_with_cairosvg(srcs: Sequence[str | Path]) -> None:
    program = _require_program("cairosvg")
    for src in srcs:
        in_svg, out_pdf = get_in_out_file(src)
        _run([program, "-f", "pdf", "-o", out_pdf, in_svg])


def export_with_svg2pdf(srcs: Sequence[str | Path]) -> None:
    program = _require_program("svg2pdf")
    for src in srcs:
        in_svg, out_pdf = get_in_out_file(src)
        _run([program, in_svg, out_pdf])


def _kind(exporter: Exporter | str) -> Exporter:
    try:
        return Exporter(exporter)
    except ValueError as e:
        raise ExportError(f"Unknown exporter: {exporter!r} (expected one of {', '.join(Exporter.names())})") from e


def ensure_available(exporter: Exporter | str) -> str:
    """
    Return the full path of the program behind `exporter`, or raise an ExportError.
    """
    return _require_program(_kind(exporter).value)


_EXPORTERS = {
    Exporter.INKSCAPE: export_with_inkscape,
    Exporter.CAIROSVG: export_with_cairosvg,
    Exporter.SVG2PDF: export_with_svg2pdf,
}


def export(exporter: Exporter | str, srcs: Sequence[str | Path]) -> list[Path]:
    """
    Export `srcs` with the given exporter and return the PDF paths.

    Nothing runs (and no program is looked up) when `srcs` is empty.
    """
    kind = _kind(exporter)
    if not srcs:
        return []

    logger.info("Exporting %d file(s) with %s", len(srcs), kind.value)
    _EXPORTERS[kind](srcs)
    return [Path(get_in_out_file(s)[1]) for s in srcs]
