"""
template.py

Responsibility: Merge CSV records into an SVG template, writing one SVG per record.

Rules:
- The data file is the template path with a `.csv` suffix.
- Records are rendered in file order with Jinja2; values are XML-escaped.
- Output names come from the selected fields (or the first column), lowercased,
  with spaces turned into underscores. Repeated names get a `-2`, `-3`, ... suffix
  so every record gets its own file.
- Exporting is delegated to `exporter.py` once every SVG has been written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from jinja2 import Environment, StrictUndefined, TemplateError, Undefined

from svggloo.data import Record, check_fields, data_path_for, load_table
from svggloo.exporter import Exporter, ensure_available, export

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "-"


class RenderError(RuntimeError):
    pass


@dataclass(frozen=True)
class RenderResult:
    rendered_files: list[Path] = field(default_factory=list)
    exported_files: list[Path] = field(default_factory=list)


def _environment(strict: bool) -> Environment:
    return Environment(
        autoescape=True,
        undefined=StrictUndefined if strict else Undefined,
        keep_trailing_newline=True,
    )


def render_record(template: str, record: Mapping[str, Any], *, strict: bool = False, name: str = "template") -> str:
    """
    Render a template string with a single record.

    >>> render_record("This is {{city}}.", {"city": "Austin"})
    'This is Austin.'
    """
    env = _environment(strict)
    try:
        return env.from_string(template).render(dict(record))
    except TemplateError as e:
        raise RenderError(f"Failed rendering template {name}: {e}") from e


def render_record_from_file(svg_template: str | Path, record: Mapping[str, Any], *, strict: bool = False) -> str:
    path = Path(svg_template)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RenderError(f"Cannot read template: {path}") from e
    return render_record(source, record, strict=strict, name=path.name)


def _clean(value: str) -> str:
    return value.replace(" ", "_").replace("/", "_").replace("\\", "_")


def item_name(record: Record, fields: Sequence[str] | None, separator: str = DEFAULT_SEPARATOR) -> str:
    """
    Build the base name of the output file for `record`.

    Without `fields`, the value of the first column is used.
    """
    if fields:
        try:
            parts = [_clean(record[f]) for f in fields]
        except KeyError as e:
            raise RenderError(f"Field {e.args[0]!r} is not a column of the data file") from e
        name = separator.join(parts)
    else:
        name = _clean(next(iter(record.values()), ""))

    name = name.strip().lower()
    if not name or name in (".", ".."):
        raise RenderError(f"Record produces an empty output name: {dict(record)}")
    return name


def _unique_name(name: str, used: set[str]) -> str:
    """
    Return `name`, or `name-2`, `name-3`, ... when it was already given to an earlier record.
    """
    candidate = name
    n = 1
    while candidate in used:
        n += 1
        candidate = f"{name}-{n}"
    if candidate != name:
        logger.warning("Output name %s is produced by more than one record; using %s", name, candidate)
    used.add(candidate)
    return candidate


def render(
    svg_template: str | Path,
    output_dir: str | Path,
    exporter: Exporter | str | None = None,
    fields: Sequence[str] | None = None,
    separator: str | None = None,
    *,
    strict: bool = False,
) -> RenderResult:
    """
    Render an SVG template once per record of its CSV file.

    The `fields` select which CSV columns name the output files; their values are
    joined with `separator` (default `-`) in the given order. When `exporter` is
    set, every written SVG is then converted to PDF next to it.
    """
    tpl_path = Path(svg_template)
    out_dir = Path(output_dir)
    sep = DEFAULT_SEPARATOR if separator is None else separator

    if not tpl_path.is_file():
        raise RenderError(f"Template file not found: {tpl_path}")

    try:
        source = tpl_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RenderError(f"Cannot read template: {tpl_path}") from e

    try:
        template = _environment(strict).from_string(source)
    except TemplateError as e:
        raise RenderError(f"Invalid template {tpl_path.name}: {e}") from e

    table = load_table(data_path_for(tpl_path))
    if fields:
        check_fields(table.columns, fields)

    if exporter is not None:
        ensure_available(exporter)

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RenderError(f"Cannot create output directory: {out_dir}") from e

    files: list[Path] = []
    used: set[str] = set()
    for record in table.records:
        name = _unique_name(item_name(record, fields, sep), used)
        try:
            rendered = template.render(record)
        except TemplateError as e:
            raise RenderError(f"Failed rendering template {tpl_path.name} for {name}: {e}") from e

        output_file = out_dir / f"{name}.svg"
        try:
            output_file.write_text(rendered, encoding="utf-8", newline="\n")
        except OSError as e:
            raise RenderError(f"Cannot write {output_file}") from e
        files.append(output_file)
        logger.info("Wrote %s", output_file)

    exported: list[Path] = []
    if exporter is not None:
        exported = export(exporter, files)

    logger.info("Rendered %d file(s), exported %d file(s)", len(files), len(exported))
    return RenderResult(rendered_files=files, exported_files=exported)
