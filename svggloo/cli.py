"""
cli.py

Responsibility: CLI entrypoint for Svggloo.

High-level flow:
1) Parse arguments, load the optional YAML config -> `Settings`
2) Read the CSV paired with the template
3) Render one SVG per record into the output directory
4) (Optional) Export every rendered SVG to PDF with an external program

This module should orchestrate behavior but keep concerns isolated:
- Configuration: `config.py`
- CSV data: `data.py`
- Rendering: `template.py`
- External converters: `exporter.py`
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from svggloo import __version__
from svggloo.config import ConfigError, Settings, find_config, load_config, resolve_settings
from svggloo.data import DataError
from svggloo.exporter import Exporter, ExportError
from svggloo.log import setup_logging
from svggloo.template import RenderError, render

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def _settings_from_args(args: argparse.Namespace) -> Settings:
    config_path = Path(args.config) if args.config else find_config(args.template)
    file_values = load_config(config_path) if config_path is not None else {}
    if config_path is not None:
        logger.debug("Using config file %s", config_path)

    cli_values = {
        "fields": args.field,
        "output_dir": args.output_dir,
        "separator": args.separator,
        "export": True if args.export else None,
        "exporter": args.exporter,
        "strict": True if args.strict else None,
    }
    base_dir = config_path.parent if config_path is not None else None
    return resolve_settings(cli_values, file_values, base_dir)


def render_cmd(args: argparse.Namespace) -> int:
    template = Path(args.template)
    if not template.is_file():
        raise CLIError(f"Template file does not exist: {template}")

    settings = _settings_from_args(args)
    logger.debug("Settings: %s", settings)

    result = render(
        template,
        settings.output_dir,
        settings.exporter if settings.export else None,
        settings.fields or None,
        settings.separator,
        strict=settings.strict,
    )

    for path in result.rendered_files:
        print(path)
    for path in result.exported_files:
        print(path)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="svggloo", description="Merge CSV data into an SVG template")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (repeatable)")

    p.add_argument(
        "--field",
        action="append",
        default=None,
        metavar="NAME",
        help="CSV column used to name the output files (repeatable, order is kept)",
    )
    p.add_argument("template", help="Path to the SVG template (its data is the .csv file with the same name)")
    p.add_argument("output_dir", nargs="?", default=None, help="Directory to render into (default: output)")
    p.add_argument("-s", "--separator", default=None, help="Separator between field values in names (default: -)")

    p.add_argument("-e", "--export", action="store_true", help="Export the rendered templates as PDF")
    p.add_argument(
        "--exporter",
        choices=Exporter.names(),
        default=None,
        help="Program used with --export (default: inkscape)",
    )
    p.add_argument("--strict", action="store_true", help="Fail when a placeholder has no value in a record")
    p.add_argument("--config", default=None, help="YAML config file (default: svggloo.yml next to the template)")

    p.set_defaults(func=render_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        return int(args.func(args))
    except (CLIError, ConfigError, DataError, RenderError, ExportError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
