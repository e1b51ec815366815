"""
svggloo package

This package implements Svggloo, a CLI that merges CSV data into SVG templates.

Key responsibilities are split across modules:
- `config.py`: optional YAML configuration and settings precedence
- `data.py`: locate and read the CSV file paired with a template
- `template.py`: render one SVG document per CSV record
- `exporter.py`: convert rendered SVGs to PDF with an external program
- `cli.py`: CLI entrypoint and orchestration (config -> data -> render -> export)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
