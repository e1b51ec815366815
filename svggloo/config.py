"""
config.py

Responsibility: Load the optional YAML configuration and resolve the final settings.

Precedence is CLI values > configuration file > built-in defaults. A value of
`None` on the CLI side means "not given".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from svggloo.exporter import Exporter

CONFIG_NAMES = ("svggloo.yml", "svggloo.yaml")

KNOWN_KEYS = frozenset({"fields", "output_dir", "separator", "exporter", "export", "strict"})


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    """Resolved options used to render a template."""

    fields: list[str] = field(default_factory=list)
    output_dir: Path = Path("output")
    separator: str = "-"
    export: bool = False
    exporter: Exporter = Exporter.INKSCAPE
    strict: bool = False


def find_config(template: str | Path, cwd: str | Path | None = None) -> Path | None:
    """
    Return the first configuration file found next to the template, then in `cwd`.
    """
    dirs = [Path(template).parent, Path(cwd) if cwd is not None else Path.cwd()]
    for d in dirs:
        for name in CONFIG_NAMES:
            candidate = d / name
            if candidate.is_file():
                return candidate
    return None


def load_config(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Config file does not exist: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {p}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")

    unknown = sorted(str(k) for k in data if k not in KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {p}: {', '.join(unknown)}")
    return data


def _as_fields(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError("`fields` must be a list of column names.")
    return list(value)


def _as_exporter(value: Any) -> Exporter:
    if isinstance(value, Exporter):
        return value
    try:
        return Exporter(str(value).strip().lower())
    except ValueError as e:
        raise ConfigError(f"`exporter` must be one of: {', '.join(Exporter.names())} (got {value!r})") from e


def _as_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"`{name}` must be true or false (got {value!r})")
    return value


def resolve_settings(
    cli_values: dict[str, Any],
    file_values: dict[str, Any] | None = None,
    base_dir: str | Path | None = None,
) -> Settings:
    """
    Merge CLI values over file values over defaults, validating each value.

    A relative `output_dir` taken from the file is resolved against `base_dir`
    (the config file's directory); one given on the CLI stays relative to the
    current directory.
    """
    merged: dict[str, Any] = dict(file_values or {})
    merged.update({k: v for k, v in cli_values.items() if v is not None})

    separator = merged.get("separator", "-")
    if not isinstance(separator, str):
        raise ConfigError("`separator` must be a string.")

    output_dir = merged.get("output_dir", "output")
    if not isinstance(output_dir, (str, Path)) or not str(output_dir).strip():
        raise ConfigError("`output_dir` must be a non-empty path.")
    output_path = Path(output_dir)
    from_file = cli_values.get("output_dir") is None and "output_dir" in (file_values or {})
    if base_dir is not None and from_file and not output_path.is_absolute():
        output_path = Path(base_dir) / output_path

    return Settings(
        fields=_as_fields(merged.get("fields")),
        output_dir=output_path,
        separator=separator,
        export=_as_bool("export", merged.get("export", False)),
        exporter=_as_exporter(merged.get("exporter", Exporter.INKSCAPE.value)),
        strict=_as_bool("strict", merged.get("strict", False)),
    )
