from __future__ import annotations

from pathlib import Path

import pytest

TEMPLATE = """<svg xmlns="http://www.w3.org/2000/svg" width="100" height="40">
  <text x="5" y="15">{{city}}, {{state}}</text>
  <text x="5" y="30">{{country}}</text>
</svg>
"""

DATA = """country,state,city
USA,TX,Austin
USA,CA,San Francisco
Canada,QC,Montreal
"""


@pytest.fixture
def make_template(tmp_path: Path):
    def _make(template: str = TEMPLATE, data: str | None = DATA, name: str = "cities") -> Path:
        svg = tmp_path / f"{name}.svg"
        svg.write_text(template, encoding="utf-8")
        if data is not None:
            (tmp_path / f"{name}.csv").write_text(data, encoding="utf-8")
        return svg

    return _make
