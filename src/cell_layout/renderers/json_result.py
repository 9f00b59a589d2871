"""JSON output of a computed layout, in the shape the diagram renderer reads."""

from __future__ import annotations

from dataclasses import dataclass

from cell_layout.export import dumps_result
from cell_layout.layout.types import LayoutResult


@dataclass
class JsonRenderer:
    indent: int | None = 2

    def render(self, result: LayoutResult) -> str:
        return dumps_result(result, indent=self.indent) + "\n"
