"""Renderers for computed layouts."""

from cell_layout.renderers.base import Renderer
from cell_layout.renderers.json_result import JsonRenderer
from cell_layout.renderers.svg import SvgRenderer

__all__ = ["JsonRenderer", "Renderer", "SvgRenderer"]
