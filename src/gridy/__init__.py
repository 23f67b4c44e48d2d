"""
gridy: パラメトリックなグリッド（方眼/ドット/等角/三角/極座標/対数/モジュラー）を生成し、
PNG / SVG として書き出すライブラリ。
"""

from __future__ import annotations

from gridy.api import Export, preview
from gridy.core.formats import FORMAT_PRESETS, apply_format
from gridy.core.generator import generate
from gridy.core.randomize import random_settings
from gridy.core.settings import GRID_TYPES, GridSettings, validate_settings
from gridy.export.image import RenderSurfaceError, render_raster
from gridy.export.svg import render_svg

__all__ = [
    "FORMAT_PRESETS",
    "GRID_TYPES",
    "Export",
    "GridSettings",
    "RenderSurfaceError",
    "apply_format",
    "generate",
    "preview",
    "random_settings",
    "render_raster",
    "render_svg",
    "validate_settings",
]
