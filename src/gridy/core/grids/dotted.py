"""
どこで: `src/gridy/core/grids/dotted.py`。ドット格子の生成。
何を: 正方格子と同じ格子点に、塗りつぶし円（ドット）を置く。
"""

from __future__ import annotations

from collections.abc import Iterator

from gridy.core.geometry import lattice_positions
from gridy.core.grid_registry import grid
from gridy.core.layer import LayerStyle
from gridy.core.primitives import Circle
from gridy.core.settings import GridSettings

DOT_RADIUS_SCALE = 1.0
"""ドット半径 = thickness * DOT_RADIUS_SCALE。プレビューとエクスポートで共通。"""


@grid("dotted")
def dotted(settings: GridSettings, layer: LayerStyle) -> Iterator[Circle]:
    """1 レイヤぶんのドットを x 優先（列ごと）で返す。"""
    radius = float(layer.thickness) * DOT_RADIUS_SCALE
    xs = lattice_positions(settings.width, layer.step).tolist()
    ys = lattice_positions(settings.height, layer.step).tolist()
    for x in xs:
        for y in ys:
            yield Circle(
                center=(x, y),
                radius=radius,
                color=layer.color,
                fill=True,
                thickness=0.0,
                layer=layer.name,
            )
