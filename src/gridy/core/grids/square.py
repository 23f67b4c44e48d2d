"""
どこで: `src/gridy/core/grids/square.py`。正方格子の生成。
何を: step の倍数位置に、キャンバス全幅/全高の垂直線→水平線を並べる。
なぜ: 最も基本的な方眼として、他の種別（modular の major 層）の基礎にもするため。
"""

from __future__ import annotations

from collections.abc import Iterator

from gridy.core.geometry import axis_lines, lattice_positions
from gridy.core.grid_registry import grid
from gridy.core.layer import LayerStyle
from gridy.core.primitives import LineSegment
from gridy.core.settings import GridSettings


@grid("square")
def square(settings: GridSettings, layer: LayerStyle) -> Iterator[LineSegment]:
    """1 レイヤぶんの方眼線を返す。

    垂直線は `x = i*step`（i = 0..floor(width/step)）、水平線も同様。
    例: width=800, step=20 なら 41 本。
    """
    xs = lattice_positions(settings.width, layer.step)
    ys = lattice_positions(settings.height, layer.step)
    return axis_lines(settings.width, settings.height, xs, ys, layer)
