"""
どこで: `src/gridy/core/grids/triangular.py`。正三角形メッシュの生成。
何を: 三角形の高さ（step*√3/2）間隔の水平線と、行帯ごとのジグザグ折れ線を生成する。
なぜ: ±60° の斜線群を「行帯 1 本の折れ線」にまとめ、三角形ファセットの辺を少ないプリミティブで表すため。

行帯のジグザグ
--------------
行 r（y = r*h）の格子点は x = (r mod 2)*step/2 + k*step に並ぶ。
行 r と行 r+1 の格子点を交互に結ぶと、帯の中の +60°/-60° 斜線がすべて 1 本の折れ線になる。
左右は 1 step ぶん、下は 1 帯ぶんキャンバス外まで伸ばす（はみ出しは描画側でクリップされる）。
"""

from __future__ import annotations

import math
from collections.abc import Iterator

from gridy.core.geometry import lattice_positions
from gridy.core.grid_registry import grid
from gridy.core.layer import LayerStyle
from gridy.core.primitives import LineSegment, Point, Polyline
from gridy.core.settings import GridSettings

_EPS = 1e-9


def triangle_height(step: float) -> float:
    """一辺 step の正三角形の高さを返す。"""
    return float(step) * math.sqrt(3.0) / 2.0


def _band_points(width: float, step: float, row: int, row_height: float) -> tuple[Point, ...]:
    s = float(step)
    offset = 0.5 * s * (row % 2)
    y_top = row * row_height
    y_bottom = (row + 1) * row_height
    k_max = int(math.ceil((float(width) - offset) / s - _EPS))

    points: list[Point] = []
    for k in range(-1, k_max + 1):
        x = offset + k * s
        points.append((x, y_top))
        points.append((x + 0.5 * s, y_bottom))
    return tuple(points)


@grid("triangular")
def triangular(settings: GridSettings, layer: LayerStyle) -> Iterator[LineSegment | Polyline]:
    """水平線 → 行帯ジグザグ（上の帯から順）を返す。"""
    w = float(settings.width)
    h = float(settings.height)
    row_height = triangle_height(layer.step)

    for y in lattice_positions(h, row_height).tolist():
        yield LineSegment(
            start=(0.0, y),
            end=(w, y),
            color=layer.color,
            thickness=layer.thickness,
            layer=layer.name,
        )

    n_bands = max(1, int(math.ceil(h / row_height - _EPS)))
    for row in range(n_bands):
        yield Polyline(
            points=_band_points(w, layer.step, row, row_height),
            color=layer.color,
            thickness=layer.thickness,
            layer=layer.name,
        )
