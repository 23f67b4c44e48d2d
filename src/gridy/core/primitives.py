# どこで: `src/gridy/core/primitives.py`。
# 何を: ジオメトリ生成の出力である描画プリミティブ（背景/線分/円/ポリライン）を定義する。
# なぜ: 生成側とアダプタ（ラスタ/ベクタ）の間を、描画 API に依存しない不変データで繋ぐため。

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

Point = tuple[float, float]
LayerName = Literal["minor", "major"]
LAYER_NAMES: tuple[LayerName, ...] = ("minor", "major")
"""描画順（minor → major）。major が常に上に重なる。"""


@dataclass(frozen=True, slots=True)
class Background:
    """キャンバス全面を塗る不透明背景。出力列の先頭にだけ現れる。"""

    width: float
    height: float
    color: str = "#ffffff"


@dataclass(frozen=True, slots=True)
class LineSegment:
    """2 点を結ぶ線分。"""

    start: Point
    end: Point
    color: str
    thickness: float
    layer: LayerName


@dataclass(frozen=True, slots=True)
class Circle:
    """全周円。

    Notes
    -----
    - `fill=False`: 線幅 `thickness` のリング（polar の同心円）。
    - `fill=True`: 半径 `radius` の塗りつぶし（dotted のドット）。`thickness` は 0。
    """

    center: Point
    radius: float
    color: str
    fill: bool
    thickness: float
    layer: LayerName


@dataclass(frozen=True, slots=True)
class Polyline:
    """頂点列を順に結ぶ折れ線。`closed=True` なら終点から始点へ閉じる。"""

    points: tuple[Point, ...]
    color: str
    thickness: float
    layer: LayerName
    closed: bool = False


Primitive = Background | LineSegment | Circle | Polyline


def is_axis_aligned(segment: LineSegment) -> bool:
    """線分が水平または垂直なら True を返す。"""

    (x0, y0), (x1, y1) = segment.start, segment.end
    return x0 == x1 or y0 == y1


def count_by_layer(primitives: Iterable[Primitive]) -> dict[str, int]:
    """レイヤ名ごとのプリミティブ数を返す（背景は `"background"`）。"""

    out: dict[str, int] = {}
    for p in primitives:
        key = "background" if isinstance(p, Background) else p.layer
        out[key] = out.get(key, 0) + 1
    return out


__all__ = [
    "LAYER_NAMES",
    "Background",
    "Circle",
    "LayerName",
    "LineSegment",
    "Point",
    "Polyline",
    "Primitive",
    "count_by_layer",
    "is_axis_aligned",
]
