"""
どこで: `src/gridy/core/grids/isometric.py`。等角（アイソメトリック）格子の生成。
何を: step 間隔の垂直線と、水平から ±30° の 2 方向の斜線群を生成する。
なぜ: 等角投影の下描き用ガイドとして、斜線が垂直線と格子点で交わる配置にするため。

斜線の配置
----------
垂直線の間隔を `s` とすると、同じ向きの斜線は垂直方向に `s / cos30°` 間隔で並べる。
このとき x = s の垂直線上で、隣の斜線とちょうど半間隔ずれて交わり、正三角形格子になる。

斜線は左端 x=0 での切片 `c = k * s / cos30°` で表し、
キャンバス外のはみ出し（`width * tan30°`）ぶんまで切片を走査してから矩形クリップする。
これで四隅まで斜線が届く。
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

from gridy.core.geometry import clip_segment_to_rect, lattice_positions
from gridy.core.grid_registry import grid
from gridy.core.layer import LayerStyle
from gridy.core.primitives import LineSegment
from gridy.core.settings import GridSettings

ISOMETRIC_ANGLE_DEG = 30.0

_EPS = 1e-9


def _intercepts(c_min: float, c_max: float, spacing: float) -> np.ndarray:
    """`[c_min, c_max]` に入る `spacing` の整数倍を昇順で返す。"""

    k0 = int(math.ceil(c_min / spacing - _EPS))
    k1 = int(math.floor(c_max / spacing + _EPS))
    if k1 < k0:
        return np.zeros((0,), dtype=np.float64)
    return np.arange(k0, k1 + 1, dtype=np.float64) * spacing


def diagonal_family(
    width: float,
    height: float,
    step: float,
    *,
    slope: float,
    layer: LayerStyle,
) -> Iterator[LineSegment]:
    """傾き `slope` の平行斜線群を、キャンバスへクリップして返す。"""

    w = float(width)
    h = float(height)
    spacing = float(step) / math.cos(math.radians(ISOMETRIC_ANGLE_DEG))
    rise = slope * w

    # y = c + slope*x が矩形 [0,w]x[0,h] を通る切片範囲。
    c_min = min(0.0, -rise)
    c_max = h + max(0.0, -rise)
    rect = (0.0, w, 0.0, h)
    for c in _intercepts(c_min, c_max, spacing).tolist():
        clipped = clip_segment_to_rect((0.0, c), (w, c + rise), rect)
        if clipped is None:
            continue
        start, end = clipped
        yield LineSegment(
            start=start,
            end=end,
            color=layer.color,
            thickness=layer.thickness,
            layer=layer.name,
        )


@grid("isometric")
def isometric(settings: GridSettings, layer: LayerStyle) -> Iterator[LineSegment]:
    """垂直線 → +30° 斜線 → -30° 斜線の順に返す。"""
    w = float(settings.width)
    h = float(settings.height)
    for x in lattice_positions(w, layer.step).tolist():
        yield LineSegment(
            start=(x, 0.0),
            end=(x, h),
            color=layer.color,
            thickness=layer.thickness,
            layer=layer.name,
        )

    t = math.tan(math.radians(ISOMETRIC_ANGLE_DEG))
    yield from diagonal_family(w, h, layer.step, slope=t, layer=layer)
    yield from diagonal_family(w, h, layer.step, slope=-t, layer=layer)
