# どこで: `src/gridy/core/geometry.py`。
# 何を: グリッド種別間で共有する幾何ユーティリティ（格子位置列 / 軸平行線 / 矩形クリップ）。
# なぜ: 種別ごとに位置計算を再実装すると、定数や丸めが微妙にずれていくため。

from __future__ import annotations

import math
from collections.abc import Iterator
from math import hypot

import numpy as np

from gridy.core.layer import LayerStyle
from gridy.core.primitives import LineSegment, Point

Rect = tuple[float, float, float, float]
"""`(x_min, x_max, y_min, y_max)` の閉区間矩形。"""

# step 倍数が extent にちょうど一致するケースを float 誤差で取りこぼさないための許容量。
_LATTICE_EPS = 1e-9


def lattice_positions(extent: float, step: float, *, start: float = 0.0) -> np.ndarray:
    """`start` から `extent` まで（両端含む）の `step` 倍数位置を返す。

    Parameters
    ----------
    extent : float
        上限（含む）。
    step : float
        間隔。0 以下または非有限なら空配列。
    start : float, optional
        最初の位置。

    Returns
    -------
    np.ndarray
        float64 の 1 次元配列 `start + i*step`（i = 0..floor((extent-start)/step)）。

    Notes
    -----
    累積加算ではなく `i*step` で求めるため、後半の位置に誤差が溜まらない。
    """

    s = float(step)
    span = float(extent) - float(start)
    if not math.isfinite(s) or s <= 0.0 or not math.isfinite(span) or span < 0.0:
        return np.zeros((0,), dtype=np.float64)
    n = int(math.floor(span / s + _LATTICE_EPS)) + 1
    return float(start) + np.arange(n, dtype=np.float64) * s


def axis_lines(
    width: float,
    height: float,
    xs: np.ndarray,
    ys: np.ndarray,
    layer: LayerStyle,
) -> Iterator[LineSegment]:
    """キャンバス全幅/全高の垂直線（xs）→ 水平線（ys）を順に返す。"""

    w = float(width)
    h = float(height)
    for x in xs.tolist():
        yield LineSegment(
            start=(x, 0.0),
            end=(x, h),
            color=layer.color,
            thickness=layer.thickness,
            layer=layer.name,
        )
    for y in ys.tolist():
        yield LineSegment(
            start=(0.0, y),
            end=(w, y),
            color=layer.color,
            thickness=layer.thickness,
            layer=layer.name,
        )


def clip_segment_to_rect(
    p0: Point,
    p1: Point,
    rect: Rect,
    *,
    eps: float = 1e-12,
) -> tuple[Point, Point] | None:
    """線分を矩形へクリップし、内側部分の端点 2 点を返す。

    矩形と交差しない、または交差が 1 点に潰れる場合は None を返す。
    """

    # Liang–Barsky line clipping。
    # 線分を `P(u)=P0 + u*(P1-P0), u in [0,1]` と置き、
    # 矩形の 4 辺に対する制約 `p*u <= q` で可視区間 `[u1, u2]` を狭めていく。
    x0, y0 = p0
    x1, y1 = p1
    x_min, x_max, y_min, y_max = rect

    dx = x1 - x0
    dy = y1 - y0

    u1 = 0.0
    u2 = 1.0

    p = (-dx, dx, -dy, dy)
    q = (x0 - x_min, x_max - x0, y0 - y_min, y_max - y0)

    for pi, qi in zip(p, q):
        # 辺と平行: 外側なら交差なし、内側なら制約なし。
        if abs(pi) < eps:
            if qi < 0.0:
                return None
            continue

        r = qi / pi
        if pi < 0.0:
            if r > u2:
                return None
            if r > u1:
                u1 = r
        else:
            if r < u1:
                return None
            if r < u2:
                u2 = r

    if u1 > u2:
        return None

    ax = x0 + u1 * dx
    ay = y0 + u1 * dy
    bx = x0 + u2 * dx
    by = y0 + u2 * dy

    # 角をかすめるだけの線は「線分なし」。
    if hypot(bx - ax, by - ay) < eps:
        return None

    return (ax, ay), (bx, by)


__all__ = [
    "Rect",
    "axis_lines",
    "clip_segment_to_rect",
    "lattice_positions",
]
