"""
どこで: `src/gridy/core/grids/polar.py`。極座標グリッドの生成。
何を: キャンバス中心の同心円（各レイヤ）と、minor レイヤの放射線を生成する。

minor_step の二重の役割
-----------------------
minor_step は同心円の半径間隔 [px] であると同時に、放射線の角度間隔 [deg] としても使う。
放射線の本数は `ceil(360 / minor_step)`（例: 30 → 12 本）。
minor_step が 0 以下のときは同心円を描かず、放射線だけ既定の 12 本（30°間隔）で描く。
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

from gridy.core.grid_registry import grid
from gridy.core.layer import LayerStyle
from gridy.core.primitives import Circle, LineSegment
from gridy.core.settings import GridSettings

FALLBACK_SPOKE_COUNT = 12

_EPS = 1e-9


def polar_center(settings: GridSettings) -> tuple[float, float, float]:
    """`(cx, cy, max_radius)` を返す。"""
    cx = 0.5 * float(settings.width)
    cy = 0.5 * float(settings.height)
    return cx, cy, min(cx, cy)


def ring_radii(max_radius: float, step: float) -> np.ndarray:
    """`step, 2*step, ...` のうち max_radius 以下の半径を返す。"""
    s = float(step)
    if not math.isfinite(s) or s <= 0.0:
        return np.zeros((0,), dtype=np.float64)
    n = int(math.floor(float(max_radius) / s + _EPS))
    return np.arange(1, n + 1, dtype=np.float64) * s


def spoke_angles_deg(step: float) -> np.ndarray:
    """放射線の角度 [deg] を 0° から昇順で返す。"""
    s = float(step)
    if not math.isfinite(s) or s <= 0.0:
        s = 360.0 / FALLBACK_SPOKE_COUNT
    n = max(1, int(math.ceil(360.0 / s - _EPS)))
    return np.arange(n, dtype=np.float64) * s


@grid("polar", gate="visible")
def polar(settings: GridSettings, layer: LayerStyle) -> Iterator[Circle | LineSegment]:
    """同心円 →（minor のみ）放射線の順に返す。"""
    if not (math.isfinite(layer.thickness) and layer.thickness > 0.0):
        return

    cx, cy, max_radius = polar_center(settings)
    for r in ring_radii(max_radius, layer.step).tolist():
        yield Circle(
            center=(cx, cy),
            radius=r,
            color=layer.color,
            fill=False,
            thickness=layer.thickness,
            layer=layer.name,
        )

    if layer.name != "minor":
        return
    for deg in spoke_angles_deg(layer.step).tolist():
        theta = math.radians(deg)
        yield LineSegment(
            start=(cx, cy),
            end=(cx + max_radius * math.cos(theta), cy + max_radius * math.sin(theta)),
            color=layer.color,
            thickness=layer.thickness,
            layer=layer.name,
        )
