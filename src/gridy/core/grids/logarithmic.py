"""
どこで: `src/gridy/core/grids/logarithmic.py`。片対数/両対数紙風グリッドの生成。
何を: 1 デケード（1..10）の log10 位置をキャンバス幅/高さへ線形に写した線を生成する。

写像
----
`pos(i) = extent * log10(i)`（i = 1..10）。i=1 が 0、i=10 が extent になり、
i が大きくなるほど線間隔が詰まる。

- minor レイヤ: i = 1..10 の 10 本（垂直線 → 水平線）
- major レイヤ: デケード境界 i = 1, 10 の 2 本（垂直線 → 水平線）

step はこの種別では位置に影響せず、0 以下でレイヤを無効にする判定にだけ使う。
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from gridy.core.geometry import axis_lines
from gridy.core.grid_registry import grid
from gridy.core.layer import LayerStyle
from gridy.core.primitives import LineSegment
from gridy.core.settings import GridSettings

DECADE_VALUES = np.arange(1, 11, dtype=np.float64)
DECADE_BOUNDARIES = np.array([1.0, 10.0], dtype=np.float64)


def log_positions(extent: float, values: np.ndarray = DECADE_VALUES) -> np.ndarray:
    """`extent * log10(values)` を返す。"""
    return float(extent) * np.log10(values)


@grid("logarithmic")
def logarithmic(settings: GridSettings, layer: LayerStyle) -> Iterator[LineSegment]:
    values = DECADE_VALUES if layer.name == "minor" else DECADE_BOUNDARIES
    xs = log_positions(settings.width, values)
    ys = log_positions(settings.height, values)
    return axis_lines(settings.width, settings.height, xs, ys, layer)
