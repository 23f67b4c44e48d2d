"""
どこで: `src/gridy/core/grids/modular.py`。モジュラーグリッドの生成。
何を: major_step のモジュール格子（major）と、各モジュール内部の分割線（minor）を生成する。
なぜ: レイアウト用の「モジュール + サブディビジョン」を、境界の二重描画なしで表すため。

分割数
------
`n = floor(major_step / minor_step)`、分割間隔は `major_step / n`。
各モジュール内で j = 1..n-1 の位置だけを出すため、モジュール境界とは重ならない。
n < 2（minor_step が major_step の半分より大きい）や major_step <= 0 のときは分割線なし。
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

from gridy.core.geometry import axis_lines, lattice_positions
from gridy.core.grid_registry import grid
from gridy.core.layer import LayerStyle
from gridy.core.primitives import LineSegment
from gridy.core.settings import GridSettings

_EPS = 1e-9


def subdivision_count(major_step: float, minor_step: float) -> int:
    """モジュール 1 つあたりの分割数を返す。分割できない場合は 0。"""

    major = float(major_step)
    minor = float(minor_step)
    if not (math.isfinite(major) and math.isfinite(minor)):
        return 0
    if major <= 0.0 or minor <= 0.0:
        return 0
    n = int(math.floor(major / minor + _EPS))
    return n if n >= 2 else 0


def subdivision_positions(extent: float, major_step: float, minor_step: float) -> np.ndarray:
    """モジュール境界を除いた分割線の位置を昇順で返す。"""

    n = subdivision_count(major_step, minor_step)
    if n == 0:
        return np.zeros((0,), dtype=np.float64)

    major = float(major_step)
    sub = major / n
    # 右端/下端の途中までしかないモジュールも対象にするため、extent 未満の境界すべてから始める。
    starts = lattice_positions(extent, major)
    starts = starts[starts < float(extent)]
    inner = np.arange(1, n, dtype=np.float64) * sub
    positions = (starts[:, None] + inner[None, :]).reshape(-1)
    return positions[positions <= float(extent) + _EPS]


@grid("modular")
def modular(settings: GridSettings, layer: LayerStyle) -> Iterator[LineSegment]:
    w = float(settings.width)
    h = float(settings.height)
    if layer.name == "major":
        xs = lattice_positions(w, layer.step)
        ys = lattice_positions(h, layer.step)
    else:
        xs = subdivision_positions(w, settings.major_step, layer.step)
        ys = subdivision_positions(h, settings.major_step, layer.step)
    return axis_lines(w, h, xs, ys, layer)
