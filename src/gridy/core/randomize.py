# どこで: `src/gridy/core/randomize.py`。
# 何を: 種別・間隔・色・太さをランダムに選んだ新しい GridSettings を返す。
# なぜ: 「おまかせ」ボタン相当の入口を、描画コアとは独立した純関数として提供するため。

from __future__ import annotations

import numpy as np

from gridy.core.settings import GridSettings

RANDOM_GRID_TYPES: tuple[str, ...] = ("square", "dotted", "isometric", "triangular", "polar")
"""ランダム選択の対象種別（logarithmic/modular は含めない）。"""

# 整数 step は [lo, hi] 両端を含む。thickness は [lo, hi)。
MINOR_STEP_RANGE = (10, 59)
MAJOR_STEP_RANGE = (50, 249)
MINOR_THICKNESS_RANGE = (0.5, 2.5)
MAJOR_THICKNESS_RANGE = (1.0, 4.0)
_COLOR_MAX = 0xFFFFFF


def random_color(rng: np.random.Generator) -> str:
    """`#rrggbb` 形式のランダム色を返す。"""
    value = int(rng.integers(0, _COLOR_MAX, endpoint=True))
    return f"#{value:06x}"


def random_settings(
    base: GridSettings | None = None,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> GridSettings:
    """base のサイズ/背景/表示設定を保ったまま、見た目の値をランダムに選び直す。

    Parameters
    ----------
    base : GridSettings or None, optional
        引き継ぐ設定。None なら既定値。
    seed : int or None, optional
        乱数シード。`rng` 未指定時のみ使う。
    rng : numpy.random.Generator or None, optional
        乱数生成器。指定時は `seed` より優先する。

    Returns
    -------
    GridSettings
        `grid_type` は `RANDOM_GRID_TYPES` から、数値は各 `*_RANGE` から選ばれた設定。
    """

    src = GridSettings() if base is None else base
    gen = rng if rng is not None else np.random.default_rng(seed)

    grid_type = RANDOM_GRID_TYPES[int(gen.integers(0, len(RANDOM_GRID_TYPES)))]
    minor_step = int(gen.integers(MINOR_STEP_RANGE[0], MINOR_STEP_RANGE[1], endpoint=True))
    major_step = int(gen.integers(MAJOR_STEP_RANGE[0], MAJOR_STEP_RANGE[1], endpoint=True))
    minor_color = random_color(gen)
    major_color = random_color(gen)
    minor_thickness = float(gen.uniform(*MINOR_THICKNESS_RANGE))
    major_thickness = float(gen.uniform(*MAJOR_THICKNESS_RANGE))

    return src.replace(
        grid_type=grid_type,
        minor_step=float(minor_step),
        major_step=float(major_step),
        minor_color=minor_color,
        major_color=major_color,
        minor_thickness=minor_thickness,
        major_thickness=major_thickness,
    )


__all__ = [
    "MAJOR_STEP_RANGE",
    "MAJOR_THICKNESS_RANGE",
    "MINOR_STEP_RANGE",
    "MINOR_THICKNESS_RANGE",
    "RANDOM_GRID_TYPES",
    "random_color",
    "random_settings",
]
