"""
どこで: `src/gridy/core/generator.py`。
何を: GridSettings から描画プリミティブ列（背景 → minor → major）を生成する。
なぜ: プレビュー/PNG/SVG が同じ 1 つの生成結果を共有し、種別ごとの定数ずれを起こさないため。
"""

from __future__ import annotations

import logging

from gridy.core.builtins import ensure_builtin_grids_registered
from gridy.core.grid_registry import GridSpec, grid_registry
from gridy.core.layer import LayerStyle, resolve_layer_style
from gridy.core.primitives import LAYER_NAMES, Background, Primitive
from gridy.core.settings import GridSettings

logger = logging.getLogger(__name__)


def _layer_enabled(spec: GridSpec, layer: LayerStyle) -> bool:
    if spec.gate == "visible":
        return layer.visible
    return layer.active


def generate(settings: GridSettings) -> tuple[Primitive, ...]:
    """設定値からプリミティブ列を生成する。

    Parameters
    ----------
    settings : GridSettings
        入力設定。

    Returns
    -------
    tuple[Primitive, ...]
        `Background`（white_background 時のみ）→ minor レイヤ → major レイヤの順。

    Notes
    -----
    - 純関数であり、同じ settings からは同じ列（順序・座標とも）を返す。
    - step/thickness が 0 以下のレイヤは例外にせず、空として扱う。
    - `grid_type` の妥当性は `GridSettings` 構築時に検証済みの前提。
    """

    ensure_builtin_grids_registered()
    spec = grid_registry.get(settings.grid_type)

    out: list[Primitive] = []
    if settings.white_background:
        out.append(Background(width=float(settings.width), height=float(settings.height)))

    for name in LAYER_NAMES:
        layer = resolve_layer_style(settings, name)
        if not _layer_enabled(spec, layer):
            continue
        out.extend(spec.func(settings, layer))

    logger.debug(
        "generate: grid_type=%s size=%dx%d primitives=%d",
        settings.grid_type,
        settings.width,
        settings.height,
        len(out),
    )
    return tuple(out)


__all__ = ["generate"]
