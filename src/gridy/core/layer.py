# どこで: `src/gridy/core/layer.py`。
# 何を: GridSettings から minor/major レイヤの描画スタイル（step/色/太さ/有効）を解決する。
# なぜ: 各グリッド種別が settings のフィールド名を個別に読む重複をなくすため。

from __future__ import annotations

import math
from dataclasses import dataclass

from gridy.core.primitives import LayerName
from gridy.core.settings import GridSettings


@dataclass(frozen=True, slots=True)
class LayerStyle:
    """1 レイヤぶんの解決済みスタイル。"""

    name: LayerName
    step: float
    color: str
    thickness: float
    visible: bool

    @property
    def active(self) -> bool:
        """このレイヤがジオメトリを持つかどうか。

        表示 ON かつ step/thickness が正の有限値のときだけ True。
        """

        return (
            self.visible
            and _is_positive(self.step)
            and _is_positive(self.thickness)
        )


def _is_positive(value: float) -> bool:
    v = float(value)
    return math.isfinite(v) and v > 0.0


def resolve_layer_style(settings: GridSettings, name: LayerName) -> LayerStyle:
    """settings から指定レイヤのスタイルを返す。"""

    if name == "minor":
        return LayerStyle(
            name="minor",
            step=float(settings.minor_step),
            color=str(settings.minor_color),
            thickness=float(settings.minor_thickness),
            visible=bool(settings.show_minor_grid),
        )
    if name == "major":
        return LayerStyle(
            name="major",
            step=float(settings.major_step),
            color=str(settings.major_color),
            thickness=float(settings.major_thickness),
            visible=bool(settings.show_major_grid),
        )
    raise ValueError(f"未知のレイヤ名です: {name!r}")


__all__ = ["LayerStyle", "resolve_layer_style"]
