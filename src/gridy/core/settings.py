# どこで: `src/gridy/core/settings.py`。
# 何を: グリッド描画の入力となる不変設定レコード `GridSettings` と、その更新/検証ヘルパを定義する。
# なぜ: プレビューと各エクスポートが「同じ 1 つの値」から同じジオメトリを得られるようにするため。

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

GRID_TYPES: tuple[str, ...] = (
    "square",
    "dotted",
    "isometric",
    "triangular",
    "polar",
    "logarithmic",
    "modular",
)
"""生成アルゴリズムを選ぶグリッド種別の一覧（表示順）。"""

# 外部（JSON/UI）由来の camelCase キー → フィールド名。
_CAMEL_TO_FIELD: dict[str, str] = {
    "width": "width",
    "height": "height",
    "gridType": "grid_type",
    "minorStep": "minor_step",
    "majorStep": "major_step",
    "minorColor": "minor_color",
    "majorColor": "major_color",
    "minorThickness": "minor_thickness",
    "majorThickness": "major_thickness",
    "whiteBackground": "white_background",
    "showMinorGrid": "show_minor_grid",
    "showMajorGrid": "show_major_grid",
}
_FIELD_TO_CAMEL: dict[str, str] = {v: k for k, v in _CAMEL_TO_FIELD.items()}


@dataclass(frozen=True, slots=True)
class GridSettings:
    """グリッド 1 枚ぶんの出力を完全に決める設定値。

    Parameters
    ----------
    width, height : int
        キャンバス寸法 [px]。範囲（例: 100..5000）は生成側では検証しない。
    grid_type : str
        `GRID_TYPES` のいずれか。
    minor_step, major_step : float
        minor/major レイヤの間隔 [px]。0 以下はそのレイヤを「線なし」にする。
    minor_color, major_color : str
        `#rrggbb` 形式の色。生成側は解釈せずアダプタへ渡す。
    minor_thickness, major_thickness : float
        線幅（線）またはドット半径（dotted）。0 以下はそのレイヤを「線なし」にする。
    white_background : bool
        True のとき、グリッドより先に白い全面背景を出力する。
    show_minor_grid, show_major_grid : bool
        各レイヤを生成するかどうか。

    Notes
    -----
    構造的な検証は `grid_type` のみ行う。値の範囲チェックは `validate_settings()`
    （呼び出し側の入力検証）に任せる。
    """

    width: int = 800
    height: int = 600
    grid_type: str = "square"
    minor_step: float = 20.0
    minor_color: str = "#cccccc"
    minor_thickness: float = 0.5
    major_step: float = 100.0
    major_color: str = "#666666"
    major_thickness: float = 1.0
    white_background: bool = True
    show_minor_grid: bool = True
    show_major_grid: bool = True

    def __post_init__(self) -> None:
        if self.grid_type not in GRID_TYPES:
            raise ValueError(
                f"未対応の grid_type です: got={self.grid_type!r} (choices={GRID_TYPES})"
            )

    def replace(self, **updates: Any) -> "GridSettings":
        """一部のフィールドだけを差し替えた新しい設定を返す。"""

        return dataclasses.replace(self, **updates)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GridSettings":
        """dict（snake_case / camelCase どちらのキーも可）から設定を構築する。

        欠けたキーは既定値で埋める。未知のキーは ValueError。
        """

        field_names = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_TO_FIELD.get(str(key), str(key))
            if name not in field_names:
                raise ValueError(f"未知の設定キーです: {key!r}")
            kwargs[name] = value

        # JSON 由来の値は型が揺れるため、ここで正規化する。
        for name in ("width", "height"):
            if name in kwargs:
                kwargs[name] = int(kwargs[name])
        for name in ("minor_step", "major_step", "minor_thickness", "major_thickness"):
            if name in kwargs:
                kwargs[name] = float(kwargs[name])
        for name in ("white_background", "show_minor_grid", "show_major_grid"):
            if name in kwargs:
                kwargs[name] = bool(kwargs[name])
        for name in ("grid_type", "minor_color", "major_color"):
            if name in kwargs:
                kwargs[name] = str(kwargs[name])
        return cls(**kwargs)

    def to_mapping(self, *, camel: bool = False) -> dict[str, Any]:
        """JSON 化しやすい dict を返す。`camel=True` で camelCase キーにする。"""

        out = dataclasses.asdict(self)
        if not camel:
            return out
        return {_FIELD_TO_CAMEL[k]: v for k, v in out.items()}

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width


def swap_orientation(settings: GridSettings) -> GridSettings:
    """width と height を入れ替えた設定を返す。"""

    return settings.replace(width=settings.height, height=settings.width)


def with_orientation(settings: GridSettings, *, portrait: bool) -> GridSettings:
    """要求された向き（縦/横）になるよう、必要なら width/height を入れ替えて返す。

    正方形は常にそのまま返す。
    """

    if settings.width == settings.height:
        return settings
    if bool(portrait) == settings.is_portrait:
        return settings
    return swap_orientation(settings)


def validate_settings(
    settings: GridSettings,
    *,
    min_size: int = 100,
    max_size: int = 5000,
) -> GridSettings:
    """呼び出し側の入力検証として、設定値が許容範囲に収まっているかを確認する。

    Parameters
    ----------
    settings : GridSettings
        検証対象。
    min_size, max_size : int
        width/height の許容範囲（両端を含む）。

    Returns
    -------
    GridSettings
        検証に通った設定（同一オブジェクト）。

    Raises
    ------
    ValueError
        範囲外の値、または色が `#rrggbb` 形式でない場合。

    Notes
    -----
    ジオメトリ生成（`generate()`）はこの関数を呼ばない。
    step/thickness の 0 以下は「そのレイヤを描かない」という正当な入力として扱う。
    """

    lo = int(min_size)
    hi = int(max_size)
    for name in ("width", "height"):
        value = int(getattr(settings, name))
        if not lo <= value <= hi:
            raise ValueError(f"{name} は {lo}..{hi} の範囲である必要があります: got={value}")

    for name in ("minor_color", "major_color"):
        value = getattr(settings, name)
        if not is_hex_color(value):
            raise ValueError(f"{name} は #rrggbb 形式である必要があります: got={value!r}")
    return settings


def is_hex_color(value: object) -> bool:
    """`#rgb` / `#rrggbb` 形式の文字列なら True を返す。"""

    if not isinstance(value, str):
        return False
    s = value.strip()
    if not s.startswith("#") or len(s) not in (4, 7):
        return False
    try:
        int(s[1:], 16)
    except ValueError:
        return False
    return True


__all__ = [
    "GRID_TYPES",
    "GridSettings",
    "is_hex_color",
    "swap_orientation",
    "validate_settings",
    "with_orientation",
]
