# どこで: `src/gridy/core/grid_registry.py`。
# 何を: グリッド種別名 → レイヤ生成関数のレジストリと、登録用デコレータ `@grid` を提供する。
# なぜ: 種別ごとの分岐を 1 箇所の辞書引きにまとめ、種別の追加を「関数 1 つの登録」で済ませるため。

from __future__ import annotations

from collections.abc import ItemsView, Iterable
from dataclasses import dataclass
from typing import Callable, Literal

from gridy.core.layer import LayerStyle
from gridy.core.primitives import Primitive
from gridy.core.settings import GRID_TYPES, GridSettings

GridFunc = Callable[[GridSettings, LayerStyle], Iterable[Primitive]]
LayerGate = Literal["active", "visible"]


@dataclass(frozen=True, slots=True)
class GridSpec:
    """登録済みグリッド種別 1 つぶんの情報。

    Attributes
    ----------
    name : str
        種別名（`GridSettings.grid_type` の値）。
    func : GridFunc
        `func(settings, layer)` で 1 レイヤぶんのプリミティブを返す生成関数。
    gate : {"active", "visible"}
        生成関数を呼ぶ条件。
        `"active"` は表示 ON かつ step/thickness が正のレイヤのみ、
        `"visible"` は表示 ON のレイヤすべて（step の扱いを関数側で決める種別向け）。
    """

    name: str
    func: GridFunc
    gate: LayerGate = "active"


class GridRegistry:
    """グリッド種別名と生成関数を対応付けるレジストリ。"""

    def __init__(self) -> None:
        """空のレジストリを初期化する。"""
        self._items: dict[str, GridSpec] = {}

    def _register(
        self,
        name: str,
        func: GridFunc,
        *,
        gate: LayerGate = "active",
        overwrite: bool = True,
    ) -> None:
        """グリッド種別を登録する（内部用）。

        Notes
        -----
        登録は `@grid` デコレータ経由に統一する。
        """
        if not overwrite and name in self._items:
            raise ValueError(f"grid '{name}' は既に登録されている")
        if gate not in ("active", "visible"):
            raise ValueError(f"未知の gate です: {gate!r}")
        self._items[name] = GridSpec(name=name, func=func, gate=gate)

    def get(self, name: str) -> GridSpec:
        """種別名に対応する GridSpec を取得する。

        Raises
        ------
        KeyError
            未登録の種別名が指定された場合。
        """
        return self._items[name]

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __getitem__(self, name: str) -> GridSpec:
        return self.get(name)

    def items(self) -> ItemsView[str, GridSpec]:
        """登録済みエントリの (name, spec) ビューを返す。"""
        return self._items.items()

    def names(self) -> tuple[str, ...]:
        return tuple(self._items.keys())


grid_registry = GridRegistry()
"""グローバルなグリッドレジストリインスタンス。"""


def grid(
    name: str,
    *,
    gate: LayerGate = "active",
    overwrite: bool = True,
) -> Callable[[GridFunc], GridFunc]:
    """グローバルグリッドレジストリ用デコレータ。

    Parameters
    ----------
    name : str
        登録する種別名。`GRID_TYPES` に含まれている必要がある。
    gate : {"active", "visible"}, optional
        生成関数を呼ぶレイヤ条件（`GridSpec.gate` を参照）。
    overwrite : bool, optional
        既存エントリがある場合に上書きするかどうか。

    Examples
    --------
    @grid("square")
    def square(settings, layer):
        ...
        yield LineSegment(...)
    """

    if name not in GRID_TYPES:
        raise ValueError(f"GRID_TYPES に無い grid 名は登録できない: {name!r}")

    def decorator(f: GridFunc) -> GridFunc:
        grid_registry._register(name, f, gate=gate, overwrite=overwrite)
        return f

    return decorator


def missing_grid_types() -> tuple[str, ...]:
    """`GRID_TYPES` のうち生成関数が未登録の種別名を返す。"""

    return tuple(name for name in GRID_TYPES if name not in grid_registry)


__all__ = [
    "GridFunc",
    "GridRegistry",
    "GridSpec",
    "grid",
    "grid_registry",
    "missing_grid_types",
]
