"""
どこで: `src/gridy/core/builtins.py`。
何を: 組み込みグリッド種別の登録（registry 初期化）を単一入口へ集約する。
なぜ: import 副作用の分散と手動列挙の重複をなくし、保守性を上げるため。
"""

from __future__ import annotations

import importlib

_BUILTIN_GRID_MODULES: tuple[str, ...] = (
    "gridy.core.grids.square",
    "gridy.core.grids.dotted",
    "gridy.core.grids.isometric",
    "gridy.core.grids.triangular",
    "gridy.core.grids.polar",
    "gridy.core.grids.logarithmic",
    "gridy.core.grids.modular",
)

_BUILTIN_GRIDS_REGISTERED = False


def ensure_builtin_grids_registered() -> None:
    """組み込みグリッド種別を registry に登録する（idempotent）。"""

    global _BUILTIN_GRIDS_REGISTERED
    if _BUILTIN_GRIDS_REGISTERED:
        return
    for module in _BUILTIN_GRID_MODULES:
        importlib.import_module(module)
    _BUILTIN_GRIDS_REGISTERED = True


__all__ = ["ensure_builtin_grids_registered"]
