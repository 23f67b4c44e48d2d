# どこで: `src/gridy/core/output_paths.py`。
# 何を: 設定値（種別/寸法）から、出力ファイル名と既定の保存先パスを決める。
# なぜ: 同じ設定の出力が常に同じ名前になり、`output/{kind}/` 配下で種類ごとに整理されるようにするため。

from __future__ import annotations

import re
from pathlib import Path

from gridy.core.runtime_config import output_root_dir
from gridy.core.settings import GridSettings

# fmt → (出力サブディレクトリ, 拡張子, ファイル名タグ)
_FORMATS: dict[str, tuple[str, str, str]] = {
    "png": ("png", "png", "300dpi"),
    "svg": ("svg", "svg", "vector"),
}


def _sanitize_token(text: str) -> str:
    """ファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(text))


def _fmt_canvas_dim_for_filename(value: float | int) -> str:
    """canvas の寸法をファイル名に埋め込むための短い表現にして返す。"""

    v = float(value)
    if v <= 0:
        raise ValueError("canvas_size は正の値である必要がある")
    if abs(v - round(v)) < 1e-9:
        return str(int(round(v)))

    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return s if s else "0"


def _normalize_fmt(fmt: str) -> str:
    f = str(fmt).lower().strip().lstrip(".")
    if f == "image":
        f = "png"
    if f not in _FORMATS:
        raise ValueError(f"未対応の出力フォーマット: {fmt!r}")
    return f


def output_filename(settings: GridSettings, fmt: str) -> str:
    """出力ファイル名を返す。

    Examples
    --------
    - PNG: `grid-square-800x600-300dpi.png`
    - SVG: `grid-square-800x600-vector.svg`
    """

    f = _normalize_fmt(fmt)
    _kind, ext, tag = _FORMATS[f]
    w = _fmt_canvas_dim_for_filename(settings.width)
    h = _fmt_canvas_dim_for_filename(settings.height)
    grid_type = _sanitize_token(settings.grid_type)
    return f"grid-{grid_type}-{w}x{h}-{tag}.{ext}"


def output_path_for_settings(
    settings: GridSettings,
    fmt: str,
    *,
    output_dir: str | Path | None = None,
) -> Path:
    """既定の保存先パス `output_root/{kind}/<filename>` を返す。

    Parameters
    ----------
    settings : GridSettings
        出力対象の設定。
    fmt : str
        `"png"`（`"image"` も可）または `"svg"`。
    output_dir : str or Path or None, optional
        出力ルート。None なら `config.yaml` の `paths.output_dir`。
    """

    f = _normalize_fmt(fmt)
    kind = _FORMATS[f][0]
    root = output_root_dir() if output_dir is None else Path(output_dir)
    return root / kind / output_filename(settings, f)


__all__ = ["output_filename", "output_path_for_settings"]
