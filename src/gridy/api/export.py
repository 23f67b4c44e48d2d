"""
どこで: `src/gridy/api/export.py`。
何を: 設定値 1 つをファイルへ書き出す公開導線 `Export` と、プレビュー取得 `preview` を提供する。
なぜ: 呼び出し側（CLI / 埋め込み先 UI）が、入力検証 → 生成 → 保存を 1 行で行えるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from gridy.core.runtime_config import runtime_config
from gridy.core.settings import GridSettings, validate_settings
from gridy.export.image import export_image, render_preview
from gridy.export.svg import export_svg


class Export:
    """GridSettings の出力をファイルへ書き出す。

    Attributes
    ----------
    settings : GridSettings
        検証済みの入力設定。
    fmt : str
        正規化済みのフォーマット名（`"png"` / `"svg"`）。
    path : Path
        実際の保存先。
    """

    def __init__(
        self,
        settings: GridSettings,
        fmt: str,
        path: str | Path | None = None,
        *,
        scale: int | None = None,
        smoothing: bool | None = None,
        pixel_snap: bool | None = None,
        validate: bool = True,
    ) -> None:
        """export を実行する。

        Parameters
        ----------
        settings : GridSettings
            出力対象の設定。
        fmt : str
            出力フォーマット。`"png"`（`"image"`）または `"svg"`。
        path : str or Path or None
            出力先パス。None なら設定値から決まる既定パス。
        scale, smoothing, pixel_snap : optional
            PNG 出力のみ有効。None なら `config.yaml` の `export.png`。
        validate : bool
            True なら `config.yaml` の canvas 範囲で入力検証してから出力する。

        Raises
        ------
        ValueError
            未対応の fmt、または入力検証に失敗した場合。
        """

        self.fmt = str(fmt).lower().strip()
        if validate:
            cfg = runtime_config()
            validate_settings(
                settings,
                min_size=cfg.canvas_min_size,
                max_size=cfg.canvas_max_size,
            )
        self.settings = settings

        if self.fmt in {"png", "image"}:
            self.fmt = "png"
            self.path = export_image(
                settings,
                path,
                scale=scale,
                smoothing=smoothing,
                pixel_snap=pixel_snap,
            )
            return
        if self.fmt == "svg":
            self.path = export_svg(settings, path)
            return

        raise ValueError(f"未対応の export fmt: {fmt!r}")


def preview(settings: GridSettings) -> Image.Image:
    """対話プレビュー用の画像（1x・スムージング ON）を返す。"""

    return render_preview(settings)


__all__ = ["Export", "preview"]
