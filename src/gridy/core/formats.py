# どこで: `src/gridy/core/formats.py`。
# 何を: 用紙サイズ（A1..A4）のキャンバス寸法プリセットと、その適用ヘルパを提供する。

from __future__ import annotations

from dataclasses import dataclass

from gridy.core.settings import GridSettings, with_orientation


@dataclass(frozen=True, slots=True)
class FormatPreset:
    """用紙フォーマット 1 つぶんの寸法 [px]（A 判は縦向きで定義）。"""

    name: str
    width: int
    height: int
    label: str


FORMAT_PRESETS: dict[str, FormatPreset] = {
    p.name: p
    for p in (
        FormatPreset("custom", 800, 600, "Custom"),
        FormatPreset("A1", 2384, 3370, "A1 (594 × 841 mm)"),
        FormatPreset("A2", 1684, 2384, "A2 (420 × 594 mm)"),
        FormatPreset("A3", 1191, 1684, "A3 (297 × 420 mm)"),
        FormatPreset("A4", 842, 1191, "A4 (210 × 297 mm)"),
    )
}


def apply_format(
    settings: GridSettings,
    name: str,
    *,
    portrait: bool | None = None,
) -> GridSettings:
    """プリセット寸法を適用した設定を返す。

    Parameters
    ----------
    settings : GridSettings
        元の設定。
    name : str
        `FORMAT_PRESETS` のキー（大文字小文字は区別しない）。
    portrait : bool or None, optional
        None ならプリセットの向きのまま。True/False なら縦/横に揃える。

    Raises
    ------
    ValueError
        未知のプリセット名の場合。
    """

    key = {k.lower(): k for k in FORMAT_PRESETS}.get(str(name).strip().lower())
    if key is None:
        raise ValueError(
            f"未知のフォーマットです: got={name!r} (choices={tuple(FORMAT_PRESETS)})"
        )
    preset = FORMAT_PRESETS[key]
    out = settings.replace(width=preset.width, height=preset.height)
    if portrait is None:
        return out
    return with_orientation(out, portrait=bool(portrait))


__all__ = ["FORMAT_PRESETS", "FormatPreset", "apply_format"]
