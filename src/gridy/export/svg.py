"""
どこで: `src/gridy/export/svg.py`。
何を: プリミティブ列を SVG 文書（文字列）へ直列化し、必要ならファイルへ保存する。
なぜ: ラスタと同じジオメトリを、解像度に依存しないベクタとして書き出すため。

出力の約束
----------
- ルート `<svg>` は `width`/`height`/`viewBox` をキャンバス寸法ちょうどで持つ。
- 背景（あれば）→ minor の `<g>` → major の `<g>` の順。要素順は生成順を保つ。
- 線を持つ要素は `vector-effect="non-scaling-stroke"` を付ける。
  表示側が viewBox を拡縮しても stroke-width は変わらない。
- 数値は固定桁で丸めてから末尾の 0 を落とす（同じ入力 → 同じ文字列）。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from gridy.core.generator import generate
from gridy.core.output_paths import output_path_for_settings
from gridy.core.primitives import (
    Background,
    Circle,
    LineSegment,
    Polyline,
    Primitive,
)
from gridy.core.settings import GridSettings

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
_DECIMALS = 3
_STROKE_ATTRS = 'vector-effect="non-scaling-stroke"'


def _fmt_num(value: float, *, decimals: int = _DECIMALS) -> str:
    """数値を短い固定表現の文字列にして返す。

    `20.000` → `20`、`0.500` → `0.5`、`-0.000` → `0`。
    """

    text = f"{float(value):.{int(decimals)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def _escape_attr(text: str) -> str:
    return (
        str(text)
        .replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def _svg_background(p: Background) -> str:
    return (
        f'<rect x="0" y="0" width="{_fmt_num(p.width)}" height="{_fmt_num(p.height)}" '
        f'fill="{_escape_attr(p.color)}"/>'
    )


def _svg_line(p: LineSegment) -> str:
    (x1, y1), (x2, y2) = p.start, p.end
    return (
        f'<line x1="{_fmt_num(x1)}" y1="{_fmt_num(y1)}" '
        f'x2="{_fmt_num(x2)}" y2="{_fmt_num(y2)}" '
        f'stroke="{_escape_attr(p.color)}" stroke-width="{_fmt_num(p.thickness)}" '
        f"{_STROKE_ATTRS}/>"
    )


def _svg_circle(p: Circle) -> str:
    cx, cy = p.center
    head = f'<circle cx="{_fmt_num(cx)}" cy="{_fmt_num(cy)}" r="{_fmt_num(p.radius)}" '
    if p.fill:
        return head + f'fill="{_escape_attr(p.color)}"/>'
    return (
        head
        + f'fill="none" stroke="{_escape_attr(p.color)}" '
        + f'stroke-width="{_fmt_num(p.thickness)}" {_STROKE_ATTRS}/>'
    )


def _svg_polyline(p: Polyline) -> str:
    tag = "polygon" if p.closed else "polyline"
    points = " ".join(f"{_fmt_num(x)},{_fmt_num(y)}" for x, y in p.points)
    return (
        f'<{tag} points="{points}" fill="none" stroke="{_escape_attr(p.color)}" '
        f'stroke-width="{_fmt_num(p.thickness)}" stroke-linejoin="miter" {_STROKE_ATTRS}/>'
    )


def svg_element(p: Primitive) -> str:
    """プリミティブ 1 つを SVG 要素 1 つへ変換する。"""

    if isinstance(p, Background):
        return _svg_background(p)
    if isinstance(p, LineSegment):
        return _svg_line(p)
    if isinstance(p, Circle):
        return _svg_circle(p)
    if isinstance(p, Polyline):
        return _svg_polyline(p)
    raise TypeError(f"未対応のプリミティブです: {type(p)!r}")


def render_svg(primitives: Sequence[Primitive], settings: GridSettings) -> str:
    """プリミティブ列を SVG 文書の文字列にして返す。

    Parameters
    ----------
    primitives : Sequence[Primitive]
        `generate()` の出力。
    settings : GridSettings
        キャンバス寸法の参照元。

    Returns
    -------
    str
        XML 宣言付きの SVG 文書（末尾改行あり）。
    """

    w = _fmt_num(settings.width)
    h = _fmt_num(settings.height)
    lines: list[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (
            f'<svg xmlns="{SVG_NS}" width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
            'shape-rendering="crispEdges">'
        ),
    ]

    # レイヤが切り替わるたびに <g> を開き直す。生成順が minor → major なので各レイヤ 1 グループになる。
    current_layer: str | None = None
    for p in primitives:
        if isinstance(p, Background):
            lines.append(svg_element(p))
            continue
        if p.layer != current_layer:
            if current_layer is not None:
                lines.append("</g>")
            lines.append(
                f'<g id="{p.layer}" stroke-linecap="square" stroke-linejoin="miter">'
            )
            current_layer = p.layer
        lines.append(svg_element(p))
    if current_layer is not None:
        lines.append("</g>")

    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def export_svg(settings: GridSettings, path: str | Path | None = None) -> Path:
    """設定値から SVG を生成して保存する。

    Parameters
    ----------
    settings : GridSettings
        出力対象の設定。
    path : str or Path or None, optional
        出力先。None なら `output/svg/grid-<type>-<W>x<H>-vector.svg`。

    Returns
    -------
    Path
        保存先パス。
    """

    out_path = output_path_for_settings(settings, "svg") if path is None else Path(path)
    text = render_svg(generate(settings), settings)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text)
    logger.debug("export_svg: %s", out_path)
    return out_path


__all__ = ["SVG_NS", "export_svg", "render_svg", "svg_element"]
