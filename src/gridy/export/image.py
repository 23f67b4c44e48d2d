"""
どこで: `src/gridy/export/image.py`。
何を: プリミティブ列を Pillow のラスタ面へ描画し、プレビュー画像や PNG として返す/保存する。
なぜ: 対話プレビュー（1x・スムージング ON）と印刷向け書き出し（4x・スムージング OFF）を同じ描画経路で扱うため。
"""

from __future__ import annotations

import io
import logging
import math
from collections.abc import Iterable, Sequence
from pathlib import Path

from PIL import Image, ImageDraw

from gridy.core.generator import generate
from gridy.core.output_paths import output_path_for_settings
from gridy.core.primitives import (
    Background,
    Circle,
    LineSegment,
    Polyline,
    Primitive,
    is_axis_aligned,
)
from gridy.core.runtime_config import runtime_config
from gridy.core.settings import GridSettings

logger = logging.getLogger(__name__)

# 1x を 75dpi 相当とみなす（4x で 300dpi）。PNG の pHYs に書き込む。
PNG_BASE_DPI = 75

# ピクセル中心へ揃える種別。軸平行線だけで構成される方眼に限定する。
_PIXEL_SNAP_GRID_TYPES = frozenset({"square"})


class RenderSurfaceError(RuntimeError):
    """要求サイズのラスタ面を確保できない場合の例外。"""


def pixel_align(value: float) -> float:
    """座標を「最も近い整数 + 0.5」（ピクセル中心）へ揃えて返す。"""

    return math.floor(float(value) + 0.5) + 0.5


def snap_primitives(
    primitives: Iterable[Primitive],
    settings: GridSettings,
) -> tuple[Primitive, ...]:
    """方眼の軸平行線を、ピクセル中心へ揃えたプリミティブ列にして返す。

    Notes
    -----
    - 垂直線は x、水平線は y だけを揃える（線の伸びる方向の端点は変えない）。
    - square 以外の種別、および軸平行でない線・円・折れ線はそのまま返す。
    """

    items = tuple(primitives)
    if settings.grid_type not in _PIXEL_SNAP_GRID_TYPES:
        return items

    out: list[Primitive] = []
    for p in items:
        if not isinstance(p, LineSegment) or not is_axis_aligned(p):
            out.append(p)
            continue
        (x0, y0), (x1, y1) = p.start, p.end
        if x0 == x1 and y0 != y1:
            x = pixel_align(x0)
            out.append(_with_points(p, (x, y0), (x, y1)))
        elif y0 == y1 and x0 != x1:
            y = pixel_align(y0)
            out.append(_with_points(p, (x0, y), (x1, y)))
        else:
            out.append(p)
    return tuple(out)


def _with_points(
    segment: LineSegment,
    start: tuple[float, float],
    end: tuple[float, float],
) -> LineSegment:
    return LineSegment(
        start=start,
        end=end,
        color=segment.color,
        thickness=segment.thickness,
        layer=segment.layer,
    )


def _device_width(thickness: float, factor: float) -> int:
    """論理線幅をデバイスピクセルの整数線幅へ変換する（最小 1px）。"""

    return max(1, int(round(float(thickness) * float(factor))))


def _new_surface(width: int, height: int, *, max_pixels: int) -> Image.Image:
    """透明な RGBA ラスタ面を確保して返す。"""

    if width <= 0 or height <= 0:
        raise RenderSurfaceError(f"ラスタ面のサイズが不正です: got={width}x{height}")
    n_pixels = int(width) * int(height)
    if n_pixels > int(max_pixels):
        raise RenderSurfaceError(
            f"ラスタ面が大きすぎます: {width}x{height} ({n_pixels} px > max_pixels={max_pixels})"
        )
    try:
        return Image.new("RGBA", (int(width), int(height)), (0, 0, 0, 0))
    except (MemoryError, ValueError, OverflowError) as exc:
        raise RenderSurfaceError(f"ラスタ面を確保できません: {width}x{height}") from exc


def _ellipse_bbox(cx: float, cy: float, radius: float) -> list[float]:
    """デバイス座標の円 `[cx-r, cx+r)` を Pillow の bbox（右下端を含む）へ変換する。"""

    x1 = max(cx - radius, cx + radius - 1.0)
    y1 = max(cy - radius, cy + radius - 1.0)
    return [cx - radius, cy - radius, x1, y1]


def _draw_primitive(draw: ImageDraw.ImageDraw, p: Primitive, factor: float) -> None:
    f = float(factor)
    if isinstance(p, Background):
        draw.rectangle(
            [0, 0, int(math.ceil(p.width * f)) - 1, int(math.ceil(p.height * f)) - 1],
            fill=p.color,
        )
        return

    if isinstance(p, LineSegment):
        (x0, y0), (x1, y1) = p.start, p.end
        draw.line(
            [(x0 * f, y0 * f), (x1 * f, y1 * f)],
            fill=p.color,
            width=_device_width(p.thickness, f),
        )
        return

    if isinstance(p, Circle):
        cx, cy = p.center
        r = float(p.radius) * f
        if p.fill:
            draw.ellipse(_ellipse_bbox(cx * f, cy * f, r), fill=p.color)
            return
        # Pillow は bbox を外周として内側へ線幅ぶん塗るので、外周を r + w/2 に置く。
        w = _device_width(p.thickness, f)
        draw.ellipse(_ellipse_bbox(cx * f, cy * f, r + 0.5 * w), outline=p.color, width=w)
        return

    if isinstance(p, Polyline):
        points = [(x * f, y * f) for x, y in p.points]
        if len(points) < 2:
            return
        if p.closed:
            points.append(points[0])
        draw.line(points, fill=p.color, width=_device_width(p.thickness, f), joint="curve")
        return

    raise TypeError(f"未対応のプリミティブです: {type(p)!r}")


def render_raster(
    primitives: Sequence[Primitive],
    settings: GridSettings,
    *,
    scale: int = 1,
    smoothing: bool = True,
    pixel_snap: bool = False,
    supersample: int | None = None,
    max_pixels: int | None = None,
) -> Image.Image:
    """プリミティブ列をラスタ画像へ描画して返す。

    Parameters
    ----------
    primitives : Sequence[Primitive]
        `generate()` の出力。先頭から順に描く（後のものが上に重なる）。
    settings : GridSettings
        キャンバス寸法と種別の参照元。
    scale : int, optional
        ピクセル倍率。出力サイズは `(width*scale, height*scale)`。
    smoothing : bool, optional
        True なら `supersample` 倍で描いて Lanczos 縮小する（アンチエイリアス）。
        False なら倍率そのままで描く（ジャギーは残るが線がぼけない）。
    pixel_snap : bool, optional
        True なら square の軸平行線をピクセル中心へ揃える（`snap_primitives()`）。
    supersample : int or None, optional
        スムージング時の超解像倍率。None なら `config.yaml` の `preview.supersample`。
    max_pixels : int or None, optional
        確保するラスタ面の上限ピクセル数。None なら `config.yaml` の `export.png.max_pixels`。

    Returns
    -------
    PIL.Image.Image
        RGBA 画像。背景プリミティブが無い場合は透明。

    Raises
    ------
    RenderSurfaceError
        ラスタ面を確保できない場合。部分的な画像は返さない。
    """

    scale_i = int(scale)
    if scale_i < 1:
        raise ValueError(f"scale は 1 以上の整数である必要があります: got={scale!r}")

    if supersample is None or max_pixels is None:
        cfg = runtime_config()
        if supersample is None:
            supersample = cfg.preview_supersample
        if max_pixels is None:
            max_pixels = cfg.png.max_pixels

    ss = max(1, int(supersample)) if smoothing else 1
    factor = scale_i * ss
    out_size = (int(settings.width) * scale_i, int(settings.height) * scale_i)

    items = snap_primitives(primitives, settings) if pixel_snap else tuple(primitives)

    image = _new_surface(out_size[0] * ss, out_size[1] * ss, max_pixels=int(max_pixels))
    draw = ImageDraw.Draw(image)
    for p in items:
        _draw_primitive(draw, p, factor)

    if ss > 1:
        image = image.resize(out_size, Image.Resampling.LANCZOS)
    return image


def render_preview(settings: GridSettings) -> Image.Image:
    """対話プレビュー用（1x・スムージング ON）の画像を返す。"""

    return render_raster(generate(settings), settings, scale=1, smoothing=True)


def encode_png(image: Image.Image, *, scale: int = 1) -> bytes:
    """画像を PNG バイト列へエンコードして返す。"""

    dpi = PNG_BASE_DPI * int(scale)
    buf = io.BytesIO()
    image.save(buf, format="PNG", dpi=(dpi, dpi))
    return buf.getvalue()


def export_image(
    settings: GridSettings,
    path: str | Path | None = None,
    *,
    scale: int | None = None,
    smoothing: bool | None = None,
    pixel_snap: bool | None = None,
) -> Path:
    """設定値から PNG を生成して保存する。

    Parameters
    ----------
    settings : GridSettings
        出力対象の設定。
    path : str or Path or None, optional
        出力先。None なら `output/png/grid-<type>-<W>x<H>-300dpi.png`。
    scale, smoothing, pixel_snap : optional
        None の場合は `config.yaml` の `export.png` の値を使う（既定 4 / False / True）。

    Returns
    -------
    Path
        保存先パス。

    Notes
    -----
    画像全体を PNG バイト列へエンコードし終えてからファイルへ書き込む。
    描画や確保に失敗した場合、ファイルは作られない。
    """

    cfg = runtime_config().png
    scale_i = int(cfg.scale if scale is None else scale)
    smooth = bool(cfg.smoothing if smoothing is None else smoothing)
    snap = bool(cfg.pixel_snap if pixel_snap is None else pixel_snap)

    out_path = output_path_for_settings(settings, "png") if path is None else Path(path)

    image = render_raster(
        generate(settings),
        settings,
        scale=scale_i,
        smoothing=smooth,
        pixel_snap=snap,
    )
    blob = encode_png(image, scale=scale_i)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(blob)
    logger.debug("export_image: %s (%dx%d)", out_path, image.width, image.height)
    return out_path


__all__ = [
    "PNG_BASE_DPI",
    "RenderSurfaceError",
    "encode_png",
    "export_image",
    "pixel_align",
    "render_preview",
    "render_raster",
    "snap_primitives",
]
