# どこで: `src/gridy/__main__.py`。
# 何を: `python -m gridy ...` の CLI エントリポイントを提供する。
# なぜ: UI を立ち上げずに、設定値からの PNG/SVG 書き出しやランダム設定の生成を短い導線で行うため。

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from gridy.core.formats import FORMAT_PRESETS, apply_format
from gridy.core.randomize import random_settings
from gridy.core.runtime_config import set_config_path
from gridy.core.settings import GRID_TYPES, GridSettings, with_orientation

# CLI 引数名 → GridSettings フィールド名。
_SETTING_ARGS: tuple[tuple[str, str, type], ...] = (
    ("--width", "width", int),
    ("--height", "height", int),
    ("--minor-step", "minor_step", float),
    ("--major-step", "major_step", float),
    ("--minor-color", "minor_color", str),
    ("--major-color", "major_color", str),
    ("--minor-thickness", "minor_thickness", float),
    ("--major-thickness", "major_thickness", float),
)


def _add_settings_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--settings", type=Path, help="設定 JSON（snake_case / camelCase キー）")
    p.add_argument("--type", dest="grid_type", choices=GRID_TYPES, help="グリッド種別")
    for flag, dest, typ in _SETTING_ARGS:
        p.add_argument(flag, dest=dest, type=typ)
    p.add_argument("--no-background", dest="white_background", action="store_false", default=None)
    p.add_argument("--hide-minor", dest="show_minor_grid", action="store_false", default=None)
    p.add_argument("--hide-major", dest="show_major_grid", action="store_false", default=None)
    p.add_argument(
        "--format",
        dest="format_preset",
        help=f"用紙プリセット（{', '.join(FORMAT_PRESETS)}）",
    )
    orient = p.add_mutually_exclusive_group()
    orient.add_argument("--portrait", dest="portrait", action="store_true", default=None)
    orient.add_argument("--landscape", dest="portrait", action="store_false")


def _settings_from_args(args: argparse.Namespace) -> GridSettings:
    """JSON → プリセット → 個別引数 → 向き の順に適用した設定を返す。"""

    base: dict[str, Any] = {}
    if args.settings is not None:
        data = json.loads(Path(args.settings).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"設定 JSON は object である必要があります: {args.settings}")
        base = data
    settings = GridSettings.from_mapping(base)

    if args.format_preset:
        settings = apply_format(settings, args.format_preset)

    updates: dict[str, Any] = {}
    for name in (
        "grid_type",
        *(dest for _flag, dest, _typ in _SETTING_ARGS),
        "white_background",
        "show_minor_grid",
        "show_major_grid",
    ):
        value = getattr(args, name, None)
        if value is not None:
            updates[name] = value
    if updates:
        settings = settings.replace(**updates)

    if args.portrait is not None:
        settings = with_orientation(settings, portrait=bool(args.portrait))
    return settings


def _cmd_render(args: argparse.Namespace) -> int:
    from gridy.api import Export

    settings = _settings_from_args(args)
    fmts = ("png", "svg") if args.fmt == "both" else (args.fmt,)
    if args.out is not None and len(fmts) > 1:
        raise ValueError("--fmt both と --out は同時に指定できません（--out-dir を使ってください）")

    for fmt in fmts:
        path = args.out
        if path is None and args.out_dir is not None:
            from gridy.core.output_paths import output_path_for_settings

            path = output_path_for_settings(settings, fmt, output_dir=args.out_dir)
        exp = Export(
            settings,
            fmt,
            path,
            scale=args.scale,
            smoothing=args.smoothing,
        )
        print(exp.path)
    return 0


def _cmd_random(args: argparse.Namespace) -> int:
    base = _settings_from_args(args)
    settings = random_settings(base, seed=args.seed)
    print(json.dumps(settings.to_mapping(camel=bool(args.camel)), indent=2, ensure_ascii=False))
    return 0


def _cmd_list(_args: argparse.Namespace) -> int:
    print("grid types:")
    for name in GRID_TYPES:
        print(f"  {name}")
    print("formats:")
    for preset in FORMAT_PRESETS.values():
        print(f"  {preset.name:<8} {preset.width}x{preset.height}  {preset.label}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="python -m gridy")
    p.add_argument("--config", type=Path, help="config.yaml のパス")
    p.add_argument("-v", "--verbose", action="store_true", help="debug ログを表示する")
    sub = p.add_subparsers(dest="cmd", required=True)

    render = sub.add_parser("render", help="設定値からグリッドを PNG/SVG へ書き出す")
    _add_settings_arguments(render)
    render.add_argument("--fmt", choices=("png", "svg", "both"), default="png")
    render.add_argument("--out", type=Path, help="出力ファイルパス")
    render.add_argument("--out-dir", type=Path, help="出力ルート（既定は config の paths.output_dir）")
    render.add_argument("--scale", type=int, help="PNG の倍率（既定は config の export.png.scale）")
    smooth = render.add_mutually_exclusive_group()
    smooth.add_argument("--smoothing", dest="smoothing", action="store_true", default=None)
    smooth.add_argument("--no-smoothing", dest="smoothing", action="store_false")

    rnd = sub.add_parser("random", help="ランダムな設定を JSON で表示する")
    _add_settings_arguments(rnd)
    rnd.add_argument("--seed", type=int)
    rnd.add_argument("--camel", action="store_true", help="camelCase キーで出力する")

    sub.add_parser("list", help="グリッド種別と用紙プリセットを一覧表示する")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.config is not None:
        set_config_path(args.config)

    if args.cmd == "render":
        return _cmd_render(args)
    if args.cmd == "random":
        return _cmd_random(args)
    if args.cmd == "list":
        return _cmd_list(args)

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
