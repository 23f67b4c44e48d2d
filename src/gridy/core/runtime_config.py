# どこで: `src/gridy/core/runtime_config.py`。
# 何を: 出力先・キャンバス範囲・PNG 書き出し既定値を持つ config.yaml を読み、`RuntimeConfig` にして返す。
# なぜ: 倍率/スムージング/出力先などを、コードを触らずにユーザーが差し替えられるようにするため。

"""gridy の実行時設定。

読み込みの流れ
--------------
1. 同梱 `gridy/resource/default_config.yaml` を土台にする。
2. `./.gridy/config.yaml` → `~/.config/gridy/config.yaml` の順で最初に見つかったものを重ねる。
3. `set_config_path()` で指定されたファイルがあれば最後に重ねる。

重ね合わせはトップレベルキー単位の置換（`export:` を書けば `export` 全体が入れ替わる）。
結果はプロセス内で 1 つだけ保持し、`set_config_path()` を呼ぶと作り直す。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

_SUPPORTED_VERSION = 1


@dataclass(frozen=True, slots=True)
class PngExportConfig:
    """`export.png` セクション。"""

    scale: int
    smoothing: bool
    pixel_snap: bool
    max_pixels: int


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """解決済みの実行時設定。

    Attributes
    ----------
    config_path:
        最後に重ねたユーザー設定ファイル。同梱デフォルトだけなら None。
    output_dir:
        PNG/SVG の既定出力ルート。
    canvas_min_size, canvas_max_size:
        `validate_settings()` に渡す width/height の許容範囲。
    preview_supersample:
        スムージング ON のラスタ描画での超解像倍率。
    png:
        PNG 書き出しの既定値。
    """

    config_path: Path | None
    output_dir: Path
    canvas_min_size: int
    canvas_max_size: int
    preview_supersample: int
    png: PngExportConfig


_explicit_path: Path | None = None
_cached: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示的に使う config.yaml を指定する（None で解除）。キャッシュは破棄される。"""

    global _explicit_path, _cached
    _explicit_path = None if path is None else Path(str(path)).expanduser()
    _cached = None


def _search_paths() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".gridy" / "config.yaml",
        Path.home() / ".config" / "gridy" / "config.yaml",
    )


def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    """YAML 本文をパースし、トップレベル mapping を返す（空文書は `{}`）。"""

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml を解釈できません: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(
            f"config.yaml のトップレベルは mapping である必要があります: source={source}"
        )
    return dict(data)


def _read_packaged_defaults() -> dict[str, Any]:
    blob = resources.files("gridy").joinpath("resource", "default_config.yaml")
    return _parse_yaml(blob.read_text(encoding="utf-8"), source="<packaged default_config.yaml>")


class _Section:
    """mapping 1 つぶんを、キーのパス付きエラーで型変換しながら読む。"""

    def __init__(self, data: Any, prefix: str) -> None:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise RuntimeError(f"{prefix} は mapping である必要があります: got={data!r}")
        self._data = data
        self._prefix = prefix

    def _key(self, name: str) -> str:
        return f"{self._prefix}.{name}" if self._prefix else name

    def _raw(self, name: str) -> Any:
        value = self._data.get(name)
        if value is None:
            raise RuntimeError(
                f"{self._key(name)} が未設定です（同梱 default_config.yaml を確認してください）"
            )
        return value

    def section(self, name: str) -> "_Section":
        return _Section(self._data.get(name), self._key(name))

    def integer(self, name: str, *, minimum: int | None = None) -> int:
        value = self._raw(name)
        if isinstance(value, bool):
            raise RuntimeError(f"{self._key(name)} は整数である必要があります: got={value!r}")
        try:
            out = int(value)
        except (TypeError, ValueError) as exc:
            raise RuntimeError(
                f"{self._key(name)} は整数である必要があります: got={value!r}"
            ) from exc
        if minimum is not None and out < minimum:
            raise ValueError(f"{self._key(name)} は {minimum} 以上である必要があります: got={out}")
        return out

    def flag(self, name: str) -> bool:
        value = self._raw(name)
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise RuntimeError(f"{self._key(name)} は bool である必要があります: got={value!r}")

    def path(self, name: str) -> Path:
        text = str(self._raw(name)).strip()
        if not text:
            raise RuntimeError(f"{self._key(name)} が空です")
        return Path(os.path.expandvars(os.path.expanduser(text)))


def _build(payload: dict[str, Any], *, config_path: Path | None) -> RuntimeConfig:
    root = _Section(payload, "")
    version = root.integer("version")
    if version != _SUPPORTED_VERSION:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    canvas = root.section("canvas")
    min_size = canvas.integer("min_size", minimum=1)
    max_size = canvas.integer("max_size")
    if max_size < min_size:
        raise ValueError(
            f"canvas.max_size は canvas.min_size 以上である必要があります: got=({min_size}, {max_size})"
        )

    png = root.section("export").section("png")
    return RuntimeConfig(
        config_path=config_path,
        output_dir=root.section("paths").path("output_dir"),
        canvas_min_size=min_size,
        canvas_max_size=max_size,
        preview_supersample=root.section("preview").integer("supersample", minimum=1),
        png=PngExportConfig(
            scale=png.integer("scale", minimum=1),
            smoothing=png.flag("smoothing"),
            pixel_snap=png.flag("pixel_snap"),
            max_pixels=png.integer("max_pixels", minimum=1),
        ),
    )


def runtime_config() -> RuntimeConfig:
    """現在の `RuntimeConfig` を返す（初回のみファイルを読む）。

    Raises
    ------
    FileNotFoundError
        `set_config_path()` で指定したファイルが存在しない場合。
    RuntimeError
        YAML が壊れている、または値の型が合わない場合。
    ValueError
        値の範囲が不正な場合。
    """

    global _cached
    if _cached is not None:
        return _cached

    explicit = _explicit_path
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")
    discovered = next((p for p in _search_paths() if p.is_file()), None)

    payload = _read_packaged_defaults()
    for layer in (discovered, explicit):
        if layer is not None:
            payload.update(_parse_yaml(layer.read_text(encoding="utf-8"), source=str(layer)))

    _cached = _build(payload, config_path=explicit or discovered)
    return _cached


def output_root_dir() -> Path:
    """PNG/SVG の既定出力ルートを返す。"""

    return runtime_config().output_dir


__all__ = [
    "PngExportConfig",
    "RuntimeConfig",
    "output_root_dir",
    "runtime_config",
    "set_config_path",
]
