"""config.yaml の探索・上書き・検証のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from gridy.core.runtime_config import output_root_dir, runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    yield
    set_config_path(None)


def test_packaged_defaults() -> None:
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.output_dir == Path("data/output")
    assert (cfg.canvas_min_size, cfg.canvas_max_size) == (100, 5000)
    assert cfg.preview_supersample == 4
    assert cfg.png.scale == 4
    assert cfg.png.smoothing is False
    assert cfg.png.pixel_snap is True
    assert cfg.png.max_pixels > 0
    assert output_root_dir() == Path("data/output")


def test_runtime_config_is_cached_until_path_changes(tmp_path: Path) -> None:
    first = runtime_config()
    assert runtime_config() is first

    p = tmp_path / "c.yaml"
    p.write_text("version: 1\n", encoding="utf-8")
    set_config_path(p)
    assert runtime_config() is not first
    assert runtime_config().config_path == p


def test_explicit_config_replaces_top_level_sections(tmp_path: Path) -> None:
    p = tmp_path / "config.yaml"
    p.write_text(
        "\n".join(
            [
                "version: 1",
                "paths:",
                "  output_dir: out",
                "export:",
                "  png:",
                "    scale: 2",
                "    smoothing: true",
                "    pixel_snap: false",
                "    max_pixels: 1000",
                "",
            ]
        ),
        encoding="utf-8",
    )
    set_config_path(p)
    cfg = runtime_config()
    assert cfg.output_dir == Path("out")
    assert (cfg.png.scale, cfg.png.smoothing, cfg.png.pixel_snap, cfg.png.max_pixels) == (
        2,
        True,
        False,
        1000,
    )
    # 指定していないセクションは同梱デフォルト。
    assert cfg.canvas_max_size == 5000


def test_discovered_config_in_cwd(tmp_path: Path) -> None:
    d = tmp_path / ".gridy"
    d.mkdir()
    (d / "config.yaml").write_text("version: 1\npreview:\n  supersample: 2\n", encoding="utf-8")
    cfg = runtime_config()
    assert cfg.preview_supersample == 2
    assert cfg.config_path == Path.cwd() / ".gridy" / "config.yaml"


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    set_config_path(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "- 1\n- 2\n",
        "version: 1\nexport:\n  png:\n    scale: 4\n    smoothing: maybe\n    pixel_snap: true\n    max_pixels: 10\n",
        "version: 1\npaths: []\n",
    ],
)
def test_invalid_config_raises_runtime_error(tmp_path: Path, text: str) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text(text, encoding="utf-8")
    set_config_path(p)
    with pytest.raises(RuntimeError):
        runtime_config()


def test_invalid_canvas_range_raises_value_error(tmp_path: Path) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text("version: 1\ncanvas:\n  min_size: 500\n  max_size: 100\n", encoding="utf-8")
    set_config_path(p)
    with pytest.raises(ValueError):
        runtime_config()
