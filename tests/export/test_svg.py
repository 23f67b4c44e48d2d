"""SVG 直列化のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from gridy.core.generator import generate
from gridy.core.primitives import Circle, LineSegment, Polyline
from gridy.core.runtime_config import set_config_path
from gridy.core.settings import GridSettings
from gridy.export.image import snap_primitives
from gridy.export.svg import SVG_NS, _fmt_num, export_svg, render_svg, svg_element

_NS = {"svg": SVG_NS}


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    yield
    set_config_path(None)


def _parse(settings: GridSettings) -> ET.Element:
    return ET.fromstring(render_svg(generate(settings), settings).encode("utf-8"))


def test_root_dimensions_and_viewbox() -> None:
    root = _parse(GridSettings(width=842, height=1191))
    assert root.tag == f"{{{SVG_NS}}}svg"
    assert root.get("width") == "842"
    assert root.get("height") == "1191"
    assert root.get("viewBox") == "0 0 842 1191"


def test_background_then_layer_groups() -> None:
    root = _parse(GridSettings())
    children = list(root)

    assert children[0].tag == f"{{{SVG_NS}}}rect"
    assert children[0].get("fill") == "#ffffff"
    assert [c.get("id") for c in children[1:]] == ["minor", "major"]
    assert len(children[1].findall("svg:line", _NS)) == 72
    assert len(children[2].findall("svg:line", _NS)) == 16


def test_no_background_and_hidden_layers() -> None:
    root = _parse(GridSettings(white_background=False, show_minor_grid=False))
    assert [c.get("id") for c in root] == ["major"]

    root = _parse(GridSettings(show_minor_grid=False, show_major_grid=False))
    assert len(list(root)) == 1


def test_strokes_do_not_scale_with_viewbox() -> None:
    root = _parse(GridSettings(grid_type="polar", width=400, height=400, minor_step=30.0))
    stroked = [e for e in root.iter() if e.get("stroke") is not None]
    assert stroked
    assert all(e.get("vector-effect") == "non-scaling-stroke" for e in stroked)


def test_circles_and_polylines() -> None:
    polar = _parse(GridSettings(grid_type="polar", width=400, height=400, minor_step=30.0))
    rings = polar.findall(".//svg:circle", _NS)
    assert len(rings) == 6 + 2
    assert all(r.get("fill") == "none" for r in rings)

    dotted = _parse(GridSettings(grid_type="dotted", width=100, height=100, minor_step=50.0))
    dots = dotted.findall(".//svg:circle", _NS)
    assert len(dots) == 9 + 4
    assert all(d.get("fill") != "none" and d.get("stroke") is None for d in dots)

    tri = GridSettings(grid_type="triangular", show_major_grid=False)
    n_polylines = sum(isinstance(p, Polyline) for p in generate(tri))
    assert len(_parse(tri).findall(".//svg:polyline", _NS)) == n_polylines


def test_line_coordinates_match_raster_geometry() -> None:
    s = GridSettings(width=200, height=100)
    prims = [p for p in generate(s) if isinstance(p, LineSegment)]
    snapped = [p for p in snap_primitives(generate(s), s) if isinstance(p, LineSegment)]
    lines = _parse(s).findall(".//svg:line", _NS)

    assert len(lines) == len(prims)
    for el, p, q in zip(lines, prims, snapped):
        x1, y1 = float(el.get("x1")), float(el.get("y1"))
        assert (x1, y1) == p.start
        # ラスタ側はピクセル中心へ 0.5 だけずれる。
        assert abs(q.start[0] - x1) in (0.0, 0.5)
        assert abs(q.start[1] - y1) in (0.0, 0.5)


def test_closed_polyline_becomes_polygon() -> None:
    p = Polyline(points=((0.0, 0.0), (10.0, 0.0), (5.0, 8.5)), color="#000", thickness=1.0, layer="minor", closed=True)
    assert svg_element(p).startswith('<polygon points="0,0 10,0 5,8.5"')
    c = Circle(center=(1.0, 2.0), radius=3.0, color="#abc", fill=False, thickness=0.5, layer="major")
    assert 'stroke-width="0.5"' in svg_element(c)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(20.0, "20"), (0.5, "0.5"), (-0.0001, "0"), (1 / 3, "0.333"), (1191, "1191"), (-2.25, "-2.25")],
)
def test_fmt_num(value: float, expected: str) -> None:
    assert _fmt_num(value) == expected


def test_render_svg_is_deterministic() -> None:
    s = GridSettings(grid_type="isometric")
    assert render_svg(generate(s), s) == render_svg(generate(s), s)


def test_export_svg_default_and_explicit_path(tmp_path: Path) -> None:
    s = GridSettings()
    out = export_svg(s)
    assert out == Path("data/output/svg/grid-square-800x600-vector.svg")
    text = (tmp_path / out).read_text(encoding="utf-8")
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert text.endswith("</svg>\n")

    explicit = export_svg(s, tmp_path / "a" / "b.svg")
    assert explicit.read_text(encoding="utf-8") == text
