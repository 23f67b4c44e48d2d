"""generate() の順序・件数・レイヤ無効化の振る舞いテスト。"""

from __future__ import annotations

import math

import pytest

from gridy.core.generator import generate
from gridy.core.primitives import (
    Background,
    Circle,
    LineSegment,
    Polyline,
    count_by_layer,
)
from gridy.core.settings import GRID_TYPES, GridSettings


def _vertical(p: object) -> bool:
    return isinstance(p, LineSegment) and p.start[0] == p.end[0]


def _horizontal(p: object) -> bool:
    return isinstance(p, LineSegment) and p.start[1] == p.end[1]


def _coords(p: object) -> list[float]:
    if isinstance(p, LineSegment):
        return [*p.start, *p.end]
    if isinstance(p, Circle):
        return [*p.center, p.radius]
    if isinstance(p, Polyline):
        return [v for xy in p.points for v in xy]
    return []


def test_square_800x600_counts_per_layer() -> None:
    prims = generate(GridSettings())

    assert isinstance(prims[0], Background)
    minor = [p for p in prims if not isinstance(p, Background) and p.layer == "minor"]
    major = [p for p in prims if not isinstance(p, Background) and p.layer == "major"]

    assert sum(map(_vertical, minor)) == 41
    assert sum(map(_horizontal, minor)) == 31
    assert sum(map(_vertical, major)) == 9
    assert sum(map(_horizontal, major)) == 7
    assert len(prims) == 1 + 72 + 16


@pytest.mark.parametrize("step", [7.0, 20.0, 33.3, 64.0, 800.0])
def test_square_line_count_follows_floor_formula(step: float) -> None:
    s = GridSettings(width=800, height=600, minor_step=step, show_major_grid=False)
    prims = [p for p in generate(s) if isinstance(p, LineSegment)]

    assert sum(map(_vertical, prims)) == math.floor(800 / step) + 1
    assert sum(map(_horizontal, prims)) == math.floor(600 / step) + 1


@pytest.mark.parametrize("step", [0.0, -5.0, float("nan")])
def test_non_positive_minor_step_yields_no_minor_primitives(step: float) -> None:
    prims = generate(GridSettings(minor_step=step))

    counts = count_by_layer(prims)
    assert "minor" not in counts
    assert counts["major"] == 16


def test_zero_thickness_disables_layer() -> None:
    prims = generate(GridSettings(grid_type="dotted", major_thickness=0.0))
    assert "major" not in count_by_layer(prims)


@pytest.mark.parametrize("grid_type", GRID_TYPES)
def test_both_layers_hidden_leaves_only_background(grid_type: str) -> None:
    s = GridSettings(grid_type=grid_type, show_minor_grid=False, show_major_grid=False)
    assert generate(s) == (Background(width=800.0, height=600.0),)
    assert generate(s.replace(white_background=False)) == ()


@pytest.mark.parametrize("grid_type", GRID_TYPES)
def test_generate_is_deterministic(grid_type: str) -> None:
    s = GridSettings(grid_type=grid_type, width=640, height=480, minor_step=17.5)
    assert generate(s) == generate(s)


@pytest.mark.parametrize("grid_type", GRID_TYPES)
def test_minor_layer_precedes_major_layer(grid_type: str) -> None:
    prims = generate(GridSettings(grid_type=grid_type))
    layers = [p.layer for p in prims if not isinstance(p, Background)]

    assert layers, grid_type
    assert layers == sorted(layers, key=("minor", "major").index)
    assert sum(isinstance(p, Background) for p in prims) == 1
    assert isinstance(prims[0], Background)


@pytest.mark.parametrize("grid_type", GRID_TYPES)
@pytest.mark.parametrize("size", [(100, 100), (801, 333), (5000, 120)])
def test_all_coordinates_are_finite(grid_type: str, size: tuple[int, int]) -> None:
    w, h = size
    s = GridSettings(grid_type=grid_type, width=w, height=h, minor_step=13.0, major_step=91.0)
    for p in generate(s):
        assert all(math.isfinite(v) for v in _coords(p)), p


def test_layer_style_is_applied_to_primitives() -> None:
    s = GridSettings(
        minor_color="#112233",
        minor_thickness=0.75,
        major_color="#445566",
        major_thickness=2.0,
    )
    for p in generate(s):
        if isinstance(p, Background):
            continue
        if p.layer == "minor":
            assert (p.color, p.thickness) == ("#112233", 0.75)
        else:
            assert (p.color, p.thickness) == ("#445566", 2.0)
