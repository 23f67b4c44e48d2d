"""isometric グリッドのテスト。"""

from __future__ import annotations

import math

import pytest

from gridy.core.generator import generate
from gridy.core.primitives import LineSegment
from gridy.core.settings import GridSettings

_TAN30 = math.tan(math.radians(30.0))


def _minor_lines(w: int, h: int, step: float) -> list[LineSegment]:
    s = GridSettings(
        grid_type="isometric",
        width=w,
        height=h,
        minor_step=step,
        show_major_grid=False,
        white_background=False,
    )
    prims = generate(s)
    assert all(isinstance(p, LineSegment) for p in prims)
    return list(prims)


def _slope(p: LineSegment) -> float | None:
    dx = p.end[0] - p.start[0]
    if dx == 0:
        return None
    return (p.end[1] - p.start[1]) / dx


@pytest.mark.parametrize(("w", "h", "step"), [(300, 200, 20.0), (800, 600, 20.0), (120, 900, 37.0)])
def test_segments_stay_inside_canvas(w: int, h: int, step: float) -> None:
    for p in _minor_lines(w, h, step):
        for x, y in (p.start, p.end):
            assert -1e-6 <= x <= w + 1e-6
            assert -1e-6 <= y <= h + 1e-6


def test_vertical_lines_then_two_diagonal_families() -> None:
    lines = _minor_lines(300, 200, 20.0)
    slopes = [_slope(p) for p in lines]

    n_vertical = math.floor(300 / 20) + 1
    assert slopes[:n_vertical] == [None] * n_vertical
    diag = slopes[n_vertical:]
    assert all(s is not None and abs(abs(s) - _TAN30) < 1e-9 for s in diag)

    first_neg = next(i for i, s in enumerate(diag) if s < 0)
    assert all(s > 0 for s in diag[:first_neg])
    assert all(s < 0 for s in diag[first_neg:])


def test_diagonals_reach_every_canvas_edge() -> None:
    w, h = 300, 200
    diag = [p for p in _minor_lines(w, h, 20.0) if _slope(p) is not None]
    xs = [v for p in diag for v in (p.start[0], p.end[0])]
    ys = [v for p in diag for v in (p.start[1], p.end[1])]
    assert min(xs) == pytest.approx(0.0)
    assert max(xs) == pytest.approx(w)
    assert min(ys) == pytest.approx(0.0)
    assert max(ys) == pytest.approx(h)


def test_diagonals_meet_vertical_lines_on_a_triangle_lattice() -> None:
    step = 20.0
    spacing = step / math.cos(math.radians(30.0))
    diag = [p for p in _minor_lines(300, 200, step) if (_slope(p) or 0) > 0]
    # 傾きが正の斜線は x=0 での切片が spacing の整数倍。
    for p in diag:
        c = p.start[1] - _slope(p) * p.start[0]
        k = c / spacing
        assert abs(k - round(k)) < 1e-6


def test_non_positive_step_yields_nothing() -> None:
    s = GridSettings(grid_type="isometric", minor_step=0.0, major_step=-1.0, white_background=False)
    assert generate(s) == ()
