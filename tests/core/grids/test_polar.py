"""polar グリッド（同心円 + 放射線）のテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from gridy.core.generator import generate
from gridy.core.grids.polar import FALLBACK_SPOKE_COUNT, ring_radii, spoke_angles_deg
from gridy.core.primitives import Background, Circle, LineSegment
from gridy.core.settings import GridSettings


def _polar(**kwargs) -> GridSettings:
    base = dict(grid_type="polar", width=400, height=400, minor_step=30.0)
    base.update(kwargs)
    return GridSettings(**base)


def test_minor_rings_and_spokes_400x400_step30() -> None:
    prims = [p for p in generate(_polar()) if getattr(p, "layer", None) == "minor"]
    rings = [p for p in prims if isinstance(p, Circle)]
    spokes = [p for p in prims if isinstance(p, LineSegment)]

    assert [r.radius for r in rings] == [30.0, 60.0, 90.0, 120.0, 150.0, 180.0]
    assert len(spokes) == 12
    assert all(not r.fill and r.center == (200.0, 200.0) for r in rings)
    for s in spokes:
        assert s.start == (200.0, 200.0)
        length = math.hypot(s.end[0] - s.start[0], s.end[1] - s.start[1])
        assert length == pytest.approx(200.0)


def test_rings_precede_spokes_and_major_rings_come_last() -> None:
    prims = [p for p in generate(_polar()) if not isinstance(p, Background)]
    kinds = [(p.layer, type(p).__name__) for p in prims]

    first_spoke = kinds.index(("minor", "LineSegment"))
    assert all(k == ("minor", "Circle") for k in kinds[:first_spoke])
    major = [p for p in prims if p.layer == "major"]
    assert [p.radius for p in major] == [100.0, 200.0]
    assert kinds[-2:] == [("major", "Circle"), ("major", "Circle")]


@pytest.mark.parametrize("step", [0.0, -10.0])
def test_non_positive_minor_step_keeps_fallback_spokes(step: float) -> None:
    prims = generate(_polar(minor_step=step, show_major_grid=False, white_background=False))

    assert not any(isinstance(p, Circle) for p in prims)
    assert len(prims) == FALLBACK_SPOKE_COUNT
    assert all(isinstance(p, LineSegment) for p in prims)


def test_hidden_or_zero_thickness_minor_has_no_spokes() -> None:
    assert generate(_polar(show_minor_grid=False, show_major_grid=False, white_background=False)) == ()
    assert generate(_polar(minor_thickness=0.0, show_major_grid=False, white_background=False)) == ()


def test_non_square_canvas_uses_shorter_half_extent() -> None:
    s = _polar(width=600, height=400, minor_step=50.0, show_major_grid=False)
    rings = [p for p in generate(s) if isinstance(p, Circle)]
    assert rings[-1].radius == 200.0
    assert rings[0].center == (300.0, 200.0)


def test_helpers() -> None:
    np.testing.assert_allclose(ring_radii(100.0, 25.0), [25.0, 50.0, 75.0, 100.0])
    assert ring_radii(100.0, 0.0).shape == (0,)
    assert spoke_angles_deg(45.0).tolist() == [0.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0]
    # 360 を割り切れない間隔でも 1 周ぶん（最後は 360 未満）。
    angles = spoke_angles_deg(50.0)
    assert len(angles) == 8 and angles[-1] == 350.0
    assert len(spoke_angles_deg(0.0)) == FALLBACK_SPOKE_COUNT
