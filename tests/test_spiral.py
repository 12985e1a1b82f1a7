import math

import pytest

from spiralcoil.coil import CoilSpec
from spiralcoil.spiral import SpiralSampler, raw_point, alignment_angle, sample_step, sample_radii, STEP_DENSITY
from spiralcoil.utils import rotate_point, DegenerateGeometryWarning


def test_round_trip_sampler():
    spec = CoilSpec(turns=5, inner_radius=2, spacing=0.5, width=0.25)
    sampler = SpiralSampler.for_coil(spec)

    # one inner via of size 0.8 with a gap of half a via size
    assert sampler.start == pytest.approx(2.4)
    assert sampler.end == pytest.approx(4.9)
    assert sampler.step == pytest.approx(0.02 / 12)
    assert sampler.segment_count == 1500

    radii = sampler.radii()
    assert radii[0] == pytest.approx(2.4)
    assert radii[-1] == pytest.approx(4.9)


@pytest.mark.parametrize('layers, start', [(1, 0.4), (2, 0.4), (3, 0.8*2*2/3), (4, 0.8*2*2/3), (5, 0.8*3*2/3)])
def test_start_radius(layers, start):
    sampler = SpiralSampler.for_coil(CoilSpec(turns=3, layers=layers))
    assert sampler.start == pytest.approx(start)
    assert sampler.end == pytest.approx(start + 3*0.5)


def test_raw_point():
    x, y = raw_point(1.0, 0.5)
    assert (x, y) == pytest.approx((1.0, 0.0), abs=1e-12)

    x, y = raw_point(1.125, 0.5)
    assert (x, y) == pytest.approx((0.0, 1.125), abs=1e-12)

    for r in [0.3, 1.7, 4.2]:
        assert math.hypot(*raw_point(r, 0.35)) == pytest.approx(r)


@pytest.mark.parametrize('end, spacing', [(4.9, 0.5), (3.0, 0.35), (1.234, 0.4), (7.1, 0.6)])
def test_alignment_angle(end, spacing):
    angle = alignment_angle(end, spacing)
    assert -math.pi <= angle <= math.pi

    x, y = rotate_point(*raw_point(end, spacing), angle)
    assert x == pytest.approx(end)
    assert y == pytest.approx(0, abs=1e-9)


def test_alignment_angle_degenerate():
    assert alignment_angle(0, 0.5) == 0


def test_sample_step():
    assert sample_step(2.4, 5, 0.5) == pytest.approx(STEP_DENSITY / 12)
    # capped at 32 samples per turn
    assert sample_step(0.01, 1, 0.5) == pytest.approx(0.5 / 32)
    assert sample_step(0, 10, 0.5) == pytest.approx(0.5 / 32)


def test_sample_radii():
    radii = sample_radii(1.0, 2.0, 0.25)
    assert radii == pytest.approx([1.0, 1.25, 1.5, 1.75, 2.0])

    radii = sample_radii(1.0, 2.1, 0.25)
    assert radii[-1] == pytest.approx(2.0)

    with pytest.warns(DegenerateGeometryWarning):
        radii = sample_radii(1.0, 1.1, 0.25)
    assert len(radii) == 2


def test_radii_monotonic():
    sampler = SpiralSampler.for_coil(CoilSpec(turns=3.5, layers=4, inner_radius=1))
    radii = sampler.radii(sampler.end + 0.3)
    assert all(b > a for a, b in zip(radii, radii[1:]))
    assert radii[-1] <= sampler.end + 0.3

    points = sampler.raw_points()
    assert len(points) == len(sampler.radii())
    assert [math.hypot(*p) for p in points] == pytest.approx(sampler.radii())
