import math

import pytest

from spiralcoil.coil import CoilSpec
from spiralcoil.stackup import (inner_via_count, outer_via_count, via_gap, pair_index, layer_label, outer_via_index,
                                outer_via, Parity, ViaRing)


@pytest.mark.parametrize('layers, inner, outer', [(1, 1, 0), (2, 1, 0), (3, 2, 1), (4, 2, 1), (5, 3, 2), (6, 3, 2),
                                                  (7, 4, 3), (8, 4, 3)])
def test_via_counts(layers, inner, outer):
    assert inner_via_count(layers) == inner
    assert outer_via_count(layers) == outer


def test_via_gap():
    assert via_gap(1) == 1/2
    assert via_gap(2) == 1/2
    assert via_gap(3) == 2/3


def test_layer_labels():
    assert [layer_label(i, 1) for i in range(1)] == ['F.Cu']
    assert [layer_label(i, 2) for i in range(2)] == ['F.Cu', 'B.Cu']
    assert [layer_label(i, 4) for i in range(4)] == ['F.Cu', 'In1.Cu', 'In2.Cu', 'B.Cu']
    assert [pair_index(i) for i in range(6)] == [0, 0, 1, 1, 2, 2]


@pytest.mark.parametrize('layers, expected', [
    (1, [None]),
    (2, [None, None]),
    (3, [None, 0, 0]),
    (4, [None, 0, 0, None]),
    (5, [None, 0, 0, 1, 1]),
    (6, [None, 0, 0, 1, 1, None]),
    ])
def test_outer_via_index(layers, expected):
    assert [outer_via_index(i, layers) for i in range(layers)] == expected


def test_outer_via_odd():
    step, rot = 0.3, 0.1
    slots = [outer_via(i, 3, step, rot) for i in range(3)]
    assert all(s.parity == Parity.ODD for s in slots)
    assert [s.y_sign for s in slots] == [1, -1, 1]
    assert [s.angle for s in slots] == pytest.approx([-rot, step + rot, step - rot])

    # Vias are spread symmetrically around the coil's terminals at -rot
    assert [s.polar_angle for s in slots] == pytest.approx([-rot, -rot - step, -rot + step])


def test_outer_via_even():
    step = 0.3
    slots = [outer_via(i, 2, step) for i in range(2)]
    assert all(s.parity == Parity.EVEN for s in slots)
    assert [s.y_sign for s in slots] == [1, -1]
    assert [s.polar_angle for s in slots] == pytest.approx([step/2, -step/2])

    slots = [outer_via(i, 4, step, 0.2) for i in range(4)]
    assert [s.angle for s in slots] == pytest.approx([0.5*step + 0.2, 0.5*step + 0.2, 1.5*step + 0.2, 1.5*step + 0.2])
    assert [s.y_sign for s in slots] == [1, -1, 1, -1]


def test_outer_via_position():
    slot = outer_via(1, 3, math.pi/2)
    x, y = slot.position(2)
    assert (x, y) == pytest.approx((0, -2), abs=1e-12)
    assert math.atan2(y, x) == pytest.approx(slot.polar_angle)


def test_via_ring():
    spec = CoilSpec(turns=3, layers=5, via_size=0.6)
    ring = ViaRing.for_coil(spec, 5.0)

    assert ring.radius == pytest.approx(5.0 + 0.6 + 1/3)
    assert ring.step == pytest.approx((2*0.6 + 2/3) / ring.radius)
    assert len(ring) == 2
    assert [s.index for s in ring] == [0, 1]

    with pytest.raises(IndexError):
        ring.slot(2)

    with pytest.raises(IndexError):
        ring.slot(-1)

    # Adjacent vias keep clear of each other
    a, b = (s.position(ring.radius) for s in ring)
    assert math.dist(a, b) > spec.via_size

    assert len(ViaRing.for_coil(CoilSpec(layers=2), 5.0)) == 0
