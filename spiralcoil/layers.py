#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2023 The spiralcoil authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

import math
from dataclasses import dataclass, field
from itertools import pairwise

from .stackup import inner_via_count, pair_index, layer_label, outer_via_index, ViaRing
from .utils import rotate_point, wrap_angle


@dataclass(frozen=True)
class Segment:
    """ One straight piece of copper trace. """
    start: tuple
    end: tuple
    width: float
    layer: str
    net: int = 0

    @property
    def length(self):
        return math.dist(self.start, self.end)


@dataclass(frozen=True)
class LayerTrace:
    """ The spiral trace on one copper layer of one coil. ``points[0]`` is the innermost point. """
    index: int
    label: str
    points: tuple
    width: float
    net: int = 0
    #: Radial change applied to the layer's outer end to make it meet its outer via
    adjustment: float = 0.0
    #: Index of the outer-ring via this layer ends at, ``None`` if the outer end is a terminal of the coil
    outer_via: int = None
    penultimate: tuple = field(init=False)
    last: tuple = field(init=False)

    def __post_init__(self):
        if len(self.points) < 2:
            raise ValueError(f'Layer trace needs at least two points, got {len(self.points)}')
        object.__setattr__(self, 'points', tuple(self.points))
        object.__setattr__(self, 'penultimate', self.points[-2])
        object.__setattr__(self, 'last', self.points[-1])

    @property
    def innermost(self):
        return self.points[0]

    @property
    def polyline(self):
        """ Points that are drawn as copper. A layer that ends at an outer via stops one point early, the stub to the
        via takes over from there. """
        if self.outer_via is not None:
            return self.points[:-1]
        return self.points

    def segments(self):
        for start, end in pairwise(self.polyline):
            yield Segment(start, end, self.width, self.label, self.net)


class LayerTransformer:
    """ Turns the raw spiral of a :py:class:`.SpiralSampler` into the individual layer traces of one coil.

    Odd layers are mirror images of even layers, so that current flows in the same rotational direction on every layer
    when going in on one layer and back out on the next. Both layers of a pair are rotated such that they start at the
    same point on the inside, and are then rotated together into the pair's via slot. All layers end at the same angle
    on the outside, except for inner layers that are stretched or shortened a little to meet their outer via.
    """

    def __init__(self, spec, sampler, center=None):
        self.spec = spec
        self.sampler = sampler
        self.center = spec.center if center is None else tuple(center)
        self.via_slot_angle = 2*math.pi / inner_via_count(spec.layers)
        self.ring = ViaRing.for_coil(spec, sampler.end)

    def to_board(self, x, y):
        """ Map a point relative to the coil center onto the board, applying the winding direction. """
        cx, cy = self.center
        return cx + x, cy + self.spec.direction * y

    def transform(self, x, y, layer):
        """ Map a raw spiral point onto ``layer``. """
        sign = (-1)**layer
        x, y = rotate_point(x, y, self.sampler.alignment + self.spec.rotation * sign)
        x, y = x, sign * y
        x, y = rotate_point(x, y, pair_index(layer) * self.via_slot_angle)
        return self.to_board(x, y)

    def nominal_stop(self, layer):
        """ Outer radius of ``layer`` before via adjustment. Layers are sampled a little past or short of the coil's end
        radius to compensate for their pair's rotation, so that all of them end at the same angle. """
        extra_angle = (-1)**layer * pair_index(layer) * self.via_slot_angle
        return self.sampler.end + extra_angle * self.spec.spacing / (2*math.pi)

    def adjustment(self, layer):
        """ Radial change that moves the outer end of an inner layer onto the angle of its outer via. First and last
        layer are not adjusted. """
        if layer in (0, self.spec.layers - 1):
            return 0.0

        if (via := outer_via_index(layer, self.spec.layers)) is None:
            return 0.0

        # Unadjusted, every layer ends at -rotation.
        delta = wrap_angle(self.ring.slot(via).polar_angle + self.spec.rotation)
        return (-1)**layer * delta * self.spec.spacing / (2*math.pi)

    def stop(self, layer):
        return self.nominal_stop(layer) + self.adjustment(layer)

    def trace(self, layer):
        if not 0 <= layer < self.spec.layers:
            raise IndexError(f'Layer {layer} out of range for a {self.spec.layers} layer coil')

        points = [self.transform(x, y, layer) for x, y in self.sampler.raw_points(self.stop(layer))]
        return LayerTrace(index=layer,
                          label=layer_label(layer, self.spec.layers),
                          points=points,
                          width=self.spec.width,
                          net=self.spec.net,
                          adjustment=self.adjustment(layer),
                          outer_via=outer_via_index(layer, self.spec.layers))

    def traces(self):
        return [self.trace(i) for i in range(self.spec.layers)]

    def extent(self):
        """ Radius of the smallest circle around the coil center that contains all of the coil's copper. """
        radius = max(self.stop(i) for i in range(self.spec.layers)) + self.spec.width/2
        if self.ring.count:
            radius = max(radius, self.ring.radius + self.spec.via_size/2)
        return radius
