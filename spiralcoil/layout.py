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

"""
Complete geometry of one or more coil instances.
"""

import math
import warnings
from dataclasses import dataclass

from .layers import LayerTransformer
from .spiral import SpiralSampler
from .utils import InvalidParameterWarning, sum_bounds
from .vias import ViaPlanner, ViaRole


@dataclass(frozen=True)
class CoilLayout:
    """ Everything that makes up one coil instance, in board coordinates. """
    index: int
    center: tuple
    traces: tuple
    vias: tuple
    #: Radius around :py:attr:`center` that contains all of this coil's copper
    outer_radius: float

    @property
    def stubs(self):
        return [stub for via in self.vias for stub in via.stubs]

    @property
    def inner_vias(self):
        return [via for via in self.vias if via.role == ViaRole.INNER_STACK]

    @property
    def outer_vias(self):
        return [via for via in self.vias if via.role == ViaRole.OUTER_RING]

    def segments(self):
        """ Trace segments of all layers, in layer order. Stubs are not included. """
        for trace in self.traces:
            yield from trace.segments()

    def bounding_box(self):
        cx, cy = self.center
        r = self.outer_radius
        return (cx-r, cy-r), (cx+r, cy+r)


def build_coil(spec, center=None, index=0):
    """ Compute the full geometry of one coil of ``spec`` centered on ``center``. """
    sampler = SpiralSampler.for_coil(spec)
    transformer = LayerTransformer(spec, sampler, center)
    traces = transformer.traces()
    vias = ViaPlanner(transformer).plan(traces)
    return CoilLayout(index=index,
                      center=transformer.center,
                      traces=tuple(traces),
                      vias=tuple(vias),
                      outer_radius=transformer.extent())


def coil_extent(spec):
    """ Radius of the circle around a coil's center that contains all of its copper. """
    return LayerTransformer(spec, SpiralSampler.for_coil(spec), (0, 0)).extent()


def min_motor_radius(count, extent, gap):
    """ Smallest radius of the circle ``count`` coils of radius ``extent`` can be placed on such that neighbors keep
    ``gap`` of clearance. """
    if count < 2:
        return 0.0
    return (extent + gap/2) / math.sin(math.pi / count)


def coil_centers(spec, extent=None):
    """ Centers of the ``spec.count`` coil instances.

    The coils are spread evenly on a circle of radius ``spec.motor_radius`` around ``spec.center``, starting at angle
    ``spec.motor_rotation`` measured from the y axis. A single coil sits right on ``spec.center`` unless a motor radius
    is given.
    """
    if extent is None:
        extent = coil_extent(spec)

    if spec.count == 1 and spec.motor_radius is None:
        return [spec.center]

    r_min = min_motor_radius(spec.count, extent, spec.gap)
    if spec.motor_radius is None:
        radius = r_min

    elif spec.motor_radius < r_min and not math.isclose(spec.motor_radius, r_min):
        warnings.warn(f'Motor radius {spec.motor_radius:.4f} is too small for {spec.count} coils of radius '
                      f'{extent:.4f}, using {r_min:.4f} instead.', InvalidParameterWarning, stacklevel=2)
        radius = r_min

    else:
        radius = spec.motor_radius

    cx, cy = spec.center
    centers = []
    for k in range(spec.count):
        angle = spec.motor_rotation + 2*math.pi*k/spec.count
        centers.append((cx + radius*math.sin(angle), cy + radius*math.cos(angle)))
    return centers


def iter_layouts(spec):
    """ Compute coil instances one after the other. Each instance is complete before the next one is started. """
    for index, center in enumerate(coil_centers(spec)):
        yield build_coil(spec, center, index)


def layouts_bounds(layouts):
    return sum_bounds(layout.bounding_box() for layout in layouts)
