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

import enum
import math
import warnings
from dataclasses import dataclass
from itertools import combinations

from .kicad.pcb import VIA_DRILL
from .layers import Segment
from .stackup import inner_via_count
from .utils import unit_vector, DegenerateGeometryWarning


class ViaRole(enum.Enum):
    INNER_STACK = 'inner-stack'
    OUTER_RING = 'outer-ring'


@dataclass(frozen=True)
class StubSegment(Segment):
    """ Short piece of trace bridging the gap between the end of a layer trace and its outer-ring via. """
    trace: int = None


@dataclass(frozen=True)
class ViaSite:
    position: tuple
    size: float
    role: ViaRole
    #: Indices of the layer traces this via connects
    layers: tuple
    net: int = 0
    drill: float = VIA_DRILL
    stubs: tuple = ()


class ViaPlanner:
    """ Places the vias of one coil, given its layer traces.

    Inner vias sit just inside the innermost point of each layer pair, pulled in towards the coil center so the via
    pad does not overlap the trace. Outer vias sit on a ring outside the coil and are connected to the layers they
    join by stub segments.
    """

    def __init__(self, transformer):
        self.transformer = transformer
        self.spec = transformer.spec
        self.ring = transformer.ring

    @property
    def inner_bias(self):
        """ Distance the inner vias are moved from the trace's innermost point along the radius. Negative values point
        towards the coil center. """
        if self.spec.layers == 1:
            return -self.spec.via_size/2 + self.spec.width/2
        return -self.spec.via_size*3/4 + self.spec.width/2

    def inner_vias(self, traces):
        cx, cy = self.transformer.center
        for pair in range(inner_via_count(self.spec.layers)):
            first = 2*pair
            x, y = traces[first].innermost
            ux, uy = unit_vector(x, y, cx, cy)
            bias = self.inner_bias
            layers = (first, first+1) if first+1 < self.spec.layers else (first,)

            yield ViaSite(position=(x + ux*bias, y + uy*bias),
                          size=self.spec.via_size,
                          role=ViaRole.INNER_STACK,
                          layers=layers,
                          net=self.spec.net)

    def outer_vias(self, traces):
        for slot in self.ring:
            position = self.transformer.to_board(*slot.position(self.ring.radius))
            joined = (2*slot.index + 1, 2*slot.index + 2)

            stubs = tuple(StubSegment(start=traces[i].penultimate,
                                      end=position,
                                      width=self.spec.width,
                                      layer=traces[i].label,
                                      net=self.spec.net,
                                      trace=i)
                          for i in joined)

            yield ViaSite(position=position,
                          size=self.spec.via_size,
                          role=ViaRole.OUTER_RING,
                          layers=joined,
                          net=self.spec.net,
                          stubs=stubs)

    def check_clearance(self, vias):
        """ Warn about pairs of outer-ring vias whose pads overlap. This happens with an even number of ring vias when
        the rotation moves the first two slots onto each other, e.g. at minus half a ring step. """
        for a, b in combinations(vias, 2):
            dist = math.dist(a.position, b.position)
            if dist < self.spec.via_size or math.isclose(dist, 0, abs_tol=1e-9):
                warnings.warn(f'Outer vias joining layers {a.layers} and {b.layers} are only {dist:.4f} apart, their '
                              f'pads of size {self.spec.via_size:.4f} overlap. Try a different rotation.',
                              DegenerateGeometryWarning, stacklevel=3)

    def plan(self, traces):
        """ All vias of the coil, inner vias first. """
        outer = list(self.outer_vias(traces))
        self.check_clearance(outer)
        return [*self.inner_vias(traces), *outer]
