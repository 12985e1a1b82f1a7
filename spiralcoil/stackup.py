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
How a coil is spread across the copper layers of the board.

Layers are joined in pairs at the inside of the coil: layers 0 and 1 share the first inner via, layers 2 and 3 the
second one, and so on. Each pair is rotated to its own angular slot so the inner vias do not collide. The pairs are
then chained together on the outside of the coil by outer-ring vias: outer via ``i`` joins layers ``2i+1`` and
``2i+2``. The outer ends of the very first and very last layer are the coil's terminals.
"""

import enum
import math
from dataclasses import dataclass


def inner_via_count(layers):
    """ Number of inner vias, i.e. of layer pairs. """
    if layers <= 2:
        return 1
    return math.ceil((layers - 0.5) / 2)


def outer_via_count(layers):
    """ Number of outer-ring vias needed to chain all layer pairs together. """
    if layers <= 2:
        return 0
    return inner_via_count(layers) - 1


def via_gap(layers):
    """ Clearance between vias as a fraction of the via size. """
    return 2/3 if layers > 2 else 1/2


def pair_index(layer):
    return layer // 2


def layer_label(layer, layers):
    """ KiCad name of copper layer number ``layer`` out of ``layers``. """
    if layer == 0:
        return 'F.Cu'
    elif layer == layers - 1:
        return 'B.Cu'
    else:
        return f'In{layer}.Cu'


def outer_via_index(layer, layers):
    """ Index of the outer-ring via the outer end of ``layer`` connects to, or ``None`` for a terminal. """
    if layer == 0:
        return None
    index = (layer - 1) // 2
    if index >= outer_via_count(layers):
        return None
    return index


class Parity(enum.Enum):
    ODD = 'odd'
    EVEN = 'even'


@dataclass(frozen=True)
class OuterViaSlot:
    """ Angular slot of one outer-ring via. The via sits at ``(cos(angle), y_sign * sin(angle))`` times the ring
    radius, relative to the coil center. """
    parity: Parity
    index: int
    angle: float
    y_sign: int

    @property
    def polar_angle(self):
        """ The via's actual angle around the coil center. """
        return math.atan2(self.y_sign * math.sin(self.angle), math.cos(self.angle))

    def position(self, radius):
        return math.cos(self.angle) * radius, self.y_sign * math.sin(self.angle) * radius


def outer_via(index, count, step, rotation=0.0):
    """ Angular slot of outer-ring via ``index`` out of ``count``.

    Vias alternate between both sides of the coil's terminals, with ``step`` radians between neighbors. With an odd
    number of vias, the first one sits right on the axis and the rest pair up around it, with an even number every via
    is half a step off the axis.

    :param step: Angle between adjacent vias on the ring.
    :param rotation: User rotation of the coil.
    """
    y_sign = (-1)**index

    if count % 2:
        m = math.ceil(index / 2)
        return OuterViaSlot(Parity.ODD, index, m*step - rotation*y_sign, y_sign)

    else:
        m = index // 2 + 0.5
        return OuterViaSlot(Parity.EVEN, index, m*step + rotation, y_sign)


@dataclass(frozen=True)
class ViaRing:
    """ The circle around the coil's outside that the outer-ring vias sit on. """
    radius: float
    step: float
    count: int
    rotation: float = 0.0

    @classmethod
    def for_coil(kls, spec, end):
        """ Via ring of a coil described by ``spec`` whose outermost turn ends at radius ``end``. """
        radius = end + spec.via_size + 1/3
        step = (2*spec.via_size + via_gap(spec.layers)) / radius
        return kls(radius, step, outer_via_count(spec.layers), spec.rotation)

    def slot(self, index):
        if not 0 <= index < self.count:
            raise IndexError(f'Outer via index {index} out of range for a ring of {self.count} vias')
        return outer_via(index, self.count, self.step, self.rotation)

    def __iter__(self):
        return (self.slot(i) for i in range(self.count))

    def __len__(self):
        return self.count
