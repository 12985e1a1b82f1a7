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
import warnings
from dataclasses import dataclass, replace, fields

from .utils import InvalidParameterWarning, DegenerateGeometryWarning


#: Gap between adjacent turns used when no usable spacing is given
DEFAULT_GAP = 0.25


@dataclass(frozen=True)
class CoilSpec:
    """ Parameters of a (set of) spiral coils. All lengths are in board units, usually millimeters, all angles are in
    radians.

    Out-of-range values do not raise. Instead, they are clamped to the nearest valid value (or replaced by the
    default where there is none) and an :py:class:`.InvalidParameterWarning` is issued. After construction, every
    instance satisfies the invariants below.

    :param turns: Number of turns per layer, at least 1. Need not be an integer.
    :param inner_radius: Radius of the innermost point of the spiral, before making room for the inner vias.
    :param spacing: Pitch of the spiral, i.e. the radial distance between successive turns. This includes the trace
                    width, so it must be at least ``width``.
    :param width: Trace width.
    :param layers: Number of copper layers the coil is spread across.
    :param direction: Winding direction, ``1`` or ``-1``. ``-1`` mirrors the whole coil across the x axis.
    :param rotation: Rotation of the coil. Positive values rotate clockwise in mathematical orientation, which is
                     counter-clockwise on screen in KiCad's y-down coordinate system.
    :param net: KiCad net index of all generated objects.
    :param via_size: Via pad diameter.
    :param count: Number of identical coils to generate.
    :param center: Center of the coil, or of the circle the coils are arranged on when ``count > 1``.
    :param motor_radius: Radius of the circle the coils are arranged on. ``None`` picks the smallest radius at which
                         neighboring coils do not overlap.
    :param motor_rotation: Angular position of the first coil on that circle.
    """
    turns: float = 10
    inner_radius: float = 0.0
    spacing: float = DEFAULT_GAP + 0.25
    width: float = 0.25
    layers: int = 1
    direction: int = 1
    rotation: float = 0.0
    net: int = 0
    via_size: float = 0.8
    count: int = 1
    center: tuple = (0.0, 0.0)
    motor_radius: float = None
    motor_rotation: float = 0.0

    def __post_init__(self):
        defaults = {f.name: f.default for f in fields(self)}

        def clamp(name, value):
            old = getattr(self, name)
            if old != value:
                warnings.warn(f'Coil parameter {name}={old!r} is out of range, using {value!r} instead.',
                              InvalidParameterWarning, stacklevel=4)
            object.__setattr__(self, name, value)

        for name in 'turns', 'inner_radius', 'spacing', 'width', 'rotation', 'via_size', 'motor_rotation':
            if not math.isfinite(getattr(self, name)):
                clamp(name, defaults[name])

        if self.motor_radius is not None and not math.isfinite(self.motor_radius):
            clamp('motor_radius', None)

        clamp('turns', max(1, self.turns))
        clamp('inner_radius', max(0.0, self.inner_radius))
        clamp('width', self.width if self.width >= 0 else defaults['width'])

        if self.spacing <= 0:
            clamp('spacing', self.width + DEFAULT_GAP)
        clamp('spacing', max(self.width, self.spacing))

        clamp('layers', max(1, int(self.layers)))
        clamp('direction', self.direction if self.direction in (1, -1) else 1)
        clamp('net', max(0, int(self.net)))
        clamp('via_size', max(0.0, self.via_size))
        clamp('count', max(1, int(self.count)))

        if self.motor_radius is not None:
            clamp('motor_radius', max(0.0, self.motor_radius))

        object.__setattr__(self, 'center', tuple(map(float, self.center)))

        if self.layers > 1 and not float(2*self.turns).is_integer():
            warnings.warn(f'With {self.turns} turns, the two layers of a via pair do not start at the same point. '
                          'Inner vias will only land on the even layer of each pair. Use a whole or half number of '
                          'turns to avoid this.', DegenerateGeometryWarning, stacklevel=3)

    @property
    def gap(self):
        """ Clearance between adjacent turns on the same layer """
        return self.spacing - self.width

    @classmethod
    def from_gap(kls, gap=DEFAULT_GAP, width=0.25, **kwargs):
        """ Create a spec from the gap between turns instead of their pitch, like the command line does. A negative
        gap is clamped to zero. """
        if gap < 0:
            warnings.warn(f'Coil parameter gap={gap!r} is out of range, using 0.0 instead.', InvalidParameterWarning,
                          stacklevel=2)
            gap = 0.0
        return kls(spacing=max(width, 0) + gap, width=width, **kwargs)

    def replace(self, **changes):
        return replace(self, **changes)
