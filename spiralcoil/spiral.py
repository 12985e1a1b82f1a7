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
Sampling of the raw Archimedean spiral ``r = spacing * phi / 2pi`` that every copper layer is derived from.
"""

import math
import warnings
from dataclasses import dataclass

from .stackup import inner_via_count, via_gap
from .utils import DegenerateGeometryWarning


#: Radial step is STEP_DENSITY / (start radius * turns). This keeps the number of points per coil roughly constant.
STEP_DENSITY = 0.02

#: Lower bound on the number of samples per turn, for coils starting at or near the center
MIN_SAMPLES_PER_TURN = 32

# Absorbs float error in (stop - start) / step so that spans that are an exact multiple of the step keep their last
# sample.
_EPSILON = 1e-9


def raw_point(r, spacing):
    """ Point of the raw spiral at radius ``r``. """
    phi = 2*math.pi * r / spacing
    return math.cos(phi) * r, math.sin(phi) * r


def alignment_angle(end, spacing):
    """ Signed angle between the positive x axis and the raw spiral's point at radius ``end``.

    Rotating the spiral clockwise by this angle puts its outer end onto the positive x axis, no matter the pitch.
    """
    x, y = raw_point(end, spacing)
    norm = math.hypot(x, y)
    if math.isclose(end, 0, abs_tol=1e-12) or math.isclose(norm, 0, abs_tol=1e-12):
        return 0.0

    # clamp against rounding errors, acos(1.0000000002) raises.
    cos_angle = max(-1.0, min(1.0, (end * x) / (end * norm)))
    angle = math.acos(cos_angle)
    return -angle if y < 0 else angle


def sample_step(start, turns, spacing):
    """ Radial distance between consecutive samples. """
    max_step = spacing / MIN_SAMPLES_PER_TURN
    if start <= 0:
        return max_step
    return min(STEP_DENSITY / (start * turns), max_step)


def sample_radii(start, stop, step):
    """ ``start, start + step, ...`` up to and including ``stop``. Always returns at least two radii. """
    n = math.floor((stop - start) / step + _EPSILON)
    if n < 1:
        warnings.warn(f'Spiral span from r={start:.4f} to r={stop:.4f} is shorter than one sampling step. Falling '
                      'back to a single segment.', DegenerateGeometryWarning, stacklevel=2)
        n = 1
    return [start + j*step for j in range(n + 1)]


@dataclass(frozen=True)
class SpiralSampler:
    """ Raw spiral of one coil, from its innermost radius ``start`` out to ``end``.

    All copper layers share one sampler. The layers only differ in how far past ``end`` they are sampled, and in the
    way :py:class:`.LayerTransformer` mirrors and rotates the resulting points.
    """
    start: float
    end: float
    spacing: float
    step: float
    alignment: float

    @classmethod
    def for_coil(kls, spec):
        # Leave room for the inner vias inside the innermost turn.
        start = spec.inner_radius + spec.via_size * inner_via_count(spec.layers) * via_gap(spec.layers)
        end = start + spec.turns * spec.spacing
        return kls(start=start,
                   end=end,
                   spacing=spec.spacing,
                   step=sample_step(start, spec.turns, spec.spacing),
                   alignment=alignment_angle(end, spec.spacing))

    def radii(self, stop=None):
        return sample_radii(self.start, self.end if stop is None else stop, self.step)

    def raw_points(self, stop=None):
        return [raw_point(r, self.spacing) for r in self.radii(stop)]

    @property
    def segment_count(self):
        """ Number of segments of an unmodified layer. """
        return len(self.radii()) - 1
