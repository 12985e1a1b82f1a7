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
SVG preview of generated coils, for a quick look without opening KiCad.
"""

from .layout import layouts_bounds
from .utils import Tag, setup_svg


LAYER_COLORS = {
    'F.Cu': '#c83434',
    'B.Cu': '#4d7fc4',
}

INNER_LAYER_COLORS = ['#7fc87f', '#c2c261', '#c261c2', '#61c2c2', '#c89b5a', '#8a6fd1']

VIA_COLOR = '#a0a0a0'
DRILL_COLOR = '#303030'


def layer_color(label, index):
    if label in LAYER_COLORS:
        return LAYER_COLORS[label]
    return INNER_LAYER_COLORS[(index - 1) % len(INNER_LAYER_COLORS)]


def _path(points, width, color, tag=Tag):
    (x0, y0), *rest = points
    d = f'M {x0:.6f} {y0:.6f} ' + ' '.join(f'L {x:.6f} {y:.6f}' for x, y in rest)
    return tag('path', d=d, fill='none', stroke=color, stroke_width=f'{width:.6f}', stroke_linecap='round',
               stroke_linejoin='round')


def _coil_tags(layout, tag=Tag):
    # Draw the back layers first so the front layer ends up on top.
    for trace in reversed(layout.traces):
        color = layer_color(trace.label, trace.index)
        children = [_path(trace.polyline, trace.width, color, tag=tag)]

        for via in layout.outer_vias:
            for stub in via.stubs:
                if stub.trace == trace.index:
                    children.append(_path([stub.start, stub.end], stub.width, color, tag=tag))

        yield tag('g', children, id=f'coil{layout.index}-layer{trace.index}')

    vias = []
    for via in layout.vias:
        x, y = via.position
        vias.append(tag('circle', cx=f'{x:.6f}', cy=f'{y:.6f}', r=f'{via.size/2:.6f}', fill=VIA_COLOR))
        vias.append(tag('circle', cx=f'{x:.6f}', cy=f'{y:.6f}', r=f'{via.drill/2:.6f}', fill=DRILL_COLOR))
    yield tag('g', vias, id=f'coil{layout.index}-vias')


def render_svg(layouts, margin=1.0, pagecolor='white', tag=Tag):
    """ Render the given coil layouts into an SVG document. Coordinates are used as-is, so like in KiCad, y points
    down. """
    layouts = list(layouts)
    if not layouts:
        raise ValueError('Nothing to render')

    tags = [t for layout in layouts for t in _coil_tags(layout, tag=tag)]
    return setup_svg(tags, layouts_bounds(layouts), margin=margin, pagecolor=pagecolor, tag=tag)
