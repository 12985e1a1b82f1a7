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
spiralcoil.utils
================
**Geometry and SVG helpers shared by the coil generator**
"""

import ast
import math
import operator
import textwrap


class InvalidParameterWarning(UserWarning):
    """ A coil parameter was out of range and has been replaced with the nearest valid value. """
    pass


class DegenerateGeometryWarning(UserWarning):
    """ The requested coil geometry is degenerate at some point, and a safe default has been substituted. """
    pass


def rotate_point(x, y, angle, cx=0, cy=0):
    """ Rotate point (x,y) around (cx,cy) by ``angle`` radians clockwise. """

    return (cx + (x - cx) * math.cos(-angle) - (y - cy) * math.sin(-angle),
            cy + (x - cx) * math.sin(-angle) + (y - cy) * math.cos(-angle))


def wrap_angle(angle):
    """ Normalize ``angle`` into the half-open interval (-pi, pi]. """
    angle = math.fmod(angle, 2*math.pi)
    if angle <= -math.pi:
        angle += 2*math.pi
    elif angle > math.pi:
        angle -= 2*math.pi
    return angle


def unit_vector(x, y, cx=0, cy=0):
    """ Unit vector pointing from (cx,cy) towards (x,y), or ``(0, 0)`` if both points coincide. """
    dx, dy = x - cx, y - cy
    length = math.hypot(dx, dy)
    if math.isclose(length, 0, abs_tol=1e-12):
        return 0.0, 0.0
    return dx/length, dy/length


_BINARY_OPS = {ast.Add: operator.add, ast.Sub: operator.sub, ast.Mult: operator.mul, ast.Div: operator.truediv,
               ast.Pow: operator.pow, ast.Mod: operator.mod}

_CONSTANTS = {'pi': math.pi, 'tau': math.tau, 'e': math.e}

_FUNCTIONS = {name: getattr(math, name) for name in ('sqrt', 'sin', 'cos', 'tan', 'asin', 'acos', 'atan', 'radians',
                                                     'degrees')}


def _eval_node(node):
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return float(node.value)

    elif isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        return _BINARY_OPS[type(node.op)](_eval_node(node.left), _eval_node(node.right))

    elif isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.UAdd, ast.USub)):
        value = _eval_node(node.operand)
        return value if isinstance(node.op, ast.UAdd) else -value

    elif isinstance(node, ast.Name) and node.id in _CONSTANTS:
        return _CONSTANTS[node.id]

    elif (isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and node.func.id in _FUNCTIONS
          and len(node.args) == 1 and not node.keywords):
        return _FUNCTIONS[node.func.id](_eval_node(node.args[0]))

    else:
        raise SyntaxError(f'Invalid expression element {ast.dump(node)}')


def eval_expression(expr):
    """ Evaluate a simple arithmetic expression such as ``pi/4`` or ``-radians(30)`` to a float.

    Only numbers, ``+ - * / % **``, the constants ``pi``, ``tau`` and ``e`` and a handful of functions from
    :py:mod:`math` are allowed.
    """
    try:
        parsed = ast.parse(expr.strip().lower(), mode='eval').body
    except SyntaxError as e:
        raise SyntaxError(f'Invalid expression {expr!r}') from e
    return float(_eval_node(parsed))


def min_none(a, b):
    """ Like the ``min(..)`` builtin, but if either value is ``None``, returns the other. """
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


def max_none(a, b):
    """ Like the ``max(..)`` builtin, but if either value is ``None``, returns the other. """
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


def sum_bounds(bounds, *, default=None):
    """ Add/union multiple bounding boxes.

    :param bounds: each arg is one bounding box in ``((min_x, min_y), (max_x, max_y))`` format

    :returns: ``((min_x, min_y), (max_x, max_y))``
    :rtype: tuple
    """

    bounds = iter(bounds)

    for (min_x, min_y), (max_x, max_y) in bounds:
        break
    else:
        return default

    for (min_x_2, min_y_2), (max_x_2, max_y_2) in bounds:
        min_x, min_y = min_none(min_x, min_x_2), min_none(min_y, min_y_2)
        max_x, max_y = max_none(max_x, max_x_2), max_none(max_y, max_y_2)

    return ((min_x, min_y), (max_x, max_y))


class Tag:
    """ Helper class to ease creation of SVG. """

    def __init__(self, name, children=None, root=False, **attrs):
        self.name, self.attrs = name, attrs
        self.children = children or []
        self.root = root

    def __str__(self):
        prefix = '<?xml version="1.0" encoding="utf-8"?>\n' if self.root else ''
        opening = ' '.join([self.name] + [f'{key.replace("__", ":").replace("_", "-")}="{value}"' for key, value in self.attrs.items()])
        if self.children:
            children = '\n'.join(textwrap.indent(str(c), '  ') for c in self.children)
            return f'{prefix}<{opening}>\n{children}\n</{self.name}>'
        else:
            return f'{prefix}<{opening}/>'


def setup_svg(tags, bounds, margin=0, pagecolor='white', tag=Tag):
    """ Wrap ``tags`` into an ``<svg>`` root tag whose viewport covers ``bounds`` plus ``margin`` on each side. All
    lengths are in millimeters. """
    (min_x, min_y), (max_x, max_y) = bounds

    min_x -= margin
    min_y -= margin
    max_x += margin
    max_y += margin

    w, h = max_x - min_x, max_y - min_y
    w = 1.0 if math.isclose(w, 0.0) else w
    h = 1.0 if math.isclose(h, 0.0) else h

    background = tag('rect', x=min_x, y=min_y, width=w, height=h, fill=pagecolor)
    return tag('svg', [background, *tags],
            width=f'{w}mm', height=f'{h}mm',
            viewBox=f'{min_x} {min_y} {w} {h}',
            xmlns="http://www.w3.org/2000/svg",
            xmlns__xlink="http://www.w3.org/1999/xlink",
            root=True)
