#! /usr/bin/env python
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

import sys
import warnings
from pathlib import Path

import click

from .coil import CoilSpec, DEFAULT_GAP
from .emitter import FootprintEmitter, DestinationUnavailable
from .layout import iter_layouts
from .preview import render_svg
from .utils import eval_expression
from . import __version__


def _showwarning(message, category, filename, lineno, file=None, line=None):
    if file is None:
        file = sys.stderr

    filename = Path(filename)
    spiralcoil_module_install_location = Path(__file__).parent.parent
    if filename.is_relative_to(spiralcoil_module_install_location):
        filename = filename.relative_to(spiralcoil_module_install_location)

    print(f'{filename}:{lineno}: {message}', file=file)
warnings.showwarning = _showwarning


def _print_version(ctx, param, value):
    if value and not ctx.resilient_parsing:
        click.echo(f'Version {__version__}')
        ctx.exit()


class Coordinate(click.ParamType):
    name = 'coordinate'

    def __init__(self, dimension=2):
        self.dimension = dimension

    def convert(self, value, param, ctx):
        if isinstance(value, (tuple, list)):
            return tuple(value)

        try:
            coords = [float(e) for e in value.split(',')]
            if len(coords) != self.dimension:
                raise ValueError()
            return tuple(coords)

        except ValueError:
            self.fail(f'{value!r} is not a valid coordinate. A coordinate consists of exactly {self.dimension} comma-separate floating-point numbers.')


class Angle(click.ParamType):
    name = 'angle'

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            return float(value)

        try:
            return eval_expression(value)

        except (SyntaxError, ArithmeticError, ValueError):
            self.fail(f'{value!r} is not a valid angle. An angle is given in radians, either as a number or as an arithmetic expression such as "pi/4" or "-radians(30)".')


def _print_summary(spec):
    click.echo(' --- Coil parameters --- ', err=True)
    click.echo(f'Count:        {spec.count}', err=True)
    click.echo(f'Turns:        {spec.turns:.3f}', err=True)
    click.echo(f'Inner radius: {spec.inner_radius:.3f}', err=True)
    click.echo(f'Gap:          {spec.gap:.3f}', err=True)
    click.echo(f'Center:       {spec.center[0]:.3f}, {spec.center[1]:.3f}', err=True)
    click.echo(f'Layers:       {spec.layers}', err=True)
    click.echo(f'Direction:    {spec.direction}', err=True)
    click.echo(f'Rotation:     {spec.rotation:.3f}', err=True)
    click.echo(f'Width:        {spec.width:.3f}', err=True)
    click.echo(f'Net:          {spec.net}', err=True)
    click.echo(f'Via size:     {spec.via_size:.3f}', err=True)


@click.command()
@click.option('--version', is_flag=True, callback=_print_version, expose_value=False, is_eager=True)
@click.option('--warnings', 'format_warnings', type=click.Choice(['default', 'ignore', 'once']), default='default',
              help='''Enable or disable warnings about clamped parameters and degenerate geometry (default: on)''')
@click.option('-t', '--turns', type=float, default=10, show_default=True, help='Number of turns per layer')
@click.option('-i', '--inner-radius', type=float, default=0, show_default=True, help='''Radius of the free space in the
              middle of the coil, not counting the space taken up by the inner vias''')
@click.option('-s', '--gap', type=float, default=DEFAULT_GAP, show_default=True, help='''Clearance between adjacent
              turns. The spiral's pitch is this gap plus the trace width.''')
@click.option('--center', type=Coordinate(), default='0,0', show_default=True, help='''Center of the coil, or of the
              circle the coils are placed on when --count is larger than one, as "x,y"''')
@click.option('-l', '--layers', type=int, default=1, show_default=True, help='Number of copper layers to use')
@click.option('-d', '--direction', type=int, default=1, show_default=True, help='Winding direction, 1 or -1')
@click.option('-r', '--rotation', type=Angle(), default='0', show_default=True, help='''Rotation of the coil in radians.
              Accepts arithmetic expressions such as "pi/4".''')
@click.option('-w', '--width', type=float, default=0.25, show_default=True, help='Trace width')
@click.option('-n', '--net', type=int, default=0, show_default=True, help='KiCad net index of the coil')
@click.option('-v', '--via-size', type=float, default=0.8, show_default=True, help='Via pad diameter')
@click.option('-c', '--count', type=int, default=1, show_default=True, help='Number of coils to generate')
@click.option('--motor-radius', type=float, help='''Radius of the circle multiple coils are placed on. Default: as small
              as possible without the coils overlapping''')
@click.option('--motor-rotation', type=Angle(), default='0', show_default=True, help='''Angular position of the first
              coil on the motor circle, in radians''')
@click.option('--svg', 'svg_file', type=click.Path(dir_okay=False, writable=True, path_type=Path), help='''Also write an
              SVG preview of the generated coils to this file''')
@click.argument('outfile', required=False, default='-', type=click.Path(dir_okay=False, allow_dash=True))
def generate(turns, inner_radius, gap, center, layers, direction, rotation, width, net, via_size, count, motor_radius,
             motor_rotation, svg_file, outfile, format_warnings):
    """ Generate a multi-layer spiral PCB coil as KiCad board tracks and vias.

    The result is written to OUTFILE (or standard output when it is omitted or "-"), one s-expression per line, ready
    to be pasted into a .kicad_pcb file. """

    with warnings.catch_warnings():
        warnings.simplefilter(format_warnings)

        try:
            emitter = FootprintEmitter() if outfile == '-' else FootprintEmitter.open(outfile)
        except DestinationUnavailable as e:
            raise click.ClickException(f'Cannot open output file {outfile!r}: {e.strerror}')

        spec = CoilSpec.from_gap(gap=gap, width=width, turns=turns, inner_radius=inner_radius, layers=layers,
                                 direction=direction, rotation=rotation, net=net, via_size=via_size, count=count,
                                 center=center, motor_radius=motor_radius, motor_rotation=motor_rotation)
        _print_summary(spec)

        layouts = []
        with emitter:
            try:
                for layout in iter_layouts(spec):
                    emitter.emit(layout)
                    layouts.append(layout)
                emitter.stream.flush()
            except OSError as e:
                raise click.ClickException(f'Error writing output: {e}')

    radius = max(layout.outer_radius for layout in layouts)
    click.echo(f'Coil radius: {radius:.3f}', err=True)
    click.echo(f'Wrote {emitter.count} records for {len(layouts)} coil(s)', err=True)

    if spec.layers > 2:
        click.echo(f'Note: This coil uses {spec.layers} copper layers. Set up the board stack-up in KiCad accordingly '
                    'before pasting the result.', err=True)

    if svg_file:
        try:
            svg_file.write_text(str(render_svg(layouts)))
        except OSError as e:
            raise click.ClickException(f'Cannot write SVG preview {str(svg_file)!r}: {e.strerror}')


if __name__ == '__main__':
    generate()
