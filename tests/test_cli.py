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

import math
import warnings

import pytest
from click.testing import CliRunner

from .utils import *
from spiralcoil import cli
from spiralcoil.kicad.pcb import TrackSegment, Via
from spiralcoil.utils import InvalidParameterWarning


class TestGenerate:
    def invoke(self, *args):
        runner = CliRunner()
        res = runner.invoke(cli.generate, list(map(str, args)))
        if res.exception:
            raise res.exception
        assert res.exit_code == 0
        return res.output

    def test_version(self):
        assert self.invoke('--version').startswith('Version ')

    def test_help(self):
        out = self.invoke('--help')
        for opt in ['--turns', '--inner-radius', '--gap', '--layers', '--direction', '--rotation', '--width', '--net',
                    '--via-size', '--count', '--center', '--motor-radius', '--svg']:
            assert opt in out

    def test_round_trip(self, tmpfile):
        out = tmpfile('Output', '.txt')
        log = self.invoke('-t', 5, '-i', 2, '-s', 0.25, '-w', 0.25, out)

        lines = out.read_text().splitlines()
        assert len(lines) == 1501
        assert sum(1 for l in lines if l.startswith('(segment ')) == 1500
        via = Via.parse(lines[-1])
        assert via.at.x == pytest.approx(2.125)
        assert via.at.y == pytest.approx(0)

        assert 'Coil radius: 5.025' in log
        assert 'Turns:        5.000' in log

    def test_stdout(self):
        out = self.invoke('-t', 1)
        records = [l for l in out.splitlines() if l.startswith('(')]
        assert records[0].startswith('(segment ')
        assert records[-1].startswith('(via ')
        TrackSegment.parse(records[0])

    def test_all_options(self, tmpfile):
        out = tmpfile('Output', '.txt')
        svg = tmpfile('Preview', '.svg')
        log = self.invoke('--turns', 3, '--inner-radius', 1, '--gap', 0.15, '--center', '10,-5', '--layers', 4,
                          '--direction', -1, '--rotation', 'pi/4', '--width', 0.2, '--net', 3, '--via-size', 0.6,
                          '--count', 2, '--motor-radius', 40, '--motor-rotation', '-pi/2', '--svg', svg, out)

        lines = out.read_text().splitlines()
        segments = [TrackSegment.parse(l) for l in lines if l.startswith('(segment ')]
        vias = [Via.parse(l) for l in lines if l.startswith('(via ')]
        assert {s.layer for s in segments} == {'F.Cu', 'In1.Cu', 'In2.Cu', 'B.Cu'}
        assert all(s.width == 0.2 and s.net == 3 for s in segments)
        assert len(vias) == 2 * 3
        assert all(v.size == 0.6 for v in vias)

        # first coil sits at -pi/2 on the motor circle
        xs = [s.start.x for s in segments[:100]]
        assert all(x < 10 - 30 for x in xs)

        assert 'Rotation:     0.785' in log
        assert 'copper layers' in log
        assert svg.read_text().startswith('<?xml')

    def test_clamping_warnings(self, tmpfile):
        out = tmpfile('Output', '.txt')
        with pytest.warns(InvalidParameterWarning):
            self.invoke('-d', 5, '-t', 2, '--warnings=once', out)
        assert out.read_text().startswith('(segment ')

        with warnings.catch_warnings():
            warnings.simplefilter('error')
            self.invoke('-d', 5, '-t', 2, '--warnings=ignore', out)

    @pytest.mark.parametrize('rotation', ['pi/', 'foo', '__import__("os")', '1/0'])
    def test_invalid_rotation(self, rotation):
        res = CliRunner().invoke(cli.generate, ['-r', rotation])
        assert res.exit_code == 2
        assert 'is not a valid angle' in res.output

    def test_invalid_center(self):
        res = CliRunner().invoke(cli.generate, ['--center', '1,2,3'])
        assert res.exit_code == 2
        assert 'is not a valid coordinate' in res.output

    def test_unwritable_output(self, tmp_path):
        res = CliRunner().invoke(cli.generate, ['-t', '1', str(tmp_path / 'missing' / 'coil.txt')])
        assert res.exit_code == 1
        assert 'Cannot open output file' in res.output
        assert 'Coil parameters' not in res.output


def test_angle_type():
    angle = cli.Angle()
    assert angle.convert('pi/4', None, None) == pytest.approx(math.pi/4)
    assert angle.convert('-radians(90)', None, None) == pytest.approx(-math.pi/2)
    assert angle.convert(1.5, None, None) == 1.5


def test_coordinate_type():
    assert cli.Coordinate().convert('1.5,-2', None, None) == (1.5, -2.0)
