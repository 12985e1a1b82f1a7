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
Writes coil layouts as KiCad board records, one ``(segment ...)`` or ``(via ...)`` per line. The output can be pasted
straight into a ``.kicad_pcb`` file.
"""

import sys

from .kicad.base_types import XYCoord
from .kicad.pcb import TrackSegment, Via
from .kicad.sexp import build_sexp


class DestinationUnavailable(OSError):
    """ The output file could not be opened for writing. """
    pass


def segment_record(segment):
    return TrackSegment(start=XYCoord(*segment.start),
                        end=XYCoord(*segment.end),
                        width=segment.width,
                        layer=segment.layer,
                        net=segment.net)


def via_record(via):
    return Via(at=XYCoord(*via.position),
               size=via.size,
               drill=via.drill,
               free=True,
               net=via.net)


class FootprintEmitter:
    """ Serializes :py:class:`.CoilLayout` instances to a text stream.

    Use :py:meth:`open` to write to a file. Emitters returned by :py:meth:`open` own their file and close it when used
    as a context manager, emitters wrapping an existing stream leave it open.
    """

    def __init__(self, stream=None, precision=6):
        self.stream = sys.stdout if stream is None else stream
        self.precision = precision
        self.count = 0
        self._owned = False

    @classmethod
    def open(kls, path, precision=6):
        try:
            stream = open(path, 'w')
        except OSError as e:
            raise DestinationUnavailable(e.errno, e.strerror, str(path)) from e

        emitter = kls(stream, precision=precision)
        emitter._owned = True
        return emitter

    def close(self):
        if self._owned:
            self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def records(self, layout):
        """ Board records of one coil in output order: the traces layer by layer, then the inner vias, then each outer
        via followed by its stubs. """
        for segment in layout.segments():
            yield segment_record(segment)

        for via in layout.inner_vias:
            yield via_record(via)

        for via in layout.outer_vias:
            yield via_record(via)
            for stub in via.stubs:
                yield segment_record(stub)

    def write(self, record):
        self.stream.write(build_sexp(record.sexp(), oneline=True, precision=self.precision))
        self.stream.write('\n')
        self.count += 1

    def emit(self, layout):
        for record in self.records(layout):
            self.write(record)

    def emit_all(self, layouts):
        for layout in layouts:
            self.emit(layout)
        self.stream.flush()
        return self.count
