"""
Track and via records of KiCad's PCB file format (``*.kicad_pcb``).

Only the two object types needed to draw a coil are modelled here. Both serialize to the form KiCad accepts when
pasted into the board file, e.g. ``(segment (start 1 2) (end 3 4) (width 0.25) (layer "F.Cu") (net 0) (tstamp ...))``.
"""

from dataclasses import field

from .sexp import *
from .sexp_mapper import *
from .base_types import *


#: Drill diameter of every via we generate.
VIA_DRILL = 0.4


@sexp_type('segment')
class TrackSegment:
    start: Rename(XYCoord) = field(default_factory=XYCoord)
    end: Rename(XYCoord) = field(default_factory=XYCoord)
    width: Named(float) = 0.5
    layer: Named(str) = 'F.Cu'
    net: Named(int) = 0
    tstamp: Timestamp = field(default_factory=Timestamp)


@sexp_type('via')
class Via:
    at: Rename(XYCoord) = field(default_factory=XYCoord)
    size: Named(float) = 0.8
    drill: Named(float) = VIA_DRILL
    layers: Named(Array(str)) = field(default_factory=lambda: ['F.Cu', 'B.Cu'])
    free: Wrap(Flag()) = False
    net: Named(int) = 0
    tstamp: Timestamp = field(default_factory=Timestamp)
