import math
import uuid
from dataclasses import field

from .sexp import *
from .sexp_mapper import *


@sexp_type('xy')
class XYCoord:
    x: float = 0
    y: float = 0

    def isclose(self, other, tol=1e-6):
        return math.isclose(self.x, other.x, abs_tol=tol) and math.isclose(self.y, other.y, abs_tol=tol)

    def __iter__(self):
        return iter((self.x, self.y))


def _new_tstamp():
    return Atom(str(uuid.uuid4()))


@sexp_type('tstamp')
class Timestamp:
    """ Opaque per-object id. KiCad only needs these to be unique within a file. """
    value: Atom = field(default_factory=_new_tstamp)

    def __before_sexp__(self):
        self.value = Atom(str(self.value))
