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
spiralcoil
==========

spiralcoil generates planar spiral inductors for printed circuit boards. A coil is an Archimedean spiral spread across
one or more copper layers and joined by vias, and is written out as KiCad board tracks and vias ready to be pasted into
a ``.kicad_pcb`` file.
"""

from .coil import CoilSpec
from .layout import CoilLayout, build_coil, iter_layouts
from .emitter import FootprintEmitter, DestinationUnavailable
from .utils import InvalidParameterWarning, DegenerateGeometryWarning

__version__ = '1.0.0'
