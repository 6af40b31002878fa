"""
Package initializer for contours.

Re-exports the contouring engine and its building blocks.
"""

from __future__ import annotations

from .cells import interpolate as interpolate
from .engine import ContourEngine as ContourEngine
from .sources import Source as Source
from .sources import field_value as field_value
from .stitching import Contour as Contour
from .stitching import ContourTopologyError as ContourTopologyError
from .stitching import stitch as stitch
