"""Parametric SKÅDIS-style pegboard: outline, extrusion and STL export."""

from pegboard.board import BoardSpec
from pegboard.extrude import extrude_region
from pegboard.profile import Contour, Region, board_region, spacer_region
from pegboard.stl import ExportFile, export_board, export_spacer, mesh_to_stl

__all__ = [
    "BoardSpec",
    "Contour",
    "ExportFile",
    "Region",
    "board_region",
    "export_board",
    "export_spacer",
    "extrude_region",
    "mesh_to_stl",
    "spacer_region",
]

__version__ = "0.1.0"
