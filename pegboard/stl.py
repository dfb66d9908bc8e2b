"""
ASCII STL writing.

Normals are recomputed from each triangle's vertex order, never taken from
the mesh, so the file always agrees with the winding it stores.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import trimesh

from pegboard.board import BoardSpec
from pegboard.constants import BOARD_SOLID_NAME, COUNTERSINK_DEPTH, SPACER_SOLID_NAME
from pegboard.extrude import extrude_region
from pegboard.profile import board_region, spacer_region


def facet_normals(triangles: np.ndarray) -> np.ndarray:
    """Unit normals of (T, 3, 3) triangles; zero for degenerate ones."""
    triangles = np.asarray(triangles, dtype=np.float64).reshape(-1, 3, 3)
    cross = np.cross(triangles[:, 1] - triangles[:, 0], triangles[:, 2] - triangles[:, 0])
    length = np.linalg.norm(cross, axis=1)
    out = np.zeros_like(cross)
    ok = length > 0
    out[ok] = cross[ok] / length[ok, None]
    return out


def mesh_to_stl(mesh: trimesh.Trimesh, name: str = "mesh") -> str:
    triangles = mesh.vertices[mesh.faces] if len(mesh.faces) else np.zeros((0, 3, 3))
    normals = facet_normals(triangles)

    lines = [f"solid {name}"]
    for tri, nrm in zip(triangles, normals):
        lines.append(f"  facet normal {nrm[0]:.6f} {nrm[1]:.6f} {nrm[2]:.6f}")
        lines.append("    outer loop")
        for v in tri:
            lines.append(f"      vertex {v[0]:.6f} {v[1]:.6f} {v[2]:.6f}")
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return "\n".join(lines) + "\n"


# ----------------------------
# Named exports
# ----------------------------

@dataclass(frozen=True)
class ExportFile:
    filename: str
    data: bytes

    def write(self, directory: str) -> Path:
        out_path = Path(directory) / self.filename
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(self.data)
        return out_path


def _mm(value: float) -> str:
    return f"{value:g}"


def board_filename(spec: BoardSpec) -> str:
    return f"skadis_{_mm(spec.width)}x{_mm(spec.height)}x{_mm(spec.thickness)}mm.stl"


def export_board(spec: BoardSpec) -> ExportFile:
    mesh = extrude_region(board_region(spec), spec.thickness)
    text = mesh_to_stl(mesh, BOARD_SOLID_NAME)
    return ExportFile(board_filename(spec), text.encode("ascii"))


def export_spacer() -> ExportFile:
    mesh = extrude_region(spacer_region(), COUNTERSINK_DEPTH)
    text = mesh_to_stl(mesh, SPACER_SOLID_NAME)
    return ExportFile(f"{SPACER_SOLID_NAME}.stl", text.encode("ascii"))
