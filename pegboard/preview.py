from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import trimesh
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from pegboard.board import BoardSpec
from pegboard.extrude import extrude_region
from pegboard.profile import Region, board_region


@dataclass(frozen=True, eq=False)
class PreviewScene:
    """Everything a viewer needs to redraw one parameter state."""

    spec: BoardSpec
    region: Region
    mesh: trimesh.Trimesh
    outline: np.ndarray  # (N+1, 3) closed polyline of the outer edge, z=0
    hole_count: int

    @property
    def area(self) -> float:
        """Plan area of the board in mm^2, holes excluded."""
        return float(self.region.to_polygon().area)

    @property
    def volume(self) -> float:
        return self.area * max(self.spec.thickness, 0.0)


def build_scene(spec: BoardSpec) -> PreviewScene:
    region = board_region(spec)
    mesh = extrude_region(region, spec.thickness)
    if region.is_empty:
        outline = np.zeros((0, 3))
    else:
        ring = region.outer.closed()
        outline = np.column_stack([ring, np.zeros(len(ring))])
    return PreviewScene(spec, region, mesh, outline, region.slot_count)


# ----------------------------
# SVG
# ----------------------------

def write_svg(region: Region, path: str):
    if region.is_empty:
        Path(path).write_text("<svg xmlns='http://www.w3.org/2000/svg'></svg>")
        return
    minx, miny, maxx, maxy = region.outer.bounds
    w = maxx - minx
    h = maxy - miny

    def ring_to_path(coords):
        coords = list(coords)
        d = f"M {coords[0][0]-minx:.3f} {maxy-coords[0][1]:.3f} "
        for x, y in coords[1:]:
            d += f"L {x-minx:.3f} {maxy-y:.3f} "
        d += "Z "
        return d

    poly = region.to_polygon()
    d = ring_to_path(poly.exterior.coords)
    for hole in poly.interiors:
        d += ring_to_path(hole.coords)

    svg = f"""<svg xmlns="http://www.w3.org/2000/svg" width="{w:.3f}mm" height="{h:.3f}mm" viewBox="0 0 {w:.3f} {h:.3f}">
  <path d="{d}" fill="#595959" fill-rule="evenodd" />
</svg>
"""
    Path(path).write_text(svg, encoding="utf-8")


# ----------------------------
# PNG
# ----------------------------

def _region_path(region: Region) -> MplPath:
    verts = []
    codes = []
    for contour in (region.outer,) + tuple(region.holes):
        ring = contour.closed()
        verts.extend(ring.tolist())
        codes.extend([MplPath.MOVETO] + [MplPath.LINETO] * (len(ring) - 2) + [MplPath.CLOSEPOLY])
    return MplPath(verts, codes)


def render_png(scene: PreviewScene, path: str, dpi: int = 120):
    fig = Figure(figsize=(6, 6))
    ax = fig.subplots()
    if not scene.region.is_empty:
        ax.add_patch(PathPatch(_region_path(scene.region), facecolor="#595959", edgecolor="none"))
        ax.plot(scene.outline[:, 0], scene.outline[:, 1], color="#333333", linewidth=1.0)
        minx, miny, maxx, maxy = scene.region.outer.bounds
        pad = 0.05 * max(maxx - minx, maxy - miny)
        ax.set_xlim(minx - pad, maxx + pad)
        ax.set_ylim(miny - pad, maxy + pad)
    ax.set_aspect("equal")
    ax.set_facecolor("#f5f5f5")
    s = scene.spec
    ax.set_title(f"{s.width:g} x {s.height:g} x {s.thickness:g} mm, {scene.hole_count} slots")
    fig.savefig(path, dpi=dpi)
