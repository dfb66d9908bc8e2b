from __future__ import annotations

import math
from typing import List, Tuple

import mapbox_earcut as earcut
import numpy as np
import trimesh

from pegboard.profile import Region


# ----------------------------
# Triangulation + extrusion
# ----------------------------

class TriangulationError(RuntimeError):
    pass


def _empty_mesh() -> trimesh.Trimesh:
    return trimesh.Trimesh(vertices=np.zeros((0, 3)), faces=np.zeros((0, 3), dtype=np.int64), process=False)


def _region_to_earcut_inputs(region: Region):
    rings = [region.outer.oriented(ccw=True)]
    rings.extend(h.oriented(ccw=False) for h in region.holes if len(h) >= 3)

    ring_ends: List[int] = []
    rings_meta: List[Tuple[int, int]] = []
    total = 0
    for ring in rings:
        rings_meta.append((total, len(ring)))
        total += len(ring)
        ring_ends.append(total)

    coords = np.vstack([r.points for r in rings]).astype(np.float64)
    return coords, np.asarray(ring_ends, dtype=np.uint32), rings_meta


def triangulate_region(region: Region):
    """
    Triangulate the region interior.

    Returns (faces, rings_meta, verts2d); faces index into verts2d and are
    counter-clockwise.
    """
    coords, ring_ends, rings_meta = _region_to_earcut_inputs(region)

    if hasattr(earcut, "triangulate_float64"):
        tri = earcut.triangulate_float64(coords, ring_ends)
    elif hasattr(earcut, "triangulate"):
        tri = earcut.triangulate(coords, ring_ends)
    else:
        raise TriangulationError("mapbox_earcut installed but API not recognized.")

    faces = np.asarray(tri, dtype=np.int64).reshape(-1, 3)
    if len(faces):
        a = coords[faces[:, 0]]
        b = coords[faces[:, 1]]
        c = coords[faces[:, 2]]
        signed = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
        flip = signed < 0
        faces[flip] = faces[flip][:, [0, 2, 1]]
    return faces, rings_meta, coords


def extrude_region(region: Region, depth: float) -> trimesh.Trimesh:
    """
    Sweep the region from z=0 to z=depth into a closed triangle mesh.

    Vertices are shared between caps and walls, so a valid region (simple
    rings, holes strictly inside and disjoint) gives a watertight mesh with
    every normal pointing away from the material. Invalid regions are not
    detected and simply give a broken mesh.
    """
    if region.is_empty or not math.isfinite(depth) or depth <= 0:
        return _empty_mesh()

    faces2d, rings_meta, verts2d = triangulate_region(region)
    n = verts2d.shape[0]

    bottom = np.column_stack([verts2d, np.zeros((n, 1), dtype=np.float64)])
    top = np.column_stack([verts2d, np.full((n, 1), float(depth), dtype=np.float64)])
    vertices = np.vstack([bottom, top])

    top_faces = faces2d + n
    bottom_faces = faces2d[:, ::-1]

    # Outer ring is CCW and holes are CW, so one winding faces outward for both
    side_faces = []
    for start, length in rings_meta:
        k = np.arange(length)
        i0 = start + k
        i1 = start + (k + 1) % length
        side_faces.append(np.column_stack([i0, i1, i1 + n]))
        side_faces.append(np.column_stack([i0, i1 + n, i0 + n]))

    faces_all = np.vstack([bottom_faces, top_faces] + side_faces).astype(np.int64)
    return trimesh.Trimesh(vertices=vertices, faces=faces_all, process=False)
