"""
Planar profile of the pegboard.

Builds the rounded outline, the staggered slot grid and the optional
corner screw holes as flattened contours, all centred on the origin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np
from shapely.geometry import Polygon

from pegboard.board import BoardSpec
from pegboard.constants import (
    BOARD_RADIUS,
    CIRCLE_SEGMENTS,
    CURVE_SEGMENTS,
    EDGE_MARGIN,
    HOLE_HEIGHT,
    HOLE_SPACING_X,
    HOLE_SPACING_Y,
    HOLE_WIDTH,
    SCREW_HOLE_DIAMETER,
    SCREW_HOLE_INSET,
    SPACER_WALL,
)

Point2 = Tuple[float, float]


# ----------------------------
# Contours
# ----------------------------

def _ring_area(coords) -> float:
    pts = np.asarray(coords, dtype=np.float64)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


@dataclass(frozen=True, eq=False)
class Contour:
    """Closed polyline; the first point is not repeated at the end."""

    points: np.ndarray
    kind: str = "outline"

    @property
    def signed_area(self) -> float:
        return _ring_area(self.points)

    @property
    def is_ccw(self) -> bool:
        return self.signed_area > 0

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        minx, miny = self.points.min(axis=0)
        maxx, maxy = self.points.max(axis=0)
        return float(minx), float(miny), float(maxx), float(maxy)

    def __len__(self) -> int:
        return len(self.points)

    def oriented(self, ccw: bool) -> "Contour":
        if self.is_ccw == ccw:
            return self
        return Contour(self.points[::-1].copy(), self.kind)

    def closed(self) -> np.ndarray:
        return np.vstack([self.points, self.points[:1]])


@dataclass(frozen=True)
class Region:
    outer: Optional[Contour]
    holes: Tuple[Contour, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.outer is None or len(self.outer) < 3

    @property
    def slot_count(self) -> int:
        return len(self.holes_of("slot"))

    def holes_of(self, kind: str) -> List[Contour]:
        return [h for h in self.holes if h.kind == kind]

    def to_polygon(self) -> Polygon:
        if self.is_empty:
            return Polygon()
        return Polygon(
            [tuple(p) for p in self.outer.points],
            [[tuple(p) for p in h.points] for h in self.holes],
        )


class _PathBuilder:
    """Collects a flattened outline from line and curve commands."""

    def __init__(self, start: Point2):
        self.pts: List[Point2] = [start]

    def _add(self, p: Point2):
        last = self.pts[-1]
        if abs(p[0] - last[0]) > 1e-9 or abs(p[1] - last[1]) > 1e-9:
            self.pts.append((float(p[0]), float(p[1])))

    def line_to(self, x: float, y: float):
        self._add((x, y))

    def quadratic_to(self, cx: float, cy: float, x: float, y: float, segments: int = CURVE_SEGMENTS):
        x0, y0 = self.pts[-1]
        for k in range(1, segments + 1):
            t = k / segments
            a = (1 - t) * (1 - t)
            b = 2 * t * (1 - t)
            c = t * t
            self._add((a * x0 + b * cx + c * x, a * y0 + b * cy + c * y))

    def finish(self, kind: str) -> Contour:
        pts = list(self.pts)
        while len(pts) > 1 and abs(pts[0][0] - pts[-1][0]) <= 1e-9 and abs(pts[0][1] - pts[-1][1]) <= 1e-9:
            pts.pop()
        return Contour(np.asarray(pts, dtype=np.float64).reshape(-1, 2), kind)


def rounded_rectangle(width: float, height: float, radius: float = BOARD_RADIUS) -> Optional[Contour]:
    """Counter-clockwise outline with quadratic corner fillets, or None if degenerate."""
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        return None
    r = max(0.0, min(radius, width / 2.0, height / 2.0))
    hw = width / 2.0
    hh = height / 2.0

    path = _PathBuilder((-hw + r, -hh))
    path.line_to(hw - r, -hh)
    path.quadratic_to(hw, -hh, hw, -hh + r)
    path.line_to(hw, hh - r)
    path.quadratic_to(hw, hh, hw - r, hh)
    path.line_to(-hw + r, hh)
    path.quadratic_to(-hw, hh, -hw, hh - r)
    path.line_to(-hw, -hh + r)
    path.quadratic_to(-hw, -hh, -hw + r, -hh)
    return path.finish("outline")


def stadium(x: float, y: float, width: float = HOLE_WIDTH, height: float = HOLE_HEIGHT) -> Contour:
    """Slot centred at (x, y): straight sides, rounded ends, traced clockwise."""
    hw = width / 2.0
    hh = height / 2.0

    path = _PathBuilder((x - hw, y - hh + hw))
    path.line_to(x - hw, y + hh - hw)
    path.quadratic_to(x - hw, y + hh, x, y + hh)
    path.quadratic_to(x + hw, y + hh, x + hw, y + hh - hw)
    path.line_to(x + hw, y - hh + hw)
    path.quadratic_to(x + hw, y - hh, x, y - hh)
    path.quadratic_to(x - hw, y - hh, x - hw, y - hh + hw)
    return path.finish("slot")


def circle(x: float, y: float, radius: float, ccw: bool = False, kind: str = "screw",
           segments: int = CIRCLE_SEGMENTS) -> Contour:
    angles = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
    if not ccw:
        angles = -angles
    pts = np.column_stack([x + radius * np.cos(angles), y + radius * np.sin(angles)])
    return Contour(pts, kind)


# ----------------------------
# Hole placement
# ----------------------------

def grid_size(width: float, height: float) -> Tuple[int, int]:
    if not (math.isfinite(width) and math.isfinite(height)):
        return 0, 0
    nx = math.floor((width - 2 * EDGE_MARGIN) / HOLE_SPACING_X) + 1
    ny = math.floor((height - 2 * EDGE_MARGIN) / HOLE_SPACING_Y) + 1
    return nx, ny


def slot_centers(width: float, height: float) -> Iterator[Point2]:
    """
    Yield slot centres relative to the board centre.

    Odd rows are shifted by half a column pitch. A candidate is dropped when
    its offset column position leaves [EDGE_MARGIN, width - EDGE_MARGIN],
    which trims the last column of the shifted rows only.
    """
    nx, ny = grid_size(width, height)
    if nx <= 0 or ny <= 0:
        return
    start_x = (width - (nx - 1) * HOLE_SPACING_X) / 2.0
    start_y = (height - (ny - 1) * HOLE_SPACING_Y) / 2.0

    for i in range(nx):
        for j in range(ny):
            offset_x = (j % 2) * (HOLE_SPACING_X / 2.0)
            ref_x = start_x + i * HOLE_SPACING_X + offset_x
            if ref_x < EDGE_MARGIN or ref_x > width - EDGE_MARGIN:
                continue
            yield ref_x - width / 2.0, start_y + j * HOLE_SPACING_Y - height / 2.0


def count_slot_holes(width: float, height: float) -> int:
    return sum(1 for _ in slot_centers(width, height))


def mounting_centers(width: float, height: float) -> List[Point2]:
    dx = width / 2.0 - SCREW_HOLE_INSET
    dy = height / 2.0 - SCREW_HOLE_INSET
    return [(-dx, -dy), (dx, -dy), (-dx, dy), (dx, dy)]


# ----------------------------
# Regions
# ----------------------------

def board_region(spec: BoardSpec) -> Region:
    outer = rounded_rectangle(spec.width, spec.height)
    if outer is None:
        return Region(None)

    holes: List[Contour] = [stadium(x, y) for x, y in slot_centers(spec.width, spec.height)]
    if spec.mounting_holes:
        r = SCREW_HOLE_DIAMETER / 2.0
        holes.extend(circle(x, y, r) for x, y in mounting_centers(spec.width, spec.height))
    return Region(outer, tuple(holes))


def spacer_region() -> Region:
    """Annulus that fits a mounting screw; independent of any board."""
    inner = SCREW_HOLE_DIAMETER / 2.0
    outer = inner + SPACER_WALL
    return Region(
        circle(0.0, 0.0, outer, ccw=True, kind="spacer"),
        (circle(0.0, 0.0, inner, ccw=False, kind="bore"),),
    )

