from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Tuple

from pegboard.constants import HEIGHT_RANGE, STANDARD_THICKNESS, THICKNESS_RANGE, WIDTH_RANGE


@dataclass(frozen=True)
class BoardSpec:
    width: float = 280.0
    height: float = 280.0
    thickness: float = 5.0
    mounting_holes: bool = True

    def with_overrides(self, width: Optional[float] = None, height: Optional[float] = None,
                       thickness: Optional[float] = None,
                       mounting_holes: Optional[bool] = None) -> "BoardSpec":
        changes = {}
        if width is not None:
            changes["width"] = float(width)
        if height is not None:
            changes["height"] = float(height)
        if thickness is not None:
            changes["thickness"] = float(thickness)
        if mounting_holes is not None:
            changes["mounting_holes"] = bool(mounting_holes)
        return replace(self, **changes)


# ----------------------------
# Controller ranges
# ----------------------------

def _on_grid(value: float, rng: Tuple[float, float, float]) -> bool:
    lo, hi, step = rng
    if value < lo - 1e-9 or value > hi + 1e-9:
        return False
    k = (value - lo) / step
    return abs(k - round(k)) < 1e-9


def range_warnings(spec: BoardSpec) -> List[str]:
    """
    Describe values the slider controller would never produce.
    The geometry core accepts them anyway; these are advisory only.
    """
    out = []
    for label, value, rng in (
        ("width", spec.width, WIDTH_RANGE),
        ("height", spec.height, HEIGHT_RANGE),
        ("thickness", spec.thickness, THICKNESS_RANGE),
    ):
        if not _on_grid(value, rng):
            lo, hi, step = rng
            out.append(f"{label} {value:g}mm is outside {lo:g}..{hi:g}mm in steps of {step:g}mm")

    if spec.thickness != STANDARD_THICKNESS:
        out.append(
            f"thickness {spec.thickness:g}mm differs from the standard {STANDARD_THICKNESS:g}mm; "
            "hooks may not fit"
        )
    return out


def load_params(path: str, base: Optional[BoardSpec] = None) -> BoardSpec:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Parameter JSON must be an object.")

    holes = data.get("mounting_holes")
    if holes is not None and not isinstance(holes, bool):
        raise ValueError(f"mounting_holes must be true or false in {path}")

    spec = base or BoardSpec()
    try:
        return spec.with_overrides(
            width=data.get("width"),
            height=data.get("height"),
            thickness=data.get("thickness"),
            mounting_holes=data.get("mounting_holes"),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid parameter value in {path}: {e}") from e
