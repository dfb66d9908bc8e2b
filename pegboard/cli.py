from __future__ import annotations

import argparse
from pathlib import Path

from pegboard.board import BoardSpec, load_params, range_warnings
from pegboard.preview import build_scene, render_png, write_svg
from pegboard.stl import export_board, export_spacer


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Generate a SKÅDIS-style pegboard as a 3D printable STL.")
    p.add_argument("--config", type=str, default=None,
                   help="JSON file with width/height/thickness/mounting_holes. Options below override it.")
    p.add_argument("--width", type=float, default=None, help="Board width (mm). Default 280.")
    p.add_argument("--height", type=float, default=None, help="Board height (mm). Default 280.")
    p.add_argument("--thickness", type=float, default=None, help="Board thickness (mm). Default 5.")

    holes = p.add_mutually_exclusive_group()
    holes.add_argument("--mounting-holes", dest="mounting_holes", action="store_true", default=None,
                       help="Add 4 corner screw holes (default).")
    holes.add_argument("--no-mounting-holes", dest="mounting_holes", action="store_false",
                       help="Leave out the corner screw holes.")

    p.add_argument("--spacer", action="store_true",
                   help="Also write the 10mm spacer STL (print 4 when using mounting holes).")
    p.add_argument("--out-dir", type=str, default=".", help="Directory for the STL files.")
    p.add_argument("--svg", type=str, default=None, help="Write SVG of the 2D board profile.")
    p.add_argument("--png", type=str, default=None, help="Write PNG preview of the board.")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    spec = BoardSpec()
    if args.config:
        if not Path(args.config).exists():
            raise SystemExit(f"Config file not found: {args.config}")
        try:
            spec = load_params(args.config, spec)
        except ValueError as e:
            raise SystemExit(str(e))

    spec = spec.with_overrides(
        width=args.width,
        height=args.height,
        thickness=args.thickness,
        mounting_holes=args.mounting_holes,
    )
    for msg in range_warnings(spec):
        print(f"Warning: {msg}")

    scene = build_scene(spec)
    if scene.region.is_empty:
        raise SystemExit("Board has no area. Check width/height.")
    if len(scene.mesh.faces) == 0:
        raise SystemExit("Mesh generation failed (empty mesh). Check thickness.")

    if args.svg:
        write_svg(scene.region, args.svg)
        print(f"Wrote profile SVG: {args.svg}")
    if args.png:
        render_png(scene, args.png)
        print(f"Wrote preview PNG: {args.png}")

    board_file = export_board(spec)
    out_path = board_file.write(args.out_dir)
    print(f"Wrote STL: {out_path.resolve()}")
    print(f"Slots: {scene.hole_count}, mounting holes: {'yes' if spec.mounting_holes else 'no'}")
    print(f"Extents (mm): {scene.mesh.extents}")
    print(f"Material volume: {scene.volume / 1000.0:.1f} cm^3")

    if args.spacer:
        spacer_path = export_spacer().write(args.out_dir)
        print(f"Wrote spacer STL: {spacer_path.resolve()}")


if __name__ == "__main__":
    main()
