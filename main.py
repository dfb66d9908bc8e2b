#!/usr/bin/env python3
"""
Creates 3D-printable SKÅDIS-style pegboards.

The board is a rounded rectangle perforated with the staggered slot pattern
(5 x 15 mm slots on a 40 x 20 mm grid) and, optionally, four corner screw
holes. It is extruded to the chosen thickness and written as ASCII STL.

Examples:
  python main.py --width 320 --height 560 --thickness 5 --out-dir out
  python main.py --no-mounting-holes --png board.png
  python main.py --spacer

Dependencies:
  pip install numpy shapely matplotlib trimesh mapbox_earcut
"""

from pegboard.cli import main

if __name__ == "__main__":
    main()
