"""Fixed dimensions of the SKÅDIS-compatible board, all in millimetres."""

BOARD_RADIUS = 8.0

HOLE_WIDTH = 5.0
HOLE_HEIGHT = 15.0
HOLE_SPACING_X = 40.0
HOLE_SPACING_Y = 20.0
EDGE_MARGIN = 20.0

SCREW_HOLE_DIAMETER = 5.0
SCREW_HOLE_INSET = 10.0
COUNTERSINK_DEPTH = 10.0
SPACER_WALL = 3.0

# Flattening resolution, shared by preview and export
CURVE_SEGMENTS = 16  # per quadratic fillet (quarter turn)
CIRCLE_SEGMENTS = 64  # per full circle

# (min, max, step) of the controller sliders
WIDTH_RANGE = (80.0, 800.0, 40.0)
HEIGHT_RANGE = (80.0, 800.0, 40.0)
THICKNESS_RANGE = (2.0, 8.0, 0.5)

STANDARD_THICKNESS = 5.0

BOARD_SOLID_NAME = "skadis_pegboard"
SPACER_SOLID_NAME = "spacer_10mm"
