import io

import numpy as np
import pytest
import trimesh
from trimesh.exchange.stl import load_stl

from pegboard.board import BoardSpec
from pegboard.extrude import extrude_region
from pegboard.profile import board_region
from pegboard.stl import (
    board_filename,
    export_board,
    export_spacer,
    facet_normals,
    mesh_to_stl,
)


def _read_stl(data):
    """Raw triangles and stored normals, without any mesh processing."""
    if isinstance(data, str):
        data = data.encode("ascii")
    loaded = load_stl(io.BytesIO(data))
    return loaded["vertices"][loaded["faces"]], loaded["face_normals"]


def test_stl_text_layout(unit_square):
    text = mesh_to_stl(extrude_region(unit_square, 1.0), "cube")
    lines = text.splitlines()
    assert lines[0] == "solid cube"
    assert lines[-1] == "endsolid cube"
    assert lines[1].startswith("  facet normal ")
    assert lines[2] == "    outer loop"
    assert lines[3].startswith("      vertex ")
    assert lines[6] == "    endloop"
    assert lines[7] == "  endfacet"
    # 2 triangles per cap, 2 per side
    assert text.count("facet normal") == 12
    for line in lines:
        if line.strip().startswith(("vertex", "facet")):
            for token in line.split()[-3:]:
                assert len(token.split(".")[1]) == 6


def test_board_export_roundtrip():
    spec = BoardSpec(160, 120, 4, True)
    mesh = extrude_region(board_region(spec), spec.thickness)
    text = mesh_to_stl(mesh, "board")
    triangles, normals = _read_stl(text)

    assert text.startswith("solid board\n")
    assert len(triangles) == len(mesh.faces)
    assert np.allclose(np.linalg.norm(normals, axis=1), 1.0, atol=1e-4)
    assert np.allclose(normals, facet_normals(triangles), atol=1e-4)
    assert np.allclose(triangles, mesh.vertices[mesh.faces], atol=1e-6)


def test_trimesh_reads_export(unit_square):
    mesh = extrude_region(unit_square, 1.0)
    loaded = trimesh.load_mesh(io.BytesIO(mesh_to_stl(mesh, "cube").encode("ascii")), file_type="stl")
    assert len(loaded.faces) == 12
    assert loaded.is_watertight
    assert loaded.volume == pytest.approx(1.0)


def test_degenerate_triangle_gets_zero_normal():
    tri = np.array([[[0, 0, 0], [1, 1, 1], [2, 2, 2]]], dtype=float)
    assert np.array_equal(facet_normals(tri), np.zeros((1, 3)))


def test_board_filename():
    assert board_filename(BoardSpec(280, 280, 5)) == "skadis_280x280x5mm.stl"
    assert board_filename(BoardSpec(320, 80, 5.5)) == "skadis_320x80x5.5mm.stl"


def test_export_board_default():
    out = export_board(BoardSpec(280, 280, 5, True))
    assert out.filename == "skadis_280x280x5mm.stl"
    text = out.data.decode("ascii")
    assert text.startswith("solid skadis_pegboard\n")
    assert text.endswith("endsolid skadis_pegboard\n")


def test_export_is_deterministic():
    spec = BoardSpec(120, 160, 5, False)
    assert export_board(spec).data == export_board(spec).data


def test_spacer_export():
    out = export_spacer()
    assert out.filename == "spacer_10mm.stl"
    triangles, normals = _read_stl(out.data)
    assert out.data.startswith(b"solid spacer_10mm\n")
    assert np.allclose(normals, facet_normals(triangles), atol=1e-4)
    radii = np.hypot(triangles[..., 0], triangles[..., 1])
    assert radii.max() == pytest.approx(5.5, abs=1e-5)
    assert radii.min() == pytest.approx(2.5, abs=1e-5)
    assert triangles[..., 2].min() == 0.0
    assert triangles[..., 2].max() == 10.0
    assert export_spacer().data == out.data


def test_empty_mesh_export():
    out = export_board(BoardSpec(0, 0, 5))
    assert out.data.decode("ascii") == "solid skadis_pegboard\nendsolid skadis_pegboard\n"


def test_export_write(tmp_path):
    path = export_spacer().write(str(tmp_path / "out"))
    assert path.name == "spacer_10mm.stl"
    assert path.read_bytes() == export_spacer().data



@pytest.mark.parametrize(
    "spec",
    [
        BoardSpec(float("nan"), 280, 5, True),
        BoardSpec(280, float("inf"), 5, True),
        BoardSpec(280, 280, float("nan"), True),
        BoardSpec(280, 280, float("inf"), False),
    ],
)
def test_non_finite_dimensions_export_empty_solid(spec):
    text = export_board(spec).data.decode("ascii")
    assert text == "solid skadis_pegboard\nendsolid skadis_pegboard\n"
