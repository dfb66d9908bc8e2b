import numpy as np
import pytest

from pegboard.board import BoardSpec
from pegboard.preview import build_scene, render_png, write_svg
from pegboard.profile import count_slot_holes


def test_scene_outline_is_closed_outer_edge():
    scene = build_scene(BoardSpec(240, 160, 5, True))
    assert scene.outline.shape[1] == 3
    assert np.array_equal(scene.outline[0], scene.outline[-1])
    assert np.all(scene.outline[:, 2] == 0.0)
    assert np.allclose(scene.outline[:, :2].min(axis=0), (-120, -80))
    assert np.allclose(scene.outline[:, :2].max(axis=0), (120, 80))
    assert scene.hole_count == count_slot_holes(240, 160)


def test_scene_volume_matches_mesh():
    scene = build_scene(BoardSpec(120, 120, 5, True))
    assert scene.volume == pytest.approx(scene.mesh.volume, rel=1e-6)


def test_scene_of_degenerate_board():
    scene = build_scene(BoardSpec(0, 0, 5))
    assert scene.outline.shape == (0, 3)
    assert len(scene.mesh.faces) == 0
    assert scene.area == 0.0


def test_write_svg(tmp_path):
    scene = build_scene(BoardSpec(120, 80, 5, True))
    path = tmp_path / "board.svg"
    write_svg(scene.region, str(path))
    svg = path.read_text(encoding="utf-8")
    assert 'width="120.000mm"' in svg
    assert 'height="80.000mm"' in svg
    assert svg.count("M ") == 1 + len(scene.region.holes)


def test_render_png(tmp_path):
    scene = build_scene(BoardSpec(120, 80, 5, False))
    path = tmp_path / "board.png"
    render_png(scene, str(path), dpi=40)
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
