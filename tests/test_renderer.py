"""Tests for the Pillow renderer."""

from launch_timeline.engine.geometry import geometry_for_viewport
from launch_timeline.engine.layouts import FULL_LAYOUT
from launch_timeline.engine.orchestrator import TimelineOrchestrator
from launch_timeline.engine.render_context import RenderContext
from launch_timeline.engine.renderer import Renderer
from launch_timeline.profile import MissionProfile


def render(width=640, height=120, offset=None):
    geometry = geometry_for_viewport(width, height)
    orchestrator = TimelineOrchestrator(MissionProfile.default(), FULL_LAYOUT, geometry)
    if offset is not None:
        orchestrator.jump(offset)
    return Renderer(geometry, RenderContext.darkmode()).render_frame(orchestrator.snapshot())


def test_frame_matches_viewport():
    image = render()
    assert image.size == (640, 120)
    assert image.mode == "P"


def test_frame_draws_on_black_background():
    image = render().convert("RGB")

    assert sum(image.getpixel((0, image.height - 1))) < 30
    # The clock and the markers near the top centre are drawn in white.
    colors = {color for _count, color in image.getcolors(maxcolors=256 * 256)}
    assert any(sum(color) > 600 for color in colors)


def test_frames_differ_as_time_moves():
    assert render(offset=-300).tobytes() != render(offset=100).tobytes()
