"""FastAPI web app for launch timeline snapshots and animations."""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response

from launch_timeline.animation_pipeline import encode_animation
from launch_timeline.config import Settings
from launch_timeline.constants import DEFAULT_ANIMATION_SECONDS, VIEW_HEIGHT, VIEW_WIDTH
from launch_timeline.engine.geometry import geometry_for_viewport
from launch_timeline.engine.layouts import resolve_layout
from launch_timeline.engine.orchestrator import TimelineOrchestrator, TimelineSnapshot
from launch_timeline.errors import TimelineError
from launch_timeline.output import (
    media_type_for_output_format,
    output_path_for_format,
)
from launch_timeline.profile import MissionProfile, load_profile

load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title="Launch Timeline")

MAX_RENDER_SECONDS = 60.0


def load_mission_profile(settings: Settings) -> MissionProfile:
    """Profile configured for the server, or the built-in default."""
    if settings.profile_path:
        return load_profile(settings.profile_path)
    return MissionProfile.default()


def snapshot_payload(snapshot: TimelineSnapshot) -> dict:
    return {
        "offset": snapshot.current_offset_seconds,
        "clock": str(snapshot.clock_display),
        "is_t_plus": snapshot.is_t_plus,
        "mode": snapshot.mode.value,
        "nodes": [
            {
                "key": node.key,
                "name": node.name,
                "timestamp": node.timestamp,
                "angle": node.angle_radians,
                "angle_degrees": node.angle_degrees,
                "cx": node.position.cx,
                "cy": node.position.cy,
                "visible": node.is_visible,
                "color": node.color.to_css(),
                "inner_dot_color": node.inner_dot_color.to_css(),
                "draw_inner_dot": node.should_draw_inner_dot,
                "label": {
                    "lines": list(node.label.lines),
                    "x": node.label.x,
                    "y": node.label.y,
                    "transform": node.label.transform,
                    "baseline": node.label.baseline,
                },
            }
            for node in snapshot.projected_nodes
        ],
    }


@app.get("/api/snapshot")
async def snapshot(
    offset: str | None = Query(None, description="Timer offset in seconds (negative before T-0)"),
    layout: str | None = Query(None, description="Timeline layout: full or half"),
    width: int = Query(VIEW_WIDTH, gt=0),
    height: int = Query(VIEW_HEIGHT, gt=0),
):
    """Return the projected timeline at a given offset."""
    try:
        settings = Settings.from_env()
        config = resolve_layout(layout or settings.layout)
        orchestrator = TimelineOrchestrator(
            load_mission_profile(settings), config, geometry_for_viewport(width, height)
        )
        try:
            if offset is not None:
                orchestrator.jump(offset)
            return snapshot_payload(orchestrator.snapshot())
        finally:
            orchestrator.dispose()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/api/render")
async def render(
    output_format: str = Query(
        "svg", alias="format", description="Output format: gif, webp, or svg"
    ),
    layout: str | None = Query(None, description="Timeline layout: full or half"),
    duration: float = Query(DEFAULT_ANIMATION_SECONDS, gt=0, le=MAX_RENDER_SECONDS),
    fps: int | None = Query(None, gt=0, le=50),
):
    """Render and return an animated countdown timeline."""
    try:
        settings = Settings.from_env()
        config = resolve_layout(layout or settings.layout)
        output_path = output_path_for_format(output_format)
        media_type = media_type_for_output_format(output_format)
        encoded = encode_animation(
            load_mission_profile(settings),
            output_path,
            config=config,
            fps=fps or settings.fps,
            duration_seconds=duration,
        )
        return Response(
            content=encoded,
            media_type=media_type,
            headers={
                "Response-Type": "blob",
                "Content-Disposition": f"inline; filename={output_path}",
            },
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TimelineError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Render failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate animation: {e}")
