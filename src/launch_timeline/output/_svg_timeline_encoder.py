"""Timeline/object-based SVG encoder."""

from xml.sax.saxutils import escape

from ..engine.projector import LabelGeometry, ProjectedNode
from ..engine.render_context import RenderContext
from ..engine.timeline_frame import TimelineFrame
from ._svg_shared import _tl_hex, _tl_num
from ._svg_tracks import (
    _tl_build_key_tracks,
    _tl_compress_discrete_track,
    _tl_compress_linear_track,
    _tl_has_distinct_values,
    _tl_key_times,
    _tl_key_times_attr,
    _tl_pad_local_track,
    _tl_transition_forced_indices,
)


_LINE_HEIGHT_EM = 1.2


def encode_svg_timeline_sequence(
    frames: list[TimelineFrame], frame_duration: int, title: str = ""
) -> bytes:
    """Encode timeline snapshots into an animated SVG.

    Pipeline:
    1. Draw the static background and the timeline arc.
    2. Build one animated marker group per event key (position, opacity, label pose).
    3. Emit one clock text per distinct clock string, toggled by a discrete track.
    """
    context = RenderContext.darkmode()
    total_duration_ms = max(1, len(frames) * frame_duration)
    times = [index * frame_duration for index in range(len(frames))]
    width, height = _tl_resolve_timeline_dimensions(frames)

    parts: list[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">',
        f"<title>{escape(title)}</title>" if title else "",
        f'<rect width="{width}" height="{height}" fill="{_tl_hex(context.background_color)}"/>',
        _tl_arc_element(frames[0], context),
    ]
    parts.extend(_tl_marker_elements(frames, times, total_duration_ms, context))
    parts.extend(_tl_clock_elements(frames, times, total_duration_ms, context, width))
    parts.append("</svg>")
    return "".join(parts).encode("utf-8")


def _tl_resolve_timeline_dimensions(frames: list[TimelineFrame]) -> tuple[int, int]:
    width = frames[0].width
    height = frames[0].height
    for frame in frames[1:]:
        if frame.width != width or frame.height != height:
            raise ValueError("All timeline frames must have the same dimensions")
    return width, height


def _tl_arc_element(frame: TimelineFrame, context: RenderContext) -> str:
    geometry = frame.geometry
    return (
        f'<circle cx="{_tl_num(geometry.center_x)}" cy="{_tl_num(geometry.center_y)}" '
        f'r="{_tl_num(geometry.radius)}" fill="none" '
        f'stroke="{_tl_hex(context.arc_color.rgb)}" '
        f'stroke-opacity="{_tl_num(context.arc_color.a)}" '
        f'stroke-width="{context.arc_width}"/>'
    )


def _tl_marker_elements(
    frames: list[TimelineFrame],
    times: list[int],
    total_duration_ms: int,
    context: RenderContext,
) -> list[str]:
    frame_maps = [
        {node.key: node for node in frame.snapshot.projected_nodes} for frame in frames
    ]
    elements: list[str] = []
    for track in _tl_build_key_tracks(frame_maps).values():
        element = _tl_render_marker_track(track, times, total_duration_ms, context)
        if element:
            elements.append(element)
    return elements


def _tl_render_marker_track(
    track: list[ProjectedNode | None],
    times: list[int],
    total_duration_ms: int,
    context: RenderContext,
) -> str:
    shown = [node is not None and node.is_visible for node in track]
    if not any(shown):
        return ""

    filled = _tl_fill_gaps(track)
    first = next(node for node, flag in zip(track, shown) if flag and node is not None)
    forced = _tl_transition_forced_indices(shown)

    node_points = [(node.position.cx, node.position.cy) for node in filled]
    label_points = [(node.label.x, node.label.y) for node in filled]
    opacities = [(node.color.a,) for node in filled]
    dot_opacities = [
        (node.inner_dot_color.a if node.should_draw_inner_dot else 0.0,) for node in filled
    ]
    rotations = [(node.label.rotation_degrees,) for node in filled]
    initial = filled[0]

    visibility_anim = _tl_discrete_animate(
        "visibility", times, ["visible" if flag else "hidden" for flag in shown], total_duration_ms
    )
    stroke_anim = _tl_discrete_animate(
        "stroke", times, [_tl_hex(node.color.rgb) for node in filled], total_duration_ms
    )

    return (
        f'<g visibility="{"visible" if shown[0] else "hidden"}" '
        f'opacity="{_tl_num(initial.color.a)}">'
        f"{visibility_anim}"
        f"{_tl_linear_animate('opacity', times, opacities, forced, total_duration_ms)}"
        f'<g transform="translate({_tl_num(initial.position.cx)} {_tl_num(initial.position.cy)})">'
        f"{_tl_linear_animate('transform', times, node_points, forced, total_duration_ms, 'translate')}"
        f'<circle r="{_tl_num(first.node_radius)}" fill="none" '
        f'stroke="{_tl_hex(initial.color.rgb)}" stroke-width="2">{stroke_anim}</circle>'
        f'<circle r="{_tl_num(first.inner_dot_radius)}" '
        f'fill="{_tl_hex(first.inner_dot_color.rgb)}" opacity="{_tl_num(dot_opacities[0][0])}">'
        f"{_tl_linear_animate('opacity', times, dot_opacities, forced, total_duration_ms)}"
        "</circle></g>"
        f'<g transform="translate({_tl_num(initial.label.x)} {_tl_num(initial.label.y)})">'
        f"{_tl_linear_animate('transform', times, label_points, forced, total_duration_ms, 'translate')}"
        f'<g transform="rotate({_tl_num(initial.label.rotation_degrees)})">'
        f"{_tl_linear_animate('transform', times, rotations, forced, total_duration_ms, 'rotate')}"
        f"{_tl_connector_element(first, context)}"
        f"{_tl_label_text(first.label, context)}"
        "</g></g></g>"
    )


def _tl_fill_gaps(track: list[ProjectedNode | None]) -> list[ProjectedNode]:
    """Hold the nearest known sample over frames where the marker is absent."""
    filled = list(track)
    last: ProjectedNode | None = None
    for index, node in enumerate(filled):
        if node is None:
            filled[index] = last
        else:
            last = node
    upcoming: ProjectedNode | None = None
    for index in range(len(filled) - 1, -1, -1):
        if filled[index] is None:
            filled[index] = upcoming
        else:
            upcoming = filled[index]
    return [node for node in filled if node is not None]


def _tl_connector_element(node: ProjectedNode, context: RenderContext) -> str:
    connector = node.label.connector
    if connector is None:
        return ""
    # Label space: the label anchor is the origin and the radius runs along y.
    direction = 1 if node.label.baseline == "text-after-edge" else -1
    start = _tl_distance(connector.x1, connector.y1, node.label.x, node.label.y)
    end = _tl_distance(connector.x2, connector.y2, node.label.x, node.label.y)
    return (
        f'<line x1="0" y1="{_tl_num(direction * start)}" x2="0" y2="{_tl_num(direction * end)}" '
        f'stroke="{_tl_hex(context.label_color)}" stroke-width="1"/>'
    )


def _tl_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return ((x1 - x2) ** 2 + (y1 - y2) ** 2) ** 0.5


def _tl_label_text(label: LabelGeometry, context: RenderContext) -> str:
    lines = label.lines or ("",)
    if len(lines) == 1:
        body = escape(lines[0])
    else:
        lead = -(len(lines) - 1) * _LINE_HEIGHT_EM if label.baseline == "text-after-edge" else 0.0
        spans = [f'<tspan x="0" dy="{_tl_num(lead)}em">{escape(lines[0])}</tspan>']
        spans.extend(
            f'<tspan x="0" dy="{_tl_num(_LINE_HEIGHT_EM)}em">{escape(line)}</tspan>'
            for line in lines[1:]
        )
        body = "".join(spans)
    return (
        f'<text text-anchor="{label.anchor}" dominant-baseline="{label.baseline}" '
        f'font-family="{context.font_family}" font-size="{context.label_font_size}" '
        f'fill="{_tl_hex(context.label_color)}">{body}</text>'
    )


def _tl_clock_elements(
    frames: list[TimelineFrame],
    times: list[int],
    total_duration_ms: int,
    context: RenderContext,
    width: int,
) -> list[str]:
    run_times, run_texts = _tl_compress_discrete_track(
        times, [frame.clock_text for frame in frames]
    )
    attrs = (
        f'x="{_tl_num(width / 2)}" y="{context.clock_margin}" text-anchor="middle" '
        f'dominant-baseline="text-before-edge" font-family="{context.font_family}" '
        f'font-size="{context.clock_font_size}" fill="{_tl_hex(context.clock_color)}"'
    )
    if len(run_texts) == 1:
        return [f"<text {attrs}>{escape(run_texts[0])}</text>"]

    elements: list[str] = []
    for index, text in enumerate(run_texts):
        start = run_times[index]
        end = run_times[index + 1] if index + 1 < len(run_times) else total_duration_ms
        visibility_times = [start]
        visibility_values = ["visible"]
        if start > 0:
            visibility_times.insert(0, 0)
            visibility_values.insert(0, "hidden")
        if end < total_duration_ms:
            visibility_times.append(end)
            visibility_values.append("hidden")
        visibility_times, visibility_values = _tl_pad_local_track(
            visibility_times, visibility_values, total_duration_ms
        )
        elements.append(
            f'<text visibility="{visibility_values[0]}" {attrs}>{escape(text)}'
            f'<animate attributeName="visibility" values="{";".join(visibility_values)}" '
            f'keyTimes="{_tl_key_times(visibility_times, total_duration_ms)}" '
            f'dur="{total_duration_ms}ms" repeatCount="indefinite" calcMode="discrete"/></text>'
        )
    return elements


def _tl_linear_animate(
    attribute: str,
    times: list[int],
    samples: list[tuple[float, ...]],
    forced_indices: set[int],
    total_duration_ms: int,
    transform_type: str | None = None,
) -> str:
    if not _tl_has_distinct_values(samples):
        return ""
    track_times, track_samples = _tl_compress_linear_track(times, samples, forced_indices)
    track_times, track_samples = _tl_pad_local_track(track_times, track_samples, total_duration_ms)
    values = ";".join(" ".join(_tl_num(value) for value in sample) for sample in track_samples)
    key_times_attr = _tl_key_times_attr(track_times, total_duration_ms)
    if transform_type is None:
        head = f'<animate attributeName="{attribute}"'
    else:
        head = f'<animateTransform attributeName="{attribute}" type="{transform_type}"'
    return (
        f'{head} values="{values}" {key_times_attr} dur="{total_duration_ms}ms" '
        f'repeatCount="indefinite"/>'
    )


def _tl_discrete_animate(
    attribute: str, times: list[int], values: list[str], total_duration_ms: int
) -> str:
    if not _tl_has_distinct_values(values):
        return ""
    track_times, track_values = _tl_compress_discrete_track(times, values)
    track_times, track_values = _tl_pad_local_track(track_times, track_values, total_duration_ms)
    return (
        f'<animate attributeName="{attribute}" values="{";".join(track_values)}" '
        f'keyTimes="{_tl_key_times(track_times, total_duration_ms)}" '
        f'dur="{total_duration_ms}ms" repeatCount="indefinite" calcMode="discrete"/>'
    )
